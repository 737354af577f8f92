"""
===============================================================================
MÓDULO: Rate limiting (Token Bucket) - in-memory, por IP
===============================================================================

Objetivo
--------
Limitar abuso por IP de cliente antes de llegar al routing:
- Token bucket (default: 100 requests cada 10 minutos, burst 100)
- Headers x-ratelimit-remaining / x-ratelimit-limit
- 429 RFC7807 con Retry-After

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componentes:
  - TokenBucket
  - RateLimitMiddleware (ASGI, envuelve a la app FastAPI completa)

Responsabilidades:
  - Decidir allow/deny por cliente
  - Mantener estado thread-safe y acotado en memoria (TTL + LRU)

Colaboradores:
  - crosscutting.config (rps / burst)
  - crosscutting.error_responses (payload 429)
  - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse

from .error_responses import PROBLEM_JSON_MEDIA_TYPE, ErrorCode, build_problem
from .logger import logger


@dataclass
class _Bucket:
    tokens: float
    last_refill: float


class TokenBucket:
    """
    Token bucket por key con refill continuo.

    - rps: tokens por segundo (puede ser fraccional: 100/600)
    - burst: capacidad máxima del bucket
    - max_buckets: cota de memoria; se desaloja el bucket menos reciente
    - ttl_seconds: buckets sin uso por más de ttl se descartan
    """

    def __init__(
        self,
        rps: float,
        burst: int,
        *,
        ttl_seconds: float = 3600,
        max_buckets: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ):
        if rps <= 0:
            raise ValueError("rps must be > 0")
        if burst <= 0:
            raise ValueError("burst must be > 0")
        self.rps = float(rps)
        self.burst = int(burst)
        self._ttl = float(ttl_seconds)
        self._max_buckets = int(max_buckets)
        self._clock = clock

        self._buckets: "OrderedDict[str, _Bucket]" = OrderedDict()
        self._lock = threading.Lock()

    def consume(self, key: str) -> tuple[bool, float]:
        """Intenta consumir 1 token. Retorna (allowed, retry_after_seconds)."""
        with self._lock:
            now = self._clock()
            self._evict_expired(now)
            bucket = self._touch(key, now)

            if bucket.tokens >= 1:
                bucket.tokens -= 1
                return True, 0.0
            return False, (1 - bucket.tokens) / self.rps

    def get_remaining(self, key: str) -> int:
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                return self.burst
            self._refill(bucket, self._clock())
            return int(bucket.tokens)

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()

    # --------------------------- internos ---------------------------

    def _touch(self, key: str, now: float) -> _Bucket:
        bucket = self._buckets.get(key)
        if bucket is None:
            if len(self._buckets) >= self._max_buckets:
                self._buckets.popitem(last=False)
            bucket = _Bucket(tokens=float(self.burst), last_refill=now)
            self._buckets[key] = bucket
        else:
            self._refill(bucket, now)
            self._buckets.move_to_end(key)
        return bucket

    def _refill(self, bucket: _Bucket, now: float) -> None:
        elapsed = now - bucket.last_refill
        if elapsed > 0:
            bucket.tokens = min(self.burst, bucket.tokens + elapsed * self.rps)
            bucket.last_refill = now

    def _evict_expired(self, now: float) -> None:
        # R: OrderedDict en orden LRU: los más viejos están al principio.
        while self._buckets:
            key, bucket = next(iter(self._buckets.items()))
            if now - bucket.last_refill <= self._ttl:
                break
            del self._buckets[key]


_rate_limiter: Optional[TokenBucket] = None
_limiter_lock = threading.Lock()


def get_rate_limiter() -> TokenBucket:
    global _rate_limiter
    with _limiter_lock:
        if _rate_limiter is None:
            from .config import get_settings

            s = get_settings()
            _rate_limiter = TokenBucket(rps=s.rate_limit_rps, burst=s.rate_limit_burst)
        return _rate_limiter


def reset_rate_limiter() -> None:
    global _rate_limiter
    with _limiter_lock:
        _rate_limiter = None


def is_rate_limiting_enabled() -> bool:
    from .config import get_settings

    s = get_settings()
    return s.rate_limit_rps > 0 and s.rate_limit_burst > 0


def get_client_identifier(request: Request) -> str:
    """IP del cliente: primer hop de X-Forwarded-For, sino la IP del peer."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        ip = forwarded_for.split(",")[0].strip()
        if ip:
            return f"ip:{ip}"

    if request.client:
        return f"ip:{request.client.host}"
    return "ip:unknown"


class RateLimitMiddleware:
    """
    ASGI middleware de rate limit.

    - Excluye endpoints de infraestructura y preflight CORS.
    - Sin overhead cuando está deshabilitado (rps=0 o burst=0).
    """

    EXCLUDED_PATHS = {"/healthz", "/metrics"}

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if (
            scope["type"] != "http"
            or scope.get("path", "") in self.EXCLUDED_PATHS
            or scope.get("method", "").upper() == "OPTIONS"
            or not is_rate_limiting_enabled()
        ):
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        client_id = get_client_identifier(request)
        limiter = get_rate_limiter()
        allowed, retry_after = limiter.consume(client_id)

        if not allowed:
            retry_after_int = max(1, int(retry_after) + 1)
            logger.warning(
                "rate limit exceeded",
                extra={
                    "client_id": client_id,
                    "path": scope.get("path", ""),
                    "retry_after": retry_after_int,
                },
            )
            response = JSONResponse(
                status_code=429,
                content=build_problem(
                    status=429,
                    code=ErrorCode.RATE_LIMITED,
                    detail="Too many requests from this IP, please try again after 10 minutes",
                    instance=str(request.url),
                ),
                headers={
                    "Retry-After": str(retry_after_int),
                    "x-ratelimit-remaining": "0",
                    "x-ratelimit-limit": str(limiter.burst),
                },
                media_type=PROBLEM_JSON_MEDIA_TYPE,
            )
            await response(scope, receive, send)
            return

        remaining = limiter.get_remaining(client_id)

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((b"x-ratelimit-remaining", str(remaining).encode()))
                headers.append((b"x-ratelimit-limit", str(limiter.burst).encode()))
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_with_headers)
