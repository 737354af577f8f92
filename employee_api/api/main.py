"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (body limit, security headers, request context, CORS)
  - Mount the users and employees routers under /api
  - Expose health check and metrics endpoints
  - Serve the frontend build in production (SPA fallback)

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID, access log and metrics
  - RateLimitMiddleware: per-IP token bucket wrapping the whole app
  - interfaces.api.http.router: business endpoints

Notes:
  - Middleware order matters (see comment above add_middleware calls)
  - /healthz follows Kubernetes health check convention
  - /metrics exposes Prometheus metrics

Production Readiness:
  - Env validation enforced at startup (via lifespan, not import time)
  - Request tracing with X-Request-Id header
  - Structured JSON logging with request correlation
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_employee_repository, get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..crosscutting.rate_limit import RateLimitMiddleware
from ..crosscutting.security import SecurityHeadersMiddleware
from ..domain.repositories import EmployeeRepository
from ..identity.passwords import hash_password
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import build_router
from .exception_handlers import register_exception_handlers
from .frontend import mount_frontend


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()

    if settings.is_production():
        settings.validate_security_requirements()

    # R: en test los repos son in-memory; no hay pool que abrir.
    uses_pool = not settings.is_test()
    if uses_pool:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    try:
        try:
            ensure_dev_admin(
                settings,
                user_repo=get_user_repository(),
                password_hasher=hash_password,
            )
        except Exception as e:
            logger.error("Startup failed", extra={"error": str(e)})
            raise

        logger.info(
            "Employee API starting up",
            extra={
                "app_env": settings.app_env,
                "port": settings.port,
                "rate_limit_rps": settings.rate_limit_rps,
                "rate_limit_burst": settings.rate_limit_burst,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )

        yield

    finally:
        if uses_pool:
            close_pool()
        logger.info("Employee API shutting down")


def create_app():
    """
    Build the ASGI application.

    Returns the FastAPI app wrapped by RateLimitMiddleware; the inner FastAPI
    instance stays reachable as `.app`.
    """
    settings = get_settings()

    fastapi_app = FastAPI(
        title="Employee Directory API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "users", "description": "Signup and login (JWT)"},
            {"name": "employees", "description": "Employee records (bearer token)"},
        ],
    )

    # R: Middleware order (last added = outermost):
    # 1. RateLimitMiddleware (ASGI wrapper) - checks rate before anything
    # 2. CORSMiddleware - handles preflight
    # 3. RequestContextMiddleware - sets request_id, access log, metrics
    # 4. SecurityHeadersMiddleware - headers on every response
    # 5. BodyLimitMiddleware - rejects oversized bodies before parsing
    fastapi_app.add_middleware(BodyLimitMiddleware)
    fastapi_app.add_middleware(SecurityHeadersMiddleware)
    fastapi_app.add_middleware(RequestContextMiddleware)
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )

    register_exception_handlers(fastapi_app)

    # R: Health check endpoint for monitoring/orchestration (Kubernetes, Docker)
    @fastapi_app.get("/healthz", tags=["ops"])
    def healthz(
        request: Request,
        repo: EmployeeRepository = Depends(get_employee_repository),
    ):
        """
        Returns:
            ok: True if the store answers
            db: "connected" or "disconnected"
            request_id: Correlation ID for this request
        """
        db_status = "disconnected"
        try:
            if repo.ping():
                db_status = "connected"
        except Exception as e:
            logger.warning("Health check: DB unavailable", extra={"error": str(e)})

        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    # R: Prometheus metrics endpoint
    @fastapi_app.get("/metrics", tags=["ops"])
    def metrics():
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    fastapi_app.include_router(build_router())

    # R: catch-all de la SPA al final (después de /api, /healthz, /metrics).
    mount_frontend(fastapi_app, settings)

    return RateLimitMiddleware(fastapi_app)


app = create_app()
