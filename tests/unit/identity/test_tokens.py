"""
Name: Token Service Tests

Responsibilities:
  - Issue/verify round trip keeps subject and role order
  - Expiration boundary with an injected clock (exp is exclusive)
  - Wrong secret, malformed tokens and missing claims are rejected

Notes:
  - Clock is injected; no sleeps.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from employee_api.identity.tokens import (
    InvalidTokenSignatureError,
    TokenError,
    TokenExpiredError,
    TokenService,
)

pytestmark = pytest.mark.unit

ISSUED_AT = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class _Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _service(clock: _Clock, *, secret: str = "unit-secret", ttl_seconds: int = 60):
    return TokenService(secret, ttl=timedelta(seconds=ttl_seconds), clock=clock)


def test_issue_then_verify_returns_identity():
    clock = _Clock(ISSUED_AT)
    service = _service(clock)

    token = service.issue("user-1", ["admin", "user"])
    identity = service.verify(token)

    assert identity.user_id == "user-1"
    assert identity.roles == ("admin", "user")
    assert identity.primary_role == "admin"


def test_token_carries_iat_and_exp():
    clock = _Clock(ISSUED_AT)
    service = _service(clock, ttl_seconds=3600)

    token = service.issue("user-1", ["user"])
    payload = jwt.decode(token, options={"verify_signature": False})

    assert payload["iat"] == int(ISSUED_AT.timestamp())
    assert payload["exp"] - payload["iat"] == 3600


def test_token_accepted_just_before_expiry():
    clock = _Clock(ISSUED_AT)
    service = _service(clock)
    token = service.issue("user-1", ["user"])

    clock.now = ISSUED_AT + timedelta(seconds=59)

    assert service.verify(token).user_id == "user-1"


@pytest.mark.parametrize("elapsed", [60, 61, 3600])
def test_token_rejected_at_or_after_expiry(elapsed):
    clock = _Clock(ISSUED_AT)
    service = _service(clock)
    token = service.issue("user-1", ["user"])

    clock.now = ISSUED_AT + timedelta(seconds=elapsed)

    with pytest.raises(TokenExpiredError):
        service.verify(token)


def test_token_signed_with_other_secret_is_rejected():
    clock = _Clock(ISSUED_AT)
    token = _service(clock, secret="secret-a").issue("user-1", ["user"])

    with pytest.raises(InvalidTokenSignatureError):
        _service(clock, secret="secret-b").verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_rejected(token):
    service = _service(_Clock(ISSUED_AT))

    with pytest.raises(TokenError):
        service.verify(token)


def test_token_without_roles_claim_is_rejected():
    clock = _Clock(ISSUED_AT)
    token = jwt.encode(
        {
            "sub": "user-1",
            "iat": int(ISSUED_AT.timestamp()),
            "exp": int((ISSUED_AT + timedelta(minutes=5)).timestamp()),
        },
        "unit-secret",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenSignatureError):
        _service(clock).verify(token)


def test_token_with_non_list_roles_is_rejected():
    clock = _Clock(ISSUED_AT)
    token = jwt.encode(
        {
            "sub": "user-1",
            "roles": "admin",
            "iat": int(ISSUED_AT.timestamp()),
            "exp": int((ISSUED_AT + timedelta(minutes=5)).timestamp()),
        },
        "unit-secret",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenSignatureError):
        _service(clock).verify(token)


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService("")
