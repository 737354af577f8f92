"""
Name: Account Use Case Tests (signup / login)

Responsibilities:
  - Signup stores a hashed password, default role and lower-cased email
  - Signup rejects duplicates (early check and store constraint)
  - Login by username or email with a single error for every failure
"""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from employee_api.application.usecases import (
    AccountErrorCode,
    LoginInput,
    LoginUseCase,
    SignupInput,
    SignupUseCase,
)
from employee_api.crosscutting.exceptions import DuplicateRecordError
from employee_api.domain.entities import UserAccount
from employee_api.identity.tokens import TokenService
from employee_api.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit


def _hasher(password: str) -> str:
    return f"hashed:{password}"


def _verifier(password: str, password_hash: str) -> bool:
    return password_hash == f"hashed:{password}"


def _signup_input(**overrides) -> SignupInput:
    values = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "username": "adalove",
        "email": "Ada@Example.com",
        "password": "secret123",
    }
    values.update(overrides)
    return SignupInput(**values)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService("unit-secret")


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def signup(users, tokens) -> SignupUseCase:
    return SignupUseCase(users, tokens, password_hasher=_hasher)


@pytest.fixture
def login(users, tokens) -> LoginUseCase:
    return LoginUseCase(users, tokens, password_verifier=_verifier)


class TestSignup:
    def test_creates_account_and_returns_token(self, signup, users, tokens):
        result = signup.execute(_signup_input())

        assert result.error is None
        assert result.user.username == "adalove"
        assert result.user.email == "ada@example.com"
        assert result.user.roles == ["user"]

        identity = tokens.verify(result.token)
        assert identity.user_id == str(result.user.id)
        assert identity.roles == ("user",)

        stored = users.get_user(result.user.id)
        assert stored.password_hash == "hashed:secret123"
        assert stored.first_name == "Ada"

    def test_profile_never_exposes_password_hash(self, signup):
        result = signup.execute(_signup_input())

        assert not hasattr(result.user, "password_hash")

    def test_duplicate_username_is_rejected(self, signup):
        signup.execute(_signup_input())

        result = signup.execute(_signup_input(email="other@example.com"))

        assert result.token is None
        assert result.error.code == AccountErrorCode.DUPLICATE
        assert result.error.message == "User already exists"

    def test_duplicate_email_is_case_insensitive(self, signup):
        signup.execute(_signup_input())

        result = signup.execute(_signup_input(username="someone", email="ADA@example.COM"))

        assert result.error.code == AccountErrorCode.DUPLICATE

    def test_store_constraint_is_reported_as_duplicate(self, tokens):
        repo = MagicMock()
        repo.find_by_username_or_email.return_value = None
        repo.create_user.side_effect = DuplicateRecordError(
            "dup", constraint="uq_users_email"
        )
        use_case = SignupUseCase(repo, tokens, password_hasher=_hasher)

        result = use_case.execute(_signup_input())

        assert result.error.code == AccountErrorCode.DUPLICATE
        assert result.token is None


class TestLogin:
    def test_login_by_username(self, signup, login, tokens):
        created = signup.execute(_signup_input())

        result = login.execute(LoginInput(username="adalove", password="secret123"))

        assert result.error is None
        assert result.user.id == created.user.id
        assert tokens.verify(result.token).user_id == str(created.user.id)

    def test_login_by_email_ignores_case(self, signup, login):
        signup.execute(_signup_input())

        result = login.execute(
            LoginInput(username="ADA@example.com", password="secret123")
        )

        assert result.error is None
        assert result.user.username == "adalove"

    @pytest.mark.parametrize(
        "username, password",
        [("adalove", "wrong-password"), ("nobody", "secret123")],
    )
    def test_failures_share_one_message(self, signup, login, username, password):
        signup.execute(_signup_input())

        result = login.execute(LoginInput(username=username, password=password))

        assert result.token is None
        assert result.error.code == AccountErrorCode.INVALID_CREDENTIALS
        assert result.error.message == "Invalid Credentials"

    def test_username_match_wins_over_email_match(self, users, login):
        # R: account A's username equals account B's email.
        users.create_user(
            UserAccount(
                id=uuid4(),
                first_name="B",
                last_name="B",
                username="bee",
                email="shared@example.com",
                password_hash="hashed:b-pass",
            )
        )
        users.create_user(
            UserAccount(
                id=uuid4(),
                first_name="A",
                last_name="A",
                username="shared@example.com",
                email="a@example.com",
                password_hash="hashed:a-pass",
            )
        )

        result = login.execute(
            LoginInput(username="shared@example.com", password="a-pass")
        )

        assert result.error is None
        assert result.user.username == "shared@example.com"
