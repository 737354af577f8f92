"""
Account use cases (signup / login) and their result models.
"""

from __future__ import annotations

from .account_results import AccountError, AccountErrorCode, AuthResult, PublicProfile
from .login import LoginInput, LoginUseCase
from .signup import SignupInput, SignupUseCase

__all__ = [
    "SignupUseCase",
    "SignupInput",
    "LoginUseCase",
    "LoginInput",
    "AuthResult",
    "PublicProfile",
    "AccountError",
    "AccountErrorCode",
]
