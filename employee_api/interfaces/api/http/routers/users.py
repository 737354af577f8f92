"""
===============================================================================
TARJETA CRC — employee_api/interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    Users Router (signup / login)

Responsibilities:
    - Exponer POST /api/users/signup (201) y POST /api/users/login (200).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir AccountError -> RFC7807.

Collaborators:
    - employee_api.application.usecases (SignupUseCase, LoginUseCase)
    - employee_api.container (factories DI)
    - schemas.users (DTOs Pydantic)

Notas:
    - Rutas públicas: no dependen del Authentication Gate.
===============================================================================
"""

from __future__ import annotations

from employee_api.application.usecases import (
    AuthResult,
    LoginInput,
    LoginUseCase,
    SignupInput,
    SignupUseCase,
)
from employee_api.container import get_login_use_case, get_signup_use_case
from fastapi import APIRouter, Depends, status

from ..error_mapping import raise_account_error
from ..schemas.users import AuthRes, LoginReq, ProfileRes, SignupReq

router = APIRouter(prefix="/api/users", tags=["users"])


def _to_auth_res(result: AuthResult) -> AuthRes:
    if result.error is not None:
        raise_account_error(result.error)
    return AuthRes(
        token=result.token,
        user=ProfileRes(
            id=result.user.id,
            username=result.user.username,
            email=result.user.email,
            roles=list(result.user.roles),
        ),
    )


@router.post(
    "/signup",
    response_model=AuthRes,
    status_code=status.HTTP_201_CREATED,
)
def signup(
    req: SignupReq,
    use_case: SignupUseCase = Depends(get_signup_use_case),
):
    result = use_case.execute(
        SignupInput(
            first_name=req.first_name,
            last_name=req.last_name,
            username=req.username,
            email=req.email,
            password=req.password,
        )
    )
    return _to_auth_res(result)


@router.post("/login", response_model=AuthRes)
def login(
    req: LoginReq,
    use_case: LoginUseCase = Depends(get_login_use_case),
):
    result = use_case.execute(LoginInput(username=req.username, password=req.password))
    return _to_auth_res(result)
