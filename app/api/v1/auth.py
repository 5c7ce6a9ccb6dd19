from fastapi import APIRouter, Depends, status

from app.core.auth.dependencies import get_auth_service
from app.core.auth.schemas import (
    DummyLoginRequest, UserLogin, UserRegisterRequest, TokenResponse, UserResponse
)
from app.core.auth.service import AuthService
from app.shared.schemas.common import ErrorResponse

router = APIRouter(tags=["authentication"])


@router.post(
    "/dummyLogin",
    response_model=TokenResponse,
    responses={400: {"model": ErrorResponse}}
)
def dummy_login(
    request: DummyLoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """
    Obtener token de prueba para un rol, sin usuario en BD

    **Body:**
    - **role**: employee o moderator
    """
    return TokenResponse(token=service.dummy_login(request.role))


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}
)
def register(
    request: UserRegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Registrar usuario con email, contraseña y rol"""
    user = service.register(request.email, request.password, request.role)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}}
)
def login(
    user_login: UserLogin,
    service: AuthService = Depends(get_auth_service)
):
    """
    Login con email y contraseña

    Email desconocido y contraseña incorrecta devuelven el mismo error.
    """
    return TokenResponse(token=service.login(user_login.email, user_login.password))
