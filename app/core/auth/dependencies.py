from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.repository import UserRepository
from app.core.auth.schemas import TokenPayload
from app.core.auth.service import AuthService
from app.core.exceptions import MissingAuthHeaderError, InvalidAuthHeaderError, AccessDeniedError
from app.shared.database.models import ROLE_EMPLOYEE, ROLE_MODERATOR

# Solo para documentar el esquema en OpenAPI; el header se valida abajo
security = HTTPBearer(auto_error=False)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(UserRepository(db))


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """Obtener claims del usuario actual desde el token"""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise MissingAuthHeaderError()

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise InvalidAuthHeaderError()

    # Los tokens dummy no tienen usuario en BD: basta con los claims
    return AuthService(None).validate_token(parts[1])


def require_roles(allowed_roles: List[str]):
    """Factory para crear dependency que requiere roles específicos"""
    def role_checker(current_user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
        if current_user.role not in allowed_roles:
            raise AccessDeniedError()
        return current_user
    return role_checker


# Dependencies específicas por rol
def get_employee_user(current_user: TokenPayload = Depends(require_roles([ROLE_EMPLOYEE]))):
    """Dependency para empleados del PVZ"""
    return current_user


def get_moderator_user(current_user: TokenPayload = Depends(require_roles([ROLE_MODERATOR]))):
    """Dependency para moderadores"""
    return current_user


def get_staff_user(current_user: TokenPayload = Depends(require_roles([ROLE_EMPLOYEE, ROLE_MODERATOR]))):
    """Dependency para cualquier rol del sistema"""
    return current_user
