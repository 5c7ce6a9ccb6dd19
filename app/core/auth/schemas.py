from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from app.shared.schemas.common import CamelModel


class DummyLoginRequest(BaseModel):
    """Schema para dummy login"""
    role: str = Field(..., description="Rol del usuario: employee o moderator")

    class Config:
        json_schema_extra = {
            "example": {"role": "employee"}
        }


class UserLogin(BaseModel):
    """Schema para login de usuario"""
    email: str = Field(..., description="Email del usuario")
    password: str = Field(..., description="Contraseña del usuario")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "employee@pvz.ru",
                "password": "employee123"
            }
        }


class UserRegisterRequest(BaseModel):
    """Schema para registro de usuario"""
    email: str = Field(..., description="Email del usuario")
    password: str = Field(..., min_length=1)
    role: str = Field(..., description="employee o moderator")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "moderator@pvz.ru",
                "password": "moderator123",
                "role": "moderator"
            }
        }


class UserResponse(CamelModel):
    """Schema para respuesta de usuario"""
    id: UUID
    email: str
    role: str


class TokenResponse(BaseModel):
    """Schema para respuesta de token"""
    token: str


class TokenPayload(BaseModel):
    """Schema para payload del token"""
    user_id: UUID
    role: str
    exp: Optional[datetime] = None
