"""Errores de negocio del servicio PVZ."""

from typing import Optional


class ServiceError(Exception):
    """Base de todos los errores de negocio."""
    message = "error"

    def __init__(self, message: Optional[str] = None):
        if message:
            self.message = message
        super().__init__(self.message)


# Validación

class InvalidRoleError(ServiceError):
    """El rol no es employee ni moderator."""
    message = "invalid role"


class InvalidEmailError(ServiceError):
    message = "invalid email"


class InvalidCityError(ServiceError):
    """Ciudad fuera de la lista soportada."""
    message = "invalid city"


class InvalidProductTypeError(ServiceError):
    """Tipo de producto fuera de la lista soportada."""
    message = "invalid product type"


class InvalidDateError(ServiceError):
    """Fecha que no está en formato RFC3339 (2025-04-01T12:00:00Z)."""
    message = "invalid date format"


class InvalidPickupPointError(ServiceError):
    """El PVZ no existe o el identificador está mal formado."""
    message = "invalid pvz id"

    def __init__(self, pvz_id=None):
        self.pvz_id = pvz_id
        super().__init__()


# Estado / conflicto

class UserExistsError(ServiceError):
    message = "user already exists"


class OpenReceptionExistsError(ServiceError):
    """El PVZ ya tiene una recepción in_progress."""
    message = "open reception already exists"


class NoOpenReceptionError(ServiceError):
    """El PVZ no tiene recepción in_progress."""
    message = "no open reception exists"


class NoProductsError(ServiceError):
    """La recepción abierta no tiene productos."""
    message = "no products in open reception"


# Autenticación

class InvalidCredentialsError(ServiceError):
    """Email desconocido o contraseña incorrecta (mismo error en ambos casos)."""
    message = "invalid credentials"


class InvalidTokenError(ServiceError):
    message = "invalid token"


class TokenExpiredError(ServiceError):
    message = "token expired"


class MissingAuthHeaderError(ServiceError):
    message = "missing authorization header"


class InvalidAuthHeaderError(ServiceError):
    message = "invalid authorization header format"


class AccessDeniedError(ServiceError):
    """El rol del token no tiene acceso a la ruta."""
    message = "access denied"


# Infraestructura

class InternalError(ServiceError):
    """Fallo inesperado de persistencia; el detalle solo va al log."""
    message = "internal server error"
