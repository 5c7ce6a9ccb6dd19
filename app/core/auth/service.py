import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from email_validator import validate_email, EmailNotValidError
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import Settings, settings as default_settings
from app.core.auth.schemas import TokenPayload
from app.core.exceptions import (
    InvalidRoleError, InvalidEmailError, UserExistsError,
    InvalidCredentialsError, InvalidTokenError, TokenExpiredError, InternalError,
)
from app.shared.database.errors import DuplicateRecordError, RecordNotFoundError
from app.shared.database.interfaces import UserRepositoryProtocol
from app.shared.database.models import User, ROLES

logger = logging.getLogger(__name__)

# Password context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def mask_email(email: str) -> str:
    """Ocultar el email en logs: us****@example.com"""
    parts = email.split("@")
    if len(parts) != 2:
        return "invalid_email"

    username, domain = parts
    return f"{username[:2]}****@{domain}"


class AuthService:
    """Servicio de autenticación"""

    def __init__(self, user_repository: Optional[UserRepositoryProtocol], config: Settings = default_settings):
        self.users = user_repository
        self.config = config

    # ==================== CONTRASEÑAS ====================

    def get_password_hash(self, password: str) -> str:
        """Generar hash de contraseña (sal global + sal aleatoria por hash)"""
        return pwd_context.hash(self.config.password_salt + password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verificar contraseña"""
        try:
            return pwd_context.verify(self.config.password_salt + plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.warning(f"Hash de contraseña ilegible: {e}")
            return False

    # ==================== TOKENS ====================

    def create_access_token(self, user_id: uuid.UUID, role: str, expires_delta: Optional[timedelta] = None) -> str:
        """Crear token de acceso"""
        now = datetime.now(timezone.utc)

        if expires_delta is None:
            expires_delta = timedelta(minutes=self.config.access_token_expire_minutes)

        to_encode = {
            "sub": str(user_id),
            "user_id": str(user_id),
            "role": role,
            "iat": now,
            "exp": now + expires_delta,
        }

        return jwt.encode(to_encode, self.config.secret_key, algorithm=self.config.algorithm)

    def validate_token(self, token: str) -> TokenPayload:
        """Verificar y decodificar token"""
        try:
            payload = jwt.decode(token, self.config.secret_key, algorithms=[self.config.algorithm])
        except ExpiredSignatureError:
            logger.warning("Token expirado")
            raise TokenExpiredError()
        except JWTError as e:
            logger.warning(f"Token inválido: {e}")
            raise InvalidTokenError()

        try:
            claims = TokenPayload(**payload)
        except (TypeError, ValueError):
            logger.warning("Payload del token inválido")
            raise InvalidTokenError()

        if claims.role not in ROLES:
            logger.warning(f"Rol desconocido en token: {claims.role}")
            raise InvalidTokenError()

        return claims

    # ==================== OPERACIONES ====================

    def dummy_login(self, role: str) -> str:
        """Token para un usuario efímero con el rol indicado, sin persistencia"""
        self._validate_role(role)

        dummy_id = uuid.uuid4()
        token = self.create_access_token(dummy_id, role)

        logger.info(f"Dummy login - Rol: {role}, Usuario: {dummy_id}")
        return token

    def register(self, email: str, password: str, role: str) -> User:
        """Registrar usuario nuevo"""
        masked = mask_email(email)

        self._validate_role(role)

        self._validate_email(email)

        try:
            self.users.get_by_email(email)
            logger.warning(f"Usuario ya existe: {masked}")
            raise UserExistsError()
        except RecordNotFoundError:
            pass
        except SQLAlchemyError:
            logger.exception(f"Error verificando usuario {masked}")
            raise InternalError()

        try:
            user = self.users.create(email, self.get_password_hash(password), role)
        except DuplicateRecordError:
            logger.warning(f"Usuario creado concurrentemente: {masked}")
            raise UserExistsError()
        except SQLAlchemyError:
            logger.exception(f"Error creando usuario {masked}")
            raise InternalError()

        logger.info(f"Usuario registrado - ID: {user.id}, Email: {masked}, Rol: {role}")
        return user

    def login(self, email: str, password: str) -> str:
        """Login con email y contraseña"""
        masked = mask_email(email)

        try:
            user = self.users.get_by_email(email)
        except RecordNotFoundError:
            logger.warning(f"Credenciales inválidas (usuario no encontrado): {masked}")
            raise InvalidCredentialsError()
        except SQLAlchemyError:
            logger.exception(f"Error obteniendo usuario {masked}")
            raise InternalError()

        if not self.verify_password(password, user.password_hash):
            logger.warning(f"Credenciales inválidas (contraseña incorrecta): {masked}")
            raise InvalidCredentialsError()

        logger.info(f"Login exitoso - Usuario: {user.id}")
        return self.create_access_token(user.id, user.role)

    @staticmethod
    def _validate_email(email: str):
        """Sintaxis del email (sin consulta DNS); los espacios alrededor no se recortan"""
        if email != email.strip():
            raise InvalidEmailError()
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            logger.warning(f"Email inválido: {e}")
            raise InvalidEmailError()

    @staticmethod
    def _validate_role(role: str):
        if role not in ROLES:
            logger.warning(f"Rol inválido: {role}")
            raise InvalidRoleError()
