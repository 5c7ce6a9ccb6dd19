# app/core/auth/repository.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.shared.database.errors import DuplicateRecordError, RecordNotFoundError
from app.shared.database.models import User, utc_now

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, email: str, password_hash: str, role: str) -> User:
        """Crear usuario; la unicidad del email la garantiza la BD"""
        user = User(
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=utc_now()
        )

        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateRecordError("user")
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(user)
        return user

    def get_by_email(self, email: str) -> User:
        user = self.db.query(User).filter(User.email == email).first()
        if user is None:
            raise RecordNotFoundError("user")
        return user
