# app/shared/database/models.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Index, UniqueConstraint,
    CheckConstraint, Uuid, text
)
from sqlalchemy.orm import relationship

from app.config.database import Base


# =====================================================
# CONSTANTES DE DOMINIO
# =====================================================

ROLE_EMPLOYEE = "employee"
ROLE_MODERATOR = "moderator"
ROLES = (ROLE_EMPLOYEE, ROLE_MODERATOR)

CITY_MOSCOW = "Москва"
CITY_SPB = "Санкт-Петербург"
CITY_KAZAN = "Казань"
CITIES = (CITY_MOSCOW, CITY_SPB, CITY_KAZAN)

STATUS_IN_PROGRESS = "in_progress"
STATUS_CLOSED = "closed"
RECEPTION_STATUSES = (STATUS_IN_PROGRESS, STATUS_CLOSED)

PRODUCT_TYPE_ELECTRONICS = "электроника"
PRODUCT_TYPE_CLOTHES = "одежда"
PRODUCT_TYPE_SHOES = "обувь"
PRODUCT_TYPES = (PRODUCT_TYPE_ELECTRONICS, PRODUCT_TYPE_CLOTHES, PRODUCT_TYPE_SHOES)


def utc_now() -> datetime:
    """Hora actual en UTC sin tzinfo (así se guarda en BD)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """Normalizar un datetime al formato almacenado"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _in_clause(values) -> str:
    return ", ".join(f"'{value}'" for value in values)


# =====================================================
# USUARIOS
# =====================================================

class User(Base):
    """Modelo de Usuario"""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    __table_args__ = (
        CheckConstraint(f"role IN ({_in_clause(ROLES)})", name="users_role_check"),
    )


# =====================================================
# PUNTOS DE RECOGIDA (PVZ)
# =====================================================

class PickupPoint(Base):
    """Modelo de Punto de Recogida"""
    __tablename__ = "pvz"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    registration_date = Column(DateTime, nullable=False, default=utc_now)
    city = Column(String(50), nullable=False)

    # Relationships
    receptions = relationship("Reception", back_populates="pickup_point")

    __table_args__ = (
        CheckConstraint(f"city IN ({_in_clause(CITIES)})", name="pvz_city_check"),
        Index("idx_pvz_registration_date", "registration_date", "id"),
    )


# =====================================================
# RECEPCIONES
# =====================================================

class Reception(Base):
    """Modelo de Recepción (sesión de ingreso de mercancía)"""
    __tablename__ = "receptions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    date_time = Column(DateTime, nullable=False, default=utc_now)
    pvz_id = Column(Uuid, ForeignKey("pvz.id"), nullable=False)
    status = Column(String(20), nullable=False, default=STATUS_IN_PROGRESS)

    # Relationships
    pickup_point = relationship("PickupPoint", back_populates="receptions")
    products = relationship("Product", back_populates="reception")

    __table_args__ = (
        CheckConstraint(
            f"status IN ({_in_clause(RECEPTION_STATUSES)})", name="receptions_status_check"
        ),
        # Como máximo una recepción abierta por PVZ
        Index(
            "uq_receptions_open_per_pvz",
            "pvz_id",
            unique=True,
            postgresql_where=text(f"status = '{STATUS_IN_PROGRESS}'"),
            sqlite_where=text(f"status = '{STATUS_IN_PROGRESS}'"),
        ),
        Index("idx_receptions_pvz_date_time", "pvz_id", "date_time"),
    )

    @property
    def is_open(self) -> bool:
        return self.status == STATUS_IN_PROGRESS


# =====================================================
# PRODUCTOS
# =====================================================

class Product(Base):
    """Modelo de Producto recibido"""
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    date_time = Column(DateTime, nullable=False, default=utc_now)
    type = Column(String(50), nullable=False)
    reception_id = Column(Uuid, ForeignKey("receptions.id"), nullable=False)
    # Posición de inserción dentro de la recepción (1, 2, 3...)
    sequence_number = Column(Integer, nullable=False)

    # Relationships
    reception = relationship("Reception", back_populates="products")

    __table_args__ = (
        CheckConstraint(f"type IN ({_in_clause(PRODUCT_TYPES)})", name="products_type_check"),
        UniqueConstraint("reception_id", "sequence_number", name="products_sequence_per_reception"),
    )
