# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Contratos que cumplen los repositorios SQLAlchemy y los dobles en memoria
# de los tests. Los servicios dependen de estas interfaces, no de Session.
#
# Convenciones:
# - "no existe" / "cero filas afectadas" -> RecordNotFoundError(entity)
# - violación de unicidad               -> DuplicateRecordError(entity)
# - cualquier otro fallo                 -> SQLAlchemyError sin traducir
#
# Cada operación que decide y modifica (abrir, cerrar, agregar, eliminar
# último) es una sola transacción dentro del repositorio.
# ==============================================================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Protocol, runtime_checkable
from uuid import UUID

from app.shared.database.models import PickupPoint, Product, Reception, User


# ==============================================================================
# MODELOS DE LECTURA
# ==============================================================================

@dataclass
class ReceptionDetails:
    """Recepción con sus productos (más reciente primero)"""
    reception: Reception
    products: List[Product] = field(default_factory=list)


@dataclass
class PickupPointDetails:
    """PVZ con sus recepciones (más reciente primero)"""
    pickup_point: PickupPoint
    receptions: List[ReceptionDetails] = field(default_factory=list)


# ==============================================================================
# INTERFACES
# ==============================================================================

@runtime_checkable
class UserRepositoryProtocol(Protocol):

    def create(self, email: str, password_hash: str, role: str) -> User:
        """Crear usuario. DuplicateRecordError si el email ya existe."""
        ...

    def get_by_email(self, email: str) -> User:
        """RecordNotFoundError si no existe."""
        ...


@runtime_checkable
class PickupPointRepositoryProtocol(Protocol):

    def create(self, city: str) -> PickupPoint:
        ...

    def exists(self, pvz_id: UUID) -> bool:
        ...

    def list_with_details(
        self,
        start_date: Optional[datetime],
        end_date: Optional[datetime],
        page: int,
        limit: int
    ) -> List[PickupPointDetails]:
        """
        Página de PVZ con recepciones filtradas por fecha.

        page y limit llegan ya normalizados (page >= 1, 1 <= limit <= 30).
        """
        ...


@runtime_checkable
class ReceptionRepositoryProtocol(Protocol):

    def create_open(self, pvz_id: UUID) -> Reception:
        """
        Abrir recepción si el PVZ no tiene otra abierta.

        DuplicateRecordError("reception") si ya existe una abierta.
        """
        ...

    def close_open(self, pvz_id: UUID) -> Reception:
        """
        Cerrar la recepción abierta con un UPDATE condicional.

        RecordNotFoundError("reception") si el UPDATE no afectó filas.
        """
        ...


@runtime_checkable
class ProductRepositoryProtocol(Protocol):

    def append(self, pvz_id: UUID, product_type: str) -> Product:
        """
        Agregar producto al final de la recepción abierta del PVZ.

        RecordNotFoundError("reception") si no hay recepción abierta.
        """
        ...

    def delete_last(self, pvz_id: UUID) -> Product:
        """
        Eliminar el producto con mayor sequence_number de la recepción abierta.

        RecordNotFoundError("reception") si no hay recepción abierta,
        RecordNotFoundError("product") si la recepción está vacía.
        """
        ...
