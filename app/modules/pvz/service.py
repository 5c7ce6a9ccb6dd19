# app/modules/pvz/service.py
from typing import List, Optional, Union
from datetime import datetime
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import InvalidCityError, InvalidDateError, InvalidPickupPointError, InternalError
from app.core.metrics import PVZ_CREATED
from app.shared.database.interfaces import PickupPointDetails, PickupPointRepositoryProtocol
from app.shared.database.models import PickupPoint, CITIES, to_utc_naive

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
MAX_LIMIT = 30


def parse_pvz_id(pvz_id: Union[str, UUID, None]) -> UUID:
    """Convertir el identificador recibido a UUID o fallar con InvalidPickupPointError"""
    if isinstance(pvz_id, UUID):
        return pvz_id
    try:
        return UUID(str(pvz_id))
    except (TypeError, ValueError):
        raise InvalidPickupPointError(pvz_id)


def parse_rfc3339(value: Optional[str], field: str) -> Optional[datetime]:
    """
    Parsear fecha RFC3339 de query string (2025-04-01T12:00:00Z o con offset).

    Sin zona horaria, sin "T" o con timestamps numéricos -> InvalidDateError
    """
    if value is None:
        return None

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        parsed = None

    if parsed is None or len(value) < 20 or value[10] != "T" or parsed.tzinfo is None:
        logger.warning(f"Fecha inválida en {field}: {value}")
        raise InvalidDateError()
    return parsed


def normalize_pagination(page: Optional[int], limit: Optional[int]):
    """page < 1 -> 1; limit fuera de [1, 30] -> 30"""
    if page is None or page < 1:
        page = DEFAULT_PAGE
    if limit is None or limit < 1 or limit > MAX_LIMIT:
        limit = MAX_LIMIT
    return page, limit


class PickupPointService:
    def __init__(self, repository: PickupPointRepositoryProtocol):
        self.repository = repository

    def create_pickup_point(self, city: str) -> PickupPoint:
        """Crear PVZ en una de las ciudades soportadas"""
        if city not in CITIES:
            logger.warning(f"Ciudad inválida: {city}")
            raise InvalidCityError()

        try:
            pickup_point = self.repository.create(city)
        except SQLAlchemyError:
            logger.exception(f"Error creando PVZ en {city}")
            raise InternalError()

        PVZ_CREATED.inc()
        logger.info(f"PVZ creado - ID: {pickup_point.id}, Ciudad: {city}")
        return pickup_point

    def list_with_details(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        page: Optional[int] = DEFAULT_PAGE,
        limit: Optional[int] = MAX_LIMIT
    ) -> List[PickupPointDetails]:
        """Listar PVZ con recepciones y productos, paginado"""
        page, limit = normalize_pagination(page, limit)

        if start_date is not None:
            start_date = to_utc_naive(start_date)
        if end_date is not None:
            end_date = to_utc_naive(end_date)

        try:
            result = self.repository.list_with_details(start_date, end_date, page, limit)
        except SQLAlchemyError:
            logger.exception("Error listando PVZ")
            raise InternalError()

        logger.info(f"Listado de PVZ - página {page}, límite {limit}, resultados {len(result)}")
        return result


def require_pickup_point(pvz_repository: PickupPointRepositoryProtocol, pvz_id: Union[str, UUID]) -> UUID:
    """Validar que el PVZ existe; devuelve su UUID"""
    pvz_uuid = parse_pvz_id(pvz_id)

    try:
        exists = pvz_repository.exists(pvz_uuid)
    except SQLAlchemyError:
        logger.exception(f"Error verificando PVZ {pvz_uuid}")
        raise InternalError()

    if not exists:
        logger.warning(f"PVZ no existe: {pvz_uuid}")
        raise InvalidPickupPointError(pvz_uuid)
    return pvz_uuid
