# app/modules/receptions/service.py
from typing import Union
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import (
    InvalidPickupPointError, OpenReceptionExistsError, NoOpenReceptionError, InternalError
)
from app.core.metrics import RECEPTIONS_CREATED
from app.modules.pvz.service import require_pickup_point
from app.shared.database.errors import DuplicateRecordError, RecordNotFoundError
from app.shared.database.interfaces import (
    PickupPointRepositoryProtocol, ReceptionRepositoryProtocol
)
from app.shared.database.models import Reception

logger = logging.getLogger(__name__)

class ReceptionService:
    def __init__(
        self,
        repository: ReceptionRepositoryProtocol,
        pvz_repository: PickupPointRepositoryProtocol
    ):
        self.repository = repository
        self.pvz_repository = pvz_repository

    def open_reception(self, pvz_id: Union[str, UUID]) -> Reception:
        """
        Abrir recepción en el PVZ.

        Falla si el PVZ no existe o si ya tiene una recepción in_progress.
        """
        pvz_uuid = require_pickup_point(self.pvz_repository, pvz_id)

        try:
            reception = self.repository.create_open(pvz_uuid)
        except DuplicateRecordError:
            logger.warning(f"PVZ {pvz_uuid} ya tiene recepción abierta")
            raise OpenReceptionExistsError()
        except RecordNotFoundError:
            raise InvalidPickupPointError(pvz_uuid)
        except SQLAlchemyError:
            logger.exception(f"Error abriendo recepción en PVZ {pvz_uuid}")
            raise InternalError()

        RECEPTIONS_CREATED.inc()
        logger.info(f"Recepción abierta - ID: {reception.id}, PVZ: {pvz_uuid}")
        return reception

    def close_last_reception(self, pvz_id: Union[str, UUID]) -> Reception:
        """Cerrar la recepción abierta del PVZ"""
        pvz_uuid = require_pickup_point(self.pvz_repository, pvz_id)

        try:
            reception = self.repository.close_open(pvz_uuid)
        except RecordNotFoundError:
            logger.warning(f"PVZ {pvz_uuid} sin recepción abierta para cerrar")
            raise NoOpenReceptionError()
        except SQLAlchemyError:
            logger.exception(f"Error cerrando recepción en PVZ {pvz_uuid}")
            raise InternalError()

        logger.info(f"Recepción cerrada - ID: {reception.id}, PVZ: {pvz_uuid}")
        return reception
