# app/modules/receptions/repository.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from uuid import UUID
import logging

from app.shared.database.errors import DuplicateRecordError, RecordNotFoundError
from app.shared.database.models import (
    PickupPoint, Reception, STATUS_IN_PROGRESS, STATUS_CLOSED, utc_now
)

logger = logging.getLogger(__name__)

class ReceptionRepository:
    def __init__(self, db: Session):
        self.db = db

    def _open_reception_query(self, pvz_id: UUID):
        return self.db.query(Reception).filter(
            Reception.pvz_id == pvz_id,
            Reception.status == STATUS_IN_PROGRESS
        )

    def create_open(self, pvz_id: UUID) -> Reception:
        """
        Abrir recepción en transacción atómica.

        - SELECT FOR UPDATE sobre el PVZ serializa aperturas concurrentes
        - El índice único parcial (pvz_id WHERE in_progress) cubre cualquier
          carrera restante: IntegrityError -> DuplicateRecordError
        """
        try:
            pickup_point = (
                self.db.query(PickupPoint)
                .filter(PickupPoint.id == pvz_id)
                .with_for_update()
                .first()
            )
            if pickup_point is None:
                raise RecordNotFoundError("pvz")

            if self._open_reception_query(pvz_id).first() is not None:
                raise DuplicateRecordError("reception")

            reception = Reception(
                pvz_id=pvz_id,
                status=STATUS_IN_PROGRESS,
                date_time=utc_now()
            )
            self.db.add(reception)
            self.db.commit()

        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Recepción abierta creada concurrentemente en PVZ {pvz_id}")
            raise DuplicateRecordError("reception")
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(reception)
        return reception

    def close_open(self, pvz_id: UUID) -> Reception:
        """
        Cerrar la recepción abierta del PVZ.

        El UPDATE lleva la condición status = in_progress; si no afecta
        filas la recepción ya fue cerrada por otra petición.
        """
        try:
            reception = self._open_reception_query(pvz_id).with_for_update().first()
            if reception is None:
                raise RecordNotFoundError("reception")

            updated = (
                self.db.query(Reception)
                .filter(
                    Reception.id == reception.id,
                    Reception.status == STATUS_IN_PROGRESS
                )
                .update({Reception.status: STATUS_CLOSED}, synchronize_session=False)
            )
            if updated == 0:
                raise RecordNotFoundError("reception")

            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(reception)
        return reception
