# app/modules/products/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import func
from uuid import UUID
import logging

from app.shared.database.errors import RecordNotFoundError
from app.shared.database.models import Reception, Product, STATUS_IN_PROGRESS, utc_now

logger = logging.getLogger(__name__)

class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def _lock_open_reception(self, pvz_id: UUID) -> Reception:
        """
        Bloquear la recepción abierta del PVZ (SELECT FOR UPDATE).

        Todas las altas y bajas de productos de la recepción pasan por este
        bloqueo, así que se ejecutan en serie.
        """
        reception = (
            self.db.query(Reception)
            .filter(
                Reception.pvz_id == pvz_id,
                Reception.status == STATUS_IN_PROGRESS
            )
            .with_for_update()
            .first()
        )
        if reception is None:
            raise RecordNotFoundError("reception")
        return reception

    def append(self, pvz_id: UUID, product_type: str) -> Product:
        """
        Agregar producto en transacción atómica.

        Proceso:
        1. Bloquear recepción abierta
        2. Calcular siguiente sequence_number
        3. Insertar producto
        4. Commit único
        """
        try:
            reception = self._lock_open_reception(pvz_id)

            last_sequence = (
                self.db.query(func.coalesce(func.max(Product.sequence_number), 0))
                .filter(Product.reception_id == reception.id)
                .scalar()
            )

            product = Product(
                type=product_type,
                reception_id=reception.id,
                sequence_number=last_sequence + 1,
                date_time=utc_now()
            )
            self.db.add(product)
            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(product)
        return product

    def delete_last(self, pvz_id: UUID) -> Product:
        """
        Eliminar el último producto agregado en transacción atómica.

        Returns:
            Product: el producto eliminado (desvinculado de la sesión)
        """
        try:
            reception = self._lock_open_reception(pvz_id)

            product = (
                self.db.query(Product)
                .filter(Product.reception_id == reception.id)
                .order_by(Product.sequence_number.desc())
                .with_for_update()
                .first()
            )
            if product is None:
                raise RecordNotFoundError("product")

            deleted = (
                self.db.query(Product)
                .filter(Product.id == product.id)
                .delete(synchronize_session=False)
            )
            if deleted == 0:
                raise RecordNotFoundError("product")

            self.db.expunge(product)
            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        return product

