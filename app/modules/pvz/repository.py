# app/modules/pvz/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import Dict, List, Optional
from datetime import datetime
from uuid import UUID
import logging

from app.shared.database.interfaces import PickupPointDetails, ReceptionDetails
from app.shared.database.models import PickupPoint, Reception, Product, utc_now

logger = logging.getLogger(__name__)

class PickupPointRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, city: str) -> PickupPoint:
        """Crear PVZ"""
        pickup_point = PickupPoint(city=city, registration_date=utc_now())

        try:
            self.db.add(pickup_point)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(pickup_point)
        return pickup_point

    def exists(self, pvz_id: UUID) -> bool:
        return self.db.query(
            self.db.query(PickupPoint.id).filter(PickupPoint.id == pvz_id).exists()
        ).scalar()

    def list_with_details(
        self,
        start_date: Optional[datetime],
        end_date: Optional[datetime],
        page: int,
        limit: int
    ) -> List[PickupPointDetails]:
        """
        Listar PVZ con recepciones y productos.

        Tres consultas:
        1. Página de PVZ (limit/offset sobre PVZ distintos)
        2. Recepciones de esos PVZ dentro del rango de fechas
        3. Productos de esas recepciones

        Los PVZ sin recepciones en el rango se devuelven con lista vacía.
        """
        pickup_points = (
            self.db.query(PickupPoint)
            .order_by(PickupPoint.registration_date.asc(), PickupPoint.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

        if not pickup_points:
            return []

        details: Dict[UUID, PickupPointDetails] = {
            pvz.id: PickupPointDetails(pickup_point=pvz) for pvz in pickup_points
        }

        # Recepciones filtradas por fecha, más reciente primero
        conditions = [Reception.pvz_id.in_(list(details.keys()))]
        if start_date is not None:
            conditions.append(Reception.date_time >= start_date)
        if end_date is not None:
            conditions.append(Reception.date_time <= end_date)

        receptions = (
            self.db.query(Reception)
            .filter(and_(*conditions))
            .order_by(Reception.date_time.desc(), Reception.id.desc())
            .all()
        )

        reception_details: Dict[UUID, ReceptionDetails] = {}
        for reception in receptions:
            item = ReceptionDetails(reception=reception)
            reception_details[reception.id] = item
            details[reception.pvz_id].receptions.append(item)

        # Productos, último agregado primero
        if reception_details:
            products = (
                self.db.query(Product)
                .filter(Product.reception_id.in_(list(reception_details.keys())))
                .order_by(Product.reception_id, Product.sequence_number.desc())
                .all()
            )
            for product in products:
                reception_details[product.reception_id].products.append(product)

        logger.debug(
            f"Listado PVZ - página {page}, límite {limit}: "
            f"{len(pickup_points)} PVZ, {len(receptions)} recepciones"
        )

        return [details[pvz.id] for pvz in pickup_points]
