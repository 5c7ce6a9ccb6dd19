# app/modules/products/service.py
from typing import Union
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import (
    InvalidProductTypeError, NoOpenReceptionError,
    NoProductsError, InternalError
)
from app.core.metrics import PRODUCTS_ADDED
from app.modules.pvz.service import require_pickup_point
from app.shared.database.errors import RecordNotFoundError
from app.shared.database.interfaces import (
    PickupPointRepositoryProtocol, ProductRepositoryProtocol
)
from app.shared.database.models import Product, PRODUCT_TYPES

logger = logging.getLogger(__name__)

class ProductService:
    def __init__(
        self,
        repository: ProductRepositoryProtocol,
        pvz_repository: PickupPointRepositoryProtocol
    ):
        self.repository = repository
        self.pvz_repository = pvz_repository

    def add_product(self, pvz_id: Union[str, UUID], product_type: str) -> Product:
        """
        Agregar producto a la recepción abierta del PVZ.

        Responsabilidades:
        - Validar tipo de producto y PVZ
        - Delegar la transacción al repository
        - Traducir "sin recepción abierta" a error de negocio
        """
        if product_type not in PRODUCT_TYPES:
            logger.warning(f"Tipo de producto inválido: {product_type}")
            raise InvalidProductTypeError()

        pvz_uuid = require_pickup_point(self.pvz_repository, pvz_id)

        try:
            product = self.repository.append(pvz_uuid, product_type)
        except RecordNotFoundError:
            logger.warning(f"PVZ {pvz_uuid} sin recepción abierta")
            raise NoOpenReceptionError()
        except SQLAlchemyError:
            logger.exception(f"Error agregando producto en PVZ {pvz_uuid}")
            raise InternalError()

        PRODUCTS_ADDED.inc()
        logger.info(
            f"Producto agregado - ID: {product.id}, Recepción: {product.reception_id}, "
            f"Posición: {product.sequence_number}"
        )
        return product

    def delete_last_product(self, pvz_id: Union[str, UUID]) -> Product:
        """Eliminar el último producto agregado a la recepción abierta"""
        pvz_uuid = require_pickup_point(self.pvz_repository, pvz_id)

        try:
            product = self.repository.delete_last(pvz_uuid)
        except RecordNotFoundError as e:
            if e.entity == "product":
                logger.warning(f"Recepción abierta de PVZ {pvz_uuid} sin productos")
                raise NoProductsError()
            logger.warning(f"PVZ {pvz_uuid} sin recepción abierta")
            raise NoOpenReceptionError()
        except SQLAlchemyError:
            logger.exception(f"Error eliminando producto en PVZ {pvz_uuid}")
            raise InternalError()

        logger.info(f"Producto eliminado - ID: {product.id}, Recepción: {product.reception_id}")
        return product
