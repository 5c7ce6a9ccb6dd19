# app/modules/products/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_employee_user
from app.modules.pvz.repository import PickupPointRepository
from app.shared.schemas.common import ErrorResponse, MessageResponse
from .repository import ProductRepository
from .service import ProductService
from .schemas import ProductCreateRequest, ProductResponse

router = APIRouter()


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(ProductRepository(db), PickupPointRepository(db))


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}
)
def add_product(
    request: ProductCreateRequest,
    current_user = Depends(get_employee_user),
    service: ProductService = Depends(get_product_service)
):
    """
    Agregar producto a la recepción abierta del PVZ (solo empleados)

    Tipos soportados: электроника, одежда, обувь
    """
    product = service.add_product(request.pvz_id, request.type)
    return ProductResponse.model_validate(product)


@router.post(
    "/pvz/{pvzId}/delete_last_product",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}
)
def delete_last_product(
    pvzId: str,
    current_user = Depends(get_employee_user),
    service: ProductService = Depends(get_product_service)
):
    """Eliminar el último producto agregado a la recepción abierta (LIFO)"""
    product = service.delete_last_product(pvzId)
    return MessageResponse(message=f"product {product.id} deleted")
