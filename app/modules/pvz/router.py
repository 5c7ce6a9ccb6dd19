# app/modules/pvz/router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_moderator_user, get_staff_user
from app.shared.schemas.common import ErrorResponse
from .repository import PickupPointRepository
from .service import PickupPointService, parse_rfc3339
from .schemas import (
    PickupPointCreateRequest, PickupPointResponse,
    PickupPointDetailsResponse, PickupPointListResponse
)

router = APIRouter()


def get_pickup_point_service(db: Session = Depends(get_db)) -> PickupPointService:
    return PickupPointService(PickupPointRepository(db))


@router.post(
    "/pvz",
    response_model=PickupPointResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}
)
def create_pickup_point(
    request: PickupPointCreateRequest,
    current_user = Depends(get_moderator_user),
    service: PickupPointService = Depends(get_pickup_point_service)
):
    """
    Crear PVZ (solo moderadores)

    Ciudades soportadas: Москва, Санкт-Петербург, Казань
    """
    pickup_point = service.create_pickup_point(request.city)
    return PickupPointResponse.model_validate(pickup_point)


@router.get(
    "/pvz",
    response_model=PickupPointListResponse,
    responses={400: {"model": ErrorResponse}}
)
def list_pickup_points(
    start_date: Optional[str] = Query(None, alias="startDate", description="Inicio del rango de recepciones (RFC3339)"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Fin del rango de recepciones (RFC3339)"),
    page: Optional[int] = Query(None, description="Página, desde 1"),
    limit: Optional[int] = Query(None, description="Elementos por página (1-30)"),
    current_user = Depends(get_staff_user),
    service: PickupPointService = Depends(get_pickup_point_service)
):
    """
    Listar PVZ con sus recepciones y productos

    **Incluye:**
    - Recepciones filtradas por fecha (más reciente primero)
    - Productos de cada recepción (último agregado primero)
    - PVZ sin recepciones en el rango, con lista vacía
    """
    details = service.list_with_details(
        parse_rfc3339(start_date, "startDate"),
        parse_rfc3339(end_date, "endDate"),
        page,
        limit
    )
    return PickupPointListResponse(
        pvzs=[PickupPointDetailsResponse.from_details(item) for item in details]
    )
