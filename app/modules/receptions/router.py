# app/modules/receptions/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_employee_user
from app.modules.pvz.repository import PickupPointRepository
from app.shared.schemas.common import ErrorResponse
from .repository import ReceptionRepository
from .service import ReceptionService
from .schemas import ReceptionCreateRequest, ReceptionResponse

router = APIRouter()


def get_reception_service(db: Session = Depends(get_db)) -> ReceptionService:
    return ReceptionService(ReceptionRepository(db), PickupPointRepository(db))


@router.post(
    "/receptions",
    response_model=ReceptionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}
)
def open_reception(
    request: ReceptionCreateRequest,
    current_user = Depends(get_employee_user),
    service: ReceptionService = Depends(get_reception_service)
):
    """
    Abrir recepción de mercancía en un PVZ (solo empleados)

    Un PVZ solo puede tener una recepción in_progress a la vez.
    """
    reception = service.open_reception(request.pvz_id)
    return ReceptionResponse.model_validate(reception)


@router.post(
    "/pvz/{pvzId}/close_last_reception",
    response_model=ReceptionResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}
)
def close_last_reception(
    pvzId: str,
    current_user = Depends(get_employee_user),
    service: ReceptionService = Depends(get_reception_service)
):
    """Cerrar la recepción abierta del PVZ"""
    reception = service.close_last_reception(pvzId)
    return ReceptionResponse.model_validate(reception)
