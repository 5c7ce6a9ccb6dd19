# app/modules/receptions/schemas.py
from pydantic import Field
from datetime import datetime
from uuid import UUID

from app.shared.schemas.common import CamelModel


class ReceptionCreateRequest(CamelModel):
    pvz_id: str = Field(..., description="UUID del PVZ")

    class Config:
        json_schema_extra = {
            "example": {"pvzId": "3fa85f64-5717-4562-b3fc-2c963f66afa6"}
        }


class ReceptionResponse(CamelModel):
    id: UUID
    date_time: datetime
    pvz_id: UUID
    status: str
