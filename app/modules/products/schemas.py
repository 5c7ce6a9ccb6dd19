# app/modules/products/schemas.py
from pydantic import Field
from datetime import datetime
from uuid import UUID

from app.shared.schemas.common import CamelModel


class ProductCreateRequest(CamelModel):
    pvz_id: str = Field(..., description="UUID del PVZ")
    type: str = Field(..., description="электроника, одежда u обувь")

    class Config:
        json_schema_extra = {
            "example": {
                "pvzId": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "type": "электроника"
            }
        }


class ProductResponse(CamelModel):
    id: UUID
    date_time: datetime
    type: str
    reception_id: UUID
