# app/modules/pvz/schemas.py
from pydantic import Field
from typing import List
from datetime import datetime
from uuid import UUID

from app.shared.database.interfaces import PickupPointDetails
from app.shared.schemas.common import CamelModel


class PickupPointCreateRequest(CamelModel):
    city: str = Field(..., description="Москва, Санкт-Петербург o Казань")

    class Config:
        json_schema_extra = {
            "example": {"city": "Москва"}
        }


class PickupPointResponse(CamelModel):
    id: UUID
    registration_date: datetime
    city: str


class ProductDetailsResponse(CamelModel):
    id: UUID
    date_time: datetime
    type: str
    reception_id: UUID


class ReceptionDetailsResponse(CamelModel):
    id: UUID
    date_time: datetime
    pvz_id: UUID
    status: str
    products: List[ProductDetailsResponse]


class PickupPointDetailsResponse(CamelModel):
    id: UUID
    registration_date: datetime
    city: str
    receptions: List[ReceptionDetailsResponse]

    @classmethod
    def from_details(cls, details: PickupPointDetails) -> "PickupPointDetailsResponse":
        pvz = details.pickup_point
        return cls(
            id=pvz.id,
            registration_date=pvz.registration_date,
            city=pvz.city,
            receptions=[
                ReceptionDetailsResponse(
                    id=item.reception.id,
                    date_time=item.reception.date_time,
                    pvz_id=item.reception.pvz_id,
                    status=item.reception.status,
                    products=[ProductDetailsResponse.model_validate(p) for p in item.products]
                )
                for item in details.receptions
            ]
        )


class PickupPointListResponse(CamelModel):
    pvzs: List[PickupPointDetailsResponse]
