# app/shared/schemas/common.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base para requests/responses: JSON en camelCase, acepta también snake_case"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ErrorResponse(BaseModel):
    error: str

    class Config:
        json_schema_extra = {
            "example": {"error": "no open reception exists"}
        }


class MessageResponse(BaseModel):
    message: str
