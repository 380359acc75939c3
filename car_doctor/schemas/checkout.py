"""
Pydantic schemas for checkout endpoints.

A checkout body is free-form: only the owner ``uid`` is required, every
other submitted field (service references, totals, dates) is stored as is.
"""

from pydantic import BaseModel, ConfigDict, Field


class CheckoutCreate(BaseModel):
    """Checkout submission. Unknown fields are kept and persisted."""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "uid": "u1",
                "serviceId": "6627a6c4f1c2a9b3e4d5f601",
                "price": 150.0,
                "date": "2026-10-19",
            }
        },
    )

    uid: str = Field(..., min_length=1, description="Owner user identifier")


class CheckoutCreatedResponse(BaseModel):
    message: str = Field(default="Checkout list saved successfully")
    id: str = Field(..., description="Identifier of the stored checkout")
