"""Pydantic schemas for the service catalog."""

from typing import Optional, Union

from pydantic import BaseModel, Field


class ServiceSummary(BaseModel):
    """
    Documented shape of the single-service lookup.

    Only used for the OpenAPI description. The endpoint returns the stored
    ``title`` and ``price`` exactly as they are in the catalog document, so
    a missing field is simply absent and a price stored as a string stays a
    string.
    """

    title: Optional[str] = Field(default=None, examples=["Engine Diagnostic"])
    price: Optional[Union[int, float]] = Field(default=None, examples=[150])
