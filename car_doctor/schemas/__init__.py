"""Request/response schemas"""

from car_doctor.schemas.auth import SessionRequest, SessionResponse
from car_doctor.schemas.checkout import CheckoutCreate, CheckoutCreatedResponse
from car_doctor.schemas.service import ServiceSummary

__all__ = [
    "CheckoutCreate",
    "CheckoutCreatedResponse",
    "ServiceSummary",
    "SessionRequest",
    "SessionResponse",
]
