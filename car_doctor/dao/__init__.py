"""Data Access Objects package"""

from car_doctor.dao.base import BaseDAO, parse_object_id, serialize_document
from car_doctor.dao.checkout import CheckoutDAO
from car_doctor.dao.service import ServiceDAO

__all__ = [
    "BaseDAO",
    "CheckoutDAO",
    "ServiceDAO",
    "parse_object_id",
    "serialize_document",
]
