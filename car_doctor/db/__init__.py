"""Database package"""

from car_doctor.db.session import create_mongo_client, get_database, ping_database

__all__ = ["create_mongo_client", "get_database", "ping_database"]
