"""Service catalog DAO (read-only)."""

from typing import Any, Dict, List, Optional

from car_doctor.dao.base import BaseDAO


class ServiceDAO(BaseDAO):
    """Reads the ``services`` collection; this API never writes to it."""

    # Lookups return only what the booking page needs.
    SUMMARY_PROJECTION = {"_id": 0, "title": 1, "price": 1}

    async def list_services(self) -> List[Dict[str, Any]]:
        return await self.find_many()

    async def get_summary(self, service_id: str) -> Optional[Dict[str, Any]]:
        """Title and price of one service, or None when it does not exist."""
        return await self.find_by_id(service_id, projection=self.SUMMARY_PROJECTION)
