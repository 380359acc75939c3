"""
Checkout DAO.

Checkouts are append-only: this DAO inserts and queries by owner, and has
no update or delete operations.
"""

import logging
from typing import Any, Dict, List

from car_doctor.dao.base import BaseDAO

logger = logging.getLogger(__name__)


class CheckoutDAO(BaseDAO):
    """Data access for the ``checkOuts`` collection."""

    async def create(self, checkout: Dict[str, Any]) -> str:
        """
        Store a submitted checkout.

        No deduplication: two identical submissions produce two documents.

        Args:
            checkout: Submitted fields, including the owner ``uid``

        Returns:
            Hex id of the new checkout
        """
        checkout_id = await self.insert(checkout)
        logger.info(f"Saved checkout {checkout_id} for user {checkout.get('uid')}")
        return checkout_id

    async def list_for_user(self, uid: str) -> List[Dict[str, Any]]:
        """
        All checkouts owned by ``uid``, in database order.

        Args:
            uid: Owner user identifier

        Returns:
            List of serialized checkouts
        """
        return await self.find_many({"uid": uid})
