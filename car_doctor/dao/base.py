"""
Base Data Access Object (DAO) class.

WHY: The DAO pattern keeps MongoDB calls out of the route handlers. Each
DAO wraps one collection, converts driver errors into DatabaseError and
returns plain JSON-ready dicts (ObjectIds rendered as hex strings).
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi.encoders import jsonable_encoder
from pymongo.errors import PyMongoError

from car_doctor.core.exceptions import DatabaseError, MalformedIdentifierError

logger = logging.getLogger(__name__)


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a MongoDB document into JSON-safe primitives.

    ObjectIds (top level or nested) become 24-char hex strings.
    """
    return jsonable_encoder(document, custom_encoder={ObjectId: str})


def parse_object_id(value: str) -> ObjectId:
    """
    Parse a path identifier into an ObjectId.

    Args:
        value: 24-hex-char identifier string

    Returns:
        ObjectId

    Raises:
        MalformedIdentifierError: If value is not a valid ObjectId
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise MalformedIdentifierError(identifier=value)


class BaseDAO:
    """
    Base Data Access Object for a single MongoDB collection.

    Subclasses name the collection-level operations the API needs and
    delegate to the generic helpers below.
    """

    def __init__(self, collection: Any):
        """
        Initialize DAO with its collection.

        Args:
            collection: AsyncCollection (or a test double with the same API)
        """
        self.collection = collection

    @property
    def collection_name(self) -> str:
        return getattr(self.collection, "name", "<unknown>")

    def _database_error(self, operation: str) -> DatabaseError:
        logger.exception(f"MongoDB {operation} on '{self.collection_name}' failed")
        return DatabaseError(collection=self.collection_name, operation=operation)

    async def find_many(
        self,
        filters: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Return every document matching ``filters`` in database order.

        Args:
            filters: MongoDB query document (empty matches everything)
            projection: Optional projection document

        Returns:
            List of serialized documents

        Raises:
            DatabaseError: If the query fails
        """
        try:
            cursor = self.collection.find(filters or {}, projection)
            documents = await cursor.to_list(length=None)
        except PyMongoError:
            raise self._database_error("find")
        return [serialize_document(doc) for doc in documents]

    async def find_by_id(
        self,
        id: str,
        projection: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Look up one document by its ObjectId.

        The identifier is parsed before any database call is made.

        Args:
            id: 24-hex identifier
            projection: Optional projection document

        Returns:
            Serialized document if found, None otherwise

        Raises:
            MalformedIdentifierError: If id is not a valid ObjectId
            DatabaseError: If the query fails
        """
        object_id = parse_object_id(id)
        try:
            document = await self.collection.find_one({"_id": object_id}, projection)
        except PyMongoError:
            raise self._database_error("find_one")
        return serialize_document(document) if document is not None else None

    async def insert(self, document: Dict[str, Any]) -> str:
        """
        Insert a new document.

        Args:
            document: Document to store (copied, never mutated)

        Returns:
            Hex string of the database-assigned _id

        Raises:
            DatabaseError: If the insert fails
        """
        to_insert = dict(document)
        try:
            result = await self.collection.insert_one(to_insert)
        except PyMongoError:
            raise self._database_error("insert_one")
        return str(result.inserted_id)
