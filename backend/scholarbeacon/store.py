"""
ScholarBeacon Backend: Collection Accessors
===========================================

What:  Generic CRUD over one named MongoDB collection, plus the `Store` that
       bundles the four collections the API uses.
How:   `CollectionAccessor` wraps an async pymongo collection. Every driver
       error is converted into DatabaseError, and every document that leaves
       the accessor is JSON-ready (ObjectId values rendered as hex strings).
Who:   Services receive a `Store` per request through FastAPI dependency
       injection (see database.get_store).

Nothing here validates document shape: inserts store the client's body
verbatim, and lookups return whatever the collection holds.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from scholarbeacon.exceptions import DatabaseError
from scholarbeacon.identifiers import parse_object_id
from scholarbeacon.schemas.api import DeleteAck, InsertAck, UpdateAck

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


def serialize_document(value: Any) -> Any:
    """Recursively replace ObjectId values with their hex string."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value


class CollectionAccessor:
    """
    Async CRUD operations against one collection.

    Results of `find_all` keep the collection's natural order (insertion
    order for these collections) and are unbounded.
    """

    def __init__(self, collection: Any):
        self.collection = collection

    @property
    def name(self) -> str:
        return self.collection.name

    def _database_error(self, operation: str, exc: Exception) -> DatabaseError:
        logger.error(
            "MongoDB %s on '%s' failed: %s", operation, self.name, str(exc)
        )
        return DatabaseError(
            context={
                "collection": self.name,
                "operation": operation,
                "error_type": type(exc).__name__,
            }
        )

    async def insert_one(self, document: Mapping[str, Any]) -> InsertAck:
        # pymongo adds `_id` to the dict it is given; keep the caller's copy clean
        payload = dict(document)
        try:
            result = await self.collection.insert_one(payload)
        except PyMongoError as e:
            raise self._database_error("insert_one", e)
        logger.info("Inserted %s into '%s'", result.inserted_id, self.name)
        return InsertAck(
            acknowledged=result.acknowledged,
            inserted_id=str(result.inserted_id),
        )

    async def find_all(self, filter: Optional[Mapping[str, Any]] = None) -> List[Document]:
        try:
            documents = await self.collection.find(dict(filter or {})).to_list()
        except PyMongoError as e:
            raise self._database_error("find", e)
        return [serialize_document(doc) for doc in documents]

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Document]:
        try:
            document = await self.collection.find_one(dict(filter))
        except PyMongoError as e:
            raise self._database_error("find_one", e)
        return serialize_document(document) if document is not None else None

    async def find_by_id(self, object_id: ObjectId) -> Optional[Document]:
        return await self.find_one({"_id": object_id})

    async def find_by_reference(self, reference: Any) -> Optional[Document]:
        """
        Resolve a soft reference stored on another document.

        ObjectId-shaped references are looked up as ObjectIds; any other
        non-empty string is matched against `_id` as stored. A missing or
        non-string reference resolves to None without touching the database,
        the same as a reference to a deleted document.
        """
        object_id = parse_object_id(reference)
        if object_id is not None:
            return await self.find_by_id(object_id)
        if isinstance(reference, str) and reference:
            return await self.find_one({"_id": reference})
        return None

    async def update_one(
        self, filter: Mapping[str, Any], fields: Mapping[str, Any]
    ) -> UpdateAck:
        try:
            result = await self.collection.update_one(dict(filter), {"$set": dict(fields)})
        except PyMongoError as e:
            raise self._database_error("update_one", e)
        return UpdateAck(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )

    async def delete_by_id(self, object_id: ObjectId) -> DeleteAck:
        try:
            result = await self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            raise self._database_error("delete_one", e)
        logger.info(
            "Deleted %d document(s) with _id %s from '%s'",
            result.deleted_count, object_id, self.name,
        )
        return DeleteAck(
            acknowledged=result.acknowledged,
            deleted_count=result.deleted_count,
        )


@dataclass(frozen=True)
class Store:
    """The four collections of the ScholarBeacon database."""

    users: CollectionAccessor
    scholarships: CollectionAccessor
    reviews: CollectionAccessor
    applications: CollectionAccessor

    @classmethod
    def from_database(cls, database: Any) -> "Store":
        return cls(
            users=CollectionAccessor(database["users"]),
            scholarships=CollectionAccessor(database["scholarships"]),
            reviews=CollectionAccessor(database["reviews"]),
            applications=CollectionAccessor(database["applications"]),
        )
