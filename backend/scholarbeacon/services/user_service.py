"""
ScholarBeacon Backend: User Service
===================================

What:  Create, list, look up by email, and patch the profile of users.
Who:   Called by routes/users.py.
"""

import logging
from typing import Any, List, Mapping, Optional

from scholarbeacon.schemas.api import InsertAck, UpdateAck, UserProfileUpdate
from scholarbeacon.store import Document, Store

logger = logging.getLogger(__name__)


class UserService:
    """User documents, keyed in practice by email (uniqueness is not enforced)."""

    async def create_user(self, store: Store, document: Mapping[str, Any]) -> InsertAck:
        return await store.users.insert_one(document)

    async def list_users(self, store: Store) -> List[Document]:
        return await store.users.find_all()

    async def get_user_by_email(self, store: Store, email: str) -> Optional[Document]:
        return await store.users.find_one({"email": email})

    async def update_profile(self, store: Store, update: UserProfileUpdate) -> UpdateAck:
        """
        Set `name` and `image` on the first user matching `update.email`.

        Both fields are written as sent, so an omitted value clears the field.
        No match is not an error: the ack reports `matchedCount: 0`.
        """
        result = await store.users.update_one(
            {"email": update.email},
            {"name": update.name, "image": update.photo},
        )
        if result.matched_count == 0:
            logger.info("Profile update matched no user for email %s", update.email)
        return result


user_service = UserService()
