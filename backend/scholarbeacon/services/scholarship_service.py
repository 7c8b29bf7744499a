"""
ScholarBeacon Backend: Scholarship Service
==========================================

What:  Read-only access to scholarship listings.
Who:   Called by routes/scholarships.py.
"""

from typing import List, Optional

from scholarbeacon.identifiers import require_object_id
from scholarbeacon.store import Document, Store


class ScholarshipService:

    async def list_scholarships(self, store: Store) -> List[Document]:
        return await store.scholarships.find_all()

    async def get_scholarship(self, store: Store, scholarship_id: str) -> Optional[Document]:
        """
        Raises InvalidIdentifierError for a malformed id; returns None when
        the id is well-formed but unknown.
        """
        object_id = require_object_id(scholarship_id)
        return await store.scholarships.find_by_id(object_id)


scholarship_service = ScholarshipService()
