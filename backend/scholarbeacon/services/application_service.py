"""
ScholarBeacon Backend: Application Service
==========================================

What:  Record, list, enrich and withdraw scholarship applications.
How:   Applications reference the applicant through `user_id` and the
       scholarship through `scholarship_id`. Listing by applicant joins each
       application with its scholarship (services/enrichment.py).
Who:   Called by routes/applications.py.
"""

import logging
from typing import Any, List, Mapping

from scholarbeacon.identifiers import require_object_id
from scholarbeacon.schemas.api import DeleteAck, InsertAck
from scholarbeacon.services.enrichment import APPLICATION_WITH_SCHOLARSHIP, enrich
from scholarbeacon.store import Document, Store

logger = logging.getLogger(__name__)


class ApplicationService:
    """
    Application documents.

    Reads are not isolated from concurrent writes: a scholarship deleted
    between the application query and its lookup shows up as "Unknown".
    """

    async def create_application(
        self, store: Store, document: Mapping[str, Any]
    ) -> InsertAck:
        return await store.applications.insert_one(document)

    async def list_applications(self, store: Store) -> List[Document]:
        return await store.applications.find_all()

    async def list_for_applicant(self, store: Store, applicant_id: str) -> List[Document]:
        """
        Applications whose `user_id` equals `applicant_id`, each merged with
        scholarship_name, university_name, scholarship_category and
        subject_name from the referenced scholarship.
        """
        applications = await store.applications.find_all({"user_id": applicant_id})
        logger.debug("Found %d applications for applicant %s", len(applications), applicant_id)
        return await enrich(
            applications,
            store.scholarships.find_by_reference,
            APPLICATION_WITH_SCHOLARSHIP,
        )

    async def delete_application(self, store: Store, application_id: str) -> DeleteAck:
        object_id = require_object_id(application_id)
        return await store.applications.delete_by_id(object_id)


application_service = ApplicationService()
