"""
ScholarBeacon Backend: Review Service
=====================================

What:  Record and list reviews, with two enriched views:
       - per scholarship: each review plus the reviewer's name and image
       - per reviewer: a summary of the reviewed scholarship and the comment
Who:   Called by routes/reviews.py.
"""

from typing import Any, List, Mapping

from scholarbeacon.schemas.api import InsertAck
from scholarbeacon.services.enrichment import (
    REVIEW_WITH_REVIEWER,
    REVIEWER_REVIEW_SUMMARY,
    enrich,
)
from scholarbeacon.store import Document, Store


class ReviewService:

    async def create_review(self, store: Store, document: Mapping[str, Any]) -> InsertAck:
        return await store.reviews.insert_one(document)

    async def list_reviews(self, store: Store) -> List[Document]:
        return await store.reviews.find_all()

    async def list_for_scholarship(self, store: Store, scholarship_id: str) -> List[Document]:
        """
        Reviews of one scholarship. Reviewers that cannot be found appear as
        "Unknown" with the "default.jpg" image.
        """
        reviews = await store.reviews.find_all({"scholarship_id": scholarship_id})
        return await enrich(reviews, store.users.find_by_reference, REVIEW_WITH_REVIEWER)

    async def list_for_reviewer(self, store: Store, reviewer_id: str) -> List[Document]:
        """
        Reviews written by one reviewer, reduced to
        {scholarship_name, university_name, review_comments, review_date}.
        """
        reviews = await store.reviews.find_all({"reviewer_id": reviewer_id})
        return await enrich(
            reviews, store.scholarships.find_by_reference, REVIEWER_REVIEW_SUMMARY
        )


review_service = ReviewService()
