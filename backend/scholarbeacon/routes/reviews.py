"""
ScholarBeacon Backend: Review Routes
====================================

What:  POST /reviews, GET /reviews, and the two enriched listings.

GET /reviews/r_id/{reviewer_id} is registered before GET /reviews/{scholarship_id}
so the literal "r_id" segment is never read as a scholarship id.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from scholarbeacon.database import get_store
from scholarbeacon.schemas.api import ErrorResponse, InsertAck, ReviewerReviewItem
from scholarbeacon.services.review_service import review_service
from scholarbeacon.store import Store

router = APIRouter(
    prefix="/reviews",
    tags=["Reviews"],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
)


@router.post("", response_model=InsertAck, summary="Post a review")
async def create_review(
    document: Dict[str, Any] = Body(..., description="Review document, stored as sent"),
    store: Store = Depends(get_store),
) -> InsertAck:
    return await review_service.create_review(store, document)


@router.get("", response_model=List[Dict[str, Any]], summary="List all reviews")
async def list_reviews(store: Store = Depends(get_store)) -> List[Dict[str, Any]]:
    return await review_service.list_reviews(store)


@router.get(
    "/r_id/{reviewer_id}",
    response_model=List[ReviewerReviewItem],
    summary="List a reviewer's reviews",
    description=(
        "One {scholarship_name, university_name, review_comments, review_date} "
        "entry per review written by this reviewer."
    ),
)
async def list_reviewer_reviews(
    reviewer_id: str,
    store: Store = Depends(get_store),
) -> List[Dict[str, Any]]:
    return await review_service.list_for_reviewer(store, reviewer_id)


@router.get(
    "/{scholarship_id}",
    response_model=List[Dict[str, Any]],
    summary="List a scholarship's reviews",
    description=(
        "Reviews of this scholarship with reviewer_name and reviewer_image added "
        "('Unknown' / 'default.jpg' when the reviewer cannot be found)."
    ),
)
async def list_scholarship_reviews(
    scholarship_id: str,
    store: Store = Depends(get_store),
) -> List[Dict[str, Any]]:
    return await review_service.list_for_scholarship(store, scholarship_id)
