"""
ScholarBeacon Backend: Scholarship Routes
=========================================

What:  GET /scholarships and GET /scholarships/{id}.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from scholarbeacon.database import get_store
from scholarbeacon.schemas.api import ErrorResponse
from scholarbeacon.services.scholarship_service import scholarship_service
from scholarbeacon.store import Store

router = APIRouter(prefix="/scholarships", tags=["Scholarships"])


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all scholarships",
)
async def list_scholarships(store: Store = Depends(get_store)) -> List[Dict[str, Any]]:
    return await scholarship_service.list_scholarships(store)


@router.get(
    "/{scholarship_id}",
    response_model=Optional[Dict[str, Any]],
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a scholarship by id",
    description="Returns the scholarship, or null when no document has this id.",
)
async def get_scholarship(
    scholarship_id: str,
    store: Store = Depends(get_store),
) -> Optional[Dict[str, Any]]:
    return await scholarship_service.get_scholarship(store, scholarship_id)
