"""
ScholarBeacon Backend: User Routes
==================================

What:  POST /users, GET /users, GET /users/{email}, PATCH /users.
How:   Bodies are stored verbatim; the profile patch only touches name/image.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends

from scholarbeacon.database import get_store
from scholarbeacon.schemas.api import ErrorResponse, InsertAck, UpdateAck, UserProfileUpdate
from scholarbeacon.services.user_service import user_service
from scholarbeacon.store import Store

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
)


@router.post("", response_model=InsertAck, summary="Create a user")
async def create_user(
    document: Dict[str, Any] = Body(..., description="User document, stored as sent"),
    store: Store = Depends(get_store),
) -> InsertAck:
    return await user_service.create_user(store, document)


@router.get("", response_model=List[Dict[str, Any]], summary="List all users")
async def list_users(store: Store = Depends(get_store)) -> List[Dict[str, Any]]:
    return await user_service.list_users(store)


@router.get(
    "/{email}",
    response_model=Optional[Dict[str, Any]],
    summary="Get a user by email",
    description="Returns the first user with this email, or null.",
)
async def get_user(email: str, store: Store = Depends(get_store)) -> Optional[Dict[str, Any]]:
    return await user_service.get_user_by_email(store, email)


@router.patch("", response_model=UpdateAck, summary="Update a user's name and photo")
async def update_user(
    update: UserProfileUpdate,
    store: Store = Depends(get_store),
) -> UpdateAck:
    return await user_service.update_profile(store, update)
