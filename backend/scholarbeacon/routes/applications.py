"""
ScholarBeacon Backend: Application Routes
=========================================

What:  Record, list and withdraw scholarship applications.

    POST   /applications                  store the body as a new application
    GET    /applications                  every application
    GET    /applications/{applicant_id}   one applicant's applications, with
                                          scholarship details merged in
    DELETE /applications/{id}             withdraw one application
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from scholarbeacon.database import get_store
from scholarbeacon.schemas.api import DeleteAck, ErrorResponse, InsertAck
from scholarbeacon.services.application_service import application_service
from scholarbeacon.store import Store

router = APIRouter(
    prefix="/applications",
    tags=["Applications"],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
)


@router.post("", response_model=InsertAck, summary="Submit an application")
async def create_application(
    document: Dict[str, Any] = Body(..., description="Application document, stored as sent"),
    store: Store = Depends(get_store),
) -> InsertAck:
    return await application_service.create_application(store, document)


@router.get("", response_model=List[Dict[str, Any]], summary="List all applications")
async def list_applications(store: Store = Depends(get_store)) -> List[Dict[str, Any]]:
    return await application_service.list_applications(store)


@router.get(
    "/{applicant_id}",
    response_model=List[Dict[str, Any]],
    summary="List an applicant's applications",
    description=(
        "Applications whose user_id matches, each with scholarship_name, "
        "university_name, scholarship_category and subject_name copied from the "
        "scholarship ('Unknown' when it cannot be found)."
    ),
)
async def list_applicant_applications(
    applicant_id: str,
    store: Store = Depends(get_store),
) -> List[Dict[str, Any]]:
    return await application_service.list_for_applicant(store, applicant_id)


@router.delete(
    "/{application_id}",
    response_model=DeleteAck,
    responses={400: {"description": "Malformed id", "model": ErrorResponse}},
    summary="Delete an application",
)
async def delete_application(
    application_id: str,
    store: Store = Depends(get_store),
) -> DeleteAck:
    return await application_service.delete_application(store, application_id)
