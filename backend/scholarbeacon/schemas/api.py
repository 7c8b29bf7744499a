"""
ScholarBeacon Backend: Pydantic Request/Response Schemas
========================================================

What:  Pydantic models for the parts of the API contract that have a fixed
       shape: write acknowledgements, the profile patch, payment intents,
       errors and health.
How:   FastAPI validates request bodies against these models and serializes
       responses through them (by alias, so write acknowledgements keep the
       camelCase keys the frontend already reads).

Documents themselves (users, scholarships, applications, reviews) are
schema-less and are passed through as plain dicts.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Write Acknowledgements
# ══════════════════════════════════════════════════════════════════════════


class InsertAck(BaseModel):
    """Result of inserting one document."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = Field(description="Whether the write was acknowledged by the server")
    inserted_id: str = Field(
        serialization_alias="insertedId",
        description="Generated document id (ObjectId hex)",
    )


class UpdateAck(BaseModel):
    """Result of updating one document."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool
    matched_count: int = Field(serialization_alias="matchedCount")
    modified_count: int = Field(serialization_alias="modifiedCount")


class DeleteAck(BaseModel):
    """
    Result of deleting one document.

    Deleting an id that no longer exists is not an error: it reports
    `deletedCount: 0`.
    """

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool
    deleted_count: int = Field(serialization_alias="deletedCount")


# ══════════════════════════════════════════════════════════════════════════
# Request Bodies
# ══════════════════════════════════════════════════════════════════════════


class UserProfileUpdate(BaseModel):
    """Body of PATCH /users. `photo` is stored in the user's `image` field."""

    email: str = Field(description="Email of the user to update")
    name: Optional[str] = Field(default=None, description="New display name")
    photo: Optional[str] = Field(default=None, description="New profile image URL")


class PaymentIntentRequest(BaseModel):
    # Currency units (e.g. dollars); converted to cents before calling Stripe
    fee: float = Field(allow_inf_nan=False, description="Amount to charge, in currency units")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PaymentIntentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(
        serialization_alias="clientSecret",
        description="Opaque Stripe client secret for confirming the payment",
    )


class ReviewerReviewItem(BaseModel):
    """
    One entry of GET /reviews/r_id/{reviewer_id}.

    Only this projection is returned; the review's other fields are dropped.
    """

    scholarship_name: Optional[Any] = Field(description="Subject name, or 'Unknown'")
    university_name: Optional[Any] = Field(description="University name, or 'Unknown'")
    review_comments: Optional[Any] = None
    review_date: Optional[Any] = None


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "invalid_identifier",
            "message": "'abc' is not a valid id",
            "details": {"field": "id", "value": "abc"},
            "request_id": "1f0c2b7a"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    payments: str = Field(description="Stripe configuration: configured, not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
