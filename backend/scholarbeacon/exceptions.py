"""
ScholarBeacon Backend: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the failure modes of the API.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) translate them
       into structured JSON error responses with the right HTTP status.
Who:   Raised by the identifier parser, collection accessors and services.

Exception Hierarchy:
    ScholarBeaconError (base)          → 500
    ├── InvalidIdentifierError         → 400 Bad Request
    ├── DatabaseError                  → 500 Internal Server Error
    └── PaymentServiceError            → 500 Internal Server Error

A related document that does not exist is NOT an error: enrichment
substitutes fallback values instead (see services/enrichment.py).
"""

from typing import Any, Dict, Optional


class ScholarBeaconError(Exception):
    """
    Base exception for all ScholarBeacon application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidIdentifierError(ScholarBeaconError):
    """
    Raised when a path parameter is not a valid MongoDB ObjectId.

    When:    GET /scholarships/{id} or DELETE /applications/{id} with a value
             that is not 24 hex characters.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "invalid_identifier",
            "message": "'abc' is not a valid id",
            "details": {"field": "id", "value": "abc"}
        }
    """

    def __init__(
        self,
        value: Any,
        field: str = "id",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["field"] = field
        ctx["value"] = str(value)
        super().__init__(message=f"'{value}' is not a valid {field}", context=ctx)
        self.field = field
        self.value = value


class DatabaseError(ScholarBeaconError):
    """
    Raised when a MongoDB operation fails (server unreachable, timeout,
    write error, ...).

    HTTP:    500 Internal Server Error

    The response message is always generic; the driver error and collection
    name are kept in `context` for the server-side log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PaymentServiceError(ScholarBeaconError):
    """
    Raised when Stripe rejects or cannot be reached for a payment intent.

    When:    Invalid amount, authentication failure, missing secret key, or
             connection errors that outlived the tenacity retries.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "The payment could not be initiated. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
