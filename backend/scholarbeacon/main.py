"""
ScholarBeacon Backend: FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       lifespan() owns the MongoDB client for the life of the process.
Who:   uvicorn (`uvicorn scholarbeacon.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  /users  /scholarships  /applications  /reviews     │
    │  /create-payment-intent  /  /health                 │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ InvalidId→400 │ DB→500 │ Payment→500 │ *→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config check → MongoDB client + ping → ready
    Shutdown: close MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from scholarbeacon import __version__
from scholarbeacon.config import settings
from scholarbeacon.database import connect, disconnect
from scholarbeacon.exceptions import (
    DatabaseError,
    InvalidIdentifierError,
    PaymentServiceError,
    ScholarBeaconError,
)
from scholarbeacon.middleware.logging import RequestLoggingMiddleware
from scholarbeacon.middleware.request_id import RequestIDMiddleware, request_id_var
from scholarbeacon.routes import applications, payments, reviews, root, scholarships, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Driver and HTTP client chatter
    for noisy in ("uvicorn.access", "pymongo", "httpx", "httpcore", "stripe"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup opens the single MongoDB client shared by all requests and
    stores it on `app.state.mongo_client`; shutdown closes it.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("ScholarBeacon Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Everything except payments still works
        logger.error("Configuration error: %s", str(e))

    app.state.mongo_client = await connect()
    logger.info("Database: %s", settings.database_name)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("ScholarBeacon Backend shutting down...")
    await disconnect(app.state.mongo_client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses for every route.

    Handler hierarchy:
        RequestValidationError → 422 (framework shape, rejected input omitted)
        InvalidIdentifierError → 400 Bad Request
        DatabaseError          → 500 (generic message)
        PaymentServiceError    → 500 (generic message)
        ScholarBeaconError     → 500 (catch-all for custom)
        Exception              → 500 (unexpected errors)

    Exception context and stack traces are logged, never returned.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        # Rejected values may be NaN/Infinity, which cannot be rendered as JSON
        errors = [
            {key: value for key, value in error.items() if key != "input"}
            for error in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", rid, errors)
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})

    @app.exception_handler(InvalidIdentifierError)
    async def handle_invalid_identifier(request: Request, exc: InvalidIdentifierError):
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid identifier: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "invalid_identifier",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(PaymentServiceError)
    async def handle_payment_error(request: Request, exc: PaymentServiceError):
        rid = request_id_var.get("")
        logger.error("[%s] Payment error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "payment_error",
                "message": "The payment could not be initiated. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(ScholarBeaconError)
    async def handle_application_error(request: Request, exc: ScholarBeaconError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Assemble the application. No I/O happens here; the database client is
    created by the lifespan, so importing this module is side-effect free.
    """
    app = FastAPI(
        title="ScholarBeacon API",
        description=(
            "Scholarship discovery backend: users, scholarships, applications, "
            "reviews and Stripe payment intents."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Executed in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(root.router)
    app.include_router(users.router)
    app.include_router(scholarships.router)
    app.include_router(applications.router)
    app.include_router(reviews.router)
    app.include_router(payments.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.backend_host, port=settings.backend_port)
