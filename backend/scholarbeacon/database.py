"""
ScholarBeacon Backend: MongoDB Connection Management
====================================================

What:  Creates the process-wide async MongoDB client, checks connectivity,
       and hands a `Store` to route handlers.
How:   The FastAPI lifespan calls `connect()` once at startup and keeps the
       returned client on `app.state`; `get_store` is the FastAPI dependency
       that builds a Store around it; `disconnect()` closes it on shutdown.
Who:   main.lifespan (lifecycle), route handlers via Depends(get_store).

Connection options:
    server_api="1", strict:  Atlas Stable API v1, rejecting commands outside it
    serverSelectionTimeoutMS: bounded wait when the cluster is unreachable
"""

import logging

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from scholarbeacon.config import settings
from scholarbeacon.store import Store

logger = logging.getLogger(__name__)


def create_client() -> AsyncMongoClient:
    """
    Build the client without connecting; pymongo connects lazily on first use.
    """
    return AsyncMongoClient(
        settings.mongo_connection_uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
        serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
    )


async def ping(client: AsyncMongoClient) -> bool:
    """Send a `ping` command; returns False instead of raising on failure."""
    try:
        await client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning("MongoDB ping failed: %s", str(e))
        return False


async def connect() -> AsyncMongoClient:
    client = create_client()
    if await ping(client):
        logger.info("Pinged your deployment. You successfully connected to MongoDB!")
    else:
        # Keep serving: each request retries server selection on its own
        logger.error("MongoDB is not reachable yet; requests will fail until it is.")
    return client


async def disconnect(client: AsyncMongoClient) -> None:
    await client.close()
    logger.info("MongoDB client closed")


def get_store(request: Request) -> Store:
    """
    FastAPI dependency returning the Store for the current request.

    Example usage in a route:
        @router.get("/users")
        async def list_users(store: Store = Depends(get_store)):
            return await store.users.find_all()

    Tests replace this dependency through `app.dependency_overrides`.
    """
    client: AsyncMongoClient = request.app.state.mongo_client
    return Store.from_database(client[settings.database_name])
