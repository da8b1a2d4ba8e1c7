import os
import logging

from fastapi import HTTPException, Request

from adapter.auth.jwt_provider import JwtAuthProvider
from adapter.auth.mock_provider import MockAuthProvider
from adapter.memory.storage import InMemoryStorage
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.storage import MongoStorage
from port.auth_provider import AuthProvider
from port.storage import Storage

logger = logging.getLogger(__name__)

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")
AUTH_PROVIDER = os.getenv("AUTH_PROVIDER", "mock")


def build_storage(backend: str = STORAGE_BACKEND) -> Storage:
    """Construct the store selected by STORAGE_BACKEND ("memory" or "mongodb")."""
    if backend == "memory":
        return InMemoryStorage()

    if backend == "mongodb":
        client = get_mongodb_client()
        if client is None:
            raise RuntimeError("STORAGE_BACKEND=mongodb but MongoDB is unavailable")
        storage = MongoStorage(client[DATABASE_NAME])
        if not storage.ensure_indexes():
            logger.warning("Failed to create some MongoDB indexes")
        return storage

    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def build_auth_provider(provider: str = AUTH_PROVIDER) -> AuthProvider:
    """Construct the identity provider selected by AUTH_PROVIDER ("mock" or "jwt")."""
    if provider == "mock":
        return MockAuthProvider()
    if provider == "jwt":
        return JwtAuthProvider(os.getenv("JWT_SECRET_KEY"))
    raise ValueError(f"Unknown AUTH_PROVIDER: {provider!r}")


def get_storage(request: Request) -> Storage:
    """Get the store built at startup, raising 503 if it was never built."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise HTTPException(status_code=503, detail="Storage unavailable")
    return storage


def get_auth_provider(request: Request) -> AuthProvider:
    provider = getattr(request.app.state, "auth_provider", None)
    if provider is None:
        raise HTTPException(status_code=503, detail="Authentication unavailable")
    return provider
