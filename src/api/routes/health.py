"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from adapter.mongodb.storage import MongoStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(request: Request):
    """Health check endpoint with storage status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        health_status["services"]["storage"] = {
            "status": "unhealthy",
            "message": "Storage not initialized"
        }
    elif isinstance(storage, MongoStorage):
        try:
            storage.client.admin.command('ping')
            health_status["services"]["storage"] = {
                "status": "healthy",
                "backend": "mongodb",
                "message": "Connection successful"
            }
        except PyMongoError as e:
            health_status["services"]["storage"] = {
                "status": "unhealthy",
                "backend": "mongodb",
                "message": f"Connection error: {str(e)[:200]}"
            }
    else:
        health_status["services"]["storage"] = {
            "status": "healthy",
            "backend": "memory",
            "message": "In-memory store"
        }

    overall_healthy = health_status["services"]["storage"]["status"] == "healthy"
    if not overall_healthy:
        health_status["status"] = "degraded"

    status_code = status.HTTP_200_OK if overall_healthy else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        content=health_status,
        status_code=status_code
    )
