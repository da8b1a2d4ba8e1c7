"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before importing modules that read env vars at import time
load_dotenv()

# main.py is at src/api/main.py, src is 2 levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.dependencies import build_auth_provider, build_storage
from api.errors import register_exception_handlers
from api.routes import auth, health, projects, stats, time_entries, users
from services.seed_service import initialize_sample_data
from utils.logging import setup_structured_logging

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Consulting Time Tracker API"

SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "true").lower() in ("1", "true", "yes")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: build the store and identity provider, seed demo data."""
    app.state.storage = build_storage()
    app.state.auth_provider = build_auth_provider()
    logger.info("Storage ready", extra={"backend": type(app.state.storage).__name__})

    if SEED_SAMPLE_DATA:
        if not initialize_sample_data(app.state.storage):
            logger.warning("Sample data was not fully initialized")

    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Time tracking and utilization reporting for consultants",
    version=VERSION,
    lifespan=lifespan,
)

# With CORS_ORIGINS="*", credentials must be disabled (browsers reject the combination)
cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(projects.router)
app.include_router(time_entries.router)
app.include_router(stats.router)
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    # Application logs go through structured logging; uvicorn's access log would duplicate them
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
