"""Time entry API routes.

- GET /api/time-entries: List entries, filtered by userId, projectId, startDate, endDate
- GET /api/time-entries/{id}: Get an entry
- POST /api/time-entries: Create an entry
- PUT /api/time-entries/{id}: Replace an entry
- DELETE /api/time-entries/{id}: Delete an entry
"""

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_storage
from api.models import SuccessResponse, TimeEntryRequest, TimeEntryResponse
from api.security import require_user
from domain.model.errors import ValidationError
from domain.model.time_entry import TimeEntry, TimeEntryFilter
from domain.model.user import User
from port.storage import Storage
from services import time_entry_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/time-entries", tags=["time-entries"])


def _to_response(entry: TimeEntry) -> TimeEntryResponse:
    return TimeEntryResponse(**asdict(entry))


@router.get("", response_model=list[TimeEntryResponse])
async def list_time_entries(
    user_id: Optional[int] = Query(None, alias="userId"),
    project_id: Optional[int] = Query(None, alias="projectId"),
    start_date: Optional[datetime] = Query(None, alias="startDate", description="ISO-8601, inclusive"),
    end_date: Optional[datetime] = Query(None, alias="endDate", description="ISO-8601, inclusive"),
    current_user: User = Depends(require_user),
    storage: Storage = Depends(get_storage),
):
    """List time entries, newest first."""
    entries = storage.get_time_entries(TimeEntryFilter(
        user_id=user_id,
        project_id=project_id,
        start_date=start_date,
        end_date=end_date,
    ))
    return [_to_response(e) for e in entries]


@router.get("/{entry_id}", response_model=TimeEntryResponse)
async def get_time_entry(
    entry_id: int,
    current_user: User = Depends(require_user),
    storage: Storage = Depends(get_storage),
):
    entry = storage.get_time_entry(entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Time entry not found")
    return _to_response(entry)


@router.post("", response_model=TimeEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_time_entry(
    request: TimeEntryRequest,
    current_user: User = Depends(require_user),
    storage: Storage = Depends(get_storage),
):
    try:
        entry = time_entry_service.create_time_entry(storage, request.to_inputs())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Time entry created", extra={
        "timeEntryId": entry.id,
        "projectId": entry.project_id,
        "userId": entry.user_id,
        "duration": entry.duration,
    })
    return _to_response(entry)


@router.put("/{entry_id}", response_model=TimeEntryResponse)
async def update_time_entry(
    entry_id: int,
    request: TimeEntryRequest,
    current_user: User = Depends(require_user),
    storage: Storage = Depends(get_storage),
):
    try:
        entry = time_entry_service.update_time_entry(storage, entry_id, request.to_inputs())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not entry:
        raise HTTPException(status_code=404, detail="Time entry not found")

    logger.info("Time entry updated", extra={"timeEntryId": entry_id, "userId": current_user.id})
    return _to_response(entry)


@router.delete("/{entry_id}", response_model=SuccessResponse)
async def delete_time_entry(
    entry_id: int,
    current_user: User = Depends(require_user),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_time_entry(entry_id):
        raise HTTPException(status_code=404, detail="Time entry not found")

    logger.info("Time entry deleted", extra={"timeEntryId": entry_id, "userId": current_user.id})
    return SuccessResponse(success=True)
