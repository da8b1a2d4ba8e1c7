"""Project API routes.

- GET /api/projects: List projects in insertion order
- GET /api/projects/{id}: Get a project
- POST /api/projects: Create a project (admin)
- PUT /api/projects/{id}: Replace a project (admin)
- DELETE /api/projects/{id}: Delete a project and its time entries (admin)
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_storage
from api.models import ProjectRequest, ProjectResponse, SuccessResponse
from api.security import require_admin, require_user
from domain.model.project import Project
from domain.model.user import User
from port.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


def _to_response(project: Project) -> ProjectResponse:
    return ProjectResponse(**asdict(project))


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    current_user: User = Depends(require_user),
    storage: Storage = Depends(get_storage),
):
    return [_to_response(p) for p in storage.get_all_projects()]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    current_user: User = Depends(require_user),
    storage: Storage = Depends(get_storage),
):
    project = storage.get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return _to_response(project)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    request: ProjectRequest,
    current_user: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    project = storage.create_project(request.to_inputs())

    logger.info("Project created", extra={"projectId": project.id, "userId": current_user.id})
    return _to_response(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    request: ProjectRequest,
    current_user: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    project = storage.update_project(project_id, request.to_inputs())
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    logger.info("Project updated", extra={"projectId": project_id, "userId": current_user.id})
    return _to_response(project)


@router.delete("/{project_id}", response_model=SuccessResponse)
async def delete_project(
    project_id: int,
    current_user: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Delete a project. Its time entries are deleted with it."""
    if not storage.delete_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    logger.info("Project deleted", extra={"projectId": project_id, "userId": current_user.id})
    return SuccessResponse(success=True)
