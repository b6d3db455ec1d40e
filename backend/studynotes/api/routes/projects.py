from fastapi import APIRouter, Depends
from ...schemas import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectListResponse,
    MessageResponse,
)
from ...services import ProjectService
from ..dependencies import get_current_user_id, get_project_service

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=ProjectListResponse)
def list_projects(
    user_id: str = Depends(get_current_user_id),
    project_service: ProjectService = Depends(get_project_service)
):
    """List all projects for the current user, most recently accessed first"""
    return ProjectListResponse(projects=project_service.list_projects(user_id))


@router.post("", response_model=ProjectResponse)
def create_project(
    project_data: ProjectCreate,
    user_id: str = Depends(get_current_user_id),
    project_service: ProjectService = Depends(get_project_service)
):
    """Create a new project"""
    return ProjectResponse(project=project_service.create_project(user_id, project_data))


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    project_service: ProjectService = Depends(get_project_service)
):
    """Get a specific project"""
    return ProjectResponse(project=project_service.get_project(user_id, project_id))


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    user_id: str = Depends(get_current_user_id),
    project_service: ProjectService = Depends(get_project_service)
):
    """Update a project"""
    return ProjectResponse(project=project_service.update_project(user_id, project_id, project_data))


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    project_service: ProjectService = Depends(get_project_service)
):
    """Delete a project (cascades to files)"""
    project_service.delete_project(user_id, project_id)
    return MessageResponse(message="Project deleted successfully")
