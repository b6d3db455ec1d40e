from fastapi import APIRouter, Depends
from ...schemas import FileCreate, FileResponse, FileListResponse, MessageResponse
from ...services import FileService
from ..dependencies import get_current_user_id, get_file_service

router = APIRouter(prefix="/projects/{project_id}/files", tags=["files"])


@router.get("", response_model=FileListResponse)
def list_files(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    file_service: FileService = Depends(get_file_service)
):
    """List the files of a project"""
    return FileListResponse(files=file_service.list_files(user_id, project_id))


@router.post("", response_model=FileResponse)
def add_file(
    project_id: str,
    file_data: FileCreate,
    user_id: str = Depends(get_current_user_id),
    file_service: FileService = Depends(get_file_service)
):
    """Attach a file record to a project"""
    return FileResponse(file=file_service.add_file(user_id, project_id, file_data))


@router.delete("/{file_id}", response_model=MessageResponse)
def delete_file(
    project_id: str,
    file_id: str,
    user_id: str = Depends(get_current_user_id),
    file_service: FileService = Depends(get_file_service)
):
    """Remove a file from a project"""
    file_service.delete_file(user_id, project_id, file_id)
    return MessageResponse(message="File deleted successfully")
