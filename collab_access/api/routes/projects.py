"""
Project API Routes

Project bootstrap, deletion and the caller's permission summary.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from collab_access.api.error import raise_for_error
from collab_access.api.utils.params import parse_project_id
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.projects import (
    CreateProjectUseCase,
    DeleteProjectResponse,
    DeleteProjectUseCase,
    GetPermissionsUseCase,
    PermissionsResponse,
    ProjectResponse,
)
from collab_access.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/projects", tags=["Projects"])


class CreateProjectRequest(BaseModel):
    name: str = Field(..., description="Project name")
    description: Optional[str] = Field(None, description="Optional description")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProjectResponse,
)
async def create_project(
    request: CreateProjectRequest,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Project

    The caller becomes the project's owner.

    Raises:
        - 400 Bad Request: INVALID_INPUT (empty or too long name)
        - 401 Unauthorized: Invalid or expired JWT
        - 409 Conflict: OWNER_CONFLICT
        - 500 Internal Server Error: Server error
    """
    use_case = CreateProjectUseCase(uow)
    result = await use_case.execute(user_id, request.name, request.description)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteProjectResponse,
)
async def delete_project(
    project_id: str,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Project

    Owner only. Removes memberships, invitation links and audit logs too.

    Raises:
        - 400 Bad Request: Invalid project_id format
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (caller is not the owner)
        - 404 Not Found: NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    project_uuid = parse_project_id(project_id)

    use_case = DeleteProjectUseCase(uow)
    result = await use_case.execute(user_id, project_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{project_id}/permissions",
    status_code=status.HTTP_200_OK,
    response_model=PermissionsResponse,
)
async def get_permissions(
    project_id: str,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Permissions

    What the caller may do in the project. Non-members get all flags false.

    Raises:
        - 400 Bad Request: Invalid project_id format
        - 401 Unauthorized: Invalid or expired JWT
        - 404 Not Found: NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    project_uuid = parse_project_id(project_id)

    use_case = GetPermissionsUseCase(uow)
    result = await use_case.execute(user_id, project_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
