"""
Invitation Link API Routes

Owner/admin management of a project's shareable join link.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from collab_access.api.error import raise_for_error
from collab_access.api.utils.params import parse_project_id
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.invitations import (
    ActiveInviteLinkResponse,
    CreateInviteLinkUseCase,
    DeactivateInviteLinkResponse,
    DeactivateInviteLinkUseCase,
    GetActiveInviteLinkUseCase,
    GetInviteStatsUseCase,
    InviteLinkView,
    InviteStatsResponse,
)
from collab_access.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/projects/{project_id}", tags=["Invitation Links"])


class CreateInviteLinkRequest(BaseModel):
    """
    Create invitation link HTTP request payload

    All fields are optional: an unbounded, non-expiring member link.
    """

    max_uses: Optional[int] = Field(None, description="Usage limit; unlimited if omitted")
    expires_at: Optional[datetime] = Field(None, description="Expiry instant")
    role: str = Field("member", description="Role granted on join: member or viewer")


@router.post(
    "/invite-link",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteLinkView,
)
async def create_invite_link(
    project_id: str,
    request: Optional[CreateInviteLinkRequest] = None,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Invitation Link

    Supersedes any link the project already has.

    Raises:
        - 400 Bad Request: INVALID_INPUT (max_uses < 1, past expiry, bad role)
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (non-admin/owner)
        - 404 Not Found: NOT_FOUND
    """
    project_uuid = parse_project_id(project_id)
    request = request or CreateInviteLinkRequest()

    use_case = CreateInviteLinkUseCase(uow, invite_base_path=ApplicationConfig.INVITE_LINK_PATH)
    result = await use_case.execute(
        user_id,
        project_uuid,
        max_uses=request.max_uses,
        expires_at=request.expires_at,
        role=request.role,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/invite-link",
    status_code=status.HTTP_200_OK,
    response_model=ActiveInviteLinkResponse,
)
async def get_active_invite_link(
    project_id: str,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Active Invitation Link

    Returns {"link": null} when the project has no usable link.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (non-admin/owner)
        - 404 Not Found: NOT_FOUND
    """
    project_uuid = parse_project_id(project_id)

    use_case = GetActiveInviteLinkUseCase(
        uow, invite_base_path=ApplicationConfig.INVITE_LINK_PATH
    )
    result = await use_case.execute(user_id, project_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/invite-link",
    status_code=status.HTTP_200_OK,
    response_model=DeactivateInviteLinkResponse,
)
async def deactivate_invite_link(
    project_id: str,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Deactivate Invitation Link

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (non-admin/owner)
        - 404 Not Found: NOT_FOUND
    """
    project_uuid = parse_project_id(project_id)

    use_case = DeactivateInviteLinkUseCase(uow)
    result = await use_case.execute(user_id, project_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/invite-stats",
    status_code=status.HTTP_200_OK,
    response_model=InviteStatsResponse,
)
async def get_invite_stats(
    project_id: str,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Invitation Statistics

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (non-admin/owner)
        - 404 Not Found: NOT_FOUND
    """
    project_uuid = parse_project_id(project_id)

    use_case = GetInviteStatsUseCase(uow, recent_days=ApplicationConfig.INVITE_STATS_RECENT_DAYS)
    result = await use_case.execute(user_id, project_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
