"""
Join API Routes

Preview and redeem invitation tokens. Any authenticated user may call these;
the token itself is the authorization.
"""

from fastapi import APIRouter, Depends, Request, status

from collab_access.api.error import raise_for_error
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.invitations import (
    InvitePreviewResponse,
    JoinProjectResponse,
    RedeemInviteLinkUseCase,
    ValidateInviteTokenUseCase,
)
from collab_access.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/join", tags=["Join"])


@router.get(
    "/{token}",
    status_code=status.HTTP_200_OK,
    response_model=InvitePreviewResponse,
)
async def preview_invite(
    token: str,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Preview Invitation

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 410 Gone: INVALID_OR_EXPIRED_TOKEN
    """
    use_case = ValidateInviteTokenUseCase(uow)
    result = await use_case.execute(user_id, token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{token}",
    status_code=status.HTTP_200_OK,
    response_model=JoinProjectResponse,
)
async def join_project(
    token: str,
    request: Request,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Join Project via Invitation Link

    Records the client address and user agent in the join log.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 409 Conflict: ALREADY_MEMBER
        - 410 Gone: INVALID_OR_EXPIRED_TOKEN (unknown, inactive, expired or used up)
    """
    ip_address = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")

    use_case = RedeemInviteLinkUseCase(uow)
    result = await use_case.execute(
        user_id, token, ip_address=ip_address, user_agent=user_agent
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
