"""
Member API Routes

Listing, direct adds, role changes, removal and ownership transfer.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from collab_access.api.error import raise_for_error
from collab_access.api.utils.params import parse_project_id
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.members import (
    AddMemberUseCase,
    ChangeRoleUseCase,
    ListMembersResponse,
    ListMembersUseCase,
    MemberResponse,
    RemoveMemberResponse,
    RemoveMemberUseCase,
    TransferOwnershipResponse,
    TransferOwnershipUseCase,
)
from collab_access.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/projects/{project_id}", tags=["Members"])


class AddMemberRequest(BaseModel):
    user_id: str = Field(..., description="User to add")
    role: str = Field("member", description="admin, member or viewer")
    join_method: str = Field("admin_added", description="admin_added or direct_invite")


class ChangeRoleRequest(BaseModel):
    role: str = Field(..., description="New role")
    reason: Optional[str] = Field(None, max_length=500, description="Kept in the audit log")


class TransferOwnershipRequest(BaseModel):
    new_owner_id: str = Field(..., description="Existing member who becomes owner")
    reason: Optional[str] = Field(None, max_length=500, description="Kept in the audit log")


@router.get(
    "/members",
    status_code=status.HTTP_200_OK,
    response_model=ListMembersResponse,
)
async def list_members(
    project_id: str,
    role: Optional[str] = Query(None, description="Only members with this role"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of members"),
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Members

    Owners first, then by role level, then by join date. Any member can list.

    Raises:
        - 400 Bad Request: INVALID_INPUT (unknown role filter)
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (caller is not a member)
        - 404 Not Found: NOT_FOUND
    """
    project_uuid = parse_project_id(project_id)

    use_case = ListMembersUseCase(uow)
    result = await use_case.execute(user_id, project_uuid, role=role, limit=limit)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/members",
    status_code=status.HTTP_201_CREATED,
    response_model=MemberResponse,
)
async def add_member(
    project_id: str,
    request: AddMemberRequest,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add Member

    Owner/admin adds a user directly; only the owner can add admins.

    Raises:
        - 400 Bad Request: INVALID_INPUT
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: DUPLICATE_MEMBERSHIP
    """
    project_uuid = parse_project_id(project_id)

    use_case = AddMemberUseCase(uow)
    result = await use_case.execute(
        user_id,
        project_uuid,
        request.user_id,
        request.role,
        join_method=request.join_method,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch(
    "/members/{member_user_id}",
    status_code=status.HTTP_200_OK,
    response_model=MemberResponse,
)
async def change_member_role(
    project_id: str,
    member_user_id: str,
    request: ChangeRoleRequest,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Member Role

    Raises:
        - 400 Bad Request: INVALID_INPUT (unknown role, unchanged role)
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (caller lacks the rights for this change)
        - 404 Not Found: NOT_FOUND, NOT_A_MEMBER (target)
        - 409 Conflict: OWNER_CONFLICT (use ownership transfer)
    """
    project_uuid = parse_project_id(project_id)

    use_case = ChangeRoleUseCase(uow)
    result = await use_case.execute(
        user_id, project_uuid, member_user_id, request.role, reason=request.reason
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/members/{member_user_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveMemberResponse,
)
async def remove_member(
    project_id: str,
    member_user_id: str,
    reason: Optional[str] = Query(None, max_length=500),
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member

    Members can leave on their own; owner/admin can remove others.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: NOT_FOUND, NOT_A_MEMBER (target)
        - 409 Conflict: CANNOT_REMOVE_OWNER
    """
    project_uuid = parse_project_id(project_id)

    use_case = RemoveMemberUseCase(uow)
    result = await use_case.execute(user_id, project_uuid, member_user_id, reason=reason)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/ownership",
    status_code=status.HTTP_200_OK,
    response_model=TransferOwnershipResponse,
)
async def transfer_ownership(
    project_id: str,
    request: TransferOwnershipRequest,
    user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Transfer Ownership

    Owner only. The previous owner stays on as admin.

    Raises:
        - 400 Bad Request: INVALID_INPUT (already the owner)
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: NOT_FOUND, NOT_A_MEMBER (new owner)
    """
    project_uuid = parse_project_id(project_id)

    use_case = TransferOwnershipUseCase(uow)
    result = await use_case.execute(
        user_id, project_uuid, request.new_owner_id, reason=request.reason
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
