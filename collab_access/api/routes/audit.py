"""
Audit API Routes

Role change and join history of projects, and of the caller.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from collab_access.api.error import raise_for_error
from collab_access.api.utils.params import parse_project_id
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.audit import (
    GetMemberJoinHistoryUseCase,
    GetMyAuditHistoryUseCase,
    GetRoleChangeHistoryUseCase,
    GetRoleChangeStatsUseCase,
    MemberJoinHistoryResponse,
    RoleChangeHistoryResponse,
    RoleChangeStatsResponse,
)
from collab_access.depends import get_current_user, get_unit_of_work

router = APIRouter(tags=["Audit"])


@router.get(
    "/projects/{project_id}/audit/role-changes",
    status_code=status.HTTP_200_OK,
    response_model=RoleChangeHistoryResponse,
)
async def get_role_change_history(
    project_id: str,
    user_id: Optional[str] = Query(None, description="Only changes to this user"),
    changed_by_id: Optional[str] = Query(None, description="Only changes by this user"),
    limit: int = Query(
        ApplicationConfig.AUDIT_DEFAULT_LIMIT,
        ge=1,
        le=ApplicationConfig.AUDIT_MAX_LIMIT,
        description="Maximum number of entries to return",
    ),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    current_user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Role Change History

    Returns:
        - entries: newest first
        - next_cursor: cursor for next page (null if no more entries)

    Raises:
        - 400 Bad Request: INVALID_INPUT (malformed cursor)
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (non-admin/owner)
        - 404 Not Found: NOT_FOUND
    """
    project_uuid = parse_project_id(project_id)

    use_case = GetRoleChangeHistoryUseCase(uow)
    result = await use_case.execute(
        current_user_id,
        project_uuid,
        user_id=user_id,
        changed_by_id=changed_by_id,
        limit=limit,
        cursor=cursor,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/projects/{project_id}/audit/role-changes/stats",
    status_code=status.HTTP_200_OK,
    response_model=RoleChangeStatsResponse,
)
async def get_role_change_stats(
    project_id: str,
    current_user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Role Change Statistics

    Counts grouped by (old role, new role), most frequent first.
    """
    project_uuid = parse_project_id(project_id)

    use_case = GetRoleChangeStatsUseCase(uow)
    result = await use_case.execute(current_user_id, project_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/projects/{project_id}/audit/joins",
    status_code=status.HTTP_200_OK,
    response_model=MemberJoinHistoryResponse,
)
async def get_member_join_history(
    project_id: str,
    join_method: Optional[str] = Query(None, description="invite_link, direct_invite or admin_added"),
    limit: int = Query(
        ApplicationConfig.AUDIT_DEFAULT_LIMIT,
        ge=1,
        le=ApplicationConfig.AUDIT_MAX_LIMIT,
    ),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    current_user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Member Join History

    Raises:
        - 400 Bad Request: INVALID_INPUT (unknown join method, malformed cursor)
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (non-admin/owner)
        - 404 Not Found: NOT_FOUND
    """
    project_uuid = parse_project_id(project_id)

    use_case = GetMemberJoinHistoryUseCase(uow)
    result = await use_case.execute(
        current_user_id, project_uuid, join_method=join_method, limit=limit, cursor=cursor
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/audit/me/role-changes",
    status_code=status.HTTP_200_OK,
    response_model=RoleChangeHistoryResponse,
)
async def get_my_role_changes(
    project_id: Optional[str] = Query(None, description="Restrict to one project"),
    limit: int = Query(
        ApplicationConfig.AUDIT_DEFAULT_LIMIT,
        ge=1,
        le=ApplicationConfig.AUDIT_MAX_LIMIT,
    ),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    current_user_id: str = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get My Role Changes

    Changes the caller was the subject or the author of, across projects.
    """
    project_uuid = parse_project_id(project_id) if project_id else None

    use_case = GetMyAuditHistoryUseCase(uow)
    result = await use_case.execute(
        current_user_id, project_id=project_uuid, limit=limit, cursor=cursor
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
