"""
Audit Trail

Append-and-query access to the two audit logs: role changes and member
joins. Entries are immutable; nothing here updates or deletes them.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union
from uuid import UUID

from collab_access.app.services.query_options import (
    MemberJoinFilters,
    Pagination,
    RoleChangeFilters,
)
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.entities import (
    JoinMethod,
    MemberJoinLog,
    ProjectRole,
    RoleChangeLog,
)
from collab_access.domain.errors import ErrorCode
from collab_access.libs.pagination import decode_cursor
from collab_access.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
MAX_REASON_LENGTH = 500

AuditEntry = Union[RoleChangeLog, MemberJoinLog]
AuditFilters = Union[RoleChangeFilters, MemberJoinFilters]


@dataclass
class AuditPage:
    """One page of audit entries, newest first"""

    entries: List[AuditEntry]
    next_cursor: Optional[str] = None


class AuditTrail:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def append(self, entry: AuditEntry) -> Result[AuditEntry]:
        """Validate and persist one audit entry"""
        if isinstance(entry, RoleChangeLog):
            if entry.new_role is not None and entry.old_role == entry.new_role:
                return Return.err(
                    Error(
                        ErrorCode.INVALID_INPUT,
                        "Old role and new role cannot be the same",
                    )
                )
            if entry.reason is not None and len(entry.reason) > MAX_REASON_LENGTH:
                return Return.err(
                    Error(
                        ErrorCode.INVALID_INPUT,
                        f"Reason must be at most {MAX_REASON_LENGTH} characters",
                    )
                )
            entry = await self.uow.role_change_logs.create(entry)
            logger.info(
                "Role change logged in project %s: %s %s -> %s by %s",
                entry.project_id,
                entry.user_id,
                entry.old_role.value,
                entry.new_role.value if entry.new_role else "removed",
                entry.changed_by_id,
            )
            return Return.ok(entry)

        if isinstance(entry, MemberJoinLog):
            if entry.join_method == JoinMethod.invite_link and not entry.invite_token:
                return Return.err(
                    Error(ErrorCode.INVALID_INPUT, "Invite link joins must record the token")
                )
            entry = await self.uow.member_join_logs.create(entry)
            return Return.ok(entry)

        raise TypeError(f"Unsupported audit entry type: {type(entry).__name__}")

    async def append_role_change(
        self,
        project_id: UUID,
        user_id: str,
        changed_by_id: str,
        old_role: ProjectRole,
        new_role: Optional[ProjectRole],
        reason: Optional[str] = None,
    ) -> Result[RoleChangeLog]:
        return await self.append(
            RoleChangeLog(
                project_id=project_id,
                user_id=user_id,
                changed_by_id=changed_by_id,
                old_role=old_role,
                new_role=new_role,
                reason=reason,
            )
        )

    async def append_member_join(
        self,
        project_id: UUID,
        user_id: str,
        join_method: JoinMethod,
        invite_token: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[MemberJoinLog]:
        return await self.append(
            MemberJoinLog(
                project_id=project_id,
                user_id=user_id,
                join_method=join_method,
                invite_token=invite_token,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        )

    async def query_by_project(
        self,
        project_id: UUID,
        filters: AuditFilters,
        pagination: Optional[Pagination] = None,
    ) -> Result[AuditPage]:
        """
        Entries of one project, newest first.

        The filters type selects the log: RoleChangeFilters for role changes,
        MemberJoinFilters for joins.
        """
        page = self._check_pagination(pagination)
        if page.is_err():
            return page
        limit, cursor = page.value

        if isinstance(filters, RoleChangeFilters):
            entries, next_cursor = await self.uow.role_change_logs.get_by_project_paginated(
                project_id,
                user_id=filters.user_id,
                changed_by_id=filters.changed_by_id,
                limit=limit,
                cursor=cursor,
            )
        elif isinstance(filters, MemberJoinFilters):
            entries, next_cursor = await self.uow.member_join_logs.get_by_project_paginated(
                project_id,
                join_method=filters.join_method,
                limit=limit,
                cursor=cursor,
            )
        else:
            raise TypeError(f"Unsupported audit filters: {type(filters).__name__}")

        return Return.ok(AuditPage(entries=entries, next_cursor=next_cursor))

    async def query_by_user(
        self,
        user_id: str,
        filters: AuditFilters,
        pagination: Optional[Pagination] = None,
    ) -> Result[AuditPage]:
        """Entries concerning one user across projects, newest first"""
        page = self._check_pagination(pagination)
        if page.is_err():
            return page
        limit, cursor = page.value

        if isinstance(filters, RoleChangeFilters):
            entries, next_cursor = await self.uow.role_change_logs.get_by_user_paginated(
                user_id, project_id=filters.project_id, limit=limit, cursor=cursor
            )
        elif isinstance(filters, MemberJoinFilters):
            entries, next_cursor = await self.uow.member_join_logs.get_by_user_paginated(
                user_id, project_id=filters.project_id, limit=limit, cursor=cursor
            )
        else:
            raise TypeError(f"Unsupported audit filters: {type(filters).__name__}")

        return Return.ok(AuditPage(entries=entries, next_cursor=next_cursor))

    async def role_change_stats(
        self, project_id: UUID
    ) -> List[Tuple[ProjectRole, Optional[ProjectRole], int]]:
        return await self.uow.role_change_logs.count_transitions(project_id)

    async def join_stats(self, project_id: UUID) -> Dict[JoinMethod, int]:
        counts = await self.uow.member_join_logs.count_by_method(project_id)
        return {method: counts.get(method, 0) for method in JoinMethod}

    @staticmethod
    def _check_pagination(
        pagination: Optional[Pagination],
    ) -> Result[Tuple[int, Optional[str]]]:
        pagination = pagination or Pagination()
        limit = max(1, min(pagination.limit, MAX_PAGE_SIZE))

        if pagination.cursor:
            try:
                decode_cursor(pagination.cursor)
            except ValueError:
                return Return.err(Error(ErrorCode.INVALID_INPUT, "Invalid pagination cursor"))

        return Return.ok((limit, pagination.cursor))
