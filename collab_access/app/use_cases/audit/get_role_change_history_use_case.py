"""
Get Role Change History Use Case

Paginated role change log of one project, newest first.
"""

from typing import Optional
from uuid import UUID

from collab_access.app.services.audit_trail import AuditTrail
from collab_access.app.services.query_options import Pagination, RoleChangeFilters
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import ProjectRole
from collab_access.libs.result import Result, Return

from .dtos import RoleChangeEntryView, RoleChangeHistoryResponse


class GetRoleChangeHistoryUseCase:
    """
    Business Rules:
    - Only owner/admin can read a project's audit log
    - Optional filters: target user, acting user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requester_user_id: str,
        project_id: UUID,
        user_id: Optional[str] = None,
        changed_by_id: Optional[str] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[RoleChangeHistoryResponse]:
        async with self.uow:
            allowed = await require_role(
                self.uow,
                project_id,
                requester_user_id,
                ProjectRole.admin,
                "Only project owners and admins can view the audit log",
            )
            if allowed.is_err():
                return Return.err(allowed.error)

            page = await AuditTrail(self.uow).query_by_project(
                project_id,
                RoleChangeFilters(user_id=user_id, changed_by_id=changed_by_id),
                Pagination(limit=limit, cursor=cursor),
            )
            if page.is_err():
                return Return.err(page.error)

            return Return.ok(
                RoleChangeHistoryResponse(
                    entries=[RoleChangeEntryView.from_entry(e) for e in page.value.entries],
                    next_cursor=page.value.next_cursor,
                )
            )
