"""
Get Member Join History Use Case

Paginated join log of one project, newest first.
"""

from typing import Optional
from uuid import UUID

from collab_access.app.services.audit_trail import AuditTrail
from collab_access.app.services.query_options import MemberJoinFilters, Pagination
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import JoinMethod, ProjectRole
from collab_access.domain.errors import ErrorCode
from collab_access.libs.result import Error, Result, Return

from .dtos import MemberJoinEntryView, MemberJoinHistoryResponse


class GetMemberJoinHistoryUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requester_user_id: str,
        project_id: UUID,
        join_method: Optional[str] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[MemberJoinHistoryResponse]:
        method = None
        if join_method is not None:
            try:
                method = JoinMethod(join_method)
            except ValueError:
                return Return.err(
                    Error(ErrorCode.INVALID_INPUT, f"Invalid join method: {join_method}")
                )

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
                MemberJoinFilters(join_method=method),
                Pagination(limit=limit, cursor=cursor),
            )
            if page.is_err():
                return Return.err(page.error)

            return Return.ok(
                MemberJoinHistoryResponse(
                    entries=[MemberJoinEntryView.from_entry(e) for e in page.value.entries],
                    next_cursor=page.value.next_cursor,
                )
            )
