"""
Get My Audit History Use Case

Role changes the caller was the subject or the author of, across projects.
"""

from typing import Optional
from uuid import UUID

from collab_access.app.services.audit_trail import AuditTrail
from collab_access.app.services.query_options import Pagination, RoleChangeFilters
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.libs.result import Result, Return

from .dtos import RoleChangeEntryView, RoleChangeHistoryResponse


class GetMyAuditHistoryUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        project_id: Optional[UUID] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[RoleChangeHistoryResponse]:
        async with self.uow:
            page = await AuditTrail(self.uow).query_by_user(
                user_id,
                RoleChangeFilters(project_id=project_id),
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
