"""
List Members Use Case

Lists the members of a project in display order.
"""

from typing import Optional
from uuid import UUID

from collab_access.app.services.membership_store import MembershipStore
from collab_access.app.services.query_options import ListMembersOptions
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import ProjectRole
from collab_access.domain.errors import ErrorCode
from collab_access.domain.role_hierarchy import parse_role
from collab_access.libs.result import Error, Result, Return

from .dtos import ListMembersResponse, MemberView


class ListMembersUseCase:
    """
    Use case for listing project members.

    Business Rules:
    - Any member (viewer and up) can list members
    - Owners first, then by role level, then by join date
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requester_user_id: str,
        project_id: UUID,
        role: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Result[ListMembersResponse]:
        role_filter = None
        if role is not None:
            role_filter = parse_role(role)
            if role_filter is None:
                return Return.err(Error(ErrorCode.INVALID_INPUT, f"Invalid role: {role}"))

        if limit is not None and limit < 1:
            return Return.err(Error(ErrorCode.INVALID_INPUT, "limit must be positive"))

        async with self.uow:
            allowed = await require_role(
                self.uow,
                project_id,
                requester_user_id,
                ProjectRole.viewer,
                "You are not a member of this project",
            )
            if allowed.is_err():
                return Return.err(allowed.error)

            store = MembershipStore(self.uow)
            members = await store.list_by_project(
                project_id, ListMembersOptions(role=role_filter, limit=limit)
            )
            counts = await store.count_by_role(project_id)

            return Return.ok(
                ListMembersResponse(
                    members=[MemberView.from_membership(m) for m in members],
                    counts_by_role={r.value: c for r, c in counts.items()},
                )
            )
