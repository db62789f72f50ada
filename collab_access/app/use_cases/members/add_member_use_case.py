"""
Add Member Use Case

Adds a user to a project directly, without an invitation link.
"""

from uuid import UUID

from collab_access.app.services.audit_trail import AuditTrail
from collab_access.app.services.membership_store import MembershipStore
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import JoinMethod, ProjectRole
from collab_access.domain.errors import ErrorCode
from collab_access.domain.role_hierarchy import parse_role
from collab_access.libs.result import Error, Result, Return

from .dtos import MemberResponse, MemberView


class AddMemberUseCase:
    """
    Use case for adding a member directly.

    Business Rules:
    - Only owner/admin can add members
    - Role must be admin, member or viewer; only the owner can add admins
    - Adding an existing member fails with DUPLICATE_MEMBERSHIP
    - A join log entry records the join method (admin_added by default)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requester_user_id: str,
        project_id: UUID,
        user_id: str,
        role: str,
        join_method: str = JoinMethod.admin_added.value,
    ) -> Result[MemberResponse]:
        member_role = parse_role(role)
        if member_role is None or member_role == ProjectRole.owner:
            return Return.err(
                Error(
                    ErrorCode.INVALID_INPUT,
                    f"Invalid role: {role}. Must be one of: admin, member, viewer",
                )
            )

        try:
            method = JoinMethod(join_method)
        except ValueError:
            return Return.err(
                Error(ErrorCode.INVALID_INPUT, f"Invalid join method: {join_method}")
            )
        if method == JoinMethod.invite_link:
            return Return.err(
                Error(ErrorCode.INVALID_INPUT, "Invite link joins go through redemption")
            )

        if not user_id or not user_id.strip():
            return Return.err(Error(ErrorCode.INVALID_INPUT, "user_id is required"))

        async with self.uow:
            allowed = await require_role(
                self.uow,
                project_id,
                requester_user_id,
                ProjectRole.admin,
                "Only owners and admins can add members",
            )
            if allowed.is_err():
                return Return.err(allowed.error)

            if member_role == ProjectRole.admin and allowed.value.role != ProjectRole.owner:
                return Return.err(
                    Error(ErrorCode.FORBIDDEN, "Only the owner can add admins")
                )

            created = await MembershipStore(self.uow).create(project_id, user_id, member_role)
            if created.is_err():
                return Return.err(created.error)

            logged = await AuditTrail(self.uow).append_member_join(
                project_id=project_id, user_id=user_id, join_method=method
            )
            if logged.is_err():
                return Return.err(logged.error)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                MemberResponse(
                    status="added", membership=MemberView.from_membership(created.value)
                )
            )
