"""
Change Member Role Use Case

Handles changing a member's role within a project.
"""

from typing import Optional
from uuid import UUID

from collab_access.app.services.permission_service import PermissionService
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import ProjectRole
from collab_access.domain.errors import ErrorCode
from collab_access.domain.role_hierarchy import parse_role
from collab_access.libs.result import Error, Result, Return

from .dtos import MemberResponse, MemberView


class ChangeRoleUseCase:
    """
    Use case for changing a member's role within a project.

    Business Rules:
    - Requester must be owner or admin
    - Only the owner grants or revokes admin
    - Owner role moves only through ownership transfer
    - Setting the current role again is rejected (INVALID_INPUT)
    - Role update and role change log entry commit together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requester_user_id: str,
        project_id: UUID,
        target_user_id: str,
        new_role: str,
        reason: Optional[str] = None,
    ) -> Result[MemberResponse]:
        """
        Execute change role use case.

        Args:
            requester_user_id: User making the change
            project_id: Project ID
            target_user_id: User whose role is being changed
            new_role: New role to assign (admin/member/viewer)
            reason: Optional free-text reason kept in the audit log

        Returns:
            Result with updated membership, or Error
        """
        membership_role = parse_role(new_role)
        if membership_role is None:
            return Return.err(
                Error(
                    ErrorCode.INVALID_INPUT,
                    f"Invalid role: {new_role}. Must be one of: owner, admin, member, viewer",
                )
            )

        async with self.uow:
            allowed = await require_role(
                self.uow,
                project_id,
                requester_user_id,
                ProjectRole.admin,
                "Only owners and admins can change member roles",
            )
            if allowed.is_err():
                return Return.err(allowed.error)

            permissions = PermissionService(self.uow)

            target = await permissions.store.find(project_id, target_user_id, for_update=True)
            if target is None:
                return Return.err(
                    Error(ErrorCode.NOT_A_MEMBER, "User is not a member of this project")
                )

            policy = permissions.check_role_change_policy(
                allowed.value.role, target.role, membership_role
            )
            if policy.is_err():
                return Return.err(policy.error)

            changed = await permissions.change_role(
                project_id,
                target_user_id,
                membership_role,
                acting_user_id=requester_user_id,
                reason=reason,
            )
            if changed.is_err():
                return Return.err(changed.error)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                MemberResponse(
                    status="updated", membership=MemberView.from_membership(changed.value)
                )
            )
