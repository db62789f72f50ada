"""
Remove Member from Project Use Case

Handles removing members from a project.
"""

from typing import Optional
from uuid import UUID

from collab_access.app.services.permission_service import PermissionService
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.entities import ProjectRole
from collab_access.domain.errors import ErrorCode
from collab_access.libs.result import Error, Result, Return

from .dtos import RemoveMemberResponse


class RemoveMemberUseCase:
    """
    Use case for removing members from a project.

    Business Rules:
    - Members may always leave on their own, except the owner
    - Otherwise only owner/admin can remove members
    - Admins can remove members and viewers, not other admins
    - The owner can never be removed (CANNOT_REMOVE_OWNER); transfer first
    - Removal is logged as a role change to no role
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requester_user_id: str,
        project_id: UUID,
        target_user_id: str,
        reason: Optional[str] = None,
    ) -> Result[RemoveMemberResponse]:
        async with self.uow:
            project = await self.uow.projects.get_by_id(project_id)
            if project is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Project not found"))

            permissions = PermissionService(self.uow)

            requester_role = await permissions.get_role(project_id, requester_user_id)
            if requester_role is None:
                return Return.err(
                    Error(ErrorCode.FORBIDDEN, "You are not a member of this project")
                )

            is_self_removal = requester_user_id == target_user_id
            if not is_self_removal and requester_role not in (
                ProjectRole.owner,
                ProjectRole.admin,
            ):
                return Return.err(
                    Error(ErrorCode.FORBIDDEN, "Only owners and admins can remove members")
                )

            target_role = await permissions.get_role(project_id, target_user_id)
            if target_role is None:
                return Return.err(
                    Error(ErrorCode.NOT_A_MEMBER, "User is not a member of this project")
                )

            if (
                not is_self_removal
                and requester_role == ProjectRole.admin
                and target_role == ProjectRole.admin
            ):
                return Return.err(
                    Error(ErrorCode.FORBIDDEN, "Admins cannot remove other admins")
                )

            removed = await permissions.remove_member(
                project_id, target_user_id, requester_user_id, reason
            )
            if removed.is_err():
                return Return.err(removed.error)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                RemoveMemberResponse(
                    status="removed",
                    user_id=target_user_id,
                    previous_role=removed.value.role.value,
                )
            )
