"""
Transfer Ownership Use Case

Hands the owner role to another member of the project.
"""

from typing import Optional
from uuid import UUID

from collab_access.app.services.permission_service import PermissionService
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import ProjectRole
from collab_access.libs.result import Result, Return

from .dtos import MemberView, TransferOwnershipResponse


class TransferOwnershipUseCase:
    """
    Use case for transferring project ownership.

    Business Rules:
    - Only the current owner can transfer ownership
    - The new owner must already be a member
    - The previous owner stays on as admin
    - Both role changes are logged; the project keeps exactly one owner
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requester_user_id: str,
        project_id: UUID,
        new_owner_user_id: str,
        reason: Optional[str] = None,
    ) -> Result[TransferOwnershipResponse]:
        async with self.uow:
            allowed = await require_role(
                self.uow,
                project_id,
                requester_user_id,
                ProjectRole.owner,
                "Only the project owner can transfer ownership",
            )
            if allowed.is_err():
                return Return.err(allowed.error)

            transferred = await PermissionService(self.uow).transfer_ownership(
                project_id,
                new_owner_user_id,
                requester_user_id,
                reason,
                current_owner_id=requester_user_id,
            )
            if transferred.is_err():
                return Return.err(transferred.error)
            previous_owner, new_owner = transferred.value

            project = await self.uow.projects.get_by_id(project_id)
            project.owner_id = new_owner.user_id
            await self.uow.projects.update(project)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                TransferOwnershipResponse(
                    status="transferred",
                    previous_owner=MemberView.from_membership(previous_owner),
                    new_owner=MemberView.from_membership(new_owner),
                    reason=reason,
                )
            )
