"""
Deactivate Invite Link Use Case
"""

from uuid import UUID

from collab_access.app.services.invitation_service import InvitationService
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.errors import ErrorCode
from collab_access.libs.result import Error, Result, Return

from .dtos import DeactivateInviteLinkResponse


class DeactivateInviteLinkUseCase:
    """
    Use case for revoking a project's invitation links.

    Business Rules:
    - Only owner/admin can deactivate
    - Deactivating when nothing is active succeeds with a count of zero
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, requester_user_id: str, project_id: UUID
    ) -> Result[DeactivateInviteLinkResponse]:
        async with self.uow:
            project = await self.uow.projects.get_by_id(project_id)
            if project is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Project not found"))

            deactivated = await InvitationService(self.uow).deactivate(
                project_id, requester_user_id
            )
            if deactivated.is_err():
                return Return.err(deactivated.error)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                DeactivateInviteLinkResponse(
                    status="deactivated", deactivated=deactivated.value
                )
            )
