"""
Validate Invite Token Use Case

Lets a user preview a link before joining. Read only.
"""

from collab_access.app.services.invitation_service import InvitationService
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.errors import ErrorCode
from collab_access.libs.result import Error, Result, Return

from .dtos import InvitePreviewResponse


class ValidateInviteTokenUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, token: str) -> Result[InvitePreviewResponse]:
        async with self.uow:
            service = InvitationService(self.uow)

            validated = await service.validate(token)
            if validated.is_err():
                return Return.err(validated.error)
            link = validated.value

            project = await self.uow.projects.get_by_id(link.project_id)
            if project is None:
                return Return.err(
                    Error(ErrorCode.INVALID_OR_EXPIRED_TOKEN, "Invalid or expired invitation link")
                )

            membership = await service.store.find(link.project_id, user_id)

            return Return.ok(
                InvitePreviewResponse(
                    project_id=str(project.id),
                    project_name=project.name,
                    role=link.role.value,
                    expires_at=link.expires_at.isoformat() if link.expires_at else None,
                    remaining_uses=link.remaining_uses(),
                    already_member=membership is not None,
                )
            )
