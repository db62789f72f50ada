"""
Get Active Invite Link Use Case
"""

from uuid import UUID

from collab_access.app.services.invitation_service import InvitationService
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import ProjectRole
from collab_access.libs.result import Result, Return

from .dtos import ActiveInviteLinkResponse, InviteLinkView


class GetActiveInviteLinkUseCase:
    """Returns the usable link of a project, or no link; owner/admin only"""

    def __init__(self, uow: UnitOfWork, invite_base_path: str = "/join"):
        self.uow = uow
        self.invite_base_path = invite_base_path

    async def execute(
        self, requester_user_id: str, project_id: UUID
    ) -> Result[ActiveInviteLinkResponse]:
        async with self.uow:
            allowed = await require_role(
                self.uow,
                project_id,
                requester_user_id,
                ProjectRole.admin,
                "Only project owners and admins can view invitation links",
            )
            if allowed.is_err():
                return Return.err(allowed.error)

            link = await InvitationService(self.uow).get_active(project_id)
            if link is None:
                return Return.ok(ActiveInviteLinkResponse())

            return Return.ok(
                ActiveInviteLinkResponse(
                    link=InviteLinkView.from_link(link, self.invite_base_path)
                )
            )
