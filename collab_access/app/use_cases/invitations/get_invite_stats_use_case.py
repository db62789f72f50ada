"""
Get Invite Stats Use Case

Usage numbers for every invitation link a project ever had.
"""

from uuid import UUID

from collab_access.app.services.invitation_service import InvitationService
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import ProjectRole
from collab_access.libs.result import Result, Return

from .dtos import InviteStatsResponse


class GetInviteStatsUseCase:
    def __init__(self, uow: UnitOfWork, recent_days: int = 30):
        self.uow = uow
        self.recent_days = recent_days

    async def execute(
        self, requester_user_id: str, project_id: UUID
    ) -> Result[InviteStatsResponse]:
        async with self.uow:
            allowed = await require_role(
                self.uow,
                project_id,
                requester_user_id,
                ProjectRole.admin,
                "Only project owners and admins can view invitation stats",
            )
            if allowed.is_err():
                return Return.err(allowed.error)

            stats = await InvitationService(self.uow).stats(project_id, self.recent_days)

            return Return.ok(
                InviteStatsResponse(project_id=str(project_id), **stats.model_dump())
            )
