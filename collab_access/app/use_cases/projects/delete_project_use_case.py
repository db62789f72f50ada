"""
Delete Project Use Case

Removes a project and everything scoped to it.
"""

import logging
from uuid import UUID

from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import ProjectRole
from collab_access.libs.result import Result, Return

from .dtos import DeleteProjectResponse

logger = logging.getLogger(__name__)


class DeleteProjectUseCase:
    """
    Use case for deleting a project.

    Business Rules:
    - Only the owner can delete the project
    - Memberships, invitation links and both audit logs are removed with it
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, requester_user_id: str, project_id: UUID
    ) -> Result[DeleteProjectResponse]:
        async with self.uow:
            allowed = await require_role(
                self.uow,
                project_id,
                requester_user_id,
                ProjectRole.owner,
                "Only the project owner can delete the project",
            )
            if allowed.is_err():
                return Return.err(allowed.error)

            project = await self.uow.projects.get_by_id(project_id)

            await self.uow.role_change_logs.delete_by_project_id(project_id)
            await self.uow.member_join_logs.delete_by_project_id(project_id)
            links_removed = await self.uow.invitation_links.delete_by_project_id(project_id)
            members_removed = await self.uow.memberships.delete_by_project_id(project_id)
            await self.uow.projects.delete(project)

            # Commit transaction
            await self.uow.commit()

            logger.info("Project %s deleted by %s", project_id, requester_user_id)

            return Return.ok(
                DeleteProjectResponse(
                    status="deleted",
                    memberships_removed=members_removed,
                    invitation_links_removed=links_removed,
                )
            )
