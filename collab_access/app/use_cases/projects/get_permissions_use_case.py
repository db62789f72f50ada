"""
Get Permissions Use Case

Summarises what the caller may do in a project.
"""

from uuid import UUID

from collab_access.app.services.permission_service import PermissionService
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.errors import ErrorCode
from collab_access.libs.result import Error, Result, Return

from .dtos import PermissionsResponse


class GetPermissionsUseCase:
    """Non-members get an all-false summary rather than an error"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, project_id: UUID) -> Result[PermissionsResponse]:
        async with self.uow:
            project = await self.uow.projects.get_by_id(project_id)
            if project is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Project not found"))

            summary = await PermissionService(self.uow).permission_summary(
                project_id, user_id
            )

            return Return.ok(
                PermissionsResponse(
                    project_id=str(project_id),
                    role=summary.role.value if summary.role else None,
                    can_view=summary.can_view,
                    can_edit=summary.can_edit,
                    can_delete=summary.can_delete,
                    can_invite=summary.can_invite,
                    can_manage_members=summary.can_manage_members,
                )
            )
