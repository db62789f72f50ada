"""
Create Project Use Case

Creates a project together with its owner membership.
"""

from typing import Optional

from collab_access.app.services.membership_store import MembershipStore
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.entities import Project, ProjectRole
from collab_access.domain.errors import ErrorCode
from collab_access.domain.role_hierarchy import level
from collab_access.libs.result import Error, Result, Return

from .dtos import ProjectResponse


class CreateProjectUseCase:
    """
    Use case for creating a project.

    Business Rules:
    - Project name is required (1-255 characters)
    - The creator becomes the single OWNER in the same transaction
    - No join log entry is written for the owner
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, owner_user_id: str, name: str, description: Optional[str] = None
    ) -> Result[ProjectResponse]:
        """
        Execute create project use case.

        Args:
            owner_user_id: Authenticated user creating the project
            name: Project name
            description: Optional project description

        Returns:
            Result with ProjectResponse DTO, or Error
        """
        name = (name or "").strip()
        if not name or len(name) > 255:
            return Return.err(
                Error(ErrorCode.INVALID_INPUT, "Project name must be 1-255 characters")
            )

        async with self.uow:
            project = await self.uow.projects.create(
                Project(name=name, description=description, owner_id=owner_user_id)
            )

            created = await MembershipStore(self.uow).create(
                project.id, owner_user_id, ProjectRole.owner, bootstrap=True
            )
            if created.is_err():
                return Return.err(created.error)
            owner = created.value

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                ProjectResponse(
                    id=str(project.id),
                    name=project.name,
                    description=project.description,
                    owner_id=project.owner_id,
                    role=owner.role.value,
                    role_level=level(owner.role),
                    created_at=project.created_at.isoformat(),
                )
            )
