"""
Create Invite Link Use Case

Creates the project's active invitation link.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import ValidationError

from collab_access.app.services.invitation_service import InvitationService
from collab_access.app.services.query_options import InviteLinkOptions
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.entities import ProjectRole
from collab_access.domain.errors import ErrorCode
from collab_access.domain.role_hierarchy import parse_role
from collab_access.libs.result import Error, Result, Return

from .dtos import InviteLinkView


class CreateInviteLinkUseCase:
    """
    Use case for creating an invitation link.

    Business Rules:
    - Only owner/admin can create links
    - A new link deactivates every previous link of the project
    - max_uses, when given, must be positive; expires_at must be in the future
    - Links grant member (default) or viewer
    """

    def __init__(self, uow: UnitOfWork, invite_base_path: str = "/join"):
        self.uow = uow
        self.invite_base_path = invite_base_path

    async def execute(
        self,
        requester_user_id: str,
        project_id: UUID,
        max_uses: Optional[int] = None,
        expires_at: Optional[datetime] = None,
        role: str = ProjectRole.member.value,
    ) -> Result[InviteLinkView]:
        link_role = parse_role(role)
        if link_role is None:
            return Return.err(Error(ErrorCode.INVALID_INPUT, f"Invalid role: {role}"))

        try:
            options = InviteLinkOptions(max_uses=max_uses, expires_at=expires_at, role=link_role)
        except ValidationError as exc:
            return Return.err(Error(ErrorCode.INVALID_INPUT, str(exc)))

        async with self.uow:
            project = await self.uow.projects.get_by_id(project_id)
            if project is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Project not found"))

            created = await InvitationService(self.uow).create(
                project_id, requester_user_id, options
            )
            if created.is_err():
                return Return.err(created.error)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(InviteLinkView.from_link(created.value, self.invite_base_path))
