from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from collab_access.domain.entities import InvitationLink


class IInvitationLinkRepository(ABC):
    """InvitationLink repository interface - application layer"""

    @abstractmethod
    async def get_by_id(
        self, link_id: UUID, for_update: bool = False
    ) -> Optional[InvitationLink]:
        """Get invitation link by ID, optionally locking the row"""
        pass

    @abstractmethod
    async def get_by_token(
        self, token: str, for_update: bool = False
    ) -> Optional[InvitationLink]:
        """Get invitation link by secret token, optionally locking the row"""
        pass

    @abstractmethod
    async def get_active_by_project(
        self, project_id: UUID, now: datetime
    ) -> Optional[InvitationLink]:
        """Get the active, unexpired link of a project"""
        pass

    @abstractmethod
    async def get_by_project_id(self, project_id: UUID) -> List[InvitationLink]:
        """Get all links of a project, newest first"""
        pass

    @abstractmethod
    async def create(self, link: InvitationLink) -> InvitationLink:
        """Create a new invitation link"""
        pass

    @abstractmethod
    async def deactivate_all_for_project(self, project_id: UUID) -> int:
        """Set every active link of a project inactive, returning the row count"""
        pass

    @abstractmethod
    async def try_increment_uses(self, link_id: UUID, now: datetime) -> bool:
        """
        Atomically claim one use of a link.

        The increment only applies while the link is still usable at ``now``.
        Returns False when no row was updated (inactive, expired or exhausted).
        """
        pass

    @abstractmethod
    async def delete_by_project_id(self, project_id: UUID) -> int:
        """Delete all links of a project, returning the row count"""
        pass
