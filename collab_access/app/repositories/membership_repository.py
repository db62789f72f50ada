from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from collab_access.domain.entities import Membership, ProjectRole


class IMembershipRepository(ABC):
    """Membership repository interface - application layer"""

    @abstractmethod
    async def get_by_project_and_user(
        self, project_id: UUID, user_id: str, for_update: bool = False
    ) -> Optional[Membership]:
        """Get membership by project and user, optionally locking the row"""
        pass

    @abstractmethod
    async def get_by_project_id(self, project_id: UUID) -> List[Membership]:
        """Get all memberships for a project (unordered)"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> List[Membership]:
        """Get all memberships for a user"""
        pass

    @abstractmethod
    async def get_by_project_and_role(
        self, project_id: UUID, role: ProjectRole
    ) -> List[Membership]:
        """Get memberships of a project holding the given role"""
        pass

    @abstractmethod
    async def count_by_role(self, project_id: UUID) -> Dict[ProjectRole, int]:
        """Count memberships of a project grouped by role"""
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """
        Create a new membership.

        Raises:
            DuplicateKeyError: (project_id, user_id) already exists
        """
        pass

    @abstractmethod
    async def try_change_role(
        self,
        project_id: UUID,
        user_id: str,
        expected_role: ProjectRole,
        new_role: ProjectRole,
        now: datetime,
    ) -> bool:
        """
        Move a membership from expected_role to new_role in one conditional write.

        Returns False when the row no longer holds expected_role.
        """
        pass

    @abstractmethod
    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        pass

    @abstractmethod
    async def delete(self, membership: Membership) -> None:
        """Delete a membership"""
        pass

    @abstractmethod
    async def delete_by_project_id(self, project_id: UUID) -> int:
        """Delete all memberships of a project, returning the row count"""
        pass
