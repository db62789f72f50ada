from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from collab_access.domain.entities import ProjectRole, RoleChangeLog


class IRoleChangeLogRepository(ABC):
    """RoleChangeLog repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: RoleChangeLog) -> RoleChangeLog:
        """Append a role change entry (immutable)"""
        pass

    @abstractmethod
    async def get_by_project_paginated(
        self,
        project_id: UUID,
        user_id: Optional[str] = None,
        changed_by_id: Optional[str] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[RoleChangeLog], Optional[str]]:
        """
        Get role changes of a project with cursor-based pagination.

        Returns:
            Tuple of (entries list, next_cursor)
            - entries: ordered by changed_at DESC
            - next_cursor: Cursor for next page, None if no more entries
        """
        pass

    @abstractmethod
    async def get_by_user_paginated(
        self,
        user_id: str,
        project_id: Optional[UUID] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[RoleChangeLog], Optional[str]]:
        """Get role changes targeting or made by a user, newest first"""
        pass

    @abstractmethod
    async def count_transitions(
        self, project_id: UUID
    ) -> List[Tuple[ProjectRole, Optional[ProjectRole], int]]:
        """Count role changes of a project grouped by (old_role, new_role)"""
        pass

    @abstractmethod
    async def delete_by_project_id(self, project_id: UUID) -> int:
        """Delete a project's entries (project deletion cascade only)"""
        pass
