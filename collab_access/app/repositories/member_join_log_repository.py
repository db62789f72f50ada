from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from collab_access.domain.entities import JoinMethod, MemberJoinLog


class IMemberJoinLogRepository(ABC):
    """MemberJoinLog repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: MemberJoinLog) -> MemberJoinLog:
        """Append a join entry (immutable)"""
        pass

    @abstractmethod
    async def get_by_project_paginated(
        self,
        project_id: UUID,
        join_method: Optional[JoinMethod] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[MemberJoinLog], Optional[str]]:
        """Get join entries of a project, newest first, cursor-paginated"""
        pass

    @abstractmethod
    async def get_by_user_paginated(
        self,
        user_id: str,
        project_id: Optional[UUID] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[MemberJoinLog], Optional[str]]:
        """Get join entries of a user, newest first, cursor-paginated"""
        pass

    @abstractmethod
    async def get_by_invite_tokens(self, tokens: List[str]) -> List[MemberJoinLog]:
        """Get join entries that used any of the given invite tokens"""
        pass

    @abstractmethod
    async def count_by_method(
        self, project_id: UUID, since: Optional[datetime] = None
    ) -> Dict[JoinMethod, int]:
        """Count join entries of a project grouped by join method"""
        pass

    @abstractmethod
    async def delete_by_project_id(self, project_id: UUID) -> int:
        """Delete a project's entries (project deletion cascade only)"""
        pass
