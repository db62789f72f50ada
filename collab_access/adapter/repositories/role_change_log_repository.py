from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from collab_access.libs.pagination import decode_cursor, split_page
from collab_access.app.repositories.role_change_log_repository import IRoleChangeLogRepository
from collab_access.domain.entities import ProjectRole, RoleChangeLog


class RoleChangeLogRepository(IRoleChangeLogRepository):
    """RoleChangeLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: RoleChangeLog) -> RoleChangeLog:
        """Append a role change entry (immutable)"""
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def get_by_project_paginated(
        self,
        project_id: UUID,
        user_id: Optional[str] = None,
        changed_by_id: Optional[str] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[RoleChangeLog], Optional[str]]:
        stmt = select(RoleChangeLog).where(RoleChangeLog.project_id == project_id)

        if user_id:
            stmt = stmt.where(RoleChangeLog.user_id == user_id)
        if changed_by_id:
            stmt = stmt.where(RoleChangeLog.changed_by_id == changed_by_id)
        if cursor:
            stmt = stmt.where(RoleChangeLog.changed_at < decode_cursor(cursor))

        # Newest first, one extra row to detect another page
        stmt = stmt.order_by(RoleChangeLog.changed_at.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        return split_page(list(result.all()), limit, "changed_at")

    async def get_by_user_paginated(
        self,
        user_id: str,
        project_id: Optional[UUID] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[RoleChangeLog], Optional[str]]:
        # Rows where the user was either the target or the actor
        stmt = select(RoleChangeLog).where(
            or_(
                RoleChangeLog.user_id == user_id,
                RoleChangeLog.changed_by_id == user_id,
            )
        )

        if project_id:
            stmt = stmt.where(RoleChangeLog.project_id == project_id)
        if cursor:
            stmt = stmt.where(RoleChangeLog.changed_at < decode_cursor(cursor))

        stmt = stmt.order_by(RoleChangeLog.changed_at.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        return split_page(list(result.all()), limit, "changed_at")

    async def count_transitions(
        self, project_id: UUID
    ) -> List[Tuple[ProjectRole, Optional[ProjectRole], int]]:
        stmt = (
            select(RoleChangeLog.old_role, RoleChangeLog.new_role, func.count())
            .where(RoleChangeLog.project_id == project_id)
            .group_by(RoleChangeLog.old_role, RoleChangeLog.new_role)
            .order_by(func.count().desc())
        )
        result = await self.session.exec(stmt)
        return [
            (ProjectRole(old), ProjectRole(new) if new is not None else None, count)
            for old, new, count in result.all()
        ]

    async def delete_by_project_id(self, project_id: UUID) -> int:
        stmt = (
            delete(RoleChangeLog)
            .where(RoleChangeLog.project_id == project_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
