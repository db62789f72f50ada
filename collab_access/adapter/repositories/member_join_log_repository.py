from datetime import datetime
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from collab_access.libs.pagination import decode_cursor, split_page
from collab_access.app.repositories.member_join_log_repository import IMemberJoinLogRepository
from collab_access.domain.entities import JoinMethod, MemberJoinLog


class MemberJoinLogRepository(IMemberJoinLogRepository):
    """MemberJoinLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: MemberJoinLog) -> MemberJoinLog:
        """Append a join entry (immutable)"""
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def get_by_project_paginated(
        self,
        project_id: UUID,
        join_method: Optional[JoinMethod] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[MemberJoinLog], Optional[str]]:
        stmt = select(MemberJoinLog).where(MemberJoinLog.project_id == project_id)

        if join_method:
            stmt = stmt.where(MemberJoinLog.join_method == join_method)
        if cursor:
            stmt = stmt.where(MemberJoinLog.joined_at < decode_cursor(cursor))

        stmt = stmt.order_by(MemberJoinLog.joined_at.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        return split_page(list(result.all()), limit, "joined_at")

    async def get_by_user_paginated(
        self,
        user_id: str,
        project_id: Optional[UUID] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[MemberJoinLog], Optional[str]]:
        stmt = select(MemberJoinLog).where(MemberJoinLog.user_id == user_id)

        if project_id:
            stmt = stmt.where(MemberJoinLog.project_id == project_id)
        if cursor:
            stmt = stmt.where(MemberJoinLog.joined_at < decode_cursor(cursor))

        stmt = stmt.order_by(MemberJoinLog.joined_at.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        return split_page(list(result.all()), limit, "joined_at")

    async def get_by_invite_tokens(self, tokens: List[str]) -> List[MemberJoinLog]:
        if not tokens:
            return []
        stmt = select(MemberJoinLog).where(MemberJoinLog.invite_token.in_(tokens))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_method(
        self, project_id: UUID, since: Optional[datetime] = None
    ) -> Dict[JoinMethod, int]:
        stmt = select(MemberJoinLog.join_method, func.count()).where(
            MemberJoinLog.project_id == project_id
        )
        if since:
            stmt = stmt.where(MemberJoinLog.joined_at >= since)
        stmt = stmt.group_by(MemberJoinLog.join_method)

        result = await self.session.exec(stmt)
        return {JoinMethod(method): count for method, count in result.all()}

    async def delete_by_project_id(self, project_id: UUID) -> int:
        stmt = (
            delete(MemberJoinLog)
            .where(MemberJoinLog.project_id == project_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
