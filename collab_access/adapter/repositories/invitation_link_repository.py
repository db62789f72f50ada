from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, or_, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from collab_access.app.repositories.invitation_link_repository import IInvitationLinkRepository
from collab_access.domain.entities import InvitationLink


class InvitationLinkRepository(IInvitationLinkRepository):
    """
    InvitationLink repository implementation using SQLModel.

    Links are mutated with bulk UPDATE statements, so every read refreshes
    already-loaded instances (populate_existing) instead of trusting the
    session's identity map.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, link_id: UUID, for_update: bool = False
    ) -> Optional[InvitationLink]:
        """Get invitation link by ID"""
        stmt = select(InvitationLink).where(InvitationLink.id == link_id)
        if for_update:
            stmt = stmt.with_for_update()
        stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token(
        self, token: str, for_update: bool = False
    ) -> Optional[InvitationLink]:
        """Get invitation link by secret token"""
        stmt = select(InvitationLink).where(InvitationLink.secret_token == token)
        if for_update:
            stmt = stmt.with_for_update()
        stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_project(
        self, project_id: UUID, now: datetime
    ) -> Optional[InvitationLink]:
        """Get the active, unexpired link of a project"""
        stmt = (
            select(InvitationLink)
            .where(
                InvitationLink.project_id == project_id,
                InvitationLink.is_active == True,  # noqa: E712
                or_(
                    InvitationLink.expires_at.is_(None),
                    InvitationLink.expires_at > now,
                ),
            )
            .order_by(InvitationLink.created_at.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_project_id(self, project_id: UUID) -> List[InvitationLink]:
        """Get all links of a project, newest first"""
        stmt = (
            select(InvitationLink)
            .where(InvitationLink.project_id == project_id)
            .order_by(InvitationLink.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, link: InvitationLink) -> InvitationLink:
        """Create a new invitation link"""
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link

    async def deactivate_all_for_project(self, project_id: UUID) -> int:
        """Set every active link of a project inactive"""
        stmt = (
            update(InvitationLink)
            .where(
                InvitationLink.project_id == project_id,
                InvitationLink.is_active == True,  # noqa: E712
            )
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def try_increment_uses(self, link_id: UUID, now: datetime) -> bool:
        """
        Claim one use of a link with a single conditional UPDATE.

        The WHERE clause re-evaluates the usability predicate against the row
        as it is at write time, so two redeemers racing for the last slot
        cannot both see an affected row.
        """
        stmt = (
            update(InvitationLink)
            .where(
                InvitationLink.id == link_id,
                InvitationLink.is_active == True,  # noqa: E712
                or_(
                    InvitationLink.max_uses.is_(None),
                    InvitationLink.current_uses < InvitationLink.max_uses,
                ),
                or_(
                    InvitationLink.expires_at.is_(None),
                    InvitationLink.expires_at > now,
                ),
            )
            .values(current_uses=InvitationLink.current_uses + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete_by_project_id(self, project_id: UUID) -> int:
        """Delete all links of a project"""
        stmt = (
            delete(InvitationLink)
            .where(InvitationLink.project_id == project_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
