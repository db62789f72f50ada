from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from collab_access.app.repositories.membership_repository import IMembershipRepository
from collab_access.domain.entities import Membership, ProjectRole
from collab_access.domain.errors import DuplicateKeyError


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_project_and_user(
        self, project_id: UUID, user_id: str, for_update: bool = False
    ) -> Optional[Membership]:
        """Get membership by project and user"""
        stmt = select(Membership).where(
            Membership.project_id == project_id, Membership.user_id == user_id
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_project_id(self, project_id: UUID) -> List[Membership]:
        """Get all memberships for a project"""
        stmt = select(Membership).where(Membership.project_id == project_id)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_user_id(self, user_id: str) -> List[Membership]:
        """Get all memberships for a user"""
        stmt = select(Membership).where(Membership.user_id == user_id)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_project_and_role(
        self, project_id: UUID, role: ProjectRole
    ) -> List[Membership]:
        """Get memberships of a project holding the given role"""
        stmt = select(Membership).where(
            Membership.project_id == project_id, Membership.role == role
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_role(self, project_id: UUID) -> Dict[ProjectRole, int]:
        """Count memberships of a project grouped by role"""
        stmt = (
            select(Membership.role, func.count())
            .where(Membership.project_id == project_id)
            .group_by(Membership.role)
        )
        result = await self.session.exec(stmt)
        return {ProjectRole(role): count for role, count in result.all()}

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        self.session.add(membership)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateKeyError(
                f"Membership already exists for project {membership.project_id}"
            ) from exc
        await self.session.refresh(membership)
        return membership

    async def try_change_role(
        self,
        project_id: UUID,
        user_id: str,
        expected_role: ProjectRole,
        new_role: ProjectRole,
        now: datetime,
    ) -> bool:
        """
        Compare-and-set a member's role with a single conditional UPDATE.

        The role predicate is evaluated against the row at write time, so of
        two transactions that both read the same role only the first to write
        sees an affected row.
        """
        stmt = (
            update(Membership)
            .where(
                Membership.project_id == project_id,
                Membership.user_id == user_id,
                Membership.role == expected_role,
            )
            .values(role=new_role, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def delete(self, membership: Membership) -> None:
        """Delete a membership"""
        await self.session.delete(membership)
        await self.session.flush()

    async def delete_by_project_id(self, project_id: UUID) -> int:
        """Delete all memberships of a project"""
        stmt = (
            delete(Membership)
            .where(Membership.project_id == project_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
