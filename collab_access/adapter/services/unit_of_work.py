from sqlmodel.ext.asyncio.session import AsyncSession

from collab_access.adapter.repositories.invitation_link_repository import InvitationLinkRepository
from collab_access.adapter.repositories.member_join_log_repository import MemberJoinLogRepository
from collab_access.adapter.repositories.membership_repository import MembershipRepository
from collab_access.adapter.repositories.project_repository import ProjectRepository
from collab_access.adapter.repositories.role_change_log_repository import RoleChangeLogRepository
from collab_access.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.projects = ProjectRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.invitation_links = InvitationLinkRepository(self.session)
        self.role_change_logs = RoleChangeLogRepository(self.session)
        self.member_join_logs = MemberJoinLogRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
