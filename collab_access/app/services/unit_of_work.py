from abc import ABC, abstractmethod

from collab_access.app.repositories.invitation_link_repository import IInvitationLinkRepository
from collab_access.app.repositories.member_join_log_repository import IMemberJoinLogRepository
from collab_access.app.repositories.membership_repository import IMembershipRepository
from collab_access.app.repositories.project_repository import IProjectRepository
from collab_access.app.repositories.role_change_log_repository import IRoleChangeLogRepository


class UnitOfWork(ABC):
    """
    Abstract UnitOfWork - defines repository access and transaction management.

    Leaving the context without commit() rolls back, so a use case that returns
    an error (or is cancelled) before committing leaves no partial writes.
    """

    # Repository properties (initialized in __aenter__)
    projects: IProjectRepository
    memberships: IMembershipRepository
    invitation_links: IInvitationLinkRepository
    role_change_logs: IRoleChangeLogRepository
    member_join_logs: IMemberJoinLogRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
