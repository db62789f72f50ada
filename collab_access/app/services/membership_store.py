"""
Membership Store

CRUD over (project, user) -> role records. Owns the membership invariants:
one record per (project, user) and exactly one OWNER per project.

The store works inside a unit of work opened by the caller and never commits;
the calling use case decides when the surrounding transaction is final.
"""

import logging
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from collab_access.app.services.query_options import ListMembersOptions
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.clock import utcnow
from collab_access.domain.entities import Membership, ProjectRole
from collab_access.domain.errors import DuplicateKeyError, ErrorCode
from collab_access.domain.role_hierarchy import level
from collab_access.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


def membership_sort_key(membership: Membership):
    """Owners first, then by descending role level, then earliest joiner"""
    return (-level(membership.role), membership.joined_at)


class MembershipStore:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def create(
        self,
        project_id: UUID,
        user_id: str,
        role: ProjectRole,
        bootstrap: bool = False,
    ) -> Result[Membership]:
        """
        Create a membership.

        Args:
            project_id: Project the membership belongs to
            user_id: Opaque user id from the identity provider
            role: Role to grant
            bootstrap: True only for the owner membership written together
                with the project itself

        Returns:
            Result with the new Membership, or Error
            (DUPLICATE_MEMBERSHIP, OWNER_CONFLICT, INVALID_INPUT)
        """
        if bootstrap and role != ProjectRole.owner:
            return Return.err(
                Error(ErrorCode.INVALID_INPUT, "Project bootstrap must create the owner")
            )

        existing = await self.uow.memberships.get_by_project_and_user(project_id, user_id)
        if existing is not None:
            return Return.err(
                Error(
                    ErrorCode.DUPLICATE_MEMBERSHIP,
                    "User is already a member of this project",
                )
            )

        if role == ProjectRole.owner:
            if bootstrap:
                # Bootstrap is only valid as the very first membership
                members = await self.uow.memberships.get_by_project_id(project_id)
                if members:
                    return Return.err(
                        Error(ErrorCode.OWNER_CONFLICT, "Project already has members")
                    )
            else:
                owners = await self.uow.memberships.get_by_project_and_role(
                    project_id, ProjectRole.owner
                )
                if owners:
                    return Return.err(
                        Error(ErrorCode.OWNER_CONFLICT, "Project already has an owner")
                    )

        now = utcnow()
        membership = Membership(
            project_id=project_id,
            user_id=user_id,
            role=role,
            joined_at=now,
            updated_at=now,
        )

        try:
            membership = await self.uow.memberships.create(membership)
        except DuplicateKeyError:
            # Lost an insert race against the unique (project, user) key
            return Return.err(
                Error(
                    ErrorCode.DUPLICATE_MEMBERSHIP,
                    "User is already a member of this project",
                )
            )

        return Return.ok(membership)

    async def find(
        self, project_id: UUID, user_id: str, for_update: bool = False
    ) -> Optional[Membership]:
        """Membership of a user in a project; None means no access"""
        return await self.uow.memberships.get_by_project_and_user(
            project_id, user_id, for_update=for_update
        )

    async def list_by_project(
        self, project_id: UUID, options: Optional[ListMembersOptions] = None
    ) -> List[Membership]:
        """All memberships of a project, owners first, then by join date"""
        options = options or ListMembersOptions()

        if options.role is not None:
            members = await self.uow.memberships.get_by_project_and_role(
                project_id, options.role
            )
        else:
            members = await self.uow.memberships.get_by_project_id(project_id)

        members = sorted(members, key=membership_sort_key)
        if options.limit is not None:
            members = members[: options.limit]
        return members

    async def list_by_user(self, user_id: str) -> List[Membership]:
        members = await self.uow.memberships.get_by_user_id(user_id)
        return sorted(members, key=lambda m: m.joined_at)

    async def get_owner(self, project_id: UUID) -> Optional[Membership]:
        owners = await self.uow.memberships.get_by_project_and_role(
            project_id, ProjectRole.owner
        )
        return owners[0] if owners else None

    async def update_role(
        self, project_id: UUID, user_id: str, new_role: ProjectRole
    ) -> Result[Membership]:
        """
        Change a member's role.

        The OWNER role can neither be granted nor taken away here; that only
        happens through transfer_ownership so the project never has zero or
        two owners.
        """
        membership = await self.find(project_id, user_id, for_update=True)
        if membership is None:
            return Return.err(
                Error(ErrorCode.NOT_A_MEMBER, "User is not a member of this project")
            )

        if new_role == ProjectRole.owner and membership.role != ProjectRole.owner:
            return Return.err(
                Error(
                    ErrorCode.OWNER_CONFLICT,
                    "Project already has an owner; transfer ownership instead",
                )
            )
        if membership.role == ProjectRole.owner and new_role != ProjectRole.owner:
            return Return.err(
                Error(
                    ErrorCode.OWNER_CONFLICT,
                    "The owner's role cannot change until ownership is transferred",
                )
            )

        membership.role = new_role
        membership.updated_at = utcnow()
        membership = await self.uow.memberships.update(membership)
        return Return.ok(membership)

    async def transfer_ownership(
        self,
        project_id: UUID,
        new_owner_id: str,
        demote_to: ProjectRole = ProjectRole.admin,
        current_owner_id: Optional[str] = None,
    ) -> Result[Tuple[Membership, Membership]]:
        """
        Move the OWNER role to another existing member.

        The owner is demoted with a conditional write that only succeeds while
        the row still holds OWNER, so two overlapping transfers cannot both
        promote their target.

        Args:
            current_owner_id: Owner the caller authorized against; when given,
                the transfer fails instead of demoting whoever owns the
                project by the time it writes

        Returns:
            Result with (previous owner, new owner) memberships, or Error
            (INVALID_INPUT, NOT_FOUND, NOT_A_MEMBER, OWNER_CONFLICT)
        """
        if demote_to == ProjectRole.owner:
            return Return.err(
                Error(ErrorCode.INVALID_INPUT, "Previous owner cannot remain owner")
            )

        if current_owner_id is None:
            owner = await self.get_owner(project_id)
            if owner is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Project owner not found"))
            current_owner_id = owner.user_id

        target = await self.find(project_id, new_owner_id, for_update=True)
        if target is None:
            return Return.err(
                Error(ErrorCode.NOT_A_MEMBER, "User is not a member of this project")
            )
        if target.user_id == current_owner_id:
            return Return.err(
                Error(ErrorCode.INVALID_INPUT, "User already owns this project")
            )

        now = utcnow()
        demoted = await self.uow.memberships.try_change_role(
            project_id, current_owner_id, ProjectRole.owner, demote_to, now
        )
        if not demoted:
            logger.warning(
                "Ownership of project %s changed before transfer to %s could apply",
                project_id,
                new_owner_id,
            )
            return Return.err(
                Error(
                    ErrorCode.OWNER_CONFLICT,
                    "Project ownership changed concurrently; reload and retry",
                )
            )
        current_owner = await self.find(project_id, current_owner_id, for_update=True)

        target.role = ProjectRole.owner
        target.updated_at = now
        target = await self.uow.memberships.update(target)

        logger.info(
            "Ownership of project %s moved from %s to %s",
            project_id,
            current_owner.user_id,
            target.user_id,
        )

        return Return.ok((current_owner, target))

    async def remove(self, project_id: UUID, user_id: str) -> Result[Membership]:
        """
        Delete a membership.

        Returns:
            Result with the removed Membership, or Error
            (NOT_A_MEMBER, CANNOT_REMOVE_OWNER)
        """
        membership = await self.find(project_id, user_id, for_update=True)
        if membership is None:
            return Return.err(
                Error(ErrorCode.NOT_A_MEMBER, "User is not a member of this project")
            )

        if membership.role == ProjectRole.owner:
            return Return.err(
                Error(
                    ErrorCode.CANNOT_REMOVE_OWNER,
                    "The project owner cannot be removed; transfer ownership first",
                )
            )

        await self.uow.memberships.delete(membership)
        return Return.ok(membership)

    async def count_by_role(self, project_id: UUID) -> Dict[ProjectRole, int]:
        counts = await self.uow.memberships.count_by_role(project_id)
        return {role: counts.get(role, 0) for role in ProjectRole}
