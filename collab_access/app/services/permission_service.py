"""
Permission Service

Answers "does user X hold at least role R on project P" and performs role
changes together with their audit entries.

Every check reads the current membership row; results are never cached.

Authorization boundary: change_role, remove_member and transfer_ownership
apply a change, they do not decide whether the actor may make it. Callers
must run has_permission (and check_role_change_policy for role changes)
first; the use cases in collab_access.app.use_cases.members do exactly that.
"""

from typing import Optional, Tuple
from uuid import UUID

from pydantic import BaseModel

from collab_access.app.services.audit_trail import AuditTrail
from collab_access.app.services.membership_store import MembershipStore
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.entities import Membership, ProjectRole
from collab_access.domain.errors import ErrorCode
from collab_access.domain.role_hierarchy import RoleLike, parse_role, satisfies
from collab_access.libs.result import Error, Result, Return

REMOVAL_REASON = "Member removed from project"
TRANSFER_REASON = "Ownership transferred"


class PermissionSummary(BaseModel):
    """What a user may do in a project, for UI gating"""

    role: Optional[ProjectRole] = None
    can_view: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_invite: bool = False
    can_manage_members: bool = False


class PermissionService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.store = MembershipStore(uow)
        self.audit = AuditTrail(uow)

    async def has_permission(
        self, project_id: UUID, user_id: str, required_role: RoleLike
    ) -> bool:
        """
        False when the user has no membership, never an error.

        An unrecognised required role denies access rather than mapping to
        level 0, which every member would satisfy.
        """
        required = parse_role(required_role)
        if required is None:
            return False

        membership = await self.store.find(project_id, user_id)
        if membership is None:
            return False
        return satisfies(membership.role, required)

    async def get_role(self, project_id: UUID, user_id: str) -> Optional[ProjectRole]:
        membership = await self.store.find(project_id, user_id)
        return membership.role if membership else None

    async def permission_summary(self, project_id: UUID, user_id: str) -> PermissionSummary:
        role = await self.get_role(project_id, user_id)
        if role is None:
            return PermissionSummary()

        return PermissionSummary(
            role=role,
            can_view=satisfies(role, ProjectRole.viewer),
            can_edit=satisfies(role, ProjectRole.member),
            can_delete=satisfies(role, ProjectRole.admin),
            can_invite=satisfies(role, ProjectRole.admin),
            can_manage_members=satisfies(role, ProjectRole.admin),
        )

    @staticmethod
    def check_role_change_policy(
        actor_role: Optional[ProjectRole],
        target_role: ProjectRole,
        new_role: ProjectRole,
    ) -> Result[None]:
        """
        Who may move whom to which role.

        - Nobody assigns OWNER or changes the OWNER's role here (transfer instead)
        - Actors need at least ADMIN
        - Only the OWNER grants or revokes ADMIN
        - ADMINs manage MEMBER and VIEWER only
        """
        if new_role == ProjectRole.owner or target_role == ProjectRole.owner:
            return Return.err(
                Error(
                    ErrorCode.OWNER_CONFLICT,
                    "Ownership can only change through an ownership transfer",
                )
            )

        if not satisfies(actor_role, ProjectRole.admin):
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only owners and admins can change member roles")
            )

        if actor_role != ProjectRole.owner:
            manageable = (ProjectRole.member, ProjectRole.viewer)
            if target_role not in manageable or new_role not in manageable:
                return Return.err(
                    Error(
                        ErrorCode.FORBIDDEN,
                        "Only the owner can grant or revoke the admin role",
                    )
                )

        return Return.ok(None)

    async def change_role(
        self,
        project_id: UUID,
        target_user_id: str,
        new_role: RoleLike,
        acting_user_id: str,
        reason: Optional[str] = None,
    ) -> Result[Membership]:
        """
        Change a member's role and record it in the role change log.

        Both writes happen in the caller's unit of work; if either fails the
        caller must not commit, so neither becomes visible.

        Returns:
            Result with the updated Membership, or Error
            (INVALID_INPUT, NOT_A_MEMBER, OWNER_CONFLICT)
        """
        parsed_role = parse_role(new_role)
        if parsed_role is None:
            return Return.err(Error(ErrorCode.INVALID_INPUT, f"Invalid role: {new_role}"))

        membership = await self.store.find(project_id, target_user_id, for_update=True)
        if membership is None:
            return Return.err(
                Error(ErrorCode.NOT_A_MEMBER, "User is not a member of this project")
            )

        old_role = membership.role
        if parsed_role == old_role:
            return Return.err(
                Error(ErrorCode.INVALID_INPUT, f"User already has the role {old_role.value}")
            )

        updated = await self.store.update_role(project_id, target_user_id, parsed_role)
        if updated.is_err():
            return updated

        logged = await self.audit.append_role_change(
            project_id=project_id,
            user_id=target_user_id,
            changed_by_id=acting_user_id,
            old_role=old_role,
            new_role=parsed_role,
            reason=reason,
        )
        if logged.is_err():
            return Return.err(logged.error)

        return updated

    async def remove_member(
        self,
        project_id: UUID,
        target_user_id: str,
        removed_by_id: str,
        reason: Optional[str] = None,
    ) -> Result[Membership]:
        """Delete a membership and log it as a change to no role"""
        removed = await self.store.remove(project_id, target_user_id)
        if removed.is_err():
            return removed

        logged = await self.audit.append_role_change(
            project_id=project_id,
            user_id=target_user_id,
            changed_by_id=removed_by_id,
            old_role=removed.value.role,
            new_role=None,
            reason=reason or REMOVAL_REASON,
        )
        if logged.is_err():
            return Return.err(logged.error)

        return removed

    async def transfer_ownership(
        self,
        project_id: UUID,
        new_owner_id: str,
        acting_user_id: str,
        reason: Optional[str] = None,
        current_owner_id: Optional[str] = None,
    ) -> Result[Tuple[Membership, Membership]]:
        """
        Hand the OWNER role to another member; the old owner becomes ADMIN.

        Pass current_owner_id when the caller authorized against a specific
        owner; the transfer then fails with OWNER_CONFLICT if that user no
        longer owns the project when the change is written.
        """
        target = await self.store.find(project_id, new_owner_id)
        if target is None:
            return Return.err(
                Error(ErrorCode.NOT_A_MEMBER, "User is not a member of this project")
            )
        target_old_role = target.role

        transferred = await self.store.transfer_ownership(
            project_id, new_owner_id, current_owner_id=current_owner_id
        )
        if transferred.is_err():
            return transferred
        previous_owner, new_owner = transferred.value

        for user_id, old_role, new_role in (
            (previous_owner.user_id, ProjectRole.owner, previous_owner.role),
            (new_owner.user_id, target_old_role, ProjectRole.owner),
        ):
            logged = await self.audit.append_role_change(
                project_id=project_id,
                user_id=user_id,
                changed_by_id=acting_user_id,
                old_role=old_role,
                new_role=new_role,
                reason=reason or TRANSFER_REASON,
            )
            if logged.is_err():
                return Return.err(logged.error)

        return transferred
