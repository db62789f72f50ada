"""
Shared authorization guard for project-scoped use cases.
"""

from uuid import UUID

from collab_access.app.services.membership_store import MembershipStore
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.entities import Membership, ProjectRole
from collab_access.domain.errors import ErrorCode
from collab_access.domain.role_hierarchy import parse_role, satisfies
from collab_access.libs.result import Error, Result, Return


async def require_role(
    uow: UnitOfWork,
    project_id: UUID,
    user_id: str,
    required_role: ProjectRole,
    message: str,
) -> Result[Membership]:
    """
    Load the caller's membership and check it against a required role.

    Must be called inside an open unit of work.

    Returns:
        Result with the caller's Membership, or Error
        (INVALID_INPUT, NOT_FOUND, FORBIDDEN)
    """
    required = parse_role(required_role)
    if required is None:
        return Return.err(Error(ErrorCode.INVALID_INPUT, f"Invalid role: {required_role}"))

    project = await uow.projects.get_by_id(project_id)
    if project is None:
        return Return.err(Error(ErrorCode.NOT_FOUND, "Project not found"))

    membership = await MembershipStore(uow).find(project_id, user_id)
    if membership is None or not satisfies(membership.role, required):
        return Return.err(Error(ErrorCode.FORBIDDEN, message))

    return Return.ok(membership)
