"""
Get Role Change Stats Use Case

Counts of role changes grouped by (old role, new role).
"""

from uuid import UUID

from collab_access.app.services.audit_trail import AuditTrail
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import ProjectRole
from collab_access.libs.result import Result, Return

from .dtos import RoleChangeStatsResponse, RoleTransitionCount


class GetRoleChangeStatsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, requester_user_id: str, project_id: UUID
    ) -> Result[RoleChangeStatsResponse]:
        async with self.uow:
            allowed = await require_role(
                self.uow,
                project_id,
                requester_user_id,
                ProjectRole.admin,
                "Only project owners and admins can view the audit log",
            )
            if allowed.is_err():
                return Return.err(allowed.error)

            transitions = await AuditTrail(self.uow).role_change_stats(project_id)

            return Return.ok(
                RoleChangeStatsResponse(
                    project_id=str(project_id),
                    total_changes=sum(count for _, _, count in transitions),
                    transitions=[
                        RoleTransitionCount(
                            old_role=old.value,
                            new_role=new.value if new else None,
                            count=count,
                        )
                        for old, new, count in transitions
                    ],
                )
            )
