"""
Use Cases

Organized into domain folders:
- projects/: Project bootstrap, deletion, permission summaries
- members/: Membership management and ownership transfer
- invitations/: Invitation links and redemption
- audit/: Role change and join logs
"""

from .projects import (
    CreateProjectUseCase,
    DeleteProjectUseCase,
    GetPermissionsUseCase,
)
from .members import (
    ListMembersUseCase,
    AddMemberUseCase,
    ChangeRoleUseCase,
    RemoveMemberUseCase,
    TransferOwnershipUseCase,
)
from .invitations import (
    CreateInviteLinkUseCase,
    GetActiveInviteLinkUseCase,
    DeactivateInviteLinkUseCase,
    GetInviteStatsUseCase,
    ValidateInviteTokenUseCase,
    RedeemInviteLinkUseCase,
)
from .audit import (
    GetRoleChangeHistoryUseCase,
    GetMemberJoinHistoryUseCase,
    GetMyAuditHistoryUseCase,
    GetRoleChangeStatsUseCase,
)

__all__ = [
    # Projects
    "CreateProjectUseCase",
    "DeleteProjectUseCase",
    "GetPermissionsUseCase",
    # Members
    "ListMembersUseCase",
    "AddMemberUseCase",
    "ChangeRoleUseCase",
    "RemoveMemberUseCase",
    "TransferOwnershipUseCase",
    # Invitations
    "CreateInviteLinkUseCase",
    "GetActiveInviteLinkUseCase",
    "DeactivateInviteLinkUseCase",
    "GetInviteStatsUseCase",
    "ValidateInviteTokenUseCase",
    "RedeemInviteLinkUseCase",
    # Audit
    "GetRoleChangeHistoryUseCase",
    "GetMemberJoinHistoryUseCase",
    "GetMyAuditHistoryUseCase",
    "GetRoleChangeStatsUseCase",
]
