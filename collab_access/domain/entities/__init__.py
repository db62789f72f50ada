"""
Project Access Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import JoinMethod, ProjectRole

# Export all entities
from .project import Project
from .membership import Membership
from .invitation_link import InvitationLink
from .member_join_log import MemberJoinLog
from .role_change_log import RoleChangeLog

__all__ = [
    # Enums
    "ProjectRole",
    "JoinMethod",
    # Entities
    "Project",
    "Membership",
    "InvitationLink",
    "MemberJoinLog",
    "RoleChangeLog",
]
