"""
Project Access Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class ProjectRole(str, Enum):
    """User role within a project"""

    owner = "owner"
    admin = "admin"
    member = "member"
    viewer = "viewer"


class JoinMethod(str, Enum):
    """How a user became a member of a project"""

    invite_link = "invite_link"
    direct_invite = "direct_invite"
    admin_added = "admin_added"
