"""
Role Hierarchy

Maps project roles to numeric levels for "at least this role" checks.
Levels are never used for display ordering.

The canonical hierarchy has four levels. Some legacy project data only knows
OWNER/MEMBER/VIEWER; LEGACY_ROLE_LEVELS reproduces that three-level variant
for comparisons against such records and is otherwise deprecated.
"""

from typing import Mapping, Optional, Union

from .entities.enums import ProjectRole

RoleLike = Union[ProjectRole, str, None]

ROLE_LEVELS: Mapping[ProjectRole, int] = {
    ProjectRole.owner: 4,
    ProjectRole.admin: 3,
    ProjectRole.member: 2,
    ProjectRole.viewer: 1,
}

LEGACY_ROLE_LEVELS: Mapping[ProjectRole, int] = {
    ProjectRole.owner: 3,
    ProjectRole.member: 2,
    ProjectRole.viewer: 1,
}


def parse_role(value: RoleLike) -> Optional[ProjectRole]:
    """Parse a role value case-insensitively; None when it is not a known role"""
    if isinstance(value, ProjectRole):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ProjectRole(value.strip().lower())
    except ValueError:
        return None


def level(role: RoleLike, levels: Mapping[ProjectRole, int] = ROLE_LEVELS) -> int:
    """Numeric level of a role; absent or unknown roles are level 0"""
    parsed = parse_role(role)
    if parsed is None:
        return 0
    return levels.get(parsed, 0)


def satisfies(
    actual: RoleLike,
    required: RoleLike,
    levels: Mapping[ProjectRole, int] = ROLE_LEVELS,
) -> bool:
    return level(actual, levels) >= level(required, levels)
