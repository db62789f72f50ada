"""
Member Use Case DTOs (Data Transfer Objects)

Memberships leave the application layer as views: ids plus derived display
fields, never the persistence entity itself.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel

from collab_access.domain.entities import Membership
from collab_access.domain.role_hierarchy import level


class MemberView(BaseModel):
    """One member of a project"""

    project_id: str
    user_id: str
    role: str
    role_level: int
    joined_at: str
    updated_at: str

    @classmethod
    def from_membership(cls, membership: Membership) -> "MemberView":
        return cls(
            project_id=str(membership.project_id),
            user_id=membership.user_id,
            role=membership.role.value,
            role_level=level(membership.role),
            joined_at=membership.joined_at.isoformat(),
            updated_at=membership.updated_at.isoformat(),
        )


# ============================================================================
# Response DTOs
# ============================================================================


class ListMembersResponse(BaseModel):
    """Response for list members use case"""

    members: List[MemberView]
    counts_by_role: Dict[str, int]


class MemberResponse(BaseModel):
    """Response for add member and change role use cases"""

    status: str
    membership: MemberView


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    status: str
    user_id: str
    previous_role: str


class TransferOwnershipResponse(BaseModel):
    """Response for transfer ownership use case"""

    status: str
    previous_owner: MemberView
    new_owner: MemberView
    reason: Optional[str] = None
