"""
Invitation Use Case DTOs (Data Transfer Objects)

The secret token leaves the service only inside InviteLinkView, which is
returned to owners and admins.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from collab_access.app.services.invitation_service import InvitationService
from collab_access.domain.entities import InvitationLink


class InviteLinkView(BaseModel):
    id: str
    project_id: str
    token: str
    invite_path: str
    role: str
    is_active: bool
    max_uses: Optional[int]
    current_uses: int
    remaining_uses: Optional[int]
    expires_at: Optional[str]
    created_at: str
    created_by_id: str

    @classmethod
    def from_link(cls, link: InvitationLink, base_path: str = "/join") -> "InviteLinkView":
        return cls(
            id=str(link.id),
            project_id=str(link.project_id),
            token=link.secret_token,
            invite_path=InvitationService.build_invite_path(link.secret_token, base_path),
            role=link.role.value,
            is_active=link.is_active,
            max_uses=link.max_uses,
            current_uses=link.current_uses,
            remaining_uses=link.remaining_uses(),
            expires_at=link.expires_at.isoformat() if link.expires_at else None,
            created_at=link.created_at.isoformat(),
            created_by_id=link.created_by_id,
        )


# ============================================================================
# Response DTOs
# ============================================================================


class ActiveInviteLinkResponse(BaseModel):
    """Response for get active invite link use case"""

    link: Optional[InviteLinkView] = None


class DeactivateInviteLinkResponse(BaseModel):
    """Response for deactivate invite link use case"""

    status: str
    deactivated: int


class InviteStatsResponse(BaseModel):
    """Response for invite stats use case"""

    project_id: str
    total_links: int
    active_links: int
    total_uses: int
    total_joins: int
    recent_joins: int
    joins_by_method: Dict[str, int]
    links: List[Dict[str, Any]]


class InvitePreviewResponse(BaseModel):
    """What a prospective joiner sees before redeeming a token"""

    project_id: str
    project_name: str
    role: str
    expires_at: Optional[str]
    remaining_uses: Optional[int]
    already_member: bool


class JoinProjectResponse(BaseModel):
    """Response for redeem invite link use case"""

    status: str
    project_id: str
    user_id: str
    role: str
    joined_at: str
