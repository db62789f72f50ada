"""
Audit Use Case DTOs (Data Transfer Objects)

Join entries expose only a preview of the invitation token used.
"""

from typing import List, Optional

from pydantic import BaseModel

from collab_access.app.services.invitation_service import token_preview
from collab_access.domain.entities import MemberJoinLog, RoleChangeLog


class RoleChangeEntryView(BaseModel):
    id: str
    project_id: str
    user_id: str
    changed_by_id: str
    old_role: str
    new_role: Optional[str]
    reason: Optional[str]
    changed_at: str

    @classmethod
    def from_entry(cls, entry: RoleChangeLog) -> "RoleChangeEntryView":
        return cls(
            id=str(entry.id),
            project_id=str(entry.project_id),
            user_id=entry.user_id,
            changed_by_id=entry.changed_by_id,
            old_role=entry.old_role.value,
            new_role=entry.new_role.value if entry.new_role else None,
            reason=entry.reason,
            changed_at=entry.changed_at.isoformat(),
        )


class MemberJoinEntryView(BaseModel):
    id: str
    project_id: str
    user_id: str
    join_method: str
    invite_token_preview: Optional[str]
    ip_address: Optional[str]
    user_agent: Optional[str]
    joined_at: str

    @classmethod
    def from_entry(cls, entry: MemberJoinLog) -> "MemberJoinEntryView":
        return cls(
            id=str(entry.id),
            project_id=str(entry.project_id),
            user_id=entry.user_id,
            join_method=entry.join_method.value,
            invite_token_preview=(
                token_preview(entry.invite_token) if entry.invite_token else None
            ),
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            joined_at=entry.joined_at.isoformat(),
        )


# ============================================================================
# Response DTOs
# ============================================================================


class RoleChangeHistoryResponse(BaseModel):
    entries: List[RoleChangeEntryView]
    next_cursor: Optional[str] = None


class MemberJoinHistoryResponse(BaseModel):
    entries: List[MemberJoinEntryView]
    next_cursor: Optional[str] = None


class RoleTransitionCount(BaseModel):
    old_role: str
    new_role: Optional[str]
    count: int


class RoleChangeStatsResponse(BaseModel):
    project_id: str
    total_changes: int
    transitions: List[RoleTransitionCount]
