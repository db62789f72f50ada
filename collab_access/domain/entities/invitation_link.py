"""
InvitationLink Entity

Shareable, revocable token granting join rights to a project.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..clock import utcnow
from .enums import ProjectRole


class InvitationLink(SQLModel, table=True):
    """
    InvitationLink entity - a shareable join token for a project.

    Business Rules:
    - Created by admin/owner only
    - At most one active link per project; a new link supersedes the old one
    - current_uses never exceeds max_uses when max_uses is set
    - Usable only while active, unexpired and below its usage bound
    - Join role is MEMBER or VIEWER
    """

    __tablename__ = "invitation_links"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    project_id: UUID = Field(foreign_key="projects.id", nullable=False, index=True)
    created_by_id: str = Field(max_length=255, nullable=False, index=True)

    secret_token: str = Field(unique=True, index=True, max_length=128)
    is_active: bool = Field(default=True)

    max_uses: Optional[int] = Field(default=None)
    current_uses: int = Field(default=0)

    role: ProjectRole = Field(default=ProjectRole.member, nullable=False)

    # Timestamps
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invite_link_project_active", "project_id", "is_active"),
        Index("idx_invite_link_expires_at", "expires_at"),
    )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or utcnow())

    def is_usage_limit_reached(self) -> bool:
        return self.max_uses is not None and self.current_uses >= self.max_uses

    def can_be_used(self, now: Optional[datetime] = None) -> bool:
        return (
            self.is_active
            and not self.is_expired(now)
            and not self.is_usage_limit_reached()
        )

    def remaining_uses(self) -> Optional[int]:
        if self.max_uses is None:
            return None
        return max(self.max_uses - self.current_uses, 0)
