"""
MemberJoinLog Entity

Append-only record of how a user joined a project.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..clock import utcnow
from .enums import JoinMethod

MAX_IP_ADDRESS_LENGTH = 64
MAX_USER_AGENT_LENGTH = 512


class MemberJoinLog(SQLModel, table=True):
    """
    MemberJoinLog entity - immutable join audit row.

    Business Rules:
    - Never updated; deleted only with its project
    - invite_token is set when join_method is invite_link
    """

    __tablename__ = "member_join_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: str = Field(max_length=255, nullable=False)
    project_id: UUID = Field(foreign_key="projects.id", nullable=False)

    join_method: JoinMethod = Field(nullable=False)
    invite_token: Optional[str] = Field(default=None, max_length=128)

    ip_address: Optional[str] = Field(default=None, max_length=MAX_IP_ADDRESS_LENGTH)
    user_agent: Optional[str] = Field(default=None, max_length=MAX_USER_AGENT_LENGTH)

    joined_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_join_log_project_joined_at", "project_id", "joined_at"),
        Index("idx_join_log_user_joined_at", "user_id", "joined_at"),
        Index("idx_join_log_invite_token", "invite_token"),
        Index("idx_join_log_join_method", "join_method"),
    )
