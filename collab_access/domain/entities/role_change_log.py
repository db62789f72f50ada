"""
RoleChangeLog Entity

Append-only record of privilege changes.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..clock import utcnow
from .enums import ProjectRole


class RoleChangeLog(SQLModel, table=True):
    """
    RoleChangeLog entity - immutable privilege change audit row.

    Business Rules:
    - old_role != new_role; no-op changes are rejected, never logged
    - new_role is None only when the member was removed from the project
    - Never updated; deleted only with its project
    """

    __tablename__ = "role_change_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: str = Field(max_length=255, nullable=False)
    project_id: UUID = Field(foreign_key="projects.id", nullable=False)
    changed_by_id: str = Field(max_length=255, nullable=False)

    old_role: ProjectRole = Field(nullable=False)
    new_role: Optional[ProjectRole] = Field(default=None)
    reason: Optional[str] = Field(default=None, max_length=500)

    changed_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_role_change_project_changed_at", "project_id", "changed_at"),
        Index("idx_role_change_user_changed_at", "user_id", "changed_at"),
        Index("idx_role_change_changed_by", "changed_by_id", "changed_at"),
    )
