"""
Membership Entity

Binds a user to a project with a role.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..clock import utcnow
from .enums import ProjectRole


class Membership(SQLModel, table=True):
    """
    Membership entity - one user's standing in one project.

    Business Rules:
    - (project_id, user_id) must be unique
    - Exactly one OWNER per project once the project exists
    - user_id is an opaque id issued by the identity provider
    - The owner cannot be removed; ownership is transferred first
    """

    __tablename__ = "memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    project_id: UUID = Field(foreign_key="projects.id", nullable=False, index=True)
    user_id: str = Field(max_length=255, nullable=False, index=True)

    role: ProjectRole = Field(nullable=False)

    # Timestamps
    joined_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_membership_project_user", "project_id", "user_id", unique=True),
        Index("idx_membership_project_role", "project_id", "role"),
        Index("idx_membership_user_role", "user_id", "role"),
    )
