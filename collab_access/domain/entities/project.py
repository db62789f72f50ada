"""
Project Entity

The collaboration space that memberships and invitation links belong to.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..clock import utcnow


class Project(SQLModel, table=True):
    """
    Project entity - a collaboration space owned by exactly one user.

    Business Rules:
    - Created together with its OWNER membership (bootstrap)
    - owner_id mirrors the OWNER membership and moves on ownership transfer
    - Deleting a project cascades memberships, links and audit rows
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)

    owner_id: str = Field(max_length=255, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_project_created_at", "created_at"),)
