"""
Project Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the project domain.
"""

from typing import Optional

from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class ProjectResponse(BaseModel):
    """Response for create project use case"""

    id: str
    name: str
    description: Optional[str]
    owner_id: str
    role: str
    role_level: int
    created_at: str


class DeleteProjectResponse(BaseModel):
    """Response for delete project use case"""

    status: str
    memberships_removed: int
    invitation_links_removed: int


class PermissionsResponse(BaseModel):
    """Response for get permissions use case"""

    project_id: str
    role: Optional[str]
    can_view: bool
    can_edit: bool
    can_delete: bool
    can_invite: bool
    can_manage_members: bool
