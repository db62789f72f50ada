"""
Typed option records accepted by the component services.

Each operation takes a closed set of recognised options instead of an open
dictionary; unknown keys are rejected at construction.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from collab_access.domain.entities import JoinMethod, ProjectRole
from collab_access.domain.entities.member_join_log import (
    MAX_IP_ADDRESS_LENGTH,
    MAX_USER_AGENT_LENGTH,
)


class _Options(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ListMembersOptions(_Options):
    role: Optional[ProjectRole] = None
    limit: Optional[int] = Field(default=None, ge=1)


class InviteLinkOptions(_Options):
    max_uses: Optional[int] = None
    expires_at: Optional[datetime] = None
    role: ProjectRole = ProjectRole.member


class RequestInfo(_Options):
    """Client details recorded with a join; cut to the join log column sizes"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @field_validator("ip_address")
    @classmethod
    def _clip_ip_address(cls, value: Optional[str]) -> Optional[str]:
        return value[:MAX_IP_ADDRESS_LENGTH] if value else value

    @field_validator("user_agent")
    @classmethod
    def _clip_user_agent(cls, value: Optional[str]) -> Optional[str]:
        return value[:MAX_USER_AGENT_LENGTH] if value else value


class RoleChangeFilters(_Options):
    user_id: Optional[str] = None
    changed_by_id: Optional[str] = None
    project_id: Optional[UUID] = None


class MemberJoinFilters(_Options):
    join_method: Optional[JoinMethod] = None
    project_id: Optional[UUID] = None


class Pagination(_Options):
    limit: int = 50
    cursor: Optional[str] = None
