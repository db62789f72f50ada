"""
Invitation Service

Lifecycle of shareable invitation links:

    nonexistent -> active -> (used 0..max_uses times) -> inactive

A project has at most one active link; creating a new one deactivates the
previous ones. Redemption turns a usable token into a membership, a join log
entry and exactly one use of the link, all in the caller's unit of work.
"""

import logging
import secrets
import time
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from collab_access.app.services.audit_trail import AuditTrail
from collab_access.app.services.membership_store import MembershipStore
from collab_access.app.services.permission_service import PermissionService
from collab_access.app.services.query_options import InviteLinkOptions, RequestInfo
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.domain.clock import to_naive_utc, utcnow
from collab_access.domain.entities import (
    InvitationLink,
    JoinMethod,
    Membership,
    ProjectRole,
)
from collab_access.domain.errors import ErrorCode
from collab_access.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

# 32 random bytes = 256 bits of entropy
TOKEN_ENTROPY_BYTES = 32
JOINABLE_ROLES = (ProjectRole.member, ProjectRole.viewer)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def token_preview(token: str) -> str:
    """Short, log-safe prefix of a secret token"""
    return f"{token[:8]}..."


class InviteStats(BaseModel):
    total_links: int
    active_links: int
    total_uses: int
    total_joins: int
    recent_joins: int
    joins_by_method: Dict[str, int]
    links: List[Dict[str, Any]]


class InvitationService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.permissions = PermissionService(uow)
        self.store = MembershipStore(uow)
        self.audit = AuditTrail(uow)

    @staticmethod
    def generate_secret_token() -> str:
        """
        URL-safe random token with a base36 millisecond prefix.

        The prefix only helps sorting and debugging; expiry never reads it.
        """
        timestamp = _to_base36(time.time_ns() // 1_000_000)
        return f"{timestamp}-{secrets.token_urlsafe(TOKEN_ENTROPY_BYTES)}"

    @staticmethod
    def build_invite_path(token: str, base_path: str = "/join") -> str:
        return f"{base_path.rstrip('/')}/{token}"

    @staticmethod
    def validate_options(
        options: InviteLinkOptions, now: datetime
    ) -> Result[InviteLinkOptions]:
        if options.max_uses is not None and options.max_uses < 1:
            return Return.err(
                Error(ErrorCode.INVALID_INPUT, "max_uses must be a positive number")
            )

        expires_at = to_naive_utc(options.expires_at)
        if expires_at is not None and expires_at <= now:
            return Return.err(
                Error(ErrorCode.INVALID_INPUT, "expires_at must be in the future")
            )

        if options.role not in JOINABLE_ROLES:
            return Return.err(
                Error(
                    ErrorCode.INVALID_INPUT,
                    "Invitation links can only grant the member or viewer role",
                )
            )

        return Return.ok(options.model_copy(update={"expires_at": expires_at}))

    async def create(
        self,
        project_id: UUID,
        creator_id: str,
        options: Optional[InviteLinkOptions] = None,
    ) -> Result[InvitationLink]:
        """
        Create the project's new active link, superseding any previous one.

        Returns:
            Result with the new InvitationLink, or Error (FORBIDDEN, INVALID_INPUT)
        """
        if not await self.permissions.has_permission(
            project_id, creator_id, ProjectRole.admin
        ):
            return Return.err(
                Error(
                    ErrorCode.FORBIDDEN,
                    "Only project owners and admins can create invitation links",
                )
            )

        now = utcnow()
        checked = self.validate_options(options or InviteLinkOptions(), now)
        if checked.is_err():
            return checked
        options = checked.value

        superseded = await self.uow.invitation_links.deactivate_all_for_project(project_id)

        link = InvitationLink(
            project_id=project_id,
            created_by_id=creator_id,
            secret_token=self.generate_secret_token(),
            is_active=True,
            max_uses=options.max_uses,
            current_uses=0,
            expires_at=options.expires_at,
            role=options.role,
            created_at=now,
        )
        link = await self.uow.invitation_links.create(link)

        logger.info(
            "Invitation link %s created for project %s by %s (superseded %d)",
            token_preview(link.secret_token),
            project_id,
            creator_id,
            superseded,
        )
        return Return.ok(link)

    async def validate(self, token: str) -> Result[InvitationLink]:
        """
        Look up a token and check it is usable right now.

        This is a pre-check only; redeem re-checks under lock because another
        redemption may consume the last use in between.
        """
        link = await self.uow.invitation_links.get_by_token(token)
        if link is None or not link.can_be_used(utcnow()):
            return Return.err(
                Error(
                    ErrorCode.INVALID_OR_EXPIRED_TOKEN,
                    "Invalid or expired invitation link",
                )
            )
        return Return.ok(link)

    async def redeem(
        self,
        token: str,
        user_id: str,
        request_info: Optional[RequestInfo] = None,
    ) -> Result[Membership]:
        """
        Convert a token into a membership.

        Must run inside a unit of work that the caller commits only on
        success: the membership, the join log entry and the usage increment
        are written together or not at all.

        Returns:
            Result with the new Membership, or Error
            (INVALID_OR_EXPIRED_TOKEN, ALREADY_MEMBER)
        """
        request_info = request_info or RequestInfo()
        now = utcnow()

        link = await self.uow.invitation_links.get_by_token(token, for_update=True)
        if link is None or not link.can_be_used(now):
            return Return.err(
                Error(
                    ErrorCode.INVALID_OR_EXPIRED_TOKEN,
                    "Invalid or expired invitation link",
                )
            )

        created = await self.store.create(link.project_id, user_id, link.role)
        if created.is_err():
            if created.error.code == ErrorCode.DUPLICATE_MEMBERSHIP:
                return Return.err(
                    Error(
                        ErrorCode.ALREADY_MEMBER,
                        "User is already a member of this project",
                    )
                )
            return created

        logged = await self.audit.append_member_join(
            project_id=link.project_id,
            user_id=user_id,
            join_method=JoinMethod.invite_link,
            invite_token=token,
            ip_address=request_info.ip_address,
            user_agent=request_info.user_agent,
        )
        if logged.is_err():
            return Return.err(logged.error)

        if not await self.uow.invitation_links.try_increment_uses(link.id, now):
            logger.warning(
                "Lost redemption race on link %s for user %s",
                token_preview(token),
                user_id,
            )
            return Return.err(
                Error(
                    ErrorCode.INVALID_OR_EXPIRED_TOKEN,
                    "Invalid or expired invitation link",
                )
            )

        logger.info(
            "User %s joined project %s via link %s",
            user_id,
            link.project_id,
            token_preview(token),
        )
        return created

    async def deactivate(self, project_id: UUID, acting_user_id: str) -> Result[int]:
        """Deactivate every active link of a project; returns how many changed"""
        if not await self.permissions.has_permission(
            project_id, acting_user_id, ProjectRole.admin
        ):
            return Return.err(
                Error(
                    ErrorCode.FORBIDDEN,
                    "Only project owners and admins can deactivate invitation links",
                )
            )

        count = await self.uow.invitation_links.deactivate_all_for_project(project_id)
        logger.info(
            "Deactivated %d invitation link(s) of project %s by %s",
            count,
            project_id,
            acting_user_id,
        )
        return Return.ok(count)

    async def get_active(self, project_id: UUID) -> Optional[InvitationLink]:
        link = await self.uow.invitation_links.get_active_by_project(project_id, utcnow())
        if link is None or link.is_usage_limit_reached():
            return None
        return link

    async def stats(self, project_id: UUID, recent_days: int = 30) -> InviteStats:
        links = await self.uow.invitation_links.get_by_project_id(project_id)
        join_logs = await self.uow.member_join_logs.get_by_invite_tokens(
            [link.secret_token for link in links]
        )
        joins_by_method = await self.audit.join_stats(project_id)

        recent_since = utcnow() - timedelta(days=recent_days)
        joins_per_token: Dict[str, int] = {}
        for entry in join_logs:
            joins_per_token[entry.invite_token] = joins_per_token.get(entry.invite_token, 0) + 1

        return InviteStats(
            total_links=len(links),
            active_links=sum(1 for link in links if link.is_active),
            total_uses=sum(link.current_uses for link in links),
            total_joins=len(join_logs),
            recent_joins=sum(1 for entry in join_logs if entry.joined_at >= recent_since),
            joins_by_method={method.value: count for method, count in joins_by_method.items()},
            links=[
                {
                    "id": str(link.id),
                    "is_active": link.is_active,
                    "role": link.role.value,
                    "max_uses": link.max_uses,
                    "current_uses": link.current_uses,
                    "expires_at": link.expires_at.isoformat() if link.expires_at else None,
                    "created_at": link.created_at.isoformat(),
                    "created_by_id": link.created_by_id,
                    "joins": joins_per_token.get(link.secret_token, 0),
                }
                for link in links
            ],
        )
