"""
Redeem Invite Link Use Case

Joins the caller to a project through an invitation token.
"""

import logging
from typing import Optional

from collab_access.app.services.invitation_service import InvitationService
from collab_access.app.services.query_options import RequestInfo
from collab_access.app.services.unit_of_work import UnitOfWork
from collab_access.libs.result import Result, Return

from .dtos import JoinProjectResponse

logger = logging.getLogger(__name__)


class RedeemInviteLinkUseCase:
    """
    Use case for joining a project with an invitation link.

    Business Rules:
    - The link must be active, unexpired and below max_uses
    - Existing members get ALREADY_MEMBER and consume no use
    - Membership, join log and use count commit together or not at all
    - Concurrent redeemers of the last use: exactly one succeeds
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        token: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[JoinProjectResponse]:
        # Cheap read-only rejection of dead tokens before taking any lock
        async with self.uow:
            validated = await InvitationService(self.uow).validate(token)
            if validated.is_err():
                return Return.err(validated.error)

        async with self.uow:
            redeemed = await InvitationService(self.uow).redeem(
                token,
                user_id,
                RequestInfo(ip_address=ip_address, user_agent=user_agent),
            )
            if redeemed.is_err():
                logger.info(
                    "Redemption rejected for user %s: %s", user_id, redeemed.error.code
                )
                return Return.err(redeemed.error)
            membership = redeemed.value

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                JoinProjectResponse(
                    status="joined",
                    project_id=str(membership.project_id),
                    user_id=membership.user_id,
                    role=membership.role.value,
                    joined_at=membership.joined_at.isoformat(),
                )
            )
