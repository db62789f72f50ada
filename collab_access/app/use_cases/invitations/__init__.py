"""
Invitation Link Use Cases
"""

from .create_invite_link_use_case import CreateInviteLinkUseCase
from .deactivate_invite_link_use_case import DeactivateInviteLinkUseCase
from .dtos import (
    ActiveInviteLinkResponse,
    DeactivateInviteLinkResponse,
    InviteLinkView,
    InvitePreviewResponse,
    InviteStatsResponse,
    JoinProjectResponse,
)
from .get_active_invite_link_use_case import GetActiveInviteLinkUseCase
from .get_invite_stats_use_case import GetInviteStatsUseCase
from .redeem_invite_link_use_case import RedeemInviteLinkUseCase
from .validate_invite_token_use_case import ValidateInviteTokenUseCase

__all__ = [
    "CreateInviteLinkUseCase",
    "GetActiveInviteLinkUseCase",
    "DeactivateInviteLinkUseCase",
    "GetInviteStatsUseCase",
    "ValidateInviteTokenUseCase",
    "RedeemInviteLinkUseCase",
    "InviteLinkView",
    "ActiveInviteLinkResponse",
    "DeactivateInviteLinkResponse",
    "InviteStatsResponse",
    "InvitePreviewResponse",
    "JoinProjectResponse",
]
