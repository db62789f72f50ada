"""
Member Management Use Cases

All membership-related business logic.
"""

from .add_member_use_case import AddMemberUseCase
from .change_role_use_case import ChangeRoleUseCase
from .dtos import (
    ListMembersResponse,
    MemberResponse,
    MemberView,
    RemoveMemberResponse,
    TransferOwnershipResponse,
)
from .list_members_use_case import ListMembersUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .transfer_ownership_use_case import TransferOwnershipUseCase

__all__ = [
    "ListMembersUseCase",
    "AddMemberUseCase",
    "ChangeRoleUseCase",
    "RemoveMemberUseCase",
    "TransferOwnershipUseCase",
    "MemberView",
    "ListMembersResponse",
    "MemberResponse",
    "RemoveMemberResponse",
    "TransferOwnershipResponse",
]
