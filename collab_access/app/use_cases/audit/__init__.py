"""
Audit Log Use Cases
"""

from .dtos import (
    MemberJoinEntryView,
    MemberJoinHistoryResponse,
    RoleChangeEntryView,
    RoleChangeHistoryResponse,
    RoleChangeStatsResponse,
    RoleTransitionCount,
)
from .get_member_join_history_use_case import GetMemberJoinHistoryUseCase
from .get_my_audit_history_use_case import GetMyAuditHistoryUseCase
from .get_role_change_history_use_case import GetRoleChangeHistoryUseCase
from .get_role_change_stats_use_case import GetRoleChangeStatsUseCase

__all__ = [
    "GetRoleChangeHistoryUseCase",
    "GetMemberJoinHistoryUseCase",
    "GetMyAuditHistoryUseCase",
    "GetRoleChangeStatsUseCase",
    "RoleChangeEntryView",
    "MemberJoinEntryView",
    "RoleChangeHistoryResponse",
    "MemberJoinHistoryResponse",
    "RoleTransitionCount",
    "RoleChangeStatsResponse",
]
