"""
Error taxonomy for access decisions, membership mutation and invitation links.

These are expected outcomes carried in ``Error.code``; routes map them to
transport statuses. Only persistence failures travel as exceptions.
"""

from enum import Enum


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    NOT_A_MEMBER = "NOT_A_MEMBER"
    FORBIDDEN = "FORBIDDEN"
    DUPLICATE_MEMBERSHIP = "DUPLICATE_MEMBERSHIP"
    ALREADY_MEMBER = "ALREADY_MEMBER"
    OWNER_CONFLICT = "OWNER_CONFLICT"
    CANNOT_REMOVE_OWNER = "CANNOT_REMOVE_OWNER"
    INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"
    INVALID_INPUT = "INVALID_INPUT"


class DuplicateKeyError(Exception):
    """Raised by repositories when a unique key rejects an insert"""
