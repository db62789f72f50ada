from uuid import UUID

from fastapi import status

from collab_access.api.error import ClientError
from collab_access.domain.errors import ErrorCode
from collab_access.libs.result import Error


def parse_project_id(project_id: str) -> UUID:
    """Path parameter to UUID; malformed ids are a 400, not a 422"""
    try:
        return UUID(project_id)
    except ValueError:
        raise ClientError(
            Error(ErrorCode.INVALID_INPUT, "Invalid project ID format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
