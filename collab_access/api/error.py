from fastapi import status
from collab_access.libs.result import Error

# Expected business outcomes and the HTTP status each one surfaces as.
# NOT_A_MEMBER here describes the target of an operation; a caller without
# membership is reported as FORBIDDEN by the use cases.
STATUS_BY_CODE = {
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "NOT_A_MEMBER": status.HTTP_404_NOT_FOUND,
    "DUPLICATE_MEMBERSHIP": status.HTTP_409_CONFLICT,
    "ALREADY_MEMBER": status.HTTP_409_CONFLICT,
    "OWNER_CONFLICT": status.HTTP_409_CONFLICT,
    "CANNOT_REMOVE_OWNER": status.HTTP_409_CONFLICT,
    "INVALID_OR_EXPIRED_TOKEN": status.HTTP_410_GONE,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Raise the ClientError matching a known code, ServerError otherwise"""
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
