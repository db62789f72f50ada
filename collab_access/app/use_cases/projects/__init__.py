"""
Project Use Cases

Project bootstrap, deletion and permission summaries.
"""

from .create_project_use_case import CreateProjectUseCase
from .delete_project_use_case import DeleteProjectUseCase
from .dtos import DeleteProjectResponse, PermissionsResponse, ProjectResponse
from .get_permissions_use_case import GetPermissionsUseCase

__all__ = [
    "CreateProjectUseCase",
    "DeleteProjectUseCase",
    "GetPermissionsUseCase",
    "ProjectResponse",
    "DeleteProjectResponse",
    "PermissionsResponse",
]
