from uuid import uuid4

import pytest

from collab_access.app.use_cases.members import (
    AddMemberUseCase,
    TransferOwnershipUseCase,
)
from collab_access.app.use_cases.projects import (
    CreateProjectUseCase,
    DeleteProjectUseCase,
)
from collab_access.domain.entities import JoinMethod, Project, ProjectRole
from tests.fixtures.entities import make_membership, memberships_by_user


@pytest.mark.asyncio
async def test_create_project_bootstraps_owner(mock_uow):
    result = await CreateProjectUseCase(mock_uow).execute("owner-1", "  Apollo  ")

    assert result.is_ok()
    assert result.value.name == "Apollo"
    assert result.value.owner_id == "owner-1"
    assert result.value.role == "owner"
    assert result.value.role_level == 4
    membership = mock_uow.memberships.create.call_args.args[0]
    assert membership.role == ProjectRole.owner
    mock_uow.member_join_logs.create.assert_not_called()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_create_project_requires_name(mock_uow):
    result = await CreateProjectUseCase(mock_uow).execute("owner-1", "   ")

    assert result.is_err()
    assert result.error.code == "INVALID_INPUT"
    mock_uow.projects.create.assert_not_called()


@pytest.mark.asyncio
async def test_delete_project_is_owner_only(mock_uow):
    project = Project(id=uuid4(), name="Apollo", owner_id="owner-1")
    mock_uow.projects.get_by_id.return_value = project
    memberships_by_user(mock_uow, make_membership(project.id, "admin-1", ProjectRole.admin))

    result = await DeleteProjectUseCase(mock_uow).execute("admin-1", project.id)

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.projects.delete.assert_not_called()


@pytest.mark.asyncio
async def test_delete_project_cascades(mock_uow):
    project = Project(id=uuid4(), name="Apollo", owner_id="owner-1")
    mock_uow.projects.get_by_id.return_value = project
    memberships_by_user(mock_uow, make_membership(project.id, "owner-1", ProjectRole.owner))
    mock_uow.memberships.delete_by_project_id.return_value = 3
    mock_uow.invitation_links.delete_by_project_id.return_value = 2

    result = await DeleteProjectUseCase(mock_uow).execute("owner-1", project.id)

    assert result.is_ok()
    assert result.value.memberships_removed == 3
    assert result.value.invitation_links_removed == 2
    mock_uow.role_change_logs.delete_by_project_id.assert_called_once_with(project.id)
    mock_uow.member_join_logs.delete_by_project_id.assert_called_once_with(project.id)
    mock_uow.projects.delete.assert_called_once_with(project)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_admin_adds_viewer_with_join_log(mock_uow):
    project = Project(id=uuid4(), name="Apollo", owner_id="owner-1")
    mock_uow.projects.get_by_id.return_value = project
    memberships_by_user(mock_uow, make_membership(project.id, "admin-1", ProjectRole.admin))

    result = await AddMemberUseCase(mock_uow).execute(
        "admin-1", project.id, "user-9", "viewer"
    )

    assert result.is_ok()
    assert result.value.membership.role == "viewer"
    entry = mock_uow.member_join_logs.create.call_args.args[0]
    assert entry.join_method == JoinMethod.admin_added
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_only_owner_adds_admins(mock_uow):
    project = Project(id=uuid4(), name="Apollo", owner_id="owner-1")
    mock_uow.projects.get_by_id.return_value = project
    memberships_by_user(mock_uow, make_membership(project.id, "admin-1", ProjectRole.admin))

    result = await AddMemberUseCase(mock_uow).execute(
        "admin-1", project.id, "user-9", "admin"
    )

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.memberships.create.assert_not_called()


@pytest.mark.asyncio
async def test_transfer_ownership_updates_project_owner(mock_uow):
    project = Project(id=uuid4(), name="Apollo", owner_id="owner-1")
    mock_uow.projects.get_by_id.return_value = project
    memberships_by_user(
        mock_uow,
        make_membership(project.id, "owner-1", ProjectRole.owner),
        make_membership(project.id, "user-1", ProjectRole.member),
    )

    result = await TransferOwnershipUseCase(mock_uow).execute(
        "owner-1", project.id, "user-1"
    )

    assert result.is_ok()
    assert result.value.previous_owner.role == "admin"
    assert result.value.new_owner.role == "owner"
    assert project.owner_id == "user-1"
    assert mock_uow.role_change_logs.create.call_count == 2
    mock_uow.commit.assert_called_once()
