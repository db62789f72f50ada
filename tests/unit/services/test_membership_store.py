from datetime import datetime
from uuid import uuid4

import pytest

from collab_access.app.services.membership_store import MembershipStore
from collab_access.domain.entities import ProjectRole
from collab_access.domain.errors import DuplicateKeyError
from tests.fixtures.entities import make_membership, memberships_by_user


@pytest.mark.asyncio
async def test_create_member(mock_uow):
    project_id = uuid4()

    result = await MembershipStore(mock_uow).create(project_id, "user-1", ProjectRole.member)

    assert result.is_ok()
    assert result.value.role == ProjectRole.member
    assert result.value.user_id == "user-1"
    mock_uow.memberships.create.assert_called_once()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_create_existing_member_is_duplicate(mock_uow):
    project_id = uuid4()
    memberships_by_user(mock_uow, make_membership(project_id, "user-1", ProjectRole.viewer))

    result = await MembershipStore(mock_uow).create(project_id, "user-1", ProjectRole.member)

    assert result.is_err()
    assert result.error.code == "DUPLICATE_MEMBERSHIP"
    mock_uow.memberships.create.assert_not_called()


@pytest.mark.asyncio
async def test_unique_key_violation_maps_to_duplicate(mock_uow):
    mock_uow.memberships.create.side_effect = DuplicateKeyError("taken")

    result = await MembershipStore(mock_uow).create(uuid4(), "user-1", ProjectRole.member)

    assert result.is_err()
    assert result.error.code == "DUPLICATE_MEMBERSHIP"


@pytest.mark.asyncio
async def test_second_owner_is_rejected(mock_uow):
    project_id = uuid4()
    memberships_by_user(mock_uow, make_membership(project_id, "owner-1", ProjectRole.owner))

    result = await MembershipStore(mock_uow).create(project_id, "user-2", ProjectRole.owner)

    assert result.is_err()
    assert result.error.code == "OWNER_CONFLICT"


@pytest.mark.asyncio
async def test_bootstrap_requires_empty_project(mock_uow):
    project_id = uuid4()
    mock_uow.memberships.get_by_project_id.return_value = [
        make_membership(project_id, "someone", ProjectRole.member)
    ]

    result = await MembershipStore(mock_uow).create(
        project_id, "owner-1", ProjectRole.owner, bootstrap=True
    )

    assert result.is_err()
    assert result.error.code == "OWNER_CONFLICT"


@pytest.mark.asyncio
async def test_bootstrap_must_create_owner(mock_uow):
    result = await MembershipStore(mock_uow).create(
        uuid4(), "user-1", ProjectRole.member, bootstrap=True
    )

    assert result.is_err()
    assert result.error.code == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_list_orders_by_level_then_join_date(mock_uow):
    project_id = uuid4()
    viewer = make_membership(project_id, "v", ProjectRole.viewer, datetime(2024, 1, 1))
    late_member = make_membership(project_id, "m2", ProjectRole.member, datetime(2024, 3, 1))
    early_member = make_membership(project_id, "m1", ProjectRole.member, datetime(2024, 2, 1))
    owner = make_membership(project_id, "o", ProjectRole.owner, datetime(2024, 4, 1))
    admin = make_membership(project_id, "a", ProjectRole.admin, datetime(2024, 5, 1))
    mock_uow.memberships.get_by_project_id.return_value = [
        viewer,
        late_member,
        early_member,
        owner,
        admin,
    ]

    members = await MembershipStore(mock_uow).list_by_project(project_id)

    assert [m.user_id for m in members] == ["o", "a", "m1", "m2", "v"]


@pytest.mark.asyncio
async def test_update_role_never_grants_owner(mock_uow):
    project_id = uuid4()
    memberships_by_user(
        mock_uow,
        make_membership(project_id, "owner-1", ProjectRole.owner),
        make_membership(project_id, "user-1", ProjectRole.admin),
    )

    result = await MembershipStore(mock_uow).update_role(
        project_id, "user-1", ProjectRole.owner
    )

    assert result.is_err()
    assert result.error.code == "OWNER_CONFLICT"
    mock_uow.memberships.update.assert_not_called()


@pytest.mark.asyncio
async def test_update_role_of_non_member(mock_uow):
    result = await MembershipStore(mock_uow).update_role(
        uuid4(), "ghost", ProjectRole.viewer
    )

    assert result.is_err()
    assert result.error.code == "NOT_A_MEMBER"


@pytest.mark.asyncio
async def test_owner_cannot_be_removed(mock_uow):
    project_id = uuid4()
    memberships_by_user(mock_uow, make_membership(project_id, "owner-1", ProjectRole.owner))

    result = await MembershipStore(mock_uow).remove(project_id, "owner-1")

    assert result.is_err()
    assert result.error.code == "CANNOT_REMOVE_OWNER"
    mock_uow.memberships.delete.assert_not_called()


@pytest.mark.asyncio
async def test_remove_member(mock_uow):
    project_id = uuid4()
    member = make_membership(project_id, "user-1", ProjectRole.member)
    memberships_by_user(mock_uow, member)

    result = await MembershipStore(mock_uow).remove(project_id, "user-1")

    assert result.is_ok()
    assert result.value is member
    mock_uow.memberships.delete.assert_called_once_with(member)


@pytest.mark.asyncio
async def test_transfer_ownership_keeps_one_owner(mock_uow):
    project_id = uuid4()
    owner = make_membership(project_id, "owner-1", ProjectRole.owner)
    member = make_membership(project_id, "user-1", ProjectRole.member)
    memberships_by_user(mock_uow, owner, member)

    result = await MembershipStore(mock_uow).transfer_ownership(project_id, "user-1")

    assert result.is_ok()
    previous, new = result.value
    assert previous.role == ProjectRole.admin
    assert new.role == ProjectRole.owner
    mock_uow.memberships.try_change_role.assert_awaited_once()
    assert mock_uow.memberships.update.call_count == 1


@pytest.mark.asyncio
async def test_transfer_ownership_fails_when_owner_changed_meanwhile(mock_uow):
    """A transfer authorized against a former owner must not promote a second owner"""
    project_id = uuid4()
    former_owner = make_membership(project_id, "owner-1", ProjectRole.admin)
    current_owner = make_membership(project_id, "user-x", ProjectRole.owner)
    target = make_membership(project_id, "user-y", ProjectRole.member)
    memberships_by_user(mock_uow, former_owner, current_owner, target)

    result = await MembershipStore(mock_uow).transfer_ownership(
        project_id, "user-y", current_owner_id="owner-1"
    )

    assert result.is_err()
    assert result.error.code == "OWNER_CONFLICT"
    assert target.role == ProjectRole.member
    assert current_owner.role == ProjectRole.owner
    mock_uow.memberships.update.assert_not_called()


@pytest.mark.asyncio
async def test_count_by_role_fills_missing_roles(mock_uow):
    mock_uow.memberships.count_by_role.return_value = {ProjectRole.owner: 1}

    counts = await MembershipStore(mock_uow).count_by_role(uuid4())

    assert counts == {
        ProjectRole.owner: 1,
        ProjectRole.admin: 0,
        ProjectRole.member: 0,
        ProjectRole.viewer: 0,
    }
