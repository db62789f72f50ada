import re
from datetime import timedelta
from uuid import uuid4

import pytest

from collab_access.app.services.invitation_service import (
    InvitationService,
    token_preview,
)
from collab_access.app.services.query_options import InviteLinkOptions, RequestInfo
from collab_access.domain.clock import utcnow
from collab_access.domain.entities import JoinMethod, MemberJoinLog, ProjectRole
from tests.fixtures.entities import make_link, make_membership, memberships_by_user

TOKEN_PATTERN = re.compile(r"^[0-9a-z]+-[A-Za-z0-9_-]{43}$")


def test_generated_tokens_are_url_safe_and_unique():
    tokens = {InvitationService.generate_secret_token() for _ in range(200)}

    assert len(tokens) == 200
    for token in tokens:
        assert TOKEN_PATTERN.match(token)


def test_invite_path():
    assert InvitationService.build_invite_path("abc") == "/join/abc"
    assert InvitationService.build_invite_path("abc", "/invite/") == "/invite/abc"


def test_token_preview_hides_the_secret():
    assert token_preview("0123456789abcdef") == "01234567..."


@pytest.mark.asyncio
async def test_create_requires_admin(mock_uow):
    project_id = uuid4()
    memberships_by_user(mock_uow, make_membership(project_id, "member-1", ProjectRole.member))

    result = await InvitationService(mock_uow).create(project_id, "member-1")

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.invitation_links.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_supersedes_previous_links(mock_uow):
    project_id = uuid4()
    memberships_by_user(mock_uow, make_membership(project_id, "admin-1", ProjectRole.admin))
    mock_uow.invitation_links.deactivate_all_for_project.return_value = 1

    result = await InvitationService(mock_uow).create(
        project_id, "admin-1", InviteLinkOptions(max_uses=5, role=ProjectRole.viewer)
    )

    assert result.is_ok()
    link = result.value
    assert link.is_active
    assert link.current_uses == 0
    assert link.max_uses == 5
    assert link.role == ProjectRole.viewer
    assert link.created_by_id == "admin-1"
    mock_uow.invitation_links.deactivate_all_for_project.assert_called_once_with(project_id)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "options",
    [
        InviteLinkOptions(max_uses=0),
        InviteLinkOptions(expires_at=utcnow() - timedelta(minutes=1)),
        InviteLinkOptions(role=ProjectRole.admin),
        InviteLinkOptions(role=ProjectRole.owner),
    ],
)
async def test_create_rejects_invalid_options(mock_uow, options):
    project_id = uuid4()
    memberships_by_user(mock_uow, make_membership(project_id, "owner-1", ProjectRole.owner))

    result = await InvitationService(mock_uow).create(project_id, "owner-1", options)

    assert result.is_err()
    assert result.error.code == "INVALID_INPUT"
    mock_uow.invitation_links.deactivate_all_for_project.assert_not_called()


@pytest.mark.asyncio
async def test_validate_unknown_token(mock_uow):
    result = await InvitationService(mock_uow).validate("nope")

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_validate_exhausted_link(mock_uow):
    mock_uow.invitation_links.get_by_token.return_value = make_link(
        uuid4(), max_uses=1, current_uses=1
    )

    result = await InvitationService(mock_uow).validate("token")

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_redeem_creates_membership_log_and_use(mock_uow):
    project_id = uuid4()
    link = make_link(project_id, role=ProjectRole.viewer)
    mock_uow.invitation_links.get_by_token.return_value = link

    result = await InvitationService(mock_uow).redeem(
        link.secret_token, "user-1", RequestInfo(ip_address="10.0.0.1", user_agent="UA")
    )

    assert result.is_ok()
    assert result.value.role == ProjectRole.viewer
    mock_uow.invitation_links.get_by_token.assert_called_once_with(
        link.secret_token, for_update=True
    )
    entry = mock_uow.member_join_logs.create.call_args.args[0]
    assert entry.join_method == JoinMethod.invite_link
    assert entry.invite_token == link.secret_token
    assert entry.ip_address == "10.0.0.1"
    assert entry.user_agent == "UA"
    mock_uow.invitation_links.try_increment_uses.assert_called_once()


@pytest.mark.asyncio
async def test_redeem_by_existing_member_consumes_nothing(mock_uow):
    project_id = uuid4()
    link = make_link(project_id, max_uses=3, current_uses=1)
    mock_uow.invitation_links.get_by_token.return_value = link
    memberships_by_user(mock_uow, make_membership(project_id, "user-1", ProjectRole.member))

    result = await InvitationService(mock_uow).redeem(link.secret_token, "user-1")

    assert result.is_err()
    assert result.error.code == "ALREADY_MEMBER"
    mock_uow.invitation_links.try_increment_uses.assert_not_called()
    mock_uow.member_join_logs.create.assert_not_called()


@pytest.mark.asyncio
async def test_redeem_fails_when_increment_loses(mock_uow):
    link = make_link(uuid4(), max_uses=1)
    mock_uow.invitation_links.get_by_token.return_value = link
    mock_uow.invitation_links.try_increment_uses.return_value = False

    result = await InvitationService(mock_uow).redeem(link.secret_token, "user-1")

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_deactivate_requires_admin(mock_uow):
    result = await InvitationService(mock_uow).deactivate(uuid4(), "stranger")

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.invitation_links.deactivate_all_for_project.assert_not_called()


@pytest.mark.asyncio
async def test_get_active_hides_used_up_link(mock_uow):
    mock_uow.invitation_links.get_active_by_project.return_value = make_link(
        uuid4(), max_uses=2, current_uses=2
    )

    assert await InvitationService(mock_uow).get_active(uuid4()) is None


@pytest.mark.asyncio
async def test_stats(mock_uow):
    project_id = uuid4()
    active = make_link(project_id, secret_token="tok-active", current_uses=2)
    old = make_link(project_id, secret_token="tok-old", is_active=False, current_uses=1)
    mock_uow.invitation_links.get_by_project_id.return_value = [active, old]

    mock_uow.member_join_logs.get_by_invite_tokens.return_value = [
        MemberJoinLog(
            project_id=project_id,
            user_id=u,
            join_method=JoinMethod.invite_link,
            invite_token=t,
        )
        for u, t in (("a", "tok-active"), ("b", "tok-active"), ("c", "tok-old"))
    ]
    mock_uow.member_join_logs.count_by_method.return_value = {JoinMethod.invite_link: 3}

    stats = await InvitationService(mock_uow).stats(project_id)

    assert stats.total_links == 2
    assert stats.active_links == 1
    assert stats.total_uses == 3
    assert stats.total_joins == 3
    assert stats.recent_joins == 3
    assert stats.joins_by_method["invite_link"] == 3
    assert [link["joins"] for link in stats.links] == [2, 1]
