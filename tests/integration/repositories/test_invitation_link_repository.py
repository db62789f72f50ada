from datetime import timedelta
from uuid import uuid4

import pytest

from collab_access.adapter.repositories.invitation_link_repository import (
    InvitationLinkRepository,
)
from collab_access.adapter.repositories.project_repository import ProjectRepository
from collab_access.domain.clock import utcnow
from collab_access.domain.entities import InvitationLink, Project


async def seed_link(db_session, **fields):
    project = await ProjectRepository(db_session).create(
        Project(name="Apollo", owner_id="owner-1")
    )
    link = InvitationLink(
        project_id=project.id,
        created_by_id="owner-1",
        secret_token=f"tok-{uuid4().hex}",
        **fields,
    )
    return await InvitationLinkRepository(db_session).create(link)


@pytest.mark.asyncio
async def test_increment_stops_at_max_uses(db_session):
    link = await seed_link(db_session, max_uses=2)
    repo = InvitationLinkRepository(db_session)
    now = utcnow()

    assert await repo.try_increment_uses(link.id, now) is True
    assert await repo.try_increment_uses(link.id, now) is True
    assert await repo.try_increment_uses(link.id, now) is False

    stored = await repo.get_by_id(link.id)
    assert stored.current_uses == 2


@pytest.mark.asyncio
async def test_increment_refuses_inactive_and_expired(db_session):
    repo = InvitationLinkRepository(db_session)
    inactive = await seed_link(db_session, is_active=False)
    expired = await seed_link(db_session, expires_at=utcnow() - timedelta(minutes=1))

    assert await repo.try_increment_uses(inactive.id, utcnow()) is False
    assert await repo.try_increment_uses(expired.id, utcnow()) is False


@pytest.mark.asyncio
async def test_active_lookup_ignores_expired_links(db_session):
    repo = InvitationLinkRepository(db_session)
    link = await seed_link(db_session, expires_at=utcnow() - timedelta(seconds=1))

    assert await repo.get_active_by_project(link.project_id, utcnow()) is None

    fresh = await repo.create(
        InvitationLink(
            project_id=link.project_id,
            created_by_id="owner-1",
            secret_token=f"tok-{uuid4().hex}",
        )
    )
    active = await repo.get_active_by_project(link.project_id, utcnow())
    assert active.id == fresh.id


@pytest.mark.asyncio
async def test_deactivate_all_for_project(db_session):
    repo = InvitationLinkRepository(db_session)
    link = await seed_link(db_session)

    assert await repo.deactivate_all_for_project(link.project_id) == 1
    assert await repo.deactivate_all_for_project(link.project_id) == 0

    stored = await repo.get_by_token(link.secret_token)
    assert stored.is_active is False
