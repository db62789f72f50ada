"""
Many users redeeming the last use of one link, each in its own session.
"""

import asyncio
from uuid import UUID

import pytest
from sqlalchemy import func
from sqlmodel import select

from collab_access.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from collab_access.app.use_cases import (
    CreateInviteLinkUseCase,
    CreateProjectUseCase,
    RedeemInviteLinkUseCase,
)
from collab_access.domain.entities import InvitationLink, MemberJoinLog, Membership

REDEEMERS = 8


async def seed_single_use_link(session_factory):
    async with session_factory() as session:
        uow = SqlAlchemyUnitOfWork(session)
        created = await CreateProjectUseCase(uow).execute("owner-1", "Apollo")
        assert created.is_ok()
        project_id = UUID(created.value.id)

        link = await CreateInviteLinkUseCase(uow).execute("owner-1", project_id, max_uses=1)
        assert link.is_ok()

    return project_id, link.value.token


async def redeem(session_factory, user_id: str, token: str) -> str:
    async with session_factory() as session:
        result = await RedeemInviteLinkUseCase(SqlAlchemyUnitOfWork(session)).execute(
            user_id, token
        )
    return "OK" if result.is_ok() else result.error.code


async def count(session_factory, model, *criteria) -> int:
    async with session_factory() as session:
        result = await session.exec(select(func.count()).select_from(model).where(*criteria))
        return result.one()


@pytest.mark.asyncio
async def test_last_use_is_granted_exactly_once(session_factory):
    project_id, token = await seed_single_use_link(session_factory)

    outcomes = await asyncio.gather(
        *(redeem(session_factory, f"user-{n}", token) for n in range(REDEEMERS))
    )

    assert sorted(outcomes) == ["INVALID_OR_EXPIRED_TOKEN"] * (REDEEMERS - 1) + ["OK"]

    async with session_factory() as session:
        result = await session.exec(
            select(InvitationLink).where(InvitationLink.secret_token == token)
        )
        assert result.one().current_uses == 1

    # Losers roll back their membership and join log together with the use
    assert await count(session_factory, MemberJoinLog, MemberJoinLog.project_id == project_id) == 1
    assert await count(session_factory, Membership, Membership.project_id == project_id) == 2
