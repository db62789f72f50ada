"""
Overlapping ownership transfers, each in its own session.
"""

from uuid import UUID

import pytest
from sqlmodel import select

from collab_access.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from collab_access.app.services.permission_service import PermissionService
from collab_access.app.use_cases import (
    AddMemberUseCase,
    CreateProjectUseCase,
    TransferOwnershipUseCase,
)
from collab_access.app.use_cases.access import require_role
from collab_access.domain.entities import Membership, ProjectRole


async def seed_project(session_factory) -> UUID:
    async with session_factory() as session:
        uow = SqlAlchemyUnitOfWork(session)
        created = await CreateProjectUseCase(uow).execute("owner-1", "Apollo")
        assert created.is_ok()
        project_id = UUID(created.value.id)

        for user_id in ("user-x", "user-y"):
            added = await AddMemberUseCase(uow).execute(
                "owner-1", project_id, user_id, "member"
            )
            assert added.is_ok()

    return project_id


async def roles_of(session_factory, project_id: UUID):
    async with session_factory() as session:
        result = await session.exec(
            select(Membership).where(Membership.project_id == project_id)
        )
        return {m.user_id: m.role for m in result.all()}


@pytest.mark.asyncio
async def test_stale_transfer_cannot_create_second_owner(session_factory):
    """
    Transfer to user-y is authorized while owner-1 still owns the project,
    but a transfer to user-x commits before it writes.
    """
    project_id = await seed_project(session_factory)

    async with session_factory() as late_session:
        late_uow = SqlAlchemyUnitOfWork(late_session)
        async with late_uow:
            guard = await require_role(
                late_uow,
                project_id,
                "owner-1",
                ProjectRole.owner,
                "Only the project owner can transfer ownership",
            )
            assert guard.is_ok()

            async with session_factory() as early_session:
                first = await TransferOwnershipUseCase(
                    SqlAlchemyUnitOfWork(early_session)
                ).execute("owner-1", project_id, "user-x")
            assert first.is_ok()

            second = await PermissionService(late_uow).transfer_ownership(
                project_id,
                "user-y",
                acting_user_id="owner-1",
                current_owner_id="owner-1",
            )

            assert second.is_err()
            assert second.error.code == "OWNER_CONFLICT"

    roles = await roles_of(session_factory, project_id)
    assert [user for user, role in roles.items() if role == ProjectRole.owner] == ["user-x"]
    assert roles["owner-1"] == ProjectRole.admin
    assert roles["user-y"] == ProjectRole.member


@pytest.mark.asyncio
async def test_transfer_by_former_owner_is_rejected(session_factory):
    project_id = await seed_project(session_factory)

    async with session_factory() as session:
        first = await TransferOwnershipUseCase(SqlAlchemyUnitOfWork(session)).execute(
            "owner-1", project_id, "user-x"
        )
    assert first.is_ok()

    async with session_factory() as session:
        second = await TransferOwnershipUseCase(SqlAlchemyUnitOfWork(session)).execute(
            "owner-1", project_id, "user-y"
        )
    assert second.is_err()
    assert second.error.code == "FORBIDDEN"

    roles = await roles_of(session_factory, project_id)
    assert [user for user, role in roles.items() if role == ProjectRole.owner] == ["user-x"]
