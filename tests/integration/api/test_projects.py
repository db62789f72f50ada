from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlmodel import select

from collab_access.domain.entities import (
    InvitationLink,
    Membership,
    Project,
    ProjectRole,
    RoleChangeLog,
)
from collab_access.domain.role_hierarchy import LEGACY_ROLE_LEVELS, level
from tests.utils.auth import auth_headers


@pytest.mark.asyncio
async def test_create_project_makes_caller_owner(client: AsyncClient, db_session):
    """Creating a project stores exactly one OWNER membership for the creator"""
    response = await client.post(
        "/projects",
        json={"name": "Apollo"},
        headers=auth_headers("owner-1"),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Apollo"
    assert data["owner_id"] == "owner-1"
    assert data["role"] == "owner"
    assert data["role_level"] == 4

    result = await db_session.exec(
        select(Membership).where(Membership.project_id == UUID(data["id"]))
    )
    memberships = result.all()
    assert len(memberships) == 1
    assert memberships[0].user_id == "owner-1"
    assert memberships[0].role == ProjectRole.owner
    # Three-level legacy data ranks the owner at 3
    assert level(memberships[0].role, LEGACY_ROLE_LEVELS) == 3

    permissions = await client.get(
        f"/projects/{data['id']}/permissions", headers=auth_headers("owner-1")
    )
    assert permissions.status_code == 200
    assert permissions.json()["can_view"] is True
    assert permissions.json()["can_manage_members"] is True


@pytest.mark.asyncio
async def test_create_project_rejects_blank_name(client: AsyncClient):
    response = await client.post(
        "/projects", json={"name": "  "}, headers=auth_headers("owner-1")
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_invalid_token_is_unauthorized(client: AsyncClient):
    response = await client.post(
        "/projects",
        json={"name": "Apollo"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_permissions_of_non_member(client: AsyncClient, project):
    response = await client.get(
        f"/projects/{project['id']}/permissions", headers=auth_headers("stranger")
    )

    assert response.status_code == 200
    data = response.json()
    assert data["role"] is None
    assert data["can_view"] is False


@pytest.mark.asyncio
async def test_malformed_project_id(client: AsyncClient):
    response = await client.get(
        "/projects/not-a-uuid/permissions", headers=auth_headers("owner-1")
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_only_owner_deletes_project(client: AsyncClient, project):
    await client.post(
        f"/projects/{project['id']}/members",
        json={"user_id": "admin-1", "role": "admin"},
        headers=auth_headers("owner-1"),
    )

    response = await client.delete(
        f"/projects/{project['id']}", headers=auth_headers("admin-1")
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_delete_project_cascades(client: AsyncClient, db_session, project):
    project_id = project["id"]
    owner = auth_headers("owner-1")
    await client.post(
        f"/projects/{project_id}/members",
        json={"user_id": "user-1", "role": "member"},
        headers=owner,
    )
    await client.patch(
        f"/projects/{project_id}/members/user-1", json={"role": "viewer"}, headers=owner
    )
    await client.post(f"/projects/{project_id}/invite-link", json={}, headers=owner)

    response = await client.delete(f"/projects/{project_id}", headers=owner)

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "deleted"
    assert data["memberships_removed"] == 2
    assert data["invitation_links_removed"] == 1

    pid = UUID(project_id)
    for model in (Membership, InvitationLink, RoleChangeLog):
        result = await db_session.exec(select(model).where(model.project_id == pid))
        assert result.all() == []
    result = await db_session.exec(select(Project).where(Project.id == pid))
    assert result.one_or_none() is None

    missing = await client.get(f"/projects/{project_id}/permissions", headers=owner)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
