import pytest
from httpx import AsyncClient

from tests.utils.auth import auth_headers


async def shuffle_roles(client, project_id, rounds):
    """Alternate user-1 between member and viewer, one log row per call"""
    owner = auth_headers("owner-1")
    await client.post(
        f"/projects/{project_id}/members",
        json={"user_id": "user-1", "role": "member"},
        headers=owner,
    )
    for i in range(rounds):
        role = "viewer" if i % 2 == 0 else "member"
        response = await client.patch(
            f"/projects/{project_id}/members/user-1", json={"role": role}, headers=owner
        )
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_role_change_history_pages_newest_first(client: AsyncClient, project):
    project_id = project["id"]
    await shuffle_roles(client, project_id, 5)

    first = await client.get(
        f"/projects/{project_id}/audit/role-changes",
        params={"limit": 3},
        headers=auth_headers("owner-1"),
    )
    assert first.status_code == 200
    page = first.json()
    assert len(page["entries"]) == 3
    assert page["next_cursor"] is not None
    stamps = [e["changed_at"] for e in page["entries"]]
    assert stamps == sorted(stamps, reverse=True)

    second = await client.get(
        f"/projects/{project_id}/audit/role-changes",
        params={"limit": 3, "cursor": page["next_cursor"]},
        headers=auth_headers("owner-1"),
    )
    rest = second.json()
    assert len(rest["entries"]) == 2
    assert rest["next_cursor"] is None

    ids = [e["id"] for e in page["entries"] + rest["entries"]]
    assert len(set(ids)) == 5


@pytest.mark.asyncio
async def test_audit_requires_admin(client: AsyncClient, project):
    project_id = project["id"]
    await shuffle_roles(client, project_id, 0)

    response = await client.get(
        f"/projects/{project_id}/audit/role-changes", headers=auth_headers("user-1")
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_malformed_cursor(client: AsyncClient, project):
    response = await client.get(
        f"/projects/{project['id']}/audit/joins",
        params={"cursor": "%%%"},
        headers=auth_headers("owner-1"),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_join_history_filters_by_method(client: AsyncClient, project):
    project_id = project["id"]
    owner = auth_headers("owner-1")
    await client.post(
        f"/projects/{project_id}/members",
        json={"user_id": "user-1", "role": "viewer", "join_method": "direct_invite"},
        headers=owner,
    )
    link = await client.post(f"/projects/{project_id}/invite-link", json={}, headers=owner)
    await client.post(f"/join/{link.json()['token']}", headers=auth_headers("user-2"))

    response = await client.get(
        f"/projects/{project_id}/audit/joins",
        params={"join_method": "invite_link"},
        headers=owner,
    )

    assert response.status_code == 200
    entries = response.json()["entries"]
    assert [e["user_id"] for e in entries] == ["user-2"]
    assert entries[0]["invite_token_preview"].endswith("...")
    assert link.json()["token"] not in response.text


@pytest.mark.asyncio
async def test_my_history_and_stats(client: AsyncClient, project):
    project_id = project["id"]
    await shuffle_roles(client, project_id, 3)

    mine = await client.get("/audit/me/role-changes", headers=auth_headers("user-1"))
    assert mine.status_code == 200
    assert len(mine.json()["entries"]) == 3

    actor = await client.get("/audit/me/role-changes", headers=auth_headers("owner-1"))
    assert len(actor.json()["entries"]) == 3

    stats = await client.get(
        f"/projects/{project_id}/audit/role-changes/stats", headers=auth_headers("owner-1")
    )
    assert stats.status_code == 200
    data = stats.json()
    assert data["total_changes"] == 3
    counts = {(t["old_role"], t["new_role"]): t["count"] for t in data["transitions"]}
    assert counts == {("member", "viewer"): 2, ("viewer", "member"): 1}
