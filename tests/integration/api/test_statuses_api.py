from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.base import utc_now
from src.domain.entities import User


@pytest.mark.asyncio
async def test_global_status(client: AsyncClient, register):
    alice = await register("uid-alice")

    response = await client.get("/statuses/users/uid-alice", headers=alice)
    assert response.status_code == 200
    assert response.json()["text"] == "Online"

    response = await client.put(
        "/statuses/me",
        json={"status_id": "showing_custom", "custom_text": "At the gym"},
        headers=alice,
    )
    assert response.status_code == 200
    assert response.json()["text"] == "At the gym"
    assert response.json()["color"] == "#2196F3"

    response = await client.put("/statuses/me", json={"status_id": "unknown"}, headers=alice)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_STATUS"


@pytest.mark.asyncio
async def test_expired_global_status_renders_online(client: AsyncClient, db_session, register):
    alice = await register("uid-alice")
    await client.put("/statuses/me", json={"status_id": "busy"}, headers=alice)

    user = (await db_session.exec(select(User))).one()
    user.global_status_expires_at = utc_now() - timedelta(minutes=1)
    db_session.add(user)
    await db_session.commit()

    response = await client.get("/statuses/users/uid-alice", headers=alice)

    assert response.json()["text"] == "Online"


@pytest.mark.asyncio
async def test_group_status_and_override(
    client: AsyncClient, register, create_group, add_member
):
    owner = await register("uid-owner")
    alice = await register("uid-alice")
    group_id = await create_group(owner)
    await add_member(group_id, owner, "uid-alice", alice)

    await client.put("/statuses/me", json={"status_id": "busy"}, headers=alice)
    response = await client.put(
        f"/statuses/groups/{group_id}",
        json={"type": "app_preset", "reference_id": "away"},
        headers=alice,
    )
    assert response.status_code == 200
    assert response.json()["text"] == "Away"

    response = await client.get(
        "/statuses/users/uid-alice", params={"group_id": group_id}, headers=owner
    )
    assert response.json()["text"] == "Away"
    assert response.json()["scope"] == "group"

    # Global status only outside the group
    response = await client.get("/statuses/users/uid-alice", headers=owner)
    assert response.json()["text"] == "Busy"

    await client.put(
        "/statuses/me",
        json={"status_id": "busy", "overwrite_all_group_statuses": True},
        headers=alice,
    )
    response = await client.get(f"/groups/{group_id}/members", headers=owner)
    statuses = {m["user_id"]: m["status"]["text"] for m in response.json()}
    assert statuses["uid-alice"] == "Busy"

    response = await client.delete(f"/statuses/groups/{group_id}", headers=alice)
    assert response.status_code == 200
    response = await client.delete(f"/statuses/groups/{group_id}", headers=alice)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_group_status_requires_membership(client: AsyncClient, register, create_group):
    owner = await register("uid-owner")
    outsider = await register("uid-outsider")
    group_id = await create_group(owner)

    response = await client.put(
        f"/statuses/groups/{group_id}",
        json={"type": "ad_hoc_custom", "custom_text": "Hi"},
        headers=outsider,
    )
    assert response.status_code == 403

    response = await client.get(
        "/statuses/users/uid-owner", params={"group_id": group_id}, headers=outsider
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_status_presets(client: AsyncClient, register):
    alice = await register("uid-alice")

    response = await client.post(
        "/statuses/presets",
        json={"preset_name": "Gym", "status_text": "At the gym", "icon_key": "fitness"},
        headers=alice,
    )
    assert response.status_code == 201
    preset_id = response.json()["id"]

    response = await client.get("/statuses/presets", headers=alice)
    assert [p["id"] for p in response.json()] == [preset_id]

    response = await client.put("/statuses/me", json={"status_id": preset_id}, headers=alice)
    assert response.status_code == 200
    assert response.json()["text"] == "At the gym"
    assert response.json()["icon_key"] == "fitness"

    response = await client.delete(f"/statuses/presets/{preset_id}", headers=alice)
    assert response.status_code == 200

    response = await client.get("/statuses/users/uid-alice", headers=alice)
    assert response.json()["text"] == "Online"
