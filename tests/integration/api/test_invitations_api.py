from datetime import timedelta
from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlmodel import select

from config import ApplicationConfig
from src.domain.base import utc_now
from src.domain.entities import (
    Group,
    Invitation,
    InvitationStatus,
    InvitationType,
    InviteLink,
)


async def _invite(client, group_id, headers, **payload):
    payload.setdefault("type", "direct_user_id")
    return await client.post(f"/groups/{group_id}/invitations", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_direct_invitation_accept_flow(
    client: AsyncClient, db_session, register, create_group
):
    owner = await register("uid-owner")
    friend = await register("uid-friend")
    group_id = await create_group(owner)

    response = await _invite(client, group_id, owner, invitee_id="uid-friend", role="moderator")
    assert response.status_code == 201
    invitation = response.json()
    assert invitation["status"] == "pending"
    assert invitation["role_to_assign"] == "moderator"
    assert invitation["group_name"] == "Climbing Club"

    response = await client.get("/invitations", headers=friend)
    assert [i["id"] for i in response.json()] == [invitation["id"]]

    response = await client.post(f"/invitations/{invitation['id']}/accept", headers=friend)
    assert response.status_code == 200
    assert response.json()["role"] == "moderator"

    # Second answer is rejected
    response = await client.post(f"/invitations/{invitation['id']}/decline", headers=friend)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVITATION_ALREADY_PROCESSED"

    group = (await db_session.exec(select(Group))).one()
    assert group.member_count == 2

    response = await client.get("/invitations", headers=friend)
    assert response.json() == []


@pytest.mark.asyncio
async def test_duplicate_and_member_invitations(
    client: AsyncClient, register, create_group, add_member
):
    owner = await register("uid-owner")
    member = await register("uid-member")
    group_id = await create_group(owner)
    await add_member(group_id, owner, "uid-member", member)

    response = await _invite(client, group_id, owner, invitee_id="uid-member")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_MEMBER"

    response = await _invite(client, group_id, owner, type="email", invitee_email="a@b.com")
    assert response.status_code == 201
    response = await _invite(client, group_id, owner, type="email", invitee_email="A@B.com")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVITE_ALREADY_EXISTS"

    # Plain members cannot invite
    response = await _invite(client, group_id, member, type="username", invitee_username="zed")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_invalid_invitee(client: AsyncClient, register, create_group):
    owner = await register("uid-owner")
    group_id = await create_group(owner)

    response = await _invite(
        client, group_id, owner, type="phone_contact", invitee_phone_number="555-1234"
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INVITEE"


@pytest.mark.asyncio
async def test_expired_invitation_is_marked_and_rejected(
    client: AsyncClient, db_session, register, create_group
):
    owner = await register("uid-owner")
    friend = await register("uid-friend")
    group_id = await create_group(owner)
    response = await _invite(client, group_id, owner, invitee_id="uid-friend")
    invitation_id = UUID(response.json()["id"])

    invitation = await db_session.get(Invitation, invitation_id)
    invitation.expires_at = utc_now() - timedelta(minutes=1)
    db_session.add(invitation)
    await db_session.commit()

    response = await client.post(f"/invitations/{invitation_id}/accept", headers=friend)
    assert response.status_code == 410
    assert response.json()["error"]["code"] == "INVITATION_EXPIRED"

    await db_session.refresh(invitation)
    assert invitation.status == InvitationStatus.expired
    assert invitation.processed_at is not None


@pytest.mark.asyncio
async def test_wrong_user_cannot_accept(client: AsyncClient, register, create_group):
    owner = await register("uid-owner")
    await register("uid-friend")
    stranger = await register("uid-stranger")
    group_id = await create_group(owner)
    response = await _invite(client, group_id, owner, invitee_id="uid-friend")

    response = await client.post(
        f"/invitations/{response.json()['id']}/accept", headers=stranger
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "NOT_INVITEE"


@pytest.mark.asyncio
async def test_revoke_invitation(client: AsyncClient, register, create_group):
    owner = await register("uid-owner")
    friend = await register("uid-friend")
    group_id = await create_group(owner)
    response = await _invite(client, group_id, owner, invitee_id="uid-friend")
    invitation_id = response.json()["id"]

    response = await client.post(f"/invitations/{invitation_id}/revoke", headers=friend)
    assert response.status_code == 403

    response = await client.post(f"/invitations/{invitation_id}/revoke", headers=owner)
    assert response.status_code == 200
    assert response.json()["status"] == "revoked"

    response = await client.post(f"/invitations/{invitation_id}/accept", headers=friend)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_username_invitation_resolution(client: AsyncClient, register, create_group):
    owner = await register("uid-owner")
    ivy = await register("uid-ivy", "ivy")
    group_id = await create_group(owner)
    response = await _invite(client, group_id, owner, type="username", invitee_username="ivy")
    invitation_id = response.json()["id"]

    # Not addressed to anyone until the matcher reports back
    response = await client.post(f"/invitations/{invitation_id}/accept", headers=ivy)
    assert response.status_code == 403

    response = await client.post(
        f"/invitations/{invitation_id}/resolution",
        json={"invitee_id": "uid-ivy"},
        headers={"X-Service-API-Key": "wrong"},
    )
    assert response.status_code == 401

    response = await client.post(
        f"/invitations/{invitation_id}/resolution",
        json={"invitee_id": "uid-ivy"},
        headers={"X-Service-API-Key": ApplicationConfig.SERVICE_API_KEY},
    )
    assert response.status_code == 200
    assert response.json()["is_username_resolved"] is True
    assert response.json()["status"] == "pending"

    response = await client.post(f"/invitations/{invitation_id}/accept", headers=ivy)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_invite_link_flow(client: AsyncClient, register, create_group):
    owner = await register("uid-owner")
    joiner = await register("uid-joiner")
    late = await register("uid-late")
    group_id = await create_group(owner)

    response = await client.post(
        f"/groups/{group_id}/invite-links", json={"max_uses": 1}, headers=owner
    )
    assert response.status_code == 201
    link = response.json()
    assert link["url"].endswith(link["code"])

    response = await client.post(f"/invitations/links/{link['code']}/join", headers=joiner)
    assert response.status_code == 201
    invitation = response.json()
    assert invitation["originating_link_id"] == link["id"]
    assert invitation["invitee_id"] == "uid-joiner"

    response = await client.post(f"/invitations/{invitation['id']}/accept", headers=joiner)
    assert response.status_code == 200

    response = await client.post(f"/invitations/links/{link['code']}/join", headers=late)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVITE_LINK_EXHAUSTED"

    response = await client.delete(f"/invitations/links/{link['id']}", headers=owner)
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    response = await client.post(f"/invitations/links/{link['code']}/join", headers=late)
    assert response.json()["error"]["code"] == "INVITE_LINK_INACTIVE"


@pytest.mark.asyncio
async def test_unknown_invite_link(client: AsyncClient, register):
    joiner = await register("uid-joiner")

    response = await client.post("/invitations/links/nope/join", headers=joiner)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_last_member_leaving_clears_invitations_and_links(
    client: AsyncClient, db_session, register, create_group
):
    owner = await register("uid-owner")
    invitee = await register("uid-invitee")
    joiner = await register("uid-joiner")
    group_id = await create_group(owner)

    response = await _invite(client, group_id, owner, invitee_id="uid-invitee")
    assert response.status_code == 201
    invitation_id = response.json()["id"]

    response = await client.post(f"/groups/{group_id}/invite-links", json={}, headers=owner)
    link = response.json()
    response = await client.post(f"/invitations/links/{link['code']}/join", headers=joiner)
    assert response.status_code == 201

    response = await client.post(f"/groups/{group_id}/leave", headers=owner)
    assert response.status_code == 200
    assert response.json() == {"status": "left", "group_deleted": True}

    assert (await db_session.exec(select(Group))).all() == []
    assert (await db_session.exec(select(Invitation))).all() == []
    assert (await db_session.exec(select(InviteLink))).all() == []

    response = await client.get("/invitations", headers=invitee)
    assert response.status_code == 200
    assert response.json() == []

    response = await client.post(f"/invitations/{invitation_id}/accept", headers=invitee)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "INVITATION_NOT_FOUND"

    response = await client.post(f"/invitations/links/{link['code']}/join", headers=joiner)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "INVITE_LINK_NOT_FOUND"


@pytest.mark.asyncio
async def test_stored_invitation_loads_enum_members(
    client: AsyncClient, db_session, register, create_group
):
    owner = await register("uid-owner")
    group_id = await create_group(owner)

    response = await _invite(client, group_id, owner, type="email", invitee_email="Ivy@Example.com")
    assert response.status_code == 201

    invitation = (await db_session.exec(select(Invitation))).one()
    assert invitation.type is InvitationType.email
    assert invitation.status is InvitationStatus.pending
    assert invitation.invitee_identifier == "ivy@example.com"
    assert invitation.needs_resolution is True
