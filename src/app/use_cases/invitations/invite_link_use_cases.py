"""
Invite Link Use Cases

Reusable links that turn into a pending invitation for whoever opens them.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, Invitation, InvitationType, InviteLink
from src.shared.result import Error, Result, Return

from .dtos import InvitationResponse, InviteLinkResponse
from .send_invitation_use_case import DEFAULT_INVITATION_TTL_DAYS
from .validation import check_can_invite, parse_role

logger = logging.getLogger(__name__)

LINK_CODE_BYTES = 12


class CreateInviteLinkUseCase:
    """
    Business Rules:
    - Same permissions as sending an invitation
    - max_uses, when given, is at least 1
    - expires_in_days, when given, is at least 1
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        group_id: UUID,
        role_to_assign: Optional[str] = None,
        max_uses: Optional[int] = None,
        expires_in_days: Optional[int] = None,
        base_url: str = "",
    ) -> Result[InviteLinkResponse]:
        role, error = parse_role(role_to_assign)
        if error:
            return Return.err(error)

        if max_uses is not None and max_uses < 1:
            return Return.err(Error("INVALID_MAX_USES", "max_uses must be at least 1"))
        if expires_in_days is not None and expires_in_days < 1:
            return Return.err(
                Error("INVALID_EXPIRY", "expires_in_days must be at least 1")
            )

        now = utc_now()

        async with self.uow:
            membership = await self.uow.members.get_by_group_and_user(group_id, user_id)
            error = check_can_invite(membership, role)
            if error:
                return Return.err(error)

            group = await self.uow.groups.get_by_id(group_id)
            if group is None:
                return Return.err(Error("GROUP_NOT_FOUND", "Group not found"))

            link = InviteLink(
                code=secrets.token_urlsafe(LINK_CODE_BYTES),
                group_id=group_id,
                group_name=group.name,
                created_by=user_id,
                max_uses=max_uses,
                role_to_assign=role,
                created_at=now,
                expires_at=now + timedelta(days=expires_in_days) if expires_in_days else None,
            )
            await self.uow.invite_links.create(link)

            audit = AuditEvent(
                group_id=group_id,
                user_id=user_id,
                action="invite_link_created",
                event_metadata={"link_id": str(link.id), "role_to_assign": role.value},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Invite link {link.id} created for group {group_id} by {user_id}")
            return Return.ok(InviteLinkResponse.from_entity(link, base_url))


class RevokeInviteLinkUseCase:
    """Deactivates a link; allowed for its creator or admins/owners."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: str, link_id: UUID, base_url: str = ""
    ) -> Result[InviteLinkResponse]:
        async with self.uow:
            link = await self.uow.invite_links.get_by_id(link_id)
            if link is None:
                return Return.err(Error("INVITE_LINK_NOT_FOUND", "Invite link not found"))

            if link.created_by != user_id:
                membership = await self.uow.members.get_by_group_and_user(
                    link.group_id, user_id
                )
                if membership is None or not membership.role.can_manage_settings():
                    return Return.err(
                        Error(
                            "INSUFFICIENT_ROLE",
                            "Only the creator or group admins can revoke this link",
                        )
                    )

            if not link.is_active:
                return Return.err(
                    Error("INVITE_LINK_INACTIVE", "Invite link is no longer active")
                )

            link.is_active = False
            await self.uow.invite_links.update(link)

            audit = AuditEvent(
                group_id=link.group_id,
                user_id=user_id,
                action="invite_link_revoked",
                event_metadata={"link_id": str(link.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Invite link {link_id} revoked by {user_id}")
            return Return.ok(InviteLinkResponse.from_entity(link, base_url))


class ProcessInviteLinkUseCase:
    """
    Opens an invite link on behalf of the caller.

    Business Rules:
    - Link must be active, unexpired and below max_uses
    - The link's group must still exist
    - Existing members are rejected
    - An existing pending invitation for the caller is returned unchanged
      and does not consume a use
    - Otherwise a pending direct invitation is created with the link's role
      and the link's uses is incremented
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: str, code: str, ttl_days: int = DEFAULT_INVITATION_TTL_DAYS
    ) -> Result[InvitationResponse]:
        now = utc_now()

        async with self.uow:
            link = await self.uow.invite_links.get_by_code((code or "").strip())
            if link is None:
                return Return.err(Error("INVITE_LINK_NOT_FOUND", "Invite link not found"))
            if not link.is_active:
                return Return.err(
                    Error("INVITE_LINK_INACTIVE", "Invite link is no longer active")
                )
            if link.is_expired(now):
                return Return.err(Error("INVITE_LINK_EXPIRED", "Invite link has expired"))
            if link.is_exhausted():
                return Return.err(
                    Error("INVITE_LINK_EXHAUSTED", "Invite link has reached its use limit")
                )

            group = await self.uow.groups.get_by_id(link.group_id)
            if group is None:
                return Return.err(Error("GROUP_NOT_FOUND", "Group no longer exists"))

            existing_member = await self.uow.members.get_by_group_and_user(
                link.group_id, user_id
            )
            if existing_member is not None:
                return Return.err(
                    Error("ALREADY_MEMBER", "You are already a member of this group")
                )

            pending = await self.uow.invitations.get_pending_by_group_and_identifier(
                link.group_id, InvitationType.direct_user_id, user_id
            )
            if pending is not None:
                if not pending.expire_if_due(now):
                    return Return.ok(InvitationResponse.from_entity(pending))
                await self.uow.invitations.update(pending)

            invitation = Invitation(
                type=InvitationType.direct_user_id,
                group_id=link.group_id,
                group_name=group.name,
                inviter_id=link.created_by,
                invitee_id=user_id,
                role_to_assign=link.role_to_assign,
                originating_link_id=link.id,
                created_at=now,
                expires_at=now + timedelta(days=ttl_days),
            )
            await self.uow.invitations.create(invitation)

            link.uses += 1
            await self.uow.invite_links.update(link)

            audit = AuditEvent(
                group_id=link.group_id,
                user_id=user_id,
                action="invite_link_used",
                event_metadata={
                    "link_id": str(link.id),
                    "invitation_id": str(invitation.id),
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Invite link {link.id} used by {user_id} ({link.uses} uses)")
            return Return.ok(InvitationResponse.from_entity(invitation))
