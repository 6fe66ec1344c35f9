"""
Accept / Decline Invitation Use Cases

The resolved invitee answers a pending invitation.
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, GroupMember, Invitation
from src.domain.exceptions import InvitationException, InvitationExpiredError
from src.shared.result import Error, Result, Return

from .dtos import RespondInvitationResponse

logger = logging.getLogger(__name__)


async def load_invitation_for_invitee(uow: UnitOfWork, invitation_id: UUID, user_id: str):
    invitation = await uow.invitations.get_by_id(invitation_id)
    if invitation is None:
        return None, Error("INVITATION_NOT_FOUND", "Invitation not found")
    if not invitation.is_addressed_to(user_id):
        return None, Error("NOT_INVITEE", "This invitation is not addressed to you")
    return invitation, None


async def persist_expiry(uow: UnitOfWork, invitation: Invitation, now) -> None:
    invitation.expire(now)
    await uow.invitations.update(invitation)
    await uow.commit()
    logger.warning(f"Invitation {invitation.id} acted on after expiry, marked expired")


class AcceptInvitationUseCase:
    """
    Use case for accepting a group invitation.

    Business Rules:
    - Only the resolved invitee may accept
    - Expired invitations are persisted as expired and rejected
    - Processed invitations are rejected
    - Accepting creates the membership with role_to_assign and bumps member_count
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: str, invitation_id: UUID
    ) -> Result[RespondInvitationResponse]:
        now = utc_now()

        async with self.uow:
            invitation, error = await load_invitation_for_invitee(
                self.uow, invitation_id, user_id
            )
            if error:
                return Return.err(error)

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("PROFILE_NOT_FOUND", "Create a profile first"))

            group = await self.uow.groups.get_by_id(invitation.group_id)
            if group is None:
                return Return.err(Error("GROUP_NOT_FOUND", "Group no longer exists"))

            try:
                invitation.accept(now)
            except InvitationExpiredError as e:
                await persist_expiry(self.uow, invitation, now)
                return Return.err(Error(e.code, e.message))
            except InvitationException as e:
                logger.warning(f"Accept rejected for invitation {invitation_id}: {e.code}")
                return Return.err(Error(e.code, e.message))

            await self.uow.invitations.update(invitation)

            role = invitation.role_to_assign
            existing = await self.uow.members.get_by_group_and_user(group.id, user_id)
            if existing is None:
                member = GroupMember(
                    group_id=group.id,
                    user_id=user_id,
                    role=role,
                    display_name=user.name_for_display,
                    photo_url=user.profile_image_url,
                    joined_at=now,
                )
                await self.uow.members.create(member)
                group.member_count += 1
                await self.uow.groups.update(group)
            else:
                role = existing.role

            audit = AuditEvent(
                group_id=group.id,
                user_id=user_id,
                action="invitation_accepted",
                event_metadata={"invitation_id": str(invitation.id), "role": role.value},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"User {user_id} joined group {group.id} via invitation {invitation.id}")
            return Return.ok(
                RespondInvitationResponse(
                    status=invitation.status.value,
                    invitation_id=str(invitation.id),
                    group_id=str(group.id),
                    role=role.value,
                )
            )


class DeclineInvitationUseCase:
    """Same invitee, group and lifecycle checks as accepting; no membership is created."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: str, invitation_id: UUID
    ) -> Result[RespondInvitationResponse]:
        now = utc_now()

        async with self.uow:
            invitation, error = await load_invitation_for_invitee(
                self.uow, invitation_id, user_id
            )
            if error:
                return Return.err(error)

            group = await self.uow.groups.get_by_id(invitation.group_id)
            if group is None:
                return Return.err(Error("GROUP_NOT_FOUND", "Group no longer exists"))

            try:
                invitation.decline(now)
            except InvitationExpiredError as e:
                await persist_expiry(self.uow, invitation, now)
                return Return.err(Error(e.code, e.message))
            except InvitationException as e:
                logger.warning(f"Decline rejected for invitation {invitation_id}: {e.code}")
                return Return.err(Error(e.code, e.message))

            await self.uow.invitations.update(invitation)

            audit = AuditEvent(
                group_id=invitation.group_id,
                user_id=user_id,
                action="invitation_declined",
                event_metadata={"invitation_id": str(invitation.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"User {user_id} declined invitation {invitation.id}")
            return Return.ok(
                RespondInvitationResponse(
                    status=invitation.status.value,
                    invitation_id=str(invitation.id),
                    group_id=str(invitation.group_id),
                )
            )
