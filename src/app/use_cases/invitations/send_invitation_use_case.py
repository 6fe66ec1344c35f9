"""
Send Invitation Use Case

Offers membership of a group to a user id, email, username or phone number.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import (
    AuditEvent,
    Invitation,
    InvitationType,
    validate_invitee,
)
from src.domain.exceptions import DomainException
from src.shared.result import Error, Result, Return

from .dtos import InvitationResponse
from .validation import check_can_invite, parse_role

logger = logging.getLogger(__name__)

DEFAULT_INVITATION_TTL_DAYS = 7


class SendInvitationUseCase:
    """
    Use case for inviting someone into a group.

    Business Rules:
    - Inviter must be an admin or owner of the group
    - Offered role must be member or one the inviter can promote to
    - The invitee field matching the invitation type is required;
      phone numbers must be E.164
    - At most one pending invitation per group and invitee identifier
      (expired leftovers are marked expired and do not block)
    - Direct invitations to existing members are rejected
    - Invitations expire ttl_days after creation
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        inviter_id: str,
        group_id: UUID,
        invitation_type: str,
        invitee_id: Optional[str] = None,
        invitee_email: Optional[str] = None,
        invitee_username: Optional[str] = None,
        invitee_phone_number: Optional[str] = None,
        role_to_assign: Optional[str] = None,
        ttl_days: int = DEFAULT_INVITATION_TTL_DAYS,
    ) -> Result[InvitationResponse]:
        try:
            kind = InvitationType((invitation_type or "").strip().lower())
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_INVITATION_TYPE",
                    f"Invalid invitation type: {invitation_type}",
                )
            )

        role, error = parse_role(role_to_assign)
        if error:
            return Return.err(error)

        try:
            identifier = validate_invitee(
                kind,
                invitee_id=invitee_id,
                invitee_email=invitee_email,
                invitee_username=invitee_username,
                invitee_phone_number=invitee_phone_number,
            )
        except DomainException as e:
            return Return.err(Error(e.code, e.message))

        if kind is InvitationType.email:
            identifier = identifier.lower()

        now = utc_now()

        async with self.uow:
            membership = await self.uow.members.get_by_group_and_user(group_id, inviter_id)
            error = check_can_invite(membership, role)
            if error:
                return Return.err(error)

            group = await self.uow.groups.get_by_id(group_id)
            if group is None:
                return Return.err(Error("GROUP_NOT_FOUND", "Group not found"))

            if kind is InvitationType.direct_user_id:
                if identifier == inviter_id:
                    return Return.err(
                        Error("CANNOT_INVITE_SELF", "You cannot invite yourself")
                    )
                existing_member = await self.uow.members.get_by_group_and_user(
                    group_id, identifier
                )
                if existing_member is not None:
                    return Return.err(
                        Error("ALREADY_MEMBER", "User is already a member of this group")
                    )

            pending = await self.uow.invitations.get_pending_by_group_and_identifier(
                group_id, kind, identifier
            )
            if pending is not None:
                if pending.expire_if_due(now):
                    await self.uow.invitations.update(pending)
                else:
                    return Return.err(
                        Error(
                            "INVITE_ALREADY_EXISTS",
                            "A pending invitation already exists for this invitee",
                        )
                    )

            inviter = await self.uow.users.get_by_id(inviter_id)

            invitation = Invitation(
                type=kind,
                group_id=group_id,
                group_name=group.name,
                inviter_id=inviter_id,
                inviter_name=inviter.name_for_display if inviter else membership.display_name,
                role_to_assign=role,
                created_at=now,
                expires_at=now + timedelta(days=ttl_days),
            )
            setattr(invitation, kind.invitee_field, identifier)
            await self.uow.invitations.create(invitation)

            audit = AuditEvent(
                group_id=group_id,
                user_id=inviter_id,
                action="invitation_sent",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "type": kind.value,
                    "role_to_assign": role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(
                f"Invitation {invitation.id} ({kind.value}) sent to group {group_id} "
                f"by {inviter_id}"
            )
            return Return.ok(InvitationResponse.from_entity(invitation))
