"""
Revoke Invitation Use Case
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent
from src.domain.exceptions import InvitationException, InvitationExpiredError
from src.shared.result import Error, Result, Return

from .dtos import InvitationResponse

logger = logging.getLogger(__name__)


class RevokeInvitationUseCase:
    """
    Use case for withdrawing a pending invitation.

    Business Rules:
    - Allowed for the inviter, or any member who can manage group settings
    - Expired invitations are persisted as expired and rejected
    - Processed invitations are rejected
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, invitation_id: UUID) -> Result[InvitationResponse]:
        now = utc_now()

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.inviter_id != user_id:
                membership = await self.uow.members.get_by_group_and_user(
                    invitation.group_id, user_id
                )
                if membership is None or not membership.role.can_manage_settings():
                    return Return.err(
                        Error(
                            "INSUFFICIENT_ROLE",
                            "Only the inviter or group admins can revoke this invitation",
                        )
                    )

            try:
                invitation.revoke(now)
            except InvitationExpiredError as e:
                invitation.expire(now)
                await self.uow.invitations.update(invitation)
                await self.uow.commit()
                logger.warning(f"Revoke of expired invitation {invitation_id}, marked expired")
                return Return.err(Error(e.code, e.message))
            except InvitationException as e:
                return Return.err(Error(e.code, e.message))

            await self.uow.invitations.update(invitation)

            audit = AuditEvent(
                group_id=invitation.group_id,
                user_id=user_id,
                action="invitation_revoked",
                event_metadata={"invitation_id": str(invitation.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Invitation {invitation_id} revoked by {user_id}")
            return Return.ok(InvitationResponse.from_entity(invitation))
