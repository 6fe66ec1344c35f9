"""
List Invitations Use Cases
"""

import logging
from typing import List
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.shared.result import Error, Result, Return

from .dtos import InvitationResponse

logger = logging.getLogger(__name__)


class ListInvitationsUseCase:
    """
    Pending invitations addressed to the caller.

    Invitations found past their expiry are marked expired and left out.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[List[InvitationResponse]]:
        now = utc_now()

        async with self.uow:
            invitations = await self.uow.invitations.get_pending_for_invitee(user_id)

            pending = []
            expired = 0
            for invitation in invitations:
                if invitation.expire_if_due(now):
                    await self.uow.invitations.update(invitation)
                    expired += 1
                else:
                    pending.append(InvitationResponse.from_entity(invitation))

            if expired:
                await self.uow.commit()
                logger.info(f"Marked {expired} invitation(s) for {user_id} as expired")

            return Return.ok(pending)


class ListGroupInvitationsUseCase:
    """All invitations of a group, for members who can manage it."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, group_id: UUID) -> Result[List[InvitationResponse]]:
        now = utc_now()

        async with self.uow:
            membership = await self.uow.members.get_by_group_and_user(group_id, user_id)
            if membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this group")
                )
            if not membership.role.can_manage_settings():
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "Only admins and owners can view invitations")
                )

            invitations = await self.uow.invitations.get_by_group_id(group_id)

            changed = False
            for invitation in invitations:
                if invitation.expire_if_due(now):
                    await self.uow.invitations.update(invitation)
                    changed = True
            if changed:
                await self.uow.commit()

            return Return.ok([InvitationResponse.from_entity(i) for i in invitations])
