"""
Record Invitation Resolution Use Case

Entry point for the external process that matches email, username and phone
invitations to accounts.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import InvitationStatus
from src.shared.result import Error, Result, Return

from .dtos import InvitationResponse

logger = logging.getLogger(__name__)


class RecordInvitationResolutionUseCase:
    """
    Business Rules:
    - Only pending invitations of a resolvable type are updated
    - Exactly one of invitee_id or error must be given
    - Status is never changed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        invitation_id: UUID,
        invitee_id: Optional[str] = None,
        error: Optional[str] = None,
    ) -> Result[InvitationResponse]:
        invitee_id = (invitee_id or "").strip() or None
        error = (error or "").strip() or None
        if bool(invitee_id) == bool(error):
            return Return.err(
                Error(
                    "INVALID_RESOLUTION",
                    "Provide either the matched invitee_id or a resolution error",
                )
            )

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if not invitation.type.requires_resolution:
                return Return.err(
                    Error(
                        "RESOLUTION_NOT_APPLICABLE",
                        "Direct invitations already name their invitee",
                    )
                )

            status = invitation.status
            if status is not InvitationStatus.pending:
                return Return.err(
                    Error(
                        "INVITATION_ALREADY_PROCESSED",
                        f"This invitation has already been processed ({status.value})",
                    )
                )

            invitation.record_resolution(invitee_id=invitee_id, error=error)
            await self.uow.invitations.update(invitation)
            await self.uow.commit()

            if invitee_id:
                logger.info(f"Invitation {invitation_id} resolved to {invitee_id}")
            else:
                logger.info(f"Invitation {invitation_id} could not be resolved: {error}")
            return Return.ok(InvitationResponse.from_entity(invitation))
