"""
Get Effective Status Use Case

Resolves how a user's status renders globally or inside a group.
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.status_resolution import resolve_effective_status
from src.shared.result import Error, Result, Return

from .dtos import StatusResponse


class GetEffectiveStatusUseCase:
    """
    Use case for reading a user's effective status.

    Business Rules:
    - Without a group the global status is returned
    - With a group, both viewer and target must be members of it
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, viewer_id: str, user_id: str, group_id: Optional[UUID] = None
    ) -> Result[StatusResponse]:
        now = utc_now()

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            detail = None
            if group_id is not None:
                viewer_membership = await self.uow.members.get_by_group_and_user(
                    group_id, viewer_id
                )
                if viewer_membership is None:
                    return Return.err(
                        Error("NOT_A_MEMBER", "You are not a member of this group")
                    )
                target_membership = await self.uow.members.get_by_group_and_user(
                    group_id, user_id
                )
                if target_membership is None:
                    return Return.err(
                        Error(
                            "MEMBERSHIP_NOT_FOUND",
                            "User is not a member of this group",
                        )
                    )
                detail = await self.uow.group_statuses.get_by_user_and_group(
                    user_id, group_id
                )

            presets = await self.uow.status_presets.get_by_user_ids([user_id])
            resolved = resolve_effective_status(user, detail, presets, now)
            return Return.ok(StatusResponse.from_resolved(resolved))
