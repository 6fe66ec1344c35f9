"""
Clear Group Status Use Case

Removes the caller's group override so the global status shows again.
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.shared.result import Error, Result, Return

from .dtos import ClearGroupStatusResponse

logger = logging.getLogger(__name__)


class ClearGroupStatusUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: str, group_id: UUID
    ) -> Result[ClearGroupStatusResponse]:
        async with self.uow:
            detail = await self.uow.group_statuses.get_by_user_and_group(user_id, group_id)
            if detail is None:
                return Return.err(
                    Error("GROUP_STATUS_NOT_FOUND", "No status is set for this group")
                )

            await self.uow.group_statuses.delete(detail)
            await self.uow.commit()

            logger.info(f"User {user_id} cleared status in group {group_id}")
            return Return.ok(ClearGroupStatusResponse(status="cleared"))
