"""
Update Global Status Use Case

Sets the caller's global status and the override-all-groups flag.
"""

import logging
from datetime import datetime
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import as_naive_utc, utc_now
from src.domain.entities import AppPresetStatus
from src.domain.status_resolution import resolve_effective_status
from src.shared.result import Error, Result, Return

from .dtos import StatusResponse
from .validation import (
    check_app_preset,
    check_custom_text,
    check_expiry,
    find_saved_preset,
)

logger = logging.getLogger(__name__)


class UpdateGlobalStatusUseCase:
    """
    Use case for updating a user's global status.

    Business Rules:
    - status_id is a selectable app preset id or one of the caller's saved presets
    - showing_custom requires non-blank custom text
    - Expiry, when given, must be in the future
    - overwrite_all_group_statuses is left unchanged when not given
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        status_id: str,
        custom_text: Optional[str] = None,
        custom_icon_key: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        overwrite_all_group_statuses: Optional[bool] = None,
    ) -> Result[StatusResponse]:
        now = utc_now()
        expires_at = as_naive_utc(expires_at)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("PROFILE_NOT_FOUND", "Create a profile first"))

            presets = await self.uow.status_presets.get_by_user_ids([user_id])
            saved = find_saved_preset(presets, status_id)

            if saved is None:
                error = check_app_preset(status_id)
                if error:
                    return Return.err(error)
                status_id = AppPresetStatus.from_id(status_id).value

            error = check_custom_text(
                custom_text,
                required=status_id == AppPresetStatus.showing_custom.value,
            ) or check_expiry(expires_at, now)
            if error:
                return Return.err(error)

            user.active_status_id = status_id
            user.global_custom_status_text = (custom_text or "").strip() or None
            user.global_custom_status_icon_key = custom_icon_key or None
            user.global_status_expires_at = expires_at
            if overwrite_all_group_statuses is not None:
                user.overwrite_all_group_statuses_with_global = overwrite_all_group_statuses

            await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"User {user_id} set global status to {status_id}")

            resolved = resolve_effective_status(user, None, presets, now)
            return Return.ok(StatusResponse.from_resolved(resolved))
