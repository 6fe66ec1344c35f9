"""
Set Group Status Use Case

Creates or replaces the caller's status inside one group.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import as_naive_utc, utc_now
from src.domain.entities import AppPresetStatus, CustomStatusType, GroupStatusDetail
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


class SetGroupStatusUseCase:
    """
    Use case for setting a group-specific status.

    Business Rules:
    - Caller must be a member of the group
    - app_preset: reference_id is a selectable preset; showing_custom needs text
    - user_generated_preset: reference_id is one of the caller's saved presets
    - ad_hoc_custom: custom text is required
    - Response is the effective status in this group, which stays global while
      the caller's override flag is set
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        group_id: UUID,
        status_type: str,
        reference_id: Optional[str] = None,
        custom_text: Optional[str] = None,
        custom_icon_key: Optional[str] = None,
        expires_at: Optional[datetime] = None,
    ) -> Result[StatusResponse]:
        now = utc_now()
        expires_at = as_naive_utc(expires_at)

        try:
            custom_type = CustomStatusType(status_type)
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_STATUS_TYPE",
                    f"Invalid status type: {status_type}. Must be one of: "
                    + ", ".join(t.value for t in CustomStatusType),
                )
            )

        async with self.uow:
            membership = await self.uow.members.get_by_group_and_user(group_id, user_id)
            if membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this group")
                )

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("PROFILE_NOT_FOUND", "Create a profile first"))

            presets = await self.uow.status_presets.get_by_user_ids([user_id])

            if custom_type is CustomStatusType.app_preset:
                error = check_app_preset(reference_id)
                if error:
                    return Return.err(error)
                reference_id = AppPresetStatus.from_id(reference_id).value
                text_required = reference_id == AppPresetStatus.showing_custom.value
            elif custom_type is CustomStatusType.user_generated_preset:
                if find_saved_preset(presets, reference_id) is None:
                    return Return.err(
                        Error("PRESET_NOT_FOUND", "Saved status preset not found")
                    )
                text_required = False
            else:
                reference_id = None
                text_required = True

            error = check_custom_text(custom_text, required=text_required) or check_expiry(
                expires_at, now
            )
            if error:
                return Return.err(error)

            detail = await self.uow.group_statuses.get_by_user_and_group(user_id, group_id)
            is_new = detail is None
            if is_new:
                detail = GroupStatusDetail(user_id=user_id, group_id=group_id)

            detail.type = custom_type
            detail.active_status_reference_id = reference_id
            detail.custom_text = (custom_text or "").strip() or None
            detail.custom_icon_key = custom_icon_key or None
            detail.expires_at = expires_at
            detail.last_updated_at = now

            if is_new:
                await self.uow.group_statuses.create(detail)
            else:
                await self.uow.group_statuses.update(detail)
            await self.uow.commit()

            logger.info(
                f"User {user_id} set {custom_type.value} status in group {group_id}"
            )

            resolved = resolve_effective_status(user, detail, presets, now)
            return Return.ok(StatusResponse.from_resolved(resolved))
