"""
Status Preset Use Cases

Create, list and delete the statuses a user saves for reuse.
"""

import logging
from typing import List, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import DEFAULT_STATUS, UserStatusPreset
from src.shared.result import Error, Result, Return

from .dtos import StatusPresetResponse
from .validation import check_custom_text

logger = logging.getLogger(__name__)

MAX_PRESETS_PER_USER = 20


class CreateStatusPresetUseCase:
    """
    Business Rules:
    - Preset name and status text must be non-blank
    - At most MAX_PRESETS_PER_USER presets per user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        preset_name: str,
        status_text: str,
        icon_key: Optional[str] = None,
    ) -> Result[StatusPresetResponse]:
        if not preset_name or not preset_name.strip():
            return Return.err(Error("PRESET_NAME_REQUIRED", "Preset name is required"))
        error = check_custom_text(status_text, required=True)
        if error:
            return Return.err(error)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("PROFILE_NOT_FOUND", "Create a profile first"))

            existing = await self.uow.status_presets.get_by_user_ids([user_id])
            if len(existing) >= MAX_PRESETS_PER_USER:
                return Return.err(
                    Error(
                        "PRESET_LIMIT_REACHED",
                        f"You can save at most {MAX_PRESETS_PER_USER} presets",
                    )
                )

            preset = UserStatusPreset(
                user_id=user_id,
                preset_name=preset_name.strip(),
                status_text=status_text.strip(),
                icon_key=icon_key or "",
            )
            await self.uow.status_presets.create(preset)
            await self.uow.commit()

            logger.info(f"User {user_id} saved status preset {preset.id}")
            return Return.ok(StatusPresetResponse.from_entity(preset))


class ListStatusPresetsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[List[StatusPresetResponse]]:
        async with self.uow:
            presets = await self.uow.status_presets.get_by_user_ids([user_id])
            return Return.ok([StatusPresetResponse.from_entity(p) for p in presets])


class DeleteStatusPresetUseCase:
    """
    Business Rules:
    - Only the owner can delete a preset
    - A global status pointing at the deleted preset falls back to the default
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, preset_id: UUID) -> Result[dict]:
        async with self.uow:
            preset = await self.uow.status_presets.get_by_id(preset_id)
            if preset is None or preset.user_id != user_id:
                return Return.err(
                    Error("PRESET_NOT_FOUND", "Saved status preset not found")
                )

            user = await self.uow.users.get_by_id(user_id)
            if user is not None and user.active_status_id == str(preset.id):
                user.active_status_id = DEFAULT_STATUS.value
                user.global_custom_status_text = None
                user.global_custom_status_icon_key = None
                user.global_status_expires_at = None
                await self.uow.users.update(user)

            await self.uow.status_presets.delete(preset)
            await self.uow.commit()

            logger.info(f"User {user_id} deleted status preset {preset_id}")
            return Return.ok({"status": "deleted"})
