"""
Input checks shared by the status use cases.
"""

from datetime import datetime
from typing import List, Optional

from src.shared.result import Error
from src.domain.entities import AppPresetStatus, UserStatusPreset

MAX_STATUS_TEXT_LENGTH = 140


def check_custom_text(custom_text: Optional[str], required: bool) -> Optional[Error]:
    if required and not (custom_text and custom_text.strip()):
        return Error("CUSTOM_TEXT_REQUIRED", "Custom status text is required")
    if custom_text and len(custom_text) > MAX_STATUS_TEXT_LENGTH:
        return Error(
            "CUSTOM_TEXT_TOO_LONG",
            f"Status text must be {MAX_STATUS_TEXT_LENGTH} characters or less",
        )
    return None


def check_app_preset(status_id: Optional[str]) -> Optional[Error]:
    preset = AppPresetStatus.from_id(status_id)
    if preset not in AppPresetStatus.selectable():
        return Error(
            "INVALID_STATUS",
            f"Unknown status: {status_id}. Must be one of: "
            + ", ".join(p.value for p in AppPresetStatus.selectable()),
        )
    return None


def check_expiry(expires_at: Optional[datetime], now: datetime) -> Optional[Error]:
    if expires_at is not None and expires_at <= now:
        return Error("INVALID_EXPIRY", "Status expiry must be in the future")
    return None


def find_saved_preset(
    presets: List[UserStatusPreset], preset_id: Optional[str]
) -> Optional[UserStatusPreset]:
    for preset in presets:
        if str(preset.id) == preset_id:
            return preset
    return None
