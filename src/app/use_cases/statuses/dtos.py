"""
Status Use Case DTOs (Data Transfer Objects)

Response classes for status domain.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import UserStatusPreset
from src.domain.status_resolution import ResolvedStatus


# ============================================================================
# Response DTOs
# ============================================================================


class StatusResponse(BaseModel):
    """Effective status as it should be rendered"""

    text: str
    icon_key: str
    color: str
    preset_id: str
    source_type: str
    scope: str
    expires_at: Optional[str] = None

    @classmethod
    def from_resolved(cls, resolved: ResolvedStatus) -> "StatusResponse":
        return cls(
            text=resolved.text,
            icon_key=resolved.icon_key,
            color=resolved.color,
            preset_id=resolved.preset.value,
            source_type=resolved.source_type.value,
            scope=resolved.scope,
            expires_at=resolved.expires_at.isoformat() if resolved.expires_at else None,
        )


class StatusPresetResponse(BaseModel):
    """Saved status preset"""

    id: str
    preset_name: str
    status_text: str
    icon_key: str

    @classmethod
    def from_entity(cls, preset: UserStatusPreset) -> "StatusPresetResponse":
        return cls(
            id=str(preset.id),
            preset_name=preset.preset_name,
            status_text=preset.status_text,
            icon_key=preset.icon_key,
        )


class ClearGroupStatusResponse(BaseModel):
    """Response for clear group status use case"""

    status: str
