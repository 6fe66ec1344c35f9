"""
Status Resolution

Decides what a user's status looks like in a given scope. Everything here is
pure: callers pass the profile, the optional group override, the user's saved
presets and the current time, and get back a ResolvedStatus. Nothing raises;
unrecognised ids render as the Unknown preset.

Precedence:
    1. overwrite_all_group_statuses_with_global -> global, group ignored
    2. group detail present and not expired     -> group
    3. otherwise                                -> global
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, Iterable, Mapping, Optional, Union

from .entities.enums import AppPresetStatus, CustomStatusType, DEFAULT_STATUS
from .entities.status import GroupStatusDetail, UserStatusPreset
from .entities.user import User

SCOPE_GLOBAL = "global"
SCOPE_GROUP = "group"


@dataclass(frozen=True)
class AppPresetSelection:
    preset_id: Optional[str]
    custom_text: Optional[str] = None
    custom_icon_key: Optional[str] = None


@dataclass(frozen=True)
class UserPresetSelection:
    preset_id: Optional[str]
    custom_text: Optional[str] = None
    custom_icon_key: Optional[str] = None


@dataclass(frozen=True)
class AdHocStatus:
    text: Optional[str]
    icon_key: Optional[str] = None


StatusRepresentation = Union[AppPresetSelection, UserPresetSelection, AdHocStatus]


@dataclass(frozen=True)
class ResolvedStatus:
    text: str
    icon_key: str
    color: str
    preset: AppPresetStatus
    source_type: CustomStatusType
    scope: str = SCOPE_GLOBAL
    expires_at: Optional[datetime] = None


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _preset_status(preset: AppPresetStatus, scope: str) -> ResolvedStatus:
    return ResolvedStatus(
        text=preset.display_name,
        icon_key=preset.icon_key,
        color=preset.color,
        preset=preset,
        source_type=CustomStatusType.app_preset,
        scope=scope,
    )


def _custom_status(
    text: str, icon_key: Optional[str], source_type: CustomStatusType, scope: str
) -> ResolvedStatus:
    marker = AppPresetStatus.showing_custom
    return ResolvedStatus(
        text=text.strip(),
        icon_key=icon_key or marker.icon_key,
        color=marker.color,
        preset=marker,
        source_type=source_type,
        scope=scope,
    )


def _saved_preset_status(
    saved: UserStatusPreset,
    custom_text: Optional[str],
    custom_icon_key: Optional[str],
    scope: str,
) -> ResolvedStatus:
    if _has_text(custom_text):
        text = custom_text
    elif _has_text(saved.status_text):
        text = saved.status_text
    else:
        text = saved.preset_name
    return _custom_status(
        text,
        custom_icon_key or saved.icon_key or None,
        CustomStatusType.user_generated_preset,
        scope,
    )


def render(
    representation: StatusRepresentation,
    presets: Mapping[str, UserStatusPreset],
    scope: str = SCOPE_GLOBAL,
) -> ResolvedStatus:
    """Render one scope's status variant into display fields."""
    if isinstance(representation, AdHocStatus):
        if _has_text(representation.text):
            return _custom_status(
                representation.text,
                representation.icon_key,
                CustomStatusType.ad_hoc_custom,
                scope,
            )
        return _preset_status(AppPresetStatus.showing_custom, scope)

    if isinstance(representation, UserPresetSelection):
        saved = presets.get(representation.preset_id or "")
        if saved is not None:
            return _saved_preset_status(
                saved, representation.custom_text, representation.custom_icon_key, scope
            )
        if _has_text(representation.custom_text):
            return _custom_status(
                representation.custom_text,
                representation.custom_icon_key,
                CustomStatusType.user_generated_preset,
                scope,
            )
        return _preset_status(AppPresetStatus.unknown, scope)

    preset = AppPresetStatus.from_id(representation.preset_id)
    if preset not in (AppPresetStatus.showing_custom, AppPresetStatus.unknown):
        return _preset_status(preset, scope)

    # Global status may point at a saved preset id
    if preset is AppPresetStatus.unknown and representation.preset_id in presets:
        return _saved_preset_status(
            presets[representation.preset_id],
            representation.custom_text,
            representation.custom_icon_key,
            scope,
        )
    if _has_text(representation.custom_text):
        return _custom_status(
            representation.custom_text,
            representation.custom_icon_key,
            CustomStatusType.app_preset,
            scope,
        )
    return _preset_status(preset, scope)


def global_representation(user: User, now: datetime) -> StatusRepresentation:
    if is_expired(user.global_status_expires_at, now):
        return AppPresetSelection(DEFAULT_STATUS.value)
    return AppPresetSelection(
        user.active_status_id,
        user.global_custom_status_text,
        user.global_custom_status_icon_key,
    )


def group_representation(detail: GroupStatusDetail) -> StatusRepresentation:
    status_type = detail.type
    if status_type is CustomStatusType.ad_hoc_custom:
        return AdHocStatus(detail.custom_text, detail.custom_icon_key)
    if status_type is CustomStatusType.user_generated_preset:
        return UserPresetSelection(
            detail.active_status_reference_id, detail.custom_text, detail.custom_icon_key
        )
    return AppPresetSelection(
        detail.active_status_reference_id, detail.custom_text, detail.custom_icon_key
    )


def is_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    return expires_at is not None and now >= expires_at


def is_group_detail_active(detail: Optional[GroupStatusDetail], now: datetime) -> bool:
    return detail is not None and not is_expired(detail.expires_at, now)


def index_presets(presets: Optional[Iterable[UserStatusPreset]]) -> Dict[str, UserStatusPreset]:
    return {str(preset.id): preset for preset in presets or ()}


def resolve_effective_status(
    user: User,
    group_detail: Optional[GroupStatusDetail],
    presets: Optional[Iterable[UserStatusPreset]],
    now: datetime,
) -> ResolvedStatus:
    """Apply the scope precedence and render the winning scope."""
    indexed = index_presets(presets)

    if not user.overwrite_all_group_statuses_with_global and is_group_detail_active(
        group_detail, now
    ):
        resolved = render(group_representation(group_detail), indexed, SCOPE_GROUP)
        return _with_expiry(resolved, group_detail.expires_at)

    resolved = render(global_representation(user, now), indexed, SCOPE_GLOBAL)
    if is_expired(user.global_status_expires_at, now):
        return resolved
    return _with_expiry(resolved, user.global_status_expires_at)


def _with_expiry(resolved: ResolvedStatus, expires_at: Optional[datetime]) -> ResolvedStatus:
    if expires_at is None:
        return resolved
    return replace(resolved, expires_at=expires_at)
