"""
Domain Enums

All enumeration types used across domain entities. Values are the lowercase
strings stored in documents; parsing stored values never raises.
"""

from enum import Enum
from typing import List, NamedTuple, Optional


class GroupRole(str, Enum):
    """Ordinal permission level held by a group member"""

    member = "member"
    moderator = "moderator"
    admin = "admin"
    owner = "owner"

    @property
    def level(self) -> int:
        return _ROLE_LEVELS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    def is_at_least(self, role: "GroupRole") -> bool:
        return self.level >= role.level

    def can_manage_settings(self) -> bool:
        return self.is_at_least(GroupRole.admin)

    def can_moderate_content(self) -> bool:
        return self.is_at_least(GroupRole.moderator)

    def can_remove_member(self, target: "GroupRole") -> bool:
        """
        Owners may remove anyone but another owner. Admins and moderators may
        remove strictly lower roles. Members may remove no one.
        """
        if self is GroupRole.owner:
            return target is not GroupRole.owner
        if self in (GroupRole.admin, GroupRole.moderator):
            return target.level < self.level
        return False

    def can_promote_to(self, target: "GroupRole") -> bool:
        if self is GroupRole.owner:
            return target is not GroupRole.owner
        if self is GroupRole.admin:
            return target.level < GroupRole.admin.level
        return False

    def can_demote_from(self, current: "GroupRole") -> bool:
        # Owners leave the role only through ownership transfer
        if current is GroupRole.owner:
            return False
        if self is GroupRole.owner:
            return True
        if self is GroupRole.admin:
            return current.level < GroupRole.admin.level
        return False

    @classmethod
    def from_string(cls, raw: Optional[str]) -> "GroupRole":
        """Case-insensitive parse; anything unrecognised becomes member."""
        if raw:
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.member


_ROLE_LEVELS = {
    GroupRole.member: 0,
    GroupRole.moderator: 1,
    GroupRole.admin: 2,
    GroupRole.owner: 3,
}


class InvitationStatus(str, Enum):
    """Invitation status; everything except pending is terminal"""

    pending = "pending"
    accepted = "accepted"
    declined = "declined"
    expired = "expired"
    revoked = "revoked"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.pending


class InvitationType(str, Enum):
    """How the invitee is identified"""

    direct_user_id = "direct_user_id"
    email = "email"
    username = "username"
    phone_contact = "phone_contact"

    @property
    def invitee_field(self) -> str:
        return _INVITEE_FIELDS[self]

    @property
    def requires_resolution(self) -> bool:
        return self is not InvitationType.direct_user_id


_INVITEE_FIELDS = {
    InvitationType.direct_user_id: "invitee_id",
    InvitationType.email: "invitee_email",
    InvitationType.username: "invitee_username",
    InvitationType.phone_contact: "invitee_phone_number",
}


class PresetDisplay(NamedTuple):
    display_name: str
    icon_key: str
    color: str


class AppPresetStatus(str, Enum):
    """
    App-defined availability presets.

    ``showing_custom`` is a signal rather than content: it tells the renderer
    to read the companion custom text and icon fields.
    """

    online = "online"
    busy = "busy"
    away = "away"
    showing_custom = "showing_custom"
    offline = "offline"
    unknown = "unknown"

    @property
    def display_name(self) -> str:
        return _PRESET_DISPLAY[self].display_name

    @property
    def icon_key(self) -> str:
        return _PRESET_DISPLAY[self].icon_key

    @property
    def color(self) -> str:
        return _PRESET_DISPLAY[self].color

    @classmethod
    def from_id(cls, raw: Optional[str]) -> "AppPresetStatus":
        """Case-insensitive parse; anything unrecognised becomes unknown."""
        if raw:
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.unknown

    @classmethod
    def is_known_id(cls, raw: Optional[str]) -> bool:
        return cls.from_id(raw) is not cls.unknown

    @classmethod
    def selectable(cls) -> List["AppPresetStatus"]:
        return [cls.online, cls.busy, cls.away, cls.showing_custom, cls.offline]


_PRESET_DISPLAY = {
    AppPresetStatus.online: PresetDisplay("Online", "circle", "#4CAF50"),
    AppPresetStatus.busy: PresetDisplay("Busy", "block", "#F44336"),
    AppPresetStatus.away: PresetDisplay("Away", "waving_hand", "#FF9800"),
    AppPresetStatus.showing_custom: PresetDisplay(
        "Custom", "chat_bubble_outline", "#2196F3"
    ),
    AppPresetStatus.offline: PresetDisplay("Offline", "person_outline", "#888888"),
    AppPresetStatus.unknown: PresetDisplay("Unknown", "help_outline", "#CCCCCC"),
}

DEFAULT_STATUS = AppPresetStatus.online


class CustomStatusType(str, Enum):
    """How a group-scoped status is defined"""

    app_preset = "app_preset"
    user_generated_preset = "user_generated_preset"
    ad_hoc_custom = "ad_hoc_custom"
