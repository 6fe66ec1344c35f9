"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AppPresetStatus,
    CustomStatusType,
    DEFAULT_STATUS,
    GroupRole,
    InvitationStatus,
    InvitationType,
)

# Export all entities
from .user import User
from .group import Group
from .group_member import GroupMember
from .invite_link import InviteLink
from .invitation import Invitation, validate_invitee
from .status import GroupStatusDetail, UserStatusPreset
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "AppPresetStatus",
    "CustomStatusType",
    "DEFAULT_STATUS",
    "GroupRole",
    "InvitationStatus",
    "InvitationType",
    # Entities
    "User",
    "Group",
    "GroupMember",
    "InviteLink",
    "Invitation",
    "GroupStatusDetail",
    "UserStatusPreset",
    "AuditEvent",
    # Helpers
    "validate_invitee",
]
