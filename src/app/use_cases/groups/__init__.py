"""
Group Use Cases

Group lifecycle, settings and membership management.
"""

from .change_member_role_use_case import ChangeMemberRoleUseCase
from .create_group_use_case import CreateGroupUseCase
from .delete_group_use_case import DeleteGroupUseCase
from .dtos import (
    AuditEventResponse,
    ChangeRoleResponse,
    DeleteGroupResponse,
    GroupResponse,
    LeaveGroupResponse,
    MemberResponse,
    RemoveMemberResponse,
)
from .get_group_use_case import GetGroupActivityUseCase, GetGroupUseCase
from .leave_group_use_case import LeaveGroupUseCase
from .list_group_members_use_case import ListGroupMembersUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .update_group_settings_use_case import UpdateGroupSettingsUseCase

__all__ = [
    "CreateGroupUseCase",
    "GetGroupUseCase",
    "GetGroupActivityUseCase",
    "UpdateGroupSettingsUseCase",
    "ChangeMemberRoleUseCase",
    "RemoveMemberUseCase",
    "LeaveGroupUseCase",
    "DeleteGroupUseCase",
    "ListGroupMembersUseCase",
    "GroupResponse",
    "MemberResponse",
    "ChangeRoleResponse",
    "RemoveMemberResponse",
    "LeaveGroupResponse",
    "DeleteGroupResponse",
    "AuditEventResponse",
]
