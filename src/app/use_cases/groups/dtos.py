"""
Group Use Case DTOs (Data Transfer Objects)

All Response classes for group domain.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from src.app.use_cases.statuses.dtos import StatusResponse
from src.domain.entities import AuditEvent, Group, GroupMember


# ============================================================================
# Response DTOs
# ============================================================================


class GroupResponse(BaseModel):
    """Group details as seen by the caller"""

    id: str
    name: str
    description: Optional[str] = None
    is_public: bool
    profile_image_url: Optional[str] = None
    banner_image_url: Optional[str] = None
    creator_id: str
    member_count: int
    role: Optional[str] = None

    @classmethod
    def from_entity(cls, group: Group, role: Optional[str] = None) -> "GroupResponse":
        return cls(
            id=str(group.id),
            name=group.name,
            description=group.description,
            is_public=group.is_public,
            profile_image_url=group.profile_image_url,
            banner_image_url=group.banner_image_url,
            creator_id=group.creator_id,
            member_count=group.member_count,
            role=role,
        )


class MemberResponse(BaseModel):
    """Group member with the status they show in this group"""

    user_id: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    role: str
    role_display_name: str
    joined_at: str
    status: Optional[StatusResponse] = None

    @classmethod
    def from_entity(
        cls, member: GroupMember, status: Optional[StatusResponse] = None
    ) -> "MemberResponse":
        return cls(
            user_id=member.user_id,
            display_name=member.display_name,
            photo_url=member.photo_url,
            role=member.role.value,
            role_display_name=member.role.display_name,
            joined_at=member.joined_at.isoformat(),
            status=status,
        )


class ChangeRoleResponse(BaseModel):
    """Response for change member role use case"""

    status: str
    user_id: str
    old_role: str
    new_role: str


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    status: str


class LeaveGroupResponse(BaseModel):
    """Response for leave group use case"""

    status: str
    group_deleted: bool


class DeleteGroupResponse(BaseModel):
    """Response for delete group use case"""

    status: str
    group_id: str
    members_removed: int
    invitations_removed: int
    invite_links_removed: int


class AuditEventResponse(BaseModel):
    """Single entry of a group's activity log"""

    action: str
    user_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: str

    @classmethod
    def from_entity(cls, event: AuditEvent) -> "AuditEventResponse":
        return cls(
            action=event.action,
            user_id=event.user_id,
            metadata=event.event_metadata,
            created_at=event.created_at.isoformat(),
        )
