"""
GroupMember Entity

Links a user to a group with a role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import GroupRole


class GroupMember(SQLModel, table=True):
    """
    GroupMember entity.

    Business Rules:
    - (group_id, user_id) must be unique
    - Role defaults to member and changes only through promote/demote
      by a higher-role actor
    - display_name / photo_url are denormalized from the user profile
    """

    __tablename__ = "group_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    group_id: UUID = Field(foreign_key="groups.id", nullable=False, index=True)
    user_id: str = Field(foreign_key="users.user_id", nullable=False, index=True)

    role: GroupRole = Field(default=GroupRole.member, nullable=False)

    display_name: Optional[str] = Field(default=None, max_length=100)
    photo_url: Optional[str] = None

    # Timestamps
    joined_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_group_member_group_user", "group_id", "user_id", unique=True),
        Index("idx_group_member_role", "role"),
    )
