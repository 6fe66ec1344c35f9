"""
Status Entities

Group-scoped status overrides and user-saved status presets.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import CustomStatusType, DEFAULT_STATUS


class GroupStatusDetail(SQLModel, table=True):
    """
    GroupStatusDetail entity - a user's status inside one group.

    Business Rules:
    - At most one per (user_id, group_id)
    - Ignored while the user's global override flag is set
    - Ignored once expires_at has passed
    - active_status_reference_id holds an app preset id for app_preset and a
      saved preset id for user_generated_preset
    """

    __tablename__ = "group_status_details"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: str = Field(foreign_key="users.user_id", nullable=False, index=True)
    group_id: UUID = Field(foreign_key="groups.id", nullable=False, index=True)

    type: CustomStatusType = Field(default=CustomStatusType.app_preset)
    active_status_reference_id: Optional[str] = Field(
        default=DEFAULT_STATUS.value, max_length=64
    )
    custom_text: Optional[str] = Field(default=None, max_length=140)
    custom_icon_key: Optional[str] = Field(default=None, max_length=50)

    # Timestamps
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_updated_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_group_status_user_group", "user_id", "group_id", unique=True),
        Index("idx_group_status_expires_at", "expires_at"),
    )


class UserStatusPreset(SQLModel, table=True):
    """
    UserStatusPreset entity - a status saved by a user for reuse.
    """

    __tablename__ = "user_status_presets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: str = Field(foreign_key="users.user_id", nullable=False, index=True)

    preset_name: str = Field(max_length=50)
    status_text: str = Field(max_length=140)
    icon_key: str = Field(default="", max_length=50)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_updated_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )
