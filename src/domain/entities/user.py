"""
User Entity

Profile document for a person authenticated by the external identity provider.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import DEFAULT_STATUS


class User(SQLModel, table=True):
    """
    User entity - profile plus global status.

    Business Rules:
    - user_id is the identity provider UID, never generated here
    - username must be unique across all users
    - phone_number is E.164 and used for contact matching
    - Global status fields are authoritative in every group when
      overwrite_all_group_statuses_with_global is set
    """

    __tablename__ = "users"

    user_id: str = Field(primary_key=True, max_length=128)
    username: str = Field(unique=True, index=True, max_length=50)
    email: Optional[str] = Field(default=None, index=True, max_length=255)
    phone_number: Optional[str] = Field(default=None, index=True, max_length=16)

    display_name: Optional[str] = Field(default=None, max_length=100)
    profile_image_url: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)

    # Global status
    active_status_id: Optional[str] = Field(default=DEFAULT_STATUS.value)
    global_custom_status_text: Optional[str] = Field(default=None, max_length=140)
    global_custom_status_icon_key: Optional[str] = Field(default=None, max_length=50)
    global_status_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    overwrite_all_group_statuses_with_global: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_status_expires_at", "global_status_expires_at"),)

    @property
    def name_for_display(self) -> str:
        return self.display_name or self.username
