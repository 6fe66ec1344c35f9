"""
Group Entity

A friend group whose members share availability status.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now


class Group(SQLModel, table=True):
    """
    Group entity.

    Business Rules:
    - Creator becomes the owner
    - member_count is maintained by membership use cases
    - Name 1-100 characters, description up to 1000
    """

    __tablename__ = "groups"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)

    is_public: bool = Field(default=True)
    profile_image_url: Optional[str] = None
    banner_image_url: Optional[str] = None

    creator_id: str = Field(foreign_key="users.user_id", max_length=128)
    member_count: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_group_is_public", "is_public"),)

    @property
    def image_url(self) -> Optional[str]:
        return self.profile_image_url or self.banner_image_url
