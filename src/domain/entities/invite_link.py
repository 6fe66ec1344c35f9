"""
InviteLink Entity

Reusable, admin-managed link that mints invitations for whoever opens it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import GroupRole


class InviteLink(SQLModel, table=True):
    """
    InviteLink entity.

    Business Rules:
    - Created by admin/owner of the group
    - Usable while active, before expires_at and below max_uses
    - Each use creates a pending direct invitation for the caller
    """

    __tablename__ = "invite_links"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    code: str = Field(unique=True, index=True, max_length=64)

    group_id: UUID = Field(foreign_key="groups.id", nullable=False, index=True)
    group_name: Optional[str] = Field(default=None, max_length=100)

    created_by: str = Field(nullable=False, max_length=128)

    uses: int = Field(default=0)
    max_uses: Optional[int] = None
    role_to_assign: GroupRole = Field(default=GroupRole.member)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_invite_link_group_active", "group_id", "is_active"),)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def is_exhausted(self) -> bool:
        return self.max_uses is not None and self.uses >= self.max_uses

    def is_usable(self, now: datetime) -> bool:
        return self.is_active and not self.is_expired(now) and not self.is_exhausted()
