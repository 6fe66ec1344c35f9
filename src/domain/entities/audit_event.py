"""
AuditEvent Entity

Immutable log of membership, invitation and status actions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utc_now


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of group actions.

    Business Rules:
    - Immutable (never updated or deleted)
    - group_id nullable for profile-level events
    - Metadata stores the before/after values of the action
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    group_id: Optional[UUID] = Field(default=None, index=True)
    user_id: Optional[str] = Field(default=None, index=True, max_length=128)

    action: str = Field(max_length=100)  # e.g., "member_removed", "invitation_accepted"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_group_action", "group_id", "action"),
    )
