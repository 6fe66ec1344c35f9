"""
Invitation Entity

Offer of group membership to an identified or matchable recipient.
"""

import re
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from ..exceptions import (
    InvalidInviteeError,
    InvitationAlreadyProcessedError,
    InvitationException,
    InvitationExpiredError,
)
from .enums import GroupRole, InvitationStatus, InvitationType

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")


class Invitation(SQLModel, table=True):
    """
    Invitation entity.

    Business Rules:
    - Created pending by an admin/owner of the group
    - Leaves pending exactly once, into accepted, declined, expired or revoked
    - processed_at is set iff status has left pending
    - Accepting, declining or revoking after expires_at is rejected
    - type decides which invitee field is authoritative; email, username and
      phone invitations are matched to an account by an external process
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    type: InvitationType = Field(default=InvitationType.direct_user_id)

    group_id: UUID = Field(foreign_key="groups.id", nullable=False, index=True)
    group_name: Optional[str] = Field(default=None, max_length=100)

    inviter_id: str = Field(nullable=False, index=True, max_length=128)
    inviter_name: Optional[str] = Field(default=None, max_length=100)

    invitee_id: Optional[str] = Field(default=None, index=True, max_length=128)
    invitee_email: Optional[str] = Field(default=None, max_length=255)
    invitee_username: Optional[str] = Field(default=None, max_length=50)
    invitee_phone_number: Optional[str] = Field(default=None, max_length=16)

    status: InvitationStatus = Field(default=InvitationStatus.pending)
    role_to_assign: GroupRole = Field(default=GroupRole.member)

    is_username_resolved: Optional[bool] = None
    resolution_error: Optional[str] = Field(default=None, max_length=255)

    originating_link_id: Optional[UUID] = Field(default=None, foreign_key="invite_links.id")

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    processed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_status", "status"),
        Index("idx_invitation_group_status", "group_id", "status"),
        Index("idx_invitation_expires_at", "expires_at"),
    )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def accept(self, now: datetime) -> None:
        self._respond(InvitationStatus.accepted, now)

    def decline(self, now: datetime) -> None:
        self._respond(InvitationStatus.declined, now)

    def revoke(self, now: datetime) -> None:
        self._respond(InvitationStatus.revoked, now)

    def expire(self, now: datetime) -> None:
        self._ensure_pending()
        if not self.is_expired(now):
            raise InvitationException(
                "Invitation has not reached its expiry", "INVITATION_NOT_EXPIRED"
            )
        self._finish(InvitationStatus.expired, now)

    def expire_if_due(self, now: datetime) -> bool:
        """Mark a pending invitation expired when its time has passed."""
        if self.status is InvitationStatus.pending and self.is_expired(now):
            self._finish(InvitationStatus.expired, now)
            return True
        return False

    def _respond(self, status: InvitationStatus, now: datetime) -> None:
        self._ensure_pending()
        if self.is_expired(now):
            raise InvitationExpiredError()
        self._finish(status, now)

    def _ensure_pending(self) -> None:
        if self.status.is_terminal:
            raise InvitationAlreadyProcessedError(self.status.value)

    def _finish(self, status: InvitationStatus, now: datetime) -> None:
        self.status = status
        self.processed_at = now

    # ------------------------------------------------------------------
    # Invitee identity
    # ------------------------------------------------------------------

    @property
    def invitee_identifier(self) -> Optional[str]:
        return getattr(self, self.type.invitee_field)

    @property
    def needs_resolution(self) -> bool:
        return self.type.requires_resolution and self.invitee_id is None

    def is_addressed_to(self, user_id: str) -> bool:
        return self.invitee_id is not None and self.invitee_id == user_id

    def record_resolution(
        self, invitee_id: Optional[str] = None, error: Optional[str] = None
    ) -> None:
        """
        Store the outcome of external invitee matching. Never changes status.
        """
        if invitee_id:
            self.invitee_id = invitee_id
            self.is_username_resolved = True
            self.resolution_error = None
        else:
            self.is_username_resolved = False
            self.resolution_error = error or "No matching account"


def validate_invitee(
    invitation_type: InvitationType,
    invitee_id: Optional[str] = None,
    invitee_email: Optional[str] = None,
    invitee_username: Optional[str] = None,
    invitee_phone_number: Optional[str] = None,
) -> str:
    """
    Check the field that invitation_type makes authoritative and return it
    stripped. Raises InvalidInviteeError when it is missing or malformed.
    """
    values = {
        "invitee_id": invitee_id,
        "invitee_email": invitee_email,
        "invitee_username": invitee_username,
        "invitee_phone_number": invitee_phone_number,
    }
    field_name = invitation_type.invitee_field
    value = (values[field_name] or "").strip()
    if not value:
        raise InvalidInviteeError(
            f"{field_name} is required for {invitation_type.value} invitations"
        )
    if invitation_type is InvitationType.phone_contact and not E164_PATTERN.match(value):
        raise InvalidInviteeError("Phone number must be in E.164 format")
    if invitation_type is InvitationType.email and "@" not in value:
        raise InvalidInviteeError("Invalid email address")
    return value
