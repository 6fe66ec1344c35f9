"""
Invitation Use Case DTOs (Data Transfer Objects)

All Response classes for invitation domain.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Invitation, InviteLink


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


# ============================================================================
# Response DTOs
# ============================================================================


class InvitationResponse(BaseModel):
    """Invitation as returned to inviters and invitees"""

    id: str
    type: str
    group_id: str
    group_name: Optional[str] = None
    inviter_id: str
    inviter_name: Optional[str] = None
    invitee_id: Optional[str] = None
    invitee_email: Optional[str] = None
    invitee_username: Optional[str] = None
    invitee_phone_number: Optional[str] = None
    status: str
    role_to_assign: str
    is_username_resolved: Optional[bool] = None
    resolution_error: Optional[str] = None
    originating_link_id: Optional[str] = None
    created_at: str
    expires_at: Optional[str] = None
    processed_at: Optional[str] = None

    @classmethod
    def from_entity(cls, invitation: Invitation) -> "InvitationResponse":
        return cls(
            id=str(invitation.id),
            type=invitation.type.value,
            group_id=str(invitation.group_id),
            group_name=invitation.group_name,
            inviter_id=invitation.inviter_id,
            inviter_name=invitation.inviter_name,
            invitee_id=invitation.invitee_id,
            invitee_email=invitation.invitee_email,
            invitee_username=invitation.invitee_username,
            invitee_phone_number=invitation.invitee_phone_number,
            status=invitation.status.value,
            role_to_assign=invitation.role_to_assign.value,
            is_username_resolved=invitation.is_username_resolved,
            resolution_error=invitation.resolution_error,
            originating_link_id=(
                str(invitation.originating_link_id)
                if invitation.originating_link_id
                else None
            ),
            created_at=invitation.created_at.isoformat(),
            expires_at=_iso(invitation.expires_at),
            processed_at=_iso(invitation.processed_at),
        )


class RespondInvitationResponse(BaseModel):
    """Response for accept/decline invitation use cases"""

    status: str
    invitation_id: str
    group_id: str
    role: Optional[str] = None


class InviteLinkResponse(BaseModel):
    """Managed invite link"""

    id: str
    code: str
    url: str
    group_id: str
    group_name: Optional[str] = None
    created_by: str
    uses: int
    max_uses: Optional[int] = None
    role_to_assign: str
    is_active: bool
    created_at: str
    expires_at: Optional[str] = None

    @classmethod
    def from_entity(cls, link: InviteLink, base_url: str = "") -> "InviteLinkResponse":
        url = f"{base_url.rstrip('/')}/{link.code}" if base_url else link.code
        return cls(
            id=str(link.id),
            code=link.code,
            url=url,
            group_id=str(link.group_id),
            group_name=link.group_name,
            created_by=link.created_by,
            uses=link.uses,
            max_uses=link.max_uses,
            role_to_assign=link.role_to_assign.value,
            is_active=link.is_active,
            created_at=link.created_at.isoformat(),
            expires_at=_iso(link.expires_at),
        )
