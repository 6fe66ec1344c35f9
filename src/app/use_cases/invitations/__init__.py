"""
Invitation Use Cases

Direct invitations, managed invite links and invitee resolution.
"""

from .dtos import InvitationResponse, InviteLinkResponse, RespondInvitationResponse
from .invite_link_use_cases import (
    CreateInviteLinkUseCase,
    ProcessInviteLinkUseCase,
    RevokeInviteLinkUseCase,
)
from .list_invitations_use_case import ListGroupInvitationsUseCase, ListInvitationsUseCase
from .record_resolution_use_case import RecordInvitationResolutionUseCase
from .respond_invitation_use_case import AcceptInvitationUseCase, DeclineInvitationUseCase
from .revoke_invitation_use_case import RevokeInvitationUseCase
from .send_invitation_use_case import DEFAULT_INVITATION_TTL_DAYS, SendInvitationUseCase

__all__ = [
    "SendInvitationUseCase",
    "AcceptInvitationUseCase",
    "DeclineInvitationUseCase",
    "RevokeInvitationUseCase",
    "ListInvitationsUseCase",
    "ListGroupInvitationsUseCase",
    "RecordInvitationResolutionUseCase",
    "CreateInviteLinkUseCase",
    "RevokeInviteLinkUseCase",
    "ProcessInviteLinkUseCase",
    "InvitationResponse",
    "InviteLinkResponse",
    "RespondInvitationResponse",
    "DEFAULT_INVITATION_TTL_DAYS",
]
