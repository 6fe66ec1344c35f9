from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.params import parse_uuid
from src.api.utils.service_auth import verify_service_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invitations import (
    AcceptInvitationUseCase,
    DeclineInvitationUseCase,
    InvitationResponse,
    InviteLinkResponse,
    ListInvitationsUseCase,
    ProcessInviteLinkUseCase,
    RecordInvitationResolutionUseCase,
    RespondInvitationResponse,
    RevokeInvitationUseCase,
    RevokeInviteLinkUseCase,
)
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/invitations", tags=["Invitations"])


def _raise_for_invitation_error(error):
    if error.code in ("NOT_INVITEE", "INSUFFICIENT_ROLE"):
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code in ("INVITATION_NOT_FOUND", "GROUP_NOT_FOUND", "PROFILE_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code == "INVITATION_ALREADY_PROCESSED":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    elif error.code == "INVITATION_EXPIRED":
        raise ClientError(error, status_code=status.HTTP_410_GONE)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=List[InvitationResponse])
async def list_invitations(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Pending invitations addressed to the caller."""
    use_case = ListInvitationsUseCase(uow)
    result = await use_case.execute(current_user["user_id"])

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/{invitation_id}/accept",
    status_code=status.HTTP_200_OK,
    response_model=RespondInvitationResponse,
)
async def accept_invitation(
    invitation_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Invitation

    Raises:
        - 403 Forbidden: NOT_INVITEE
        - 404 Not Found: INVITATION_NOT_FOUND, GROUP_NOT_FOUND, PROFILE_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_PROCESSED
        - 410 Gone: INVITATION_EXPIRED
    """
    invitation_uuid = parse_uuid(invitation_id, "INVALID_INVITATION_ID", "invitation ID")

    use_case = AcceptInvitationUseCase(uow)
    result = await use_case.execute(current_user["user_id"], invitation_uuid)

    if result.is_err():
        _raise_for_invitation_error(result.error)

    return result.value


@router.post(
    "/{invitation_id}/decline",
    status_code=status.HTTP_200_OK,
    response_model=RespondInvitationResponse,
)
async def decline_invitation(
    invitation_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    invitation_uuid = parse_uuid(invitation_id, "INVALID_INVITATION_ID", "invitation ID")

    use_case = DeclineInvitationUseCase(uow)
    result = await use_case.execute(current_user["user_id"], invitation_uuid)

    if result.is_err():
        _raise_for_invitation_error(result.error)

    return result.value


@router.post(
    "/{invitation_id}/revoke",
    status_code=status.HTTP_200_OK,
    response_model=InvitationResponse,
)
async def revoke_invitation(
    invitation_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Invitation

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_PROCESSED
        - 410 Gone: INVITATION_EXPIRED
    """
    invitation_uuid = parse_uuid(invitation_id, "INVALID_INVITATION_ID", "invitation ID")

    use_case = RevokeInvitationUseCase(uow)
    result = await use_case.execute(current_user["user_id"], invitation_uuid)

    if result.is_err():
        _raise_for_invitation_error(result.error)

    return result.value


class RecordResolutionRequest(BaseModel):
    """
    Invitee resolution HTTP request payload

    Exactly one of invitee_id or error.
    """

    invitee_id: Optional[str] = None
    error: Optional[str] = None


@router.post(
    "/{invitation_id}/resolution",
    status_code=status.HTTP_200_OK,
    response_model=InvitationResponse,
    dependencies=[Depends(verify_service_api_key)],
)
async def record_invitation_resolution(
    invitation_id: str,
    request: RecordResolutionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Record Invitee Resolution (service-to-service)

    Called by the process that matches email, username and phone invitations
    to accounts. Requires X-Service-API-Key.
    """
    invitation_uuid = parse_uuid(invitation_id, "INVALID_INVITATION_ID", "invitation ID")

    use_case = RecordInvitationResolutionUseCase(uow)
    result = await use_case.execute(
        invitation_uuid, invitee_id=request.invitee_id, error=request.error
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_RESOLUTION", "RESOLUTION_NOT_APPLICABLE"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        _raise_for_invitation_error(error)

    return result.value


@router.post(
    "/links/{code}/join",
    status_code=status.HTTP_201_CREATED,
    response_model=InvitationResponse,
)
async def join_via_invite_link(
    code: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Use Invite Link

    Creates (or returns) a pending invitation for the caller, who then
    accepts it like any other invitation.

    Raises:
        - 404 Not Found: INVITE_LINK_NOT_FOUND, GROUP_NOT_FOUND
        - 409 Conflict: INVITE_LINK_INACTIVE, INVITE_LINK_EXHAUSTED, ALREADY_MEMBER
        - 410 Gone: INVITE_LINK_EXPIRED
    """
    use_case = ProcessInviteLinkUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"], code, ttl_days=ApplicationConfig.INVITATION_TTL_DAYS
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVITE_LINK_NOT_FOUND", "GROUP_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("INVITE_LINK_INACTIVE", "INVITE_LINK_EXHAUSTED", "ALREADY_MEMBER"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVITE_LINK_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value


@router.delete(
    "/links/{link_id}",
    status_code=status.HTTP_200_OK,
    response_model=InviteLinkResponse,
)
async def revoke_invite_link(
    link_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    link_uuid = parse_uuid(link_id, "INVALID_LINK_ID", "invite link ID")

    use_case = RevokeInviteLinkUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"], link_uuid, base_url=ApplicationConfig.INVITE_LINK_BASE_URL
    )

    if result.is_err():
        error = result.error
        if error.code == "INSUFFICIENT_ROLE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "INVITE_LINK_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "INVITE_LINK_INACTIVE":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
