from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.params import parse_uuid
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.groups import (
    AuditEventResponse,
    ChangeMemberRoleUseCase,
    ChangeRoleResponse,
    CreateGroupUseCase,
    DeleteGroupResponse,
    DeleteGroupUseCase,
    GetGroupActivityUseCase,
    GetGroupUseCase,
    GroupResponse,
    LeaveGroupResponse,
    LeaveGroupUseCase,
    ListGroupMembersUseCase,
    MemberResponse,
    RemoveMemberResponse,
    RemoveMemberUseCase,
    UpdateGroupSettingsUseCase,
)
from src.app.use_cases.invitations import (
    CreateInviteLinkUseCase,
    InvitationResponse,
    InviteLinkResponse,
    ListGroupInvitationsUseCase,
    SendInvitationUseCase,
)
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/groups", tags=["Groups"])

FORBIDDEN_CODES = ("NOT_A_MEMBER", "INSUFFICIENT_ROLE")


class GroupSettingsRequest(BaseModel):
    """Group create/update HTTP request payload"""

    name: str = Field(..., description="Group name, 1-100 characters")
    description: Optional[str] = None
    is_public: bool = True
    profile_image_url: Optional[str] = None
    banner_image_url: Optional[str] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=GroupResponse)
async def create_group(
    request: GroupSettingsRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Group

    The caller becomes the owner.

    Raises:
        - 400 Bad Request: INVALID_GROUP_NAME, INVALID_GROUP_DESCRIPTION
        - 404 Not Found: PROFILE_NOT_FOUND
    """
    use_case = CreateGroupUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"],
        request.name,
        description=request.description,
        is_public=request.is_public,
        profile_image_url=request.profile_image_url,
        banner_image_url=request.banner_image_url,
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_GROUP_NAME", "INVALID_GROUP_DESCRIPTION"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "PROFILE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get("/{group_id}", status_code=status.HTTP_200_OK, response_model=GroupResponse)
async def get_group(
    group_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = GetGroupUseCase(uow)
    result = await use_case.execute(current_user["user_id"], group_uuid)

    if result.is_err():
        error = result.error
        if error.code == "GROUP_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.put("/{group_id}", status_code=status.HTTP_200_OK, response_model=GroupResponse)
async def update_group_settings(
    group_id: str,
    request: GroupSettingsRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Group Settings

    Raises:
        - 400 Bad Request: Invalid name or description
        - 403 Forbidden: NOT_A_MEMBER, INSUFFICIENT_ROLE
        - 404 Not Found: GROUP_NOT_FOUND
    """
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = UpdateGroupSettingsUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"],
        group_uuid,
        request.name,
        description=request.description,
        is_public=request.is_public,
        profile_image_url=request.profile_image_url,
        banner_image_url=request.banner_image_url,
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_GROUP_NAME", "INVALID_GROUP_DESCRIPTION"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in FORBIDDEN_CODES:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "GROUP_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get(
    "/{group_id}/members",
    status_code=status.HTTP_200_OK,
    response_model=List[MemberResponse],
)
async def list_group_members(
    group_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Members with the status each one currently shows in this group."""
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = ListGroupMembersUseCase(uow)
    result = await use_case.execute(current_user["user_id"], group_uuid)

    if result.is_err():
        error = result.error
        if error.code == "NOT_A_MEMBER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class ChangeRoleRequest(BaseModel):
    """Change role HTTP request payload"""

    role: str = Field(..., description="New role (member/moderator/admin)")


@router.put(
    "/{group_id}/members/{user_id}/role",
    status_code=status.HTTP_200_OK,
    response_model=ChangeRoleResponse,
)
async def change_member_role(
    group_id: str,
    user_id: str,
    request: ChangeRoleRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Promote or Demote Member

    Raises:
        - 400 Bad Request: INVALID_ROLE, CANNOT_CHANGE_OWN_ROLE
        - 403 Forbidden: NOT_A_MEMBER, INSUFFICIENT_ROLE
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
        - 409 Conflict: ROLE_UNCHANGED
    """
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = ChangeMemberRoleUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"], group_uuid, user_id, request.role
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_ROLE", "CANNOT_CHANGE_OWN_ROLE"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in FORBIDDEN_CODES:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "MEMBERSHIP_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ROLE_UNCHANGED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{group_id}/members/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveMemberResponse,
)
async def remove_member(
    group_id: str,
    user_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member

    Raises:
        - 400 Bad Request: USE_LEAVE_INSTEAD
        - 403 Forbidden: NOT_A_MEMBER, INSUFFICIENT_ROLE
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
    """
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = RemoveMemberUseCase(uow)
    result = await use_case.execute(current_user["user_id"], group_uuid, user_id)

    if result.is_err():
        error = result.error
        if error.code == "USE_LEAVE_INSTEAD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in FORBIDDEN_CODES:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "MEMBERSHIP_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/{group_id}/leave",
    status_code=status.HTTP_200_OK,
    response_model=LeaveGroupResponse,
)
async def leave_group(
    group_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Leave Group

    Raises:
        - 403 Forbidden: NOT_A_MEMBER
        - 404 Not Found: GROUP_NOT_FOUND
        - 409 Conflict: OWNERSHIP_TRANSFER_REQUIRED
    """
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = LeaveGroupUseCase(uow)
    result = await use_case.execute(current_user["user_id"], group_uuid)

    if result.is_err():
        error = result.error
        if error.code == "NOT_A_MEMBER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "GROUP_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "OWNERSHIP_TRANSFER_REQUIRED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteGroupResponse,
)
async def delete_group(
    group_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Group

    Owner only. Removes memberships, group statuses, invitations and invite
    links along with the group.

    Raises:
        - 403 Forbidden: NOT_A_MEMBER, INSUFFICIENT_ROLE
        - 404 Not Found: GROUP_NOT_FOUND
    """
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = DeleteGroupUseCase(uow)
    result = await use_case.execute(current_user["user_id"], group_uuid)

    if result.is_err():
        error = result.error
        if error.code in FORBIDDEN_CODES:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "GROUP_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get(
    "/{group_id}/activity",
    status_code=status.HTTP_200_OK,
    response_model=List[AuditEventResponse],
)
async def get_group_activity(
    group_id: str,
    limit: int = Query(50, ge=1, le=200),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = GetGroupActivityUseCase(uow)
    result = await use_case.execute(current_user["user_id"], group_uuid, limit)

    if result.is_err():
        error = result.error
        if error.code in FORBIDDEN_CODES:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class SendInvitationRequest(BaseModel):
    """
    Send invitation HTTP request payload

    Only the field matching `type` is read.
    """

    type: str = Field(..., description="direct_user_id, email, username or phone_contact")
    invitee_id: Optional[str] = None
    invitee_email: Optional[str] = None
    invitee_username: Optional[str] = None
    invitee_phone_number: Optional[str] = None
    role: Optional[str] = Field(None, description="Role granted on accept, default member")


@router.post(
    "/{group_id}/invitations",
    status_code=status.HTTP_201_CREATED,
    response_model=InvitationResponse,
)
async def send_invitation(
    group_id: str,
    request: SendInvitationRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Invite to Group

    Raises:
        - 400 Bad Request: INVALID_INVITATION_TYPE, INVALID_ROLE, INVALID_INVITEE,
                           CANNOT_INVITE_SELF
        - 403 Forbidden: NOT_A_MEMBER, INSUFFICIENT_ROLE
        - 404 Not Found: GROUP_NOT_FOUND
        - 409 Conflict: INVITE_ALREADY_EXISTS, ALREADY_MEMBER
    """
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = SendInvitationUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"],
        group_uuid,
        request.type,
        invitee_id=request.invitee_id,
        invitee_email=request.invitee_email,
        invitee_username=request.invitee_username,
        invitee_phone_number=request.invitee_phone_number,
        role_to_assign=request.role,
        ttl_days=ApplicationConfig.INVITATION_TTL_DAYS,
    )

    if result.is_err():
        error = result.error
        if error.code in (
            "INVALID_INVITATION_TYPE",
            "INVALID_ROLE",
            "INVALID_INVITEE",
            "CANNOT_INVITE_SELF",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in FORBIDDEN_CODES:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "GROUP_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("INVITE_ALREADY_EXISTS", "ALREADY_MEMBER"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/{group_id}/invitations",
    status_code=status.HTTP_200_OK,
    response_model=List[InvitationResponse],
)
async def list_group_invitations(
    group_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = ListGroupInvitationsUseCase(uow)
    result = await use_case.execute(current_user["user_id"], group_uuid)

    if result.is_err():
        error = result.error
        if error.code in FORBIDDEN_CODES:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class CreateInviteLinkRequest(BaseModel):
    """Create invite link HTTP request payload"""

    role: Optional[str] = Field(None, description="Role granted on accept, default member")
    max_uses: Optional[int] = Field(None, description="Unlimited when omitted")
    expires_in_days: Optional[int] = Field(None, description="Never expires when omitted")


@router.post(
    "/{group_id}/invite-links",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteLinkResponse,
)
async def create_invite_link(
    group_id: str,
    request: CreateInviteLinkRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Invite Link

    Raises:
        - 400 Bad Request: INVALID_ROLE, INVALID_MAX_USES, INVALID_EXPIRY
        - 403 Forbidden: NOT_A_MEMBER, INSUFFICIENT_ROLE
        - 404 Not Found: GROUP_NOT_FOUND
    """
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = CreateInviteLinkUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"],
        group_uuid,
        role_to_assign=request.role,
        max_uses=request.max_uses,
        expires_in_days=request.expires_in_days,
        base_url=ApplicationConfig.INVITE_LINK_BASE_URL,
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_ROLE", "INVALID_MAX_USES", "INVALID_EXPIRY"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in FORBIDDEN_CODES:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "GROUP_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
