from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.params import parse_uuid
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.statuses import (
    ClearGroupStatusResponse,
    ClearGroupStatusUseCase,
    CreateStatusPresetUseCase,
    DeleteStatusPresetUseCase,
    GetEffectiveStatusUseCase,
    ListStatusPresetsUseCase,
    SetGroupStatusUseCase,
    StatusPresetResponse,
    StatusResponse,
    UpdateGlobalStatusUseCase,
)
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/statuses", tags=["Statuses"])

VALIDATION_CODES = (
    "INVALID_STATUS",
    "INVALID_STATUS_TYPE",
    "INVALID_EXPIRY",
    "CUSTOM_TEXT_REQUIRED",
    "CUSTOM_TEXT_TOO_LONG",
)


class UpdateGlobalStatusRequest(BaseModel):
    """
    Global status HTTP request payload

    status_id is an app preset id (online, busy, away, showing_custom, offline)
    or the id of one of the caller's saved presets.
    """

    status_id: str
    custom_text: Optional[str] = None
    custom_icon_key: Optional[str] = None
    expires_at: Optional[datetime] = None
    overwrite_all_group_statuses: Optional[bool] = None


@router.put("/me", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def update_global_status(
    request: UpdateGlobalStatusRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Global Status

    Raises:
        - 400 Bad Request: INVALID_STATUS, INVALID_EXPIRY, CUSTOM_TEXT_*
        - 404 Not Found: PROFILE_NOT_FOUND
    """
    use_case = UpdateGlobalStatusUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"],
        request.status_id,
        custom_text=request.custom_text,
        custom_icon_key=request.custom_icon_key,
        expires_at=request.expires_at,
        overwrite_all_group_statuses=request.overwrite_all_group_statuses,
    )

    if result.is_err():
        error = result.error
        if error.code in VALIDATION_CODES:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "PROFILE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class SetGroupStatusRequest(BaseModel):
    """Group status HTTP request payload"""

    type: str = Field(..., description="app_preset, user_generated_preset or ad_hoc_custom")
    reference_id: Optional[str] = Field(
        None, description="App preset id or saved preset id, per type"
    )
    custom_text: Optional[str] = None
    custom_icon_key: Optional[str] = None
    expires_at: Optional[datetime] = None


@router.put(
    "/groups/{group_id}",
    status_code=status.HTTP_200_OK,
    response_model=StatusResponse,
)
async def set_group_status(
    group_id: str,
    request: SetGroupStatusRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set Status for One Group

    Raises:
        - 400 Bad Request: INVALID_STATUS_TYPE, INVALID_STATUS, INVALID_EXPIRY,
                           CUSTOM_TEXT_*
        - 403 Forbidden: NOT_A_MEMBER
        - 404 Not Found: PROFILE_NOT_FOUND, PRESET_NOT_FOUND
    """
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = SetGroupStatusUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"],
        group_uuid,
        request.type,
        reference_id=request.reference_id,
        custom_text=request.custom_text,
        custom_icon_key=request.custom_icon_key,
        expires_at=request.expires_at,
    )

    if result.is_err():
        error = result.error
        if error.code in VALIDATION_CODES:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NOT_A_MEMBER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("PROFILE_NOT_FOUND", "PRESET_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/groups/{group_id}",
    status_code=status.HTTP_200_OK,
    response_model=ClearGroupStatusResponse,
)
async def clear_group_status(
    group_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID")

    use_case = ClearGroupStatusUseCase(uow)
    result = await use_case.execute(current_user["user_id"], group_uuid)

    if result.is_err():
        error = result.error
        if error.code == "GROUP_STATUS_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get(
    "/users/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=StatusResponse,
)
async def get_effective_status(
    user_id: str,
    group_id: Optional[str] = Query(None, description="Resolve as seen in this group"),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Effective Status of a User

    Without group_id the global status is returned.

    Raises:
        - 403 Forbidden: NOT_A_MEMBER
        - 404 Not Found: USER_NOT_FOUND, MEMBERSHIP_NOT_FOUND
    """
    group_uuid = parse_uuid(group_id, "INVALID_GROUP_ID", "group ID") if group_id else None

    use_case = GetEffectiveStatusUseCase(uow)
    result = await use_case.execute(current_user["user_id"], user_id, group_uuid)

    if result.is_err():
        error = result.error
        if error.code == "NOT_A_MEMBER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("USER_NOT_FOUND", "MEMBERSHIP_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class CreateStatusPresetRequest(BaseModel):
    """Saved status preset HTTP request payload"""

    preset_name: str
    status_text: str
    icon_key: Optional[str] = None


@router.post(
    "/presets",
    status_code=status.HTTP_201_CREATED,
    response_model=StatusPresetResponse,
)
async def create_status_preset(
    request: CreateStatusPresetRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Save a Status Preset

    Raises:
        - 400 Bad Request: PRESET_NAME_REQUIRED, CUSTOM_TEXT_*
        - 404 Not Found: PROFILE_NOT_FOUND
        - 409 Conflict: PRESET_LIMIT_REACHED
    """
    use_case = CreateStatusPresetUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"],
        request.preset_name,
        request.status_text,
        icon_key=request.icon_key,
    )

    if result.is_err():
        error = result.error
        if error.code in ("PRESET_NAME_REQUIRED",) + VALIDATION_CODES:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "PROFILE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "PRESET_LIMIT_REACHED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/presets",
    status_code=status.HTTP_200_OK,
    response_model=List[StatusPresetResponse],
)
async def list_status_presets(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ListStatusPresetsUseCase(uow)
    result = await use_case.execute(current_user["user_id"])

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete("/presets/{preset_id}", status_code=status.HTTP_200_OK)
async def delete_status_preset(
    preset_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    preset_uuid = parse_uuid(preset_id, "INVALID_PRESET_ID", "preset ID")

    use_case = DeleteStatusPresetUseCase(uow)
    result = await use_case.execute(current_user["user_id"], preset_uuid)

    if result.is_err():
        error = result.error
        if error.code == "PRESET_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
