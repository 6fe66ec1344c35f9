from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    GetProfileUseCase,
    ProfileResponse,
    RegisterProfileUseCase,
)
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/users", tags=["Users"])


class RegisterProfileRequest(BaseModel):
    """
    Register profile HTTP request payload

    Creates or updates the caller's profile. The user id comes from the token.
    """

    username: str = Field(..., description="Unique username, 3-30 of [A-Za-z0-9_.]")
    display_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, description="E.164 phone number")
    profile_image_url: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=500)


@router.put("/me", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def register_profile(
    request: RegisterProfileRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Register or Update Profile

    Raises:
        - 400 Bad Request: INVALID_USERNAME, INVALID_PHONE_NUMBER
        - 401 Unauthorized: Invalid or expired JWT
        - 409 Conflict: USERNAME_TAKEN
    """
    use_case = RegisterProfileUseCase(uow)
    result = await use_case.execute(
        current_user["user_id"],
        request.username,
        display_name=request.display_name,
        email=request.email,
        phone_number=request.phone_number,
        profile_image_url=request.profile_image_url,
        bio=request.bio,
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_USERNAME", "INVALID_PHONE_NUMBER"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USERNAME_TAKEN":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def get_profile(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetProfileUseCase(uow)
    result = await use_case.execute(current_user["user_id"])

    if result.is_err():
        error = result.error
        if error.code == "PROFILE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
