"""
Register Profile Use Case

Creates or updates the profile document for an authenticated user.
"""

import logging
import re
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.domain.entities.invitation import E164_PATTERN
from src.shared.result import Error, Result, Return

from .dtos import ProfileResponse

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.]{3,30}$")


class RegisterProfileUseCase:
    """
    Use case for registering or editing the caller's profile.

    Business Rules:
    - The identity provider owns authentication; this only stores the profile
    - Username is 3-30 of letters, digits, '_' or '.', unique case-insensitively
    - Phone number, when present, must be E.164
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        username: str,
        display_name: Optional[str] = None,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        profile_image_url: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> Result[ProfileResponse]:
        username = (username or "").strip()
        if not USERNAME_PATTERN.match(username):
            return Return.err(
                Error(
                    "INVALID_USERNAME",
                    "Username must be 3-30 letters, digits, '_' or '.'",
                )
            )
        if phone_number and not E164_PATTERN.match(phone_number):
            return Return.err(
                Error("INVALID_PHONE_NUMBER", "Phone number must be in E.164 format")
            )

        async with self.uow:
            holder = await self.uow.users.get_by_username(username)
            if holder is not None and holder.user_id != user_id:
                return Return.err(
                    Error("USERNAME_TAKEN", "This username is already taken")
                )

            user = await self.uow.users.get_by_id(user_id)
            is_new = user is None
            if is_new:
                user = User(user_id=user_id, username=username)

            user.username = username
            user.display_name = display_name
            user.email = email.lower() if email else None
            user.phone_number = phone_number
            user.profile_image_url = profile_image_url
            user.bio = bio

            if is_new:
                await self.uow.users.create(user)
            else:
                await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(
                f"Profile {'created' if is_new else 'updated'} for user {user_id}"
            )
            return Return.ok(ProfileResponse.from_entity(user))


class GetProfileUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[ProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("PROFILE_NOT_FOUND", "Profile not found"))
            return Return.ok(ProfileResponse.from_entity(user))
