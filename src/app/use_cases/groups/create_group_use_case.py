"""
Create Group Use Case

Creates a group with the caller as its owner.
"""

import logging
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Group, GroupMember, GroupRole
from src.shared.result import Error, Result, Return

from .dtos import GroupResponse
from .validation import check_group_details

logger = logging.getLogger(__name__)


class CreateGroupUseCase:
    """
    Use case for creating a group.

    Business Rules:
    - Caller must have a profile
    - Caller becomes the owner and the only member (member_count = 1)
    - Owner's display name and photo are denormalized into the membership
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        name: str,
        description: Optional[str] = None,
        is_public: bool = True,
        profile_image_url: Optional[str] = None,
        banner_image_url: Optional[str] = None,
    ) -> Result[GroupResponse]:
        error = check_group_details(name, description)
        if error:
            return Return.err(error)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("PROFILE_NOT_FOUND", "Create a profile first"))

            group = Group(
                name=name.strip(),
                description=(description or "").strip() or None,
                is_public=is_public,
                profile_image_url=profile_image_url,
                banner_image_url=banner_image_url,
                creator_id=user_id,
                member_count=1,
            )
            await self.uow.groups.create(group)

            owner = GroupMember(
                group_id=group.id,
                user_id=user_id,
                role=GroupRole.owner,
                display_name=user.name_for_display,
                photo_url=user.profile_image_url,
            )
            await self.uow.members.create(owner)

            audit = AuditEvent(
                group_id=group.id,
                user_id=user_id,
                action="group_created",
                event_metadata={"name": group.name},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Group {group.id} created by {user_id}")
            return Return.ok(GroupResponse.from_entity(group, GroupRole.owner.value))
