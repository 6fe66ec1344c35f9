"""
Update Group Settings Use Case

Edits a group's name, description, visibility and images.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.shared.result import Error, Result, Return

from .dtos import GroupResponse
from .validation import check_group_details

logger = logging.getLogger(__name__)


class UpdateGroupSettingsUseCase:
    """
    Use case for updating group settings.

    Business Rules:
    - Caller's role must be able to manage settings (admin or owner)
    - Same name/description limits as group creation
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        group_id: UUID,
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
            membership = await self.uow.members.get_by_group_and_user(group_id, user_id)
            if membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this group")
                )

            if not membership.role.can_manage_settings():
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "Only admins and owners can update group settings",
                    )
                )

            group = await self.uow.groups.get_by_id(group_id)
            if group is None:
                return Return.err(Error("GROUP_NOT_FOUND", "Group not found"))

            group.name = name.strip()
            group.description = (description or "").strip() or None
            group.is_public = is_public
            group.profile_image_url = (profile_image_url or "").strip() or None
            group.banner_image_url = (banner_image_url or "").strip() or None
            await self.uow.groups.update(group)

            audit = AuditEvent(
                group_id=group_id,
                user_id=user_id,
                action="group_updated",
                event_metadata={"name": group.name, "is_public": group.is_public},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Group {group_id} settings updated by {user_id}")
            return Return.ok(GroupResponse.from_entity(group, membership.role.value))
