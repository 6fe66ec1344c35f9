"""
Remove Member from Group Use Case
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.shared.result import Error, Result, Return

from .dtos import RemoveMemberResponse

logger = logging.getLogger(__name__)


class RemoveMemberUseCase:
    """
    Use case for removing members from a group.

    Business Rules:
    - Allowed only when actor.can_remove_member(target role)
    - Owners can remove anyone except another owner
    - Removing yourself goes through leave
    - Removed member's group status is deleted and member_count decremented
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_user_id: str, group_id: UUID, target_user_id: str
    ) -> Result[RemoveMemberResponse]:
        async with self.uow:
            actor = await self.uow.members.get_by_group_and_user(group_id, actor_user_id)
            if actor is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this group")
                )

            if actor_user_id == target_user_id:
                return Return.err(
                    Error("USE_LEAVE_INSTEAD", "Use leave to remove yourself from a group")
                )

            target = await self.uow.members.get_by_group_and_user(group_id, target_user_id)
            if target is None:
                return Return.err(
                    Error("MEMBERSHIP_NOT_FOUND", "User is not a member of this group")
                )

            if not actor.role.can_remove_member(target.role):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        f"{actor.role.display_name} cannot remove a "
                        f"{target.role.display_name}",
                    )
                )

            await self.uow.members.delete(target)

            detail = await self.uow.group_statuses.get_by_user_and_group(
                target_user_id, group_id
            )
            if detail is not None:
                await self.uow.group_statuses.delete(detail)

            group = await self.uow.groups.get_by_id(group_id)
            if group is not None:
                group.member_count = max(group.member_count - 1, 0)
                await self.uow.groups.update(group)

            audit = AuditEvent(
                group_id=group_id,
                user_id=actor_user_id,
                action="member_removed",
                event_metadata={
                    "removed_user_id": target_user_id,
                    "removed_user_role": target.role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Group {group_id}: {actor_user_id} removed {target_user_id}")
            return Return.ok(RemoveMemberResponse(status="removed"))
