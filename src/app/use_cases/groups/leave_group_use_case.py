"""
Leave Group Use Case
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, GroupRole
from src.shared.result import Error, Result, Return

from .delete_group_use_case import purge_group
from .dtos import LeaveGroupResponse

logger = logging.getLogger(__name__)


class LeaveGroupUseCase:
    """
    Use case for a member leaving a group.

    Business Rules:
    - The last member leaving deletes the group with its invitations and
      invite links
    - Any other owner must hand over ownership first, which this service does
      not implement
    - The leaving member's group status is deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, group_id: UUID) -> Result[LeaveGroupResponse]:
        async with self.uow:
            membership = await self.uow.members.get_by_group_and_user(group_id, user_id)
            if membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this group")
                )

            group = await self.uow.groups.get_by_id(group_id)
            if group is None:
                return Return.err(Error("GROUP_NOT_FOUND", "Group not found"))

            members = await self.uow.members.get_by_group_id(group_id)
            is_last_member = len(members) <= 1

            if membership.role is GroupRole.owner and not is_last_member:
                return Return.err(
                    Error(
                        "OWNERSHIP_TRANSFER_REQUIRED",
                        "Owners must transfer ownership before leaving",
                    )
                )

            await self.uow.members.delete(membership)

            detail = await self.uow.group_statuses.get_by_user_and_group(user_id, group_id)
            if detail is not None:
                await self.uow.group_statuses.delete(detail)

            if is_last_member:
                name = group.name
                purged = await purge_group(self.uow, group)
                audit = AuditEvent(
                    group_id=group_id,
                    user_id=user_id,
                    action="group_deleted",
                    event_metadata={
                        "name": name,
                        "reason": "last_member_left",
                        "invitations_removed": purged.invitations_removed,
                        "invite_links_removed": purged.invite_links_removed,
                    },
                )
            else:
                group.member_count = max(group.member_count - 1, 0)
                await self.uow.groups.update(group)
                audit = AuditEvent(
                    group_id=group_id,
                    user_id=user_id,
                    action="member_left",
                    event_metadata={"role": membership.role.value},
                )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(
                f"User {user_id} left group {group_id}"
                + (" (group deleted)" if is_last_member else "")
            )
            return Return.ok(LeaveGroupResponse(status="left", group_deleted=is_last_member))
