"""
Delete Group Use Case

Removes a group together with everything that points at it.
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Group, GroupRole
from src.shared.result import Error, Result, Return

from .dtos import DeleteGroupResponse

logger = logging.getLogger(__name__)


async def purge_group(uow: UnitOfWork, group: Group) -> DeleteGroupResponse:
    """
    Delete a group and its dependent rows inside the caller's unit of work.

    Invitations go before invite links because they reference the link they
    came from. The caller commits.
    """
    group_id = group.id
    invitations_removed = await uow.invitations.delete_by_group_id(group_id)
    invite_links_removed = await uow.invite_links.delete_by_group_id(group_id)
    await uow.group_statuses.delete_by_group_id(group_id)
    members_removed = await uow.members.delete_by_group_id(group_id)
    await uow.groups.delete(group)

    return DeleteGroupResponse(
        status="deleted",
        group_id=str(group_id),
        members_removed=members_removed,
        invitations_removed=invitations_removed,
        invite_links_removed=invite_links_removed,
    )


class DeleteGroupUseCase:
    """
    Use case for an owner deleting a group.

    Business Rules:
    - Only the owner may delete the group
    - Memberships, group statuses, invitations and invite links are removed
      in the same transaction
    - The audit trail keeps a group_deleted event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, group_id: UUID) -> Result[DeleteGroupResponse]:
        async with self.uow:
            membership = await self.uow.members.get_by_group_and_user(group_id, user_id)
            if membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this group")
                )

            if membership.role is not GroupRole.owner:
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "Only the owner can delete this group")
                )

            group = await self.uow.groups.get_by_id(group_id)
            if group is None:
                return Return.err(Error("GROUP_NOT_FOUND", "Group not found"))

            name = group.name
            response = await purge_group(self.uow, group)

            audit = AuditEvent(
                group_id=group_id,
                user_id=user_id,
                action="group_deleted",
                event_metadata={
                    "name": name,
                    "members_removed": response.members_removed,
                    "invitations_removed": response.invitations_removed,
                    "invite_links_removed": response.invite_links_removed,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(
                f"Group {group_id} deleted by owner {user_id} "
                f"({response.members_removed} members removed)"
            )
            return Return.ok(response)
