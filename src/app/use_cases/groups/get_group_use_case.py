"""
Get Group Use Cases

Group details and the group's activity log.
"""

from typing import List
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.shared.result import Error, Result, Return

from .dtos import AuditEventResponse, GroupResponse


class GetGroupUseCase:
    """
    Business Rules:
    - Public groups are visible to everyone
    - Private groups are visible to members only; others get GROUP_NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, viewer_id: str, group_id: UUID) -> Result[GroupResponse]:
        async with self.uow:
            group = await self.uow.groups.get_by_id(group_id)
            if group is None:
                return Return.err(Error("GROUP_NOT_FOUND", "Group not found"))

            membership = await self.uow.members.get_by_group_and_user(group_id, viewer_id)
            if membership is None and not group.is_public:
                return Return.err(Error("GROUP_NOT_FOUND", "Group not found"))

            role = membership.role.value if membership else None
            return Return.ok(GroupResponse.from_entity(group, role))


class GetGroupActivityUseCase:
    """Recent audit events; requires a role that can manage settings."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, viewer_id: str, group_id: UUID, limit: int = 50
    ) -> Result[List[AuditEventResponse]]:
        async with self.uow:
            membership = await self.uow.members.get_by_group_and_user(group_id, viewer_id)
            if membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this group")
                )
            if not membership.role.can_manage_settings():
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "Only admins and owners can view group activity",
                    )
                )

            events = await self.uow.audit_events.get_by_group_id(group_id, limit)
            return Return.ok([AuditEventResponse.from_entity(e) for e in events])
