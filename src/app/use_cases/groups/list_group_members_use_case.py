"""
List Group Members Use Case

Members of a group together with the status each one shows in it.
"""

from typing import List
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.statuses.dtos import StatusResponse
from src.domain.base import utc_now
from src.domain.entities import GroupRole
from src.domain.status_resolution import resolve_effective_status
from src.shared.result import Error, Result, Return

from .dtos import MemberResponse


class ListGroupMembersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, viewer_id: str, group_id: UUID) -> Result[List[MemberResponse]]:
        now = utc_now()

        async with self.uow:
            viewer = await self.uow.members.get_by_group_and_user(group_id, viewer_id)
            if viewer is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this group")
                )

            members = await self.uow.members.get_by_group_id(group_id)
            user_ids = [m.user_id for m in members]

            users = {u.user_id: u for u in await self.uow.users.get_by_ids(user_ids)}
            details = {
                d.user_id: d for d in await self.uow.group_statuses.get_by_group_id(group_id)
            }
            presets_by_user = {}
            for preset in await self.uow.status_presets.get_by_user_ids(user_ids):
                presets_by_user.setdefault(preset.user_id, []).append(preset)

            result = []
            for member in members:
                user = users.get(member.user_id)
                status = None
                if user is not None:
                    resolved = resolve_effective_status(
                        user,
                        details.get(member.user_id),
                        presets_by_user.get(member.user_id),
                        now,
                    )
                    status = StatusResponse.from_resolved(resolved)
                result.append(MemberResponse.from_entity(member, status))

            # Highest role first, then by join order
            result.sort(key=lambda m: -GroupRole.from_string(m.role).level)
            return Return.ok(result)

