"""
Change Member Role Use Case

Promotes or demotes a group member.
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, GroupRole
from src.shared.result import Error, Result, Return

from .dtos import ChangeRoleResponse

logger = logging.getLogger(__name__)


class ChangeMemberRoleUseCase:
    """
    Use case for changing a member's role within a group.

    Business Rules:
    - Promotion requires actor.can_promote_to(new_role)
    - Demotion requires actor.can_demote_from(current_role)
    - Owners are never demoted; nobody is promoted to owner
    - Members cannot change their own role
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_user_id: str, group_id: UUID, target_user_id: str, new_role: str
    ) -> Result[ChangeRoleResponse]:
        try:
            role = GroupRole((new_role or "").strip().lower())
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_ROLE",
                    f"Invalid role: {new_role}. Must be one of: "
                    + ", ".join(r.value for r in GroupRole),
                )
            )

        async with self.uow:
            actor = await self.uow.members.get_by_group_and_user(group_id, actor_user_id)
            if actor is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this group")
                )

            if actor_user_id == target_user_id:
                return Return.err(
                    Error("CANNOT_CHANGE_OWN_ROLE", "You cannot change your own role")
                )

            target = await self.uow.members.get_by_group_and_user(group_id, target_user_id)
            if target is None:
                return Return.err(
                    Error("MEMBERSHIP_NOT_FOUND", "User is not a member of this group")
                )

            current = target.role
            if role is current:
                return Return.err(
                    Error("ROLE_UNCHANGED", f"User is already {current.display_name}")
                )

            if role.level > current.level:
                allowed = actor.role.can_promote_to(role)
            else:
                allowed = actor.role.can_demote_from(current)

            if not allowed:
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        f"{actor.role.display_name} cannot change "
                        f"{current.display_name} to {role.display_name}",
                    )
                )

            target.role = role
            await self.uow.members.update(target)

            audit = AuditEvent(
                group_id=group_id,
                user_id=actor_user_id,
                action="role_changed",
                event_metadata={
                    "target_user_id": target_user_id,
                    "old_role": current.value,
                    "new_role": role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(
                f"Group {group_id}: {actor_user_id} changed {target_user_id} "
                f"from {current.value} to {role.value}"
            )
            return Return.ok(
                ChangeRoleResponse(
                    status="updated",
                    user_id=target_user_id,
                    old_role=current.value,
                    new_role=role.value,
                )
            )
