from typing import Optional, Tuple

from src.domain.entities import GroupMember, GroupRole
from src.shared.result import Error


def parse_role(raw: Optional[str]) -> Tuple[Optional[GroupRole], Optional[Error]]:
    try:
        return GroupRole((raw or GroupRole.member.value).strip().lower()), None
    except ValueError:
        return None, Error(
            "INVALID_ROLE",
            f"Invalid role: {raw}. Must be one of: " + ", ".join(r.value for r in GroupRole),
        )


def check_can_invite(
    membership: Optional[GroupMember], role_to_assign: GroupRole
) -> Optional[Error]:
    """Inviter must manage the group and be allowed to grant the offered role."""
    if membership is None:
        return Error("NOT_A_MEMBER", "You are not a member of this group")
    if not membership.role.can_manage_settings():
        return Error("INSUFFICIENT_ROLE", "Only admins and owners can invite members")
    if role_to_assign is not GroupRole.member and not membership.role.can_promote_to(
        role_to_assign
    ):
        return Error(
            "INSUFFICIENT_ROLE",
            f"{membership.role.display_name} cannot invite as {role_to_assign.display_name}",
        )
    return None
