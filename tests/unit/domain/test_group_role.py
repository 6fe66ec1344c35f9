import pytest

from src.domain.entities import GroupRole

MEMBER = GroupRole.member
MODERATOR = GroupRole.moderator
ADMIN = GroupRole.admin
OWNER = GroupRole.owner

ALL_ROLES = [MEMBER, MODERATOR, ADMIN, OWNER]

# (actor, target) pairs allowed to remove; every other pair is rejected
REMOVABLE = {
    (OWNER, ADMIN),
    (OWNER, MODERATOR),
    (OWNER, MEMBER),
    (ADMIN, MODERATOR),
    (ADMIN, MEMBER),
    (MODERATOR, MEMBER),
}


def test_levels_are_strictly_ordered():
    assert [r.level for r in ALL_ROLES] == [0, 1, 2, 3]


@pytest.mark.parametrize("actor", ALL_ROLES)
@pytest.mark.parametrize("target", ALL_ROLES)
def test_can_remove_member_truth_table(actor, target):
    assert actor.can_remove_member(target) == ((actor, target) in REMOVABLE)


def test_can_manage_settings_and_moderate():
    assert [r.can_manage_settings() for r in ALL_ROLES] == [False, False, True, True]
    assert [r.can_moderate_content() for r in ALL_ROLES] == [False, True, True, True]


def test_can_promote_to():
    assert OWNER.can_promote_to(ADMIN)
    assert OWNER.can_promote_to(MODERATOR)
    assert not OWNER.can_promote_to(OWNER)
    assert ADMIN.can_promote_to(MODERATOR)
    assert not ADMIN.can_promote_to(ADMIN)
    assert not ADMIN.can_promote_to(OWNER)
    for target in ALL_ROLES:
        assert not MEMBER.can_promote_to(target)
        assert not MODERATOR.can_promote_to(target)


@pytest.mark.parametrize("actor", ALL_ROLES)
def test_owner_is_never_demoted(actor):
    assert not actor.can_demote_from(OWNER)


def test_can_demote_from():
    assert OWNER.can_demote_from(ADMIN)
    assert OWNER.can_demote_from(MODERATOR)
    assert ADMIN.can_demote_from(MODERATOR)
    assert not ADMIN.can_demote_from(ADMIN)
    assert not MODERATOR.can_demote_from(MEMBER)
    assert not MEMBER.can_demote_from(MEMBER)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("owner", OWNER),
        ("ADMIN", ADMIN),
        (" Moderator ", MODERATOR),
        ("member", MEMBER),
        ("superuser", MEMBER),
        ("", MEMBER),
        (None, MEMBER),
    ],
)
def test_from_string_falls_back_to_member(raw, expected):
    assert GroupRole.from_string(raw) is expected


def test_display_name():
    assert MODERATOR.display_name == "Moderator"
