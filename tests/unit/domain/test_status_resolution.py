from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from src.domain.entities import (
    AppPresetStatus,
    CustomStatusType,
    GroupStatusDetail,
    User,
    UserStatusPreset,
)
from src.domain.status_resolution import (
    SCOPE_GLOBAL,
    SCOPE_GROUP,
    AdHocStatus,
    AppPresetSelection,
    UserPresetSelection,
    render,
    resolve_effective_status,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)
GROUP_ID = uuid4()


def make_user(**overrides) -> User:
    fields = dict(user_id="uid-1", username="alice")
    fields.update(overrides)
    return User(**fields)


def make_detail(**overrides) -> GroupStatusDetail:
    fields = dict(user_id="uid-1", group_id=GROUP_ID)
    fields.update(overrides)
    return GroupStatusDetail(**fields)


def make_preset(**overrides) -> UserStatusPreset:
    fields = dict(
        user_id="uid-1", preset_name="Gym", status_text="At the gym", icon_key="fitness"
    )
    fields.update(overrides)
    return UserStatusPreset(**fields)


class TestAppPresetStatus:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("online", AppPresetStatus.online),
            ("BUSY", AppPresetStatus.busy),
            ("Showing_Custom", AppPresetStatus.showing_custom),
            ("dnd", AppPresetStatus.unknown),
            ("", AppPresetStatus.unknown),
            (None, AppPresetStatus.unknown),
        ],
    )
    def test_from_id(self, raw, expected):
        assert AppPresetStatus.from_id(raw) is expected

    def test_selectable_excludes_unknown(self):
        assert AppPresetStatus.unknown not in AppPresetStatus.selectable()
        assert len(AppPresetStatus.selectable()) == 5

    def test_display_metadata(self):
        assert AppPresetStatus.away.display_name == "Away"
        assert AppPresetStatus.away.icon_key == "waving_hand"
        assert AppPresetStatus.away.color == "#FF9800"
        assert AppPresetStatus.unknown.display_name == "Unknown"


class TestResolveEffectiveStatus:
    def test_override_flag_wins_over_active_group_status(self):
        user = make_user(active_status_id="busy", overwrite_all_group_statuses_with_global=True)
        detail = make_detail(active_status_reference_id="away")

        resolved = resolve_effective_status(user, detail, [], NOW)

        assert resolved.preset is AppPresetStatus.busy
        assert resolved.text == "Busy"
        assert resolved.scope == SCOPE_GLOBAL

    def test_active_group_status_wins_without_override(self):
        user = make_user(active_status_id="busy")
        detail = make_detail(active_status_reference_id="away")

        resolved = resolve_effective_status(user, detail, [], NOW)

        assert resolved.preset is AppPresetStatus.away
        assert resolved.scope == SCOPE_GROUP

    @pytest.mark.parametrize("override", [True, False])
    @pytest.mark.parametrize("detail_state", ["absent", "active", "expired"])
    def test_precedence_combinations(self, override, detail_state):
        user = make_user(
            active_status_id="busy", overwrite_all_group_statuses_with_global=override
        )
        detail = None
        if detail_state == "active":
            detail = make_detail(
                active_status_reference_id="away", expires_at=NOW + timedelta(hours=1)
            )
        elif detail_state == "expired":
            detail = make_detail(
                active_status_reference_id="away", expires_at=NOW - timedelta(hours=1)
            )

        resolved = resolve_effective_status(user, detail, [], NOW)

        if not override and detail_state == "active":
            assert resolved.preset is AppPresetStatus.away
            assert resolved.scope == SCOPE_GROUP
            assert resolved.expires_at == NOW + timedelta(hours=1)
        else:
            assert resolved.preset is AppPresetStatus.busy
            assert resolved.scope == SCOPE_GLOBAL

    def test_showing_custom_renders_custom_text(self):
        user = make_user(
            active_status_id="showing_custom",
            global_custom_status_text="At the gym",
            global_custom_status_icon_key="fitness",
        )

        resolved = resolve_effective_status(user, None, [], NOW)

        assert resolved.text == "At the gym"
        assert resolved.icon_key == "fitness"
        assert resolved.preset is AppPresetStatus.showing_custom

    def test_showing_custom_without_text_renders_custom_preset(self):
        user = make_user(active_status_id="showing_custom")

        resolved = resolve_effective_status(user, None, [], NOW)

        assert resolved.text == "Custom"
        assert resolved.icon_key == "chat_bubble_outline"

    def test_expired_global_status_falls_back_to_online(self):
        user = make_user(
            active_status_id="showing_custom",
            global_custom_status_text="In a meeting",
            global_status_expires_at=NOW - timedelta(minutes=5),
        )

        resolved = resolve_effective_status(user, None, [], NOW)

        assert resolved.preset is AppPresetStatus.online
        assert resolved.text == "Online"
        assert resolved.expires_at is None

    def test_unexpired_global_status_reports_expiry(self):
        expires_at = NOW + timedelta(hours=2)
        user = make_user(active_status_id="away", global_status_expires_at=expires_at)

        resolved = resolve_effective_status(user, None, [], NOW)

        assert resolved.preset is AppPresetStatus.away
        assert resolved.expires_at == expires_at

    def test_global_status_can_reference_saved_preset(self):
        preset = make_preset()
        user = make_user(active_status_id=str(preset.id))

        resolved = resolve_effective_status(user, None, [preset], NOW)

        assert resolved.text == "At the gym"
        assert resolved.icon_key == "fitness"
        assert resolved.source_type is CustomStatusType.user_generated_preset

    def test_unrecognised_global_id_renders_unknown(self):
        user = make_user(active_status_id="on_vacation")

        resolved = resolve_effective_status(user, None, [], NOW)

        assert resolved.preset is AppPresetStatus.unknown
        assert resolved.text == "Unknown"


class TestRender:
    def test_user_preset_with_group_text_override(self):
        preset = make_preset()
        selection = UserPresetSelection(str(preset.id), custom_text="Leg day")

        resolved = render(selection, {str(preset.id): preset}, SCOPE_GROUP)

        assert resolved.text == "Leg day"
        assert resolved.icon_key == "fitness"
        assert resolved.scope == SCOPE_GROUP

    def test_missing_user_preset_falls_back_to_custom_text(self):
        resolved = render(UserPresetSelection("deleted-id", custom_text="Studying"), {})

        assert resolved.text == "Studying"

    def test_missing_user_preset_without_text_is_unknown(self):
        resolved = render(UserPresetSelection("deleted-id"), {})

        assert resolved.preset is AppPresetStatus.unknown

    def test_ad_hoc_status(self):
        resolved = render(AdHocStatus("Commuting", "train"), {})

        assert resolved.text == "Commuting"
        assert resolved.icon_key == "train"
        assert resolved.source_type is CustomStatusType.ad_hoc_custom

    def test_blank_ad_hoc_status_renders_custom(self):
        resolved = render(AdHocStatus("   "), {})

        assert resolved.text == "Custom"

    def test_plain_preset_ignores_custom_text(self):
        resolved = render(AppPresetSelection("busy", custom_text="ignored"), {})

        assert resolved.text == "Busy"
        assert resolved.color == "#F44336"

    def test_group_ad_hoc_detail(self):
        user = make_user()
        detail = make_detail(
            type=CustomStatusType.ad_hoc_custom,
            active_status_reference_id=None,
            custom_text="On call",
        )

        resolved = resolve_effective_status(user, detail, [], NOW)

        assert resolved.text == "On call"
        assert resolved.scope == SCOPE_GROUP
