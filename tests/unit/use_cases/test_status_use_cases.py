from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from src.app.use_cases.statuses import (
    ClearGroupStatusUseCase,
    CreateStatusPresetUseCase,
    DeleteStatusPresetUseCase,
    GetEffectiveStatusUseCase,
    SetGroupStatusUseCase,
    UpdateGlobalStatusUseCase,
)
from src.domain.base import utc_now
from src.domain.entities import (
    CustomStatusType,
    GroupStatusDetail,
    UserStatusPreset,
)
from tests.unit.use_cases.factories import make_member, make_user, members_by_user


def make_preset(user_id="uid-1", **fields) -> UserStatusPreset:
    fields.setdefault("preset_name", "Gym")
    fields.setdefault("status_text", "At the gym")
    fields.setdefault("icon_key", "fitness")
    return UserStatusPreset(id=uuid4(), user_id=user_id, **fields)


# ============================================================================
# UpdateGlobalStatusUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_set_global_busy(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    use_case = UpdateGlobalStatusUseCase(mock_uow)
    result = await use_case.execute("uid-1", "BUSY")

    assert result.is_ok()
    assert result.value.text == "Busy"
    assert user.active_status_id == "busy"
    mock_uow.users.update.assert_called_once_with(user)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_global_custom_status_with_aware_expiry(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    expires_at = datetime.now(timezone.utc) + timedelta(hours=1)

    use_case = UpdateGlobalStatusUseCase(mock_uow)
    result = await use_case.execute(
        "uid-1",
        "showing_custom",
        custom_text="At the gym",
        expires_at=expires_at,
        overwrite_all_group_statuses=True,
    )

    assert result.is_ok()
    assert result.value.text == "At the gym"
    assert user.global_status_expires_at.tzinfo is None
    assert user.overwrite_all_group_statuses_with_global is True


@pytest.mark.asyncio
async def test_showing_custom_requires_text(mock_uow):
    mock_uow.users.get_by_id.return_value = make_user()

    use_case = UpdateGlobalStatusUseCase(mock_uow)
    result = await use_case.execute("uid-1", "showing_custom", custom_text="  ")

    assert result.error.code == "CUSTOM_TEXT_REQUIRED"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("status_id", ["unknown", "dnd", ""])
async def test_unselectable_global_status(mock_uow, status_id):
    mock_uow.users.get_by_id.return_value = make_user()

    use_case = UpdateGlobalStatusUseCase(mock_uow)
    result = await use_case.execute("uid-1", status_id)

    assert result.error.code == "INVALID_STATUS"


@pytest.mark.asyncio
async def test_global_status_expiry_must_be_future(mock_uow):
    mock_uow.users.get_by_id.return_value = make_user()

    use_case = UpdateGlobalStatusUseCase(mock_uow)
    result = await use_case.execute(
        "uid-1", "away", expires_at=utc_now() - timedelta(minutes=1)
    )

    assert result.error.code == "INVALID_EXPIRY"


@pytest.mark.asyncio
async def test_global_status_from_saved_preset(mock_uow):
    preset = make_preset()
    mock_uow.users.get_by_id.return_value = make_user()
    mock_uow.status_presets.get_by_user_ids.return_value = [preset]

    use_case = UpdateGlobalStatusUseCase(mock_uow)
    result = await use_case.execute("uid-1", str(preset.id))

    assert result.is_ok()
    assert result.value.text == "At the gym"
    assert result.value.source_type == "user_generated_preset"


# ============================================================================
# SetGroupStatusUseCase / ClearGroupStatusUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_set_group_status_creates_detail(mock_uow):
    group_id = uuid4()
    mock_uow.members.get_by_group_and_user.return_value = make_member(group_id, "uid-1")
    mock_uow.users.get_by_id.return_value = make_user(active_status_id="busy")

    use_case = SetGroupStatusUseCase(mock_uow)
    result = await use_case.execute("uid-1", group_id, "app_preset", reference_id="away")

    assert result.is_ok()
    assert result.value.text == "Away"
    assert result.value.scope == "group"
    detail = mock_uow.group_statuses.create.call_args[0][0]
    assert detail.active_status_reference_id == "away"
    assert detail.type == CustomStatusType.app_preset
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_set_group_status_updates_existing_detail(mock_uow):
    group_id = uuid4()
    detail = GroupStatusDetail(user_id="uid-1", group_id=group_id)
    mock_uow.members.get_by_group_and_user.return_value = make_member(group_id, "uid-1")
    mock_uow.users.get_by_id.return_value = make_user()
    mock_uow.group_statuses.get_by_user_and_group.return_value = detail

    use_case = SetGroupStatusUseCase(mock_uow)
    result = await use_case.execute(
        "uid-1", group_id, "ad_hoc_custom", custom_text="Climbing", custom_icon_key="hiking"
    )

    assert result.is_ok()
    assert result.value.text == "Climbing"
    assert detail.type == CustomStatusType.ad_hoc_custom
    assert detail.active_status_reference_id is None
    mock_uow.group_statuses.update.assert_called_once_with(detail)
    mock_uow.group_statuses.create.assert_not_called()


@pytest.mark.asyncio
async def test_group_status_shadowed_by_override(mock_uow):
    group_id = uuid4()
    mock_uow.members.get_by_group_and_user.return_value = make_member(group_id, "uid-1")
    mock_uow.users.get_by_id.return_value = make_user(
        active_status_id="busy", overwrite_all_group_statuses_with_global=True
    )

    use_case = SetGroupStatusUseCase(mock_uow)
    result = await use_case.execute("uid-1", group_id, "app_preset", reference_id="away")

    assert result.is_ok()
    assert result.value.text == "Busy"
    assert result.value.scope == "global"


@pytest.mark.asyncio
async def test_group_status_requires_membership(mock_uow):
    use_case = SetGroupStatusUseCase(mock_uow)
    result = await use_case.execute("uid-1", uuid4(), "app_preset", reference_id="away")

    assert result.error.code == "NOT_A_MEMBER"


@pytest.mark.asyncio
async def test_group_status_with_missing_saved_preset(mock_uow):
    group_id = uuid4()
    mock_uow.members.get_by_group_and_user.return_value = make_member(group_id, "uid-1")
    mock_uow.users.get_by_id.return_value = make_user()

    use_case = SetGroupStatusUseCase(mock_uow)
    result = await use_case.execute(
        "uid-1", group_id, "user_generated_preset", reference_id=str(uuid4())
    )

    assert result.error.code == "PRESET_NOT_FOUND"


@pytest.mark.asyncio
async def test_invalid_group_status_type(mock_uow):
    use_case = SetGroupStatusUseCase(mock_uow)
    result = await use_case.execute("uid-1", uuid4(), "mood")

    assert result.error.code == "INVALID_STATUS_TYPE"


@pytest.mark.asyncio
async def test_clear_group_status(mock_uow):
    detail = GroupStatusDetail(user_id="uid-1", group_id=uuid4())
    mock_uow.group_statuses.get_by_user_and_group.return_value = detail

    use_case = ClearGroupStatusUseCase(mock_uow)
    result = await use_case.execute("uid-1", detail.group_id)

    assert result.value.status == "cleared"
    mock_uow.group_statuses.delete.assert_called_once_with(detail)


@pytest.mark.asyncio
async def test_clear_missing_group_status(mock_uow):
    use_case = ClearGroupStatusUseCase(mock_uow)
    result = await use_case.execute("uid-1", uuid4())

    assert result.error.code == "GROUP_STATUS_NOT_FOUND"


# ============================================================================
# GetEffectiveStatusUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_effective_status_in_group(mock_uow):
    group_id = uuid4()
    viewer = make_member(group_id, "uid-viewer")
    target = make_member(group_id, "uid-1")
    mock_uow.users.get_by_id.return_value = make_user(active_status_id="busy")
    mock_uow.members.get_by_group_and_user.side_effect = members_by_user(viewer, target)
    mock_uow.group_statuses.get_by_user_and_group.return_value = GroupStatusDetail(
        user_id="uid-1", group_id=group_id, active_status_reference_id="away"
    )

    use_case = GetEffectiveStatusUseCase(mock_uow)
    result = await use_case.execute("uid-viewer", "uid-1", group_id)

    assert result.value.text == "Away"


@pytest.mark.asyncio
async def test_effective_status_ignores_expired_group_detail(mock_uow):
    group_id = uuid4()
    viewer = make_member(group_id, "uid-viewer")
    target = make_member(group_id, "uid-1")
    mock_uow.users.get_by_id.return_value = make_user(active_status_id="busy")
    mock_uow.members.get_by_group_and_user.side_effect = members_by_user(viewer, target)
    mock_uow.group_statuses.get_by_user_and_group.return_value = GroupStatusDetail(
        user_id="uid-1",
        group_id=group_id,
        active_status_reference_id="away",
        expires_at=utc_now() - timedelta(minutes=1),
    )

    use_case = GetEffectiveStatusUseCase(mock_uow)
    result = await use_case.execute("uid-viewer", "uid-1", group_id)

    assert result.value.text == "Busy"
    assert result.value.scope == "global"


@pytest.mark.asyncio
async def test_effective_status_outsider_rejected(mock_uow):
    group_id = uuid4()
    mock_uow.users.get_by_id.return_value = make_user()
    mock_uow.members.get_by_group_and_user.side_effect = members_by_user(
        make_member(group_id, "uid-1")
    )

    use_case = GetEffectiveStatusUseCase(mock_uow)
    result = await use_case.execute("uid-outsider", "uid-1", group_id)

    assert result.error.code == "NOT_A_MEMBER"


@pytest.mark.asyncio
async def test_effective_status_unknown_user(mock_uow):
    use_case = GetEffectiveStatusUseCase(mock_uow)
    result = await use_case.execute("uid-viewer", "uid-nobody")

    assert result.error.code == "USER_NOT_FOUND"


# ============================================================================
# Status presets
# ============================================================================


@pytest.mark.asyncio
async def test_create_status_preset(mock_uow):
    mock_uow.users.get_by_id.return_value = make_user()

    use_case = CreateStatusPresetUseCase(mock_uow)
    result = await use_case.execute("uid-1", " Gym ", "At the gym", icon_key="fitness")

    assert result.is_ok()
    assert result.value.preset_name == "Gym"
    mock_uow.status_presets.create.assert_called_once()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_preset_limit(mock_uow):
    mock_uow.users.get_by_id.return_value = make_user()
    mock_uow.status_presets.get_by_user_ids.return_value = [make_preset() for _ in range(20)]

    use_case = CreateStatusPresetUseCase(mock_uow)
    result = await use_case.execute("uid-1", "One more", "Busy again")

    assert result.error.code == "PRESET_LIMIT_REACHED"


@pytest.mark.asyncio
async def test_delete_active_preset_resets_global_status(mock_uow):
    preset = make_preset()
    user = make_user(active_status_id=str(preset.id), global_custom_status_text="x")
    mock_uow.status_presets.get_by_id.return_value = preset
    mock_uow.users.get_by_id.return_value = user

    use_case = DeleteStatusPresetUseCase(mock_uow)
    result = await use_case.execute("uid-1", preset.id)

    assert result.is_ok()
    assert user.active_status_id == "online"
    assert user.global_custom_status_text is None
    mock_uow.status_presets.delete.assert_called_once_with(preset)


@pytest.mark.asyncio
async def test_cannot_delete_someone_elses_preset(mock_uow):
    mock_uow.status_presets.get_by_id.return_value = make_preset(user_id="uid-other")

    use_case = DeleteStatusPresetUseCase(mock_uow)
    result = await use_case.execute("uid-1", uuid4())

    assert result.error.code == "PRESET_NOT_FOUND"
