from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_username = AsyncMock(return_value=None)
    uow.users.get_by_ids = AsyncMock(return_value=[])
    uow.users.create = AsyncMock()
    uow.users.update = AsyncMock()

    uow.groups = MagicMock()
    uow.groups.get_by_id = AsyncMock(return_value=None)
    uow.groups.create = AsyncMock()
    uow.groups.update = AsyncMock()
    uow.groups.delete = AsyncMock()

    uow.members = MagicMock()
    uow.members.get_by_group_and_user = AsyncMock(return_value=None)
    uow.members.get_by_group_id = AsyncMock(return_value=[])
    uow.members.get_by_user_id = AsyncMock(return_value=[])
    uow.members.create = AsyncMock()
    uow.members.update = AsyncMock()
    uow.members.delete = AsyncMock()
    uow.members.delete_by_group_id = AsyncMock(return_value=0)

    uow.invitations = MagicMock()
    uow.invitations.get_by_id = AsyncMock(return_value=None)
    uow.invitations.get_pending_for_invitee = AsyncMock(return_value=[])
    uow.invitations.get_pending_by_group_and_identifier = AsyncMock(return_value=None)
    uow.invitations.get_by_group_id = AsyncMock(return_value=[])
    uow.invitations.create = AsyncMock()
    uow.invitations.update = AsyncMock()
    uow.invitations.delete_by_group_id = AsyncMock(return_value=0)

    uow.invite_links = MagicMock()
    uow.invite_links.get_by_id = AsyncMock(return_value=None)
    uow.invite_links.get_by_code = AsyncMock(return_value=None)
    uow.invite_links.create = AsyncMock()
    uow.invite_links.update = AsyncMock()
    uow.invite_links.delete_by_group_id = AsyncMock(return_value=0)

    uow.group_statuses = MagicMock()
    uow.group_statuses.get_by_user_and_group = AsyncMock(return_value=None)
    uow.group_statuses.get_by_group_id = AsyncMock(return_value=[])
    uow.group_statuses.create = AsyncMock()
    uow.group_statuses.update = AsyncMock()
    uow.group_statuses.delete = AsyncMock()
    uow.group_statuses.delete_by_group_id = AsyncMock(return_value=0)

    uow.status_presets = MagicMock()
    uow.status_presets.get_by_id = AsyncMock(return_value=None)
    uow.status_presets.get_by_user_ids = AsyncMock(return_value=[])
    uow.status_presets.create = AsyncMock()
    uow.status_presets.delete = AsyncMock()

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()
    uow.audit_events.get_by_group_id = AsyncMock(return_value=[])

    return uow
