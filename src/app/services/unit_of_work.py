from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.group_member_repository import IGroupMemberRepository
from src.app.repositories.group_repository import IGroupRepository
from src.app.repositories.group_status_repository import IGroupStatusRepository
from src.app.repositories.invitation_repository import IInvitationRepository
from src.app.repositories.invite_link_repository import IInviteLinkRepository
from src.app.repositories.status_preset_repository import IStatusPresetRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    groups: IGroupRepository
    members: IGroupMemberRepository
    invitations: IInvitationRepository
    invite_links: IInviteLinkRepository
    group_statuses: IGroupStatusRepository
    status_presets: IStatusPresetRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
