from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.group_member_repository import GroupMemberRepository
from src.adapter.repositories.group_repository import GroupRepository
from src.adapter.repositories.group_status_repository import GroupStatusRepository
from src.adapter.repositories.invitation_repository import InvitationRepository
from src.adapter.repositories.invite_link_repository import InviteLinkRepository
from src.adapter.repositories.status_preset_repository import StatusPresetRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.groups = GroupRepository(self.session)
        self.members = GroupMemberRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.invite_links = InviteLinkRepository(self.session)
        self.group_statuses = GroupStatusRepository(self.session)
        self.status_presets = StatusPresetRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
