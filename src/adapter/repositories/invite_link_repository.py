from typing import Optional
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invite_link_repository import IInviteLinkRepository
from src.domain.entities import InviteLink


class InviteLinkRepository(IInviteLinkRepository):
    """InviteLink repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, link_id: UUID) -> Optional[InviteLink]:
        """Get invite link by ID"""
        stmt = select(InviteLink).where(InviteLink.id == link_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str) -> Optional[InviteLink]:
        """Get invite link by its shareable code"""
        stmt = select(InviteLink).where(InviteLink.code == code)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, link: InviteLink) -> InviteLink:
        """Create a new invite link"""
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link

    async def update(self, link: InviteLink) -> InviteLink:
        """Update existing invite link"""
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link

    async def delete_by_group_id(self, group_id: UUID) -> int:
        """Delete every invite link of a group, returning the count"""
        stmt = delete(InviteLink).where(InviteLink.group_id == group_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
