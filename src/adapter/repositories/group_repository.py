from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.group_repository import IGroupRepository
from src.domain.entities import Group


class GroupRepository(IGroupRepository):
    """Group repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, group_id: UUID) -> Optional[Group]:
        """Get group by ID"""
        stmt = select(Group).where(Group.id == group_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, group: Group) -> Group:
        """Create a new group"""
        self.session.add(group)
        await self.session.flush()
        await self.session.refresh(group)
        return group

    async def update(self, group: Group) -> Group:
        """Update existing group"""
        self.session.add(group)
        await self.session.flush()
        await self.session.refresh(group)
        return group

    async def delete(self, group: Group) -> None:
        """Delete a group"""
        await self.session.delete(group)
        await self.session.flush()
