from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.group_status_repository import IGroupStatusRepository
from src.domain.entities import GroupStatusDetail


class GroupStatusRepository(IGroupStatusRepository):
    """GroupStatusDetail repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_group(
        self, user_id: str, group_id: UUID
    ) -> Optional[GroupStatusDetail]:
        """Get a user's status override for one group"""
        stmt = select(GroupStatusDetail).where(
            GroupStatusDetail.user_id == user_id,
            GroupStatusDetail.group_id == group_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_group_id(self, group_id: UUID) -> List[GroupStatusDetail]:
        """Get all status overrides set inside a group"""
        stmt = select(GroupStatusDetail).where(GroupStatusDetail.group_id == group_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, detail: GroupStatusDetail) -> GroupStatusDetail:
        """Create a new status override"""
        self.session.add(detail)
        await self.session.flush()
        await self.session.refresh(detail)
        return detail

    async def update(self, detail: GroupStatusDetail) -> GroupStatusDetail:
        """Update existing status override"""
        self.session.add(detail)
        await self.session.flush()
        await self.session.refresh(detail)
        return detail

    async def delete(self, detail: GroupStatusDetail) -> None:
        """Delete a status override"""
        await self.session.delete(detail)
        await self.session.flush()

    async def delete_by_group_id(self, group_id: UUID) -> int:
        """Delete every status override set inside a group"""
        stmt = delete(GroupStatusDetail).where(GroupStatusDetail.group_id == group_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
