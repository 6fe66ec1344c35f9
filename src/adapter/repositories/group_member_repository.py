from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.group_member_repository import IGroupMemberRepository
from src.domain.entities import GroupMember


class GroupMemberRepository(IGroupMemberRepository):
    """GroupMember repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_group_and_user(
        self, group_id: UUID, user_id: str
    ) -> Optional[GroupMember]:
        """Get membership by group and user"""
        stmt = select(GroupMember).where(
            GroupMember.group_id == group_id, GroupMember.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_group_id(self, group_id: UUID) -> List[GroupMember]:
        """Get all members of a group, oldest first"""
        stmt = (
            select(GroupMember)
            .where(GroupMember.group_id == group_id)
            .order_by(GroupMember.joined_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_user_id(self, user_id: str) -> List[GroupMember]:
        """Get all memberships for a user"""
        stmt = select(GroupMember).where(GroupMember.user_id == user_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, member: GroupMember) -> GroupMember:
        """Create a new membership"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def update(self, member: GroupMember) -> GroupMember:
        """Update existing membership"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def delete(self, member: GroupMember) -> None:
        """Delete a membership"""
        await self.session.delete(member)
        await self.session.flush()

    async def delete_by_group_id(self, group_id: UUID) -> int:
        """Delete every membership of a group, returning the count"""
        stmt = delete(GroupMember).where(GroupMember.group_id == group_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
