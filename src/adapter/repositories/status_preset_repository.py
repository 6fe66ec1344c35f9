from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.status_preset_repository import IStatusPresetRepository
from src.domain.entities import UserStatusPreset


class StatusPresetRepository(IStatusPresetRepository):
    """UserStatusPreset repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, preset_id: UUID) -> Optional[UserStatusPreset]:
        """Get saved preset by ID"""
        stmt = select(UserStatusPreset).where(UserStatusPreset.id == preset_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_ids(self, user_ids: List[str]) -> List[UserStatusPreset]:
        """Get saved presets for one or more users"""
        if not user_ids:
            return []
        stmt = (
            select(UserStatusPreset)
            .where(UserStatusPreset.user_id.in_(user_ids))
            .order_by(UserStatusPreset.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, preset: UserStatusPreset) -> UserStatusPreset:
        """Create a new saved preset"""
        self.session.add(preset)
        await self.session.flush()
        await self.session.refresh(preset)
        return preset

    async def delete(self, preset: UserStatusPreset) -> None:
        """Delete a saved preset"""
        await self.session.delete(preset)
        await self.session.flush()
