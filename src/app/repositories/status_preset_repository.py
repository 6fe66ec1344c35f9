from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import UserStatusPreset


class IStatusPresetRepository(ABC):
    """UserStatusPreset repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, preset_id: UUID) -> Optional[UserStatusPreset]:
        """Get saved preset by ID"""
        pass

    @abstractmethod
    async def get_by_user_ids(self, user_ids: List[str]) -> List[UserStatusPreset]:
        """Get saved presets for one or more users"""
        pass

    @abstractmethod
    async def create(self, preset: UserStatusPreset) -> UserStatusPreset:
        """Create a new saved preset"""
        pass

    @abstractmethod
    async def delete(self, preset: UserStatusPreset) -> None:
        """Delete a saved preset"""
        pass
