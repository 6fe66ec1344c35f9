from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import GroupStatusDetail


class IGroupStatusRepository(ABC):
    """GroupStatusDetail repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_group(
        self, user_id: str, group_id: UUID
    ) -> Optional[GroupStatusDetail]:
        """Get a user's status override for one group"""
        pass

    @abstractmethod
    async def get_by_group_id(self, group_id: UUID) -> List[GroupStatusDetail]:
        """Get all status overrides set inside a group"""
        pass

    @abstractmethod
    async def create(self, detail: GroupStatusDetail) -> GroupStatusDetail:
        """Create a new status override"""
        pass

    @abstractmethod
    async def update(self, detail: GroupStatusDetail) -> GroupStatusDetail:
        """Update existing status override"""
        pass

    @abstractmethod
    async def delete(self, detail: GroupStatusDetail) -> None:
        """Delete a status override"""
        pass

    @abstractmethod
    async def delete_by_group_id(self, group_id: UUID) -> int:
        """Delete every status override set inside a group"""
        pass
