from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import InviteLink


class IInviteLinkRepository(ABC):
    """InviteLink repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, link_id: UUID) -> Optional[InviteLink]:
        """Get invite link by ID"""
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[InviteLink]:
        """Get invite link by its shareable code"""
        pass

    @abstractmethod
    async def delete_by_group_id(self, group_id: UUID) -> int:
        """Delete every invite link of a group, returning the count"""
        pass

    @abstractmethod
    async def create(self, link: InviteLink) -> InviteLink:
        """Create a new invite link"""
        pass

    @abstractmethod
    async def update(self, link: InviteLink) -> InviteLink:
        """Update existing invite link"""
        pass
