from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Invitation, InvitationType


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_pending_for_invitee(self, invitee_id: str) -> List[Invitation]:
        """Get pending invitations addressed to a resolved invitee"""
        pass

    @abstractmethod
    async def get_pending_by_group_and_identifier(
        self, group_id: UUID, invitation_type: InvitationType, identifier: str
    ) -> Optional[Invitation]:
        """Get pending invitation for the same group and invitee identifier"""
        pass

    @abstractmethod
    async def get_by_group_id(self, group_id: UUID) -> List[Invitation]:
        """Get all invitations for a group"""
        pass

    @abstractmethod
    async def delete_by_group_id(self, group_id: UUID) -> int:
        """Delete every invitation of a group, returning the count"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass
