from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.entities import Invitation, InvitationStatus, InvitationType


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending_for_invitee(self, invitee_id: str) -> List[Invitation]:
        """Get pending invitations addressed to a resolved invitee"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.invitee_id == invitee_id,
                Invitation.status == InvitationStatus.pending,
            )
            .order_by(Invitation.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_pending_by_group_and_identifier(
        self, group_id: UUID, invitation_type: InvitationType, identifier: str
    ) -> Optional[Invitation]:
        """Get pending invitation for the same group and invitee identifier"""
        column = getattr(Invitation, invitation_type.invitee_field)
        stmt = select(Invitation).where(
            Invitation.group_id == group_id,
            Invitation.status == InvitationStatus.pending,
            column == identifier,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_group_id(self, group_id: UUID) -> List[Invitation]:
        """Get all invitations for a group"""
        stmt = (
            select(Invitation)
            .where(Invitation.group_id == group_id)
            .order_by(Invitation.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def delete_by_group_id(self, group_id: UUID) -> int:
        """Delete every invitation of a group, returning the count"""
        stmt = delete(Invitation).where(Invitation.group_id == group_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
