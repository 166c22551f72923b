from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.base import utc_now
from src.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        stmt = select(Invitation).where(Invitation.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_organization_and_email(
        self, organization_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by organization and email"""
        stmt = select(Invitation).where(
            Invitation.organization_id == organization_id,
            Invitation.email == email,
            Invitation.status == InvitationStatus.pending,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_tenant(
        self, organization_id: UUID, tenant_id: str
    ) -> List[Invitation]:
        """Get all invitations of a tenant, newest first"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.organization_id == organization_id,
                Invitation.tenant_id == tenant_id,
            )
            .order_by(Invitation.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def transition_status(
        self,
        invitation_id: UUID,
        from_status: InvitationStatus,
        to_status: InvitationStatus,
        valid_at: Optional[datetime] = None,
    ) -> bool:
        """Conditional UPDATE guarded by the previous state"""
        conditions = [Invitation.id == invitation_id, Invitation.status == from_status]
        if valid_at is not None:
            conditions.append(Invitation.expires_at > valid_at)

        stmt = (
            update(Invitation)
            .where(*conditions)
            .values(status=to_status, updated_at=utc_now())
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete_pending(
        self, invitation_id: UUID, organization_id: UUID, tenant_id: str
    ) -> bool:
        """Conditional DELETE guarded by tenant scope and pending state"""
        stmt = delete(Invitation).where(
            Invitation.id == invitation_id,
            Invitation.organization_id == organization_id,
            Invitation.tenant_id == tenant_id,
            Invitation.status == InvitationStatus.pending,
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
