from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Invitation, InvitationStatus


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        pass

    @abstractmethod
    async def get_pending_by_organization_and_email(
        self, organization_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by organization and email"""
        pass

    @abstractmethod
    async def list_by_tenant(
        self, organization_id: UUID, tenant_id: str
    ) -> List[Invitation]:
        """Get all invitations of a tenant, newest first"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def transition_status(
        self,
        invitation_id: UUID,
        from_status: InvitationStatus,
        to_status: InvitationStatus,
        valid_at: Optional[datetime] = None,
    ) -> bool:
        """
        Atomically move an invitation between states.

        Applies only while the stored status still equals from_status (and,
        when valid_at is given, while expires_at is later than valid_at).
        Returns False if no row matched.
        """
        pass

    @abstractmethod
    async def delete_pending(
        self, invitation_id: UUID, organization_id: UUID, tenant_id: str
    ) -> bool:
        """Hard-delete a pending invitation of this tenant, False if none matched"""
        pass
