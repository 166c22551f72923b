from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from src.domain.entities import Organization


class IOrganizationRepository(ABC):
    """Organization repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, organization_id: UUID) -> Optional[Organization]:
        """Get organization by ID"""
        pass

    @abstractmethod
    async def get_by_id_and_tenant(
        self, organization_id: UUID, tenant_id: str
    ) -> Optional[Organization]:
        """Get organization by ID, scoped to its tenant"""
        pass

    @abstractmethod
    async def list_recent(self, limit: Optional[int] = None) -> List[Organization]:
        """Get organizations, newest first"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all organizations"""
        pass

    @abstractmethod
    async def create(self, organization: Organization) -> Organization:
        """Create a new organization"""
        pass

    @abstractmethod
    async def update_profile(
        self,
        organization_id: UUID,
        tenant_id: str,
        name: Optional[str] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> Optional[Organization]:
        """Update name and/or settings of a tenant's organization"""
        pass
