from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import AuditAction, AuditEntry, AuditResource


class IAuditEntryRepository(ABC):
    """AuditEntry repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: AuditEntry) -> AuditEntry:
        """Append an audit entry"""
        pass

    @abstractmethod
    async def get_by_tenant_paginated(
        self,
        tenant_id: str,
        organization_id: UUID,
        limit: int = 20,
        cursor: Optional[str] = None,
        action: Optional[AuditAction] = None,
        resource: Optional[AuditResource] = None,
    ) -> Tuple[List[AuditEntry], Optional[str]]:
        """Get audit entries for a tenant with cursor-based pagination"""
        pass
