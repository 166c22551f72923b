from abc import ABC, abstractmethod
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import AuditAction, AuditResource
from src.domain.tenant_context import Caller, TenantContext


class AuditActor(BaseModel):
    """Who performed an audited action, all parts optional"""

    user_id: Optional[UUID] = None
    tenant_id: Optional[str] = None
    organization_id: Optional[UUID] = None

    @classmethod
    def from_context(cls, context: TenantContext) -> "AuditActor":
        return cls(
            user_id=context.user_id,
            tenant_id=context.tenant_id,
            organization_id=context.organization_id,
        )

    @classmethod
    def from_caller(cls, caller: Caller) -> "AuditActor":
        return cls(
            user_id=caller.id,
            tenant_id=caller.tenant_id,
            organization_id=caller.organization_id,
        )


class IAuditRecorder(ABC):
    """
    Best-effort audit log writer.

    record() returns nothing and never raises: the audited operation has
    already completed and must not be failed by its audit trail.
    """

    @abstractmethod
    async def record(
        self,
        actor: Optional[AuditActor],
        action: AuditAction,
        resource: AuditResource,
        resource_id: Optional[str] = None,
        details: Any = None,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        pass
