"""
Get Audit Entries Use Case

Retrieves audit log entries for a tenant with pagination.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditResource
from src.domain.tenant_context import TenantContext
from src.libs.result import Result, Return

MAX_PAGE_SIZE = 100


class AuditEntryInfo(BaseModel):
    id: str
    action: str
    resource: str
    resource_id: Optional[str] = None
    details: Any = None
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    ip: Optional[str] = None
    created_at: datetime


class AuditEntryPage(BaseModel):
    entries: List[AuditEntryInfo]
    next_cursor: Optional[str] = None


class GetAuditEntriesUseCase:
    """
    Use case for retrieving audit entries for a tenant.

    Business Rules:
    - Results are tenant-scoped (only entries for the caller's tenant)
    - Results ordered by newest first
    - Optional action and resource filters
    - Supports cursor-based pagination, page size clamped to 1..100
    - Each entry includes the acting user's email when known
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        context: TenantContext,
        limit: int = 20,
        cursor: Optional[str] = None,
        action: Optional[AuditAction] = None,
        resource: Optional[AuditResource] = None,
    ) -> Result[AuditEntryPage]:
        limit = min(MAX_PAGE_SIZE, max(1, limit))

        async with self.uow:
            entries, next_cursor = await self.uow.audit_entries.get_by_tenant_paginated(
                context.tenant_id,
                context.organization_id,
                limit=limit,
                cursor=cursor,
                action=action,
                resource=resource,
            )

            user_emails = {}
            for entry in entries:
                if entry.user_id and entry.user_id not in user_emails:
                    user = await self.uow.users.get_by_id(entry.user_id)
                    user_emails[entry.user_id] = user.email if user else None

            items = [
                AuditEntryInfo(
                    id=str(entry.id),
                    action=entry.action.value,
                    resource=entry.resource.value,
                    resource_id=entry.resource_id,
                    details=entry.details,
                    user_id=str(entry.user_id) if entry.user_id else None,
                    user_email=user_emails.get(entry.user_id),
                    ip=entry.ip,
                    created_at=entry.created_at,
                )
                for entry in entries
            ]

        return Return.ok(AuditEntryPage(entries=items, next_cursor=next_cursor))
