import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_entry_repository import IAuditEntryRepository
from src.domain.entities import AuditAction, AuditEntry, AuditResource


class AuditEntryRepository(IAuditEntryRepository):
    """AuditEntry repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: AuditEntry) -> AuditEntry:
        """Append an audit entry (immutable)"""
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def get_by_tenant_paginated(
        self,
        tenant_id: str,
        organization_id: UUID,
        limit: int = 20,
        cursor: Optional[str] = None,
        action: Optional[AuditAction] = None,
        resource: Optional[AuditResource] = None,
    ) -> Tuple[List[AuditEntry], Optional[str]]:
        """
        Get audit entries for a tenant with cursor-based pagination.

        Cursor format: base64 of "<created_at ISO>|<id>" of the last entry returned
        """
        stmt = select(AuditEntry).where(
            AuditEntry.tenant_id == tenant_id,
            AuditEntry.organization_id == organization_id,
        )
        if action is not None:
            stmt = stmt.where(AuditEntry.action == action)
        if resource is not None:
            stmt = stmt.where(AuditEntry.resource == resource)

        if cursor:
            try:
                cursor_timestamp_str, cursor_id_str = (
                    base64.b64decode(cursor).decode("utf-8").split("|", 1)
                )
                cursor_timestamp = datetime.fromisoformat(cursor_timestamp_str)
                cursor_id = UUID(cursor_id_str)
                stmt = stmt.where(
                    or_(
                        AuditEntry.created_at < cursor_timestamp,
                        and_(AuditEntry.created_at == cursor_timestamp, AuditEntry.id < cursor_id),
                    )
                )
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        # Newest first (id breaks timestamp ties), one extra row to detect a next page
        stmt = stmt.order_by(AuditEntry.created_at.desc(), AuditEntry.id.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        entries = list(result.all())

        has_more = len(entries) > limit
        if has_more:
            entries = entries[:limit]

        next_cursor = None
        if has_more and entries:
            last = entries[-1]
            cursor_str = f"{last.created_at.isoformat()}|{last.id}"
            next_cursor = base64.b64encode(cursor_str.encode("utf-8")).decode("utf-8")

        return entries, next_cursor
