import logging
from typing import Any, Callable, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_entry_repository import AuditEntryRepository
from src.app.services.audit_recorder import AuditActor, IAuditRecorder
from src.domain.entities import AuditAction, AuditEntry, AuditResource

logger = logging.getLogger(__name__)


class SqlAlchemyAuditRecorder(IAuditRecorder):
    """Writes each entry in its own short-lived session"""

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

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
        actor = actor or AuditActor()
        try:
            async with self.session_factory() as session:
                entry = AuditEntry(
                    user_id=actor.user_id,
                    tenant_id=actor.tenant_id,
                    organization_id=actor.organization_id,
                    action=action,
                    resource=resource,
                    resource_id=resource_id,
                    details=details,
                    ip=ip,
                    user_agent=user_agent,
                )
                await AuditEntryRepository(session).create(entry)
                await session.commit()
        except Exception:
            logger.exception(f"Audit log failed: {action.value} on {resource.value}")
