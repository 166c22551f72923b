from typing import Any, Optional

from fastapi import BackgroundTasks, Request

from src.app.services.audit_recorder import AuditActor, IAuditRecorder
from src.domain.entities import AuditAction, AuditResource


def schedule_audit(
    background_tasks: BackgroundTasks,
    recorder: IAuditRecorder,
    request: Request,
    actor: Optional[AuditActor],
    action: AuditAction,
    resource: AuditResource,
    resource_id: Optional[str] = None,
    details: Any = None,
) -> None:
    """Record an audit entry after the response has been produced"""
    background_tasks.add_task(
        recorder.record,
        actor,
        action,
        resource,
        resource_id=resource_id,
        details=details,
        ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


async def record_audit_now(
    recorder: IAuditRecorder,
    request: Request,
    actor: Optional[AuditActor],
    action: AuditAction,
    resource: AuditResource,
    resource_id: Optional[str] = None,
    details: Any = None,
) -> None:
    """Record inline, for error paths where background tasks are discarded"""
    await recorder.record(
        actor,
        action,
        resource,
        resource_id=resource_id,
        details=details,
        ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
