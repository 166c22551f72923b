"""
Audit API Routes

Handles audit log retrieval endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.api.utils.rbac import require_permission
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import AuditEntryPage, GetAuditEntriesUseCase
from src.depends import get_unit_of_work
from src.domain.entities import AuditAction, AuditResource
from src.domain.permissions import Permission
from src.domain.tenant_context import TenantContext

router = APIRouter(prefix="/audit-logs", tags=["Audit"])


@router.get("", status_code=status.HTTP_200_OK, response_model=AuditEntryPage)
async def get_audit_logs(
    context: TenantContext = Depends(require_permission(Permission.view_audit_log)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(20, ge=1, le=100, description="Maximum number of entries to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    action: Optional[AuditAction] = Query(None, description="Only entries with this action"),
    resource: Optional[AuditResource] = Query(None, description="Only entries on this resource"),
):
    """
    Get Audit Logs

    Returns the audit trail of the caller's tenant, newest first.
    Only accessible by owner and admin roles.

    Returns:
        - entries: List of audit entries ordered by newest first
        - next_cursor: Cursor for next page (null if no more entries)
    """
    result = await GetAuditEntriesUseCase(uow).execute(
        context, limit=limit, cursor=cursor, action=action, resource=resource
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
