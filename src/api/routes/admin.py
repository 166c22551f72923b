"""
Admin API Routes - Platform Administration Endpoints

Only super admins may call these; tenant roles are rejected.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import raise_for_error
from src.api.utils.rbac import require_super_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    GetPlatformStatsUseCase,
    ListTenantsUseCase,
    PlatformStats,
    TenantList,
)
from src.depends import get_unit_of_work
from src.domain.tenant_context import Caller

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=PlatformStats)
async def get_platform_stats(
    caller: Caller = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetPlatformStatsUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/tenants", status_code=status.HTTP_200_OK, response_model=TenantList)
async def list_tenants(
    caller: Caller = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListTenantsUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value
