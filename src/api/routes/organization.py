from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.utils.rbac import require_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.organizations import (
    GetOrganizationUseCase,
    ListMembersUseCase,
    MemberList,
    OrganizationDetails,
    UpdateOrganizationCommand,
    UpdateOrganizationUseCase,
)
from src.depends import get_tenant_context, get_unit_of_work
from src.domain.tenant_context import TenantContext

router = APIRouter(prefix="/organization", tags=["Organization"])


@router.get("", status_code=status.HTTP_200_OK, response_model=OrganizationDetails)
async def get_organization(
    context: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetOrganizationUseCase(uow).execute(context)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class UpdateOrganizationRequest(BaseModel):
    """
    Update organization HTTP request payload

    Unknown fields such as organization_id or tenant_id are ignored.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    settings: Optional[Dict[str, Any]] = None


@router.put("", status_code=status.HTTP_200_OK, response_model=OrganizationDetails)
async def update_organization(
    payload: UpdateOrganizationRequest,
    context: TenantContext = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    command = UpdateOrganizationCommand(name=payload.name, settings=payload.settings)
    result = await UpdateOrganizationUseCase(uow).execute(context, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/members", status_code=status.HTTP_200_OK, response_model=MemberList)
async def list_members(
    context: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListMembersUseCase(uow).execute(context)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
