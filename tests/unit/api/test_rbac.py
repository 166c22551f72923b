from uuid import uuid4

import pytest

from src.api.error import ClientError
from src.api.utils.rbac import require_admin, require_owner, require_super_admin
from src.domain.entities import UserRole
from src.domain.tenant_context import Caller, TenantContext


def context_for(role: UserRole) -> TenantContext:
    return TenantContext(tenant_id="t-1", organization_id=uuid4(), user_id=uuid4(), role=role)


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.member, UserRole.super_admin])
async def test_require_admin_rejects_non_admin_roles(role):
    with pytest.raises(ClientError) as exc_info:
        await require_admin(context_for(role))

    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.owner, UserRole.admin])
async def test_require_admin_admits_owner_and_admin(role):
    context = context_for(role)

    assert await require_admin(context) is context


@pytest.mark.asyncio
async def test_require_owner_rejects_admin():
    with pytest.raises(ClientError) as exc_info:
        await require_owner(context_for(UserRole.admin))

    assert exc_info.value.base_error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_require_super_admin_rejects_tenant_owner():
    owner = Caller(
        id=uuid4(), email="o@acme.com", role=UserRole.owner, organization_id=uuid4(), tenant_id="t-1"
    )

    with pytest.raises(ClientError) as exc_info:
        await require_super_admin(owner)

    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_require_super_admin_admits_platform_admin():
    admin = Caller(id=uuid4(), email="root@platform.io", role=UserRole.super_admin)

    assert await require_super_admin(admin) is admin
