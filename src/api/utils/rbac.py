"""
Role Authorization Guard

FastAPI dependency factories that run after tenant context resolution and
reject callers whose role does not grant access.
"""

from fastapi import Depends, status

from src.api.error import ClientError
from src.depends import get_current_user, get_tenant_context
from src.domain.entities import UserRole
from src.domain.permissions import Permission, check_permission, check_role
from src.domain.tenant_context import Caller, TenantContext
from src.libs.result import Error, ErrorKind


def require_role(*roles: UserRole):
    allowed = frozenset(roles)

    async def dependency(context: TenantContext = Depends(get_tenant_context)) -> TenantContext:
        result = check_role(context, allowed)
        if result.is_err():
            raise ClientError.from_error(result.error)
        return result.value

    return dependency


def require_permission(permission: Permission):
    async def dependency(context: TenantContext = Depends(get_tenant_context)) -> TenantContext:
        result = check_permission(context, permission)
        if result.is_err():
            raise ClientError.from_error(result.error)
        return result.value

    return dependency


require_owner = require_role(UserRole.owner)
require_admin = require_role(UserRole.owner, UserRole.admin)


async def require_super_admin(caller: Caller = Depends(get_current_user)) -> Caller:
    """Platform routes: only super_admin, never tenant roles"""
    if not caller.is_platform_admin:
        raise ClientError(
            Error("SUPER_ADMIN_REQUIRED", "Super admin access required", ErrorKind.forbidden),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return caller
