"""
Caller and Tenant Context

The tenant scope of a request is derived from the caller's own stored
record and nothing else.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.libs.result import Error, ErrorKind, Result, Return

from .entities import User, UserRole


class Caller(BaseModel):
    """Authenticated user as seen by request handlers (no credentials)"""

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str
    role: UserRole
    organization_id: Optional[UUID] = None
    tenant_id: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "Caller":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            organization_id=user.organization_id,
            tenant_id=user.tenant_id,
        )

    @property
    def is_platform_admin(self) -> bool:
        return self.role == UserRole.super_admin


class TenantContext(BaseModel):
    """Enforced scope every tenant-scoped query must filter by"""

    model_config = ConfigDict(frozen=True)

    tenant_id: str
    organization_id: UUID
    user_id: UUID
    role: UserRole


def check_user_scope(
    role: UserRole, organization_id: Optional[UUID], tenant_id: Optional[str]
) -> Result[None]:
    """super_admin has no tenant; every other role has exactly one"""
    if role == UserRole.super_admin:
        if organization_id is not None or tenant_id is not None:
            return Return.err(
                Error(
                    "INVALID_SCOPE",
                    "A platform admin cannot belong to an organization",
                    ErrorKind.validation,
                )
            )
        return Return.ok(None)

    if organization_id is None or not tenant_id:
        return Return.err(
            Error(
                "INVALID_SCOPE",
                "Organization and tenant are required for this role",
                ErrorKind.validation,
            )
        )
    return Return.ok(None)


def resolve_tenant_context(caller: Optional[Caller]) -> Result[TenantContext]:
    if caller is None:
        return Return.err(
            Error("UNAUTHORIZED", "Authentication required", ErrorKind.unauthorized)
        )

    if caller.is_platform_admin:
        return Return.err(
            Error(
                "PLATFORM_ADMIN_ONLY",
                "Platform admins have no tenant context; use the platform admin routes",
                ErrorKind.forbidden,
            )
        )

    if caller.organization_id is None or not caller.tenant_id:
        return Return.err(
            Error(
                "NO_TENANT_CONTEXT",
                "No organization is associated with this account",
                ErrorKind.forbidden,
            )
        )

    return Return.ok(
        TenantContext(
            tenant_id=caller.tenant_id,
            organization_id=caller.organization_id,
            user_id=caller.id,
            role=caller.role,
        )
    )
