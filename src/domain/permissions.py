"""
Role Permission Matrix

Closed set of roles mapped by a total function onto closed sets of
permissions. Adding a role without extending permissions_for is a type error.
"""

from enum import Enum
from typing import FrozenSet, Iterable, Optional, assert_never

from src.libs.result import Error, ErrorKind, Result, Return

from .entities import UserRole
from .tenant_context import TenantContext


class Permission(str, Enum):
    # Organization
    manage_organization = "manage_organization"
    manage_billing = "manage_billing"

    # Members & invitations
    invite_users = "invite_users"
    manage_members = "manage_members"
    cancel_invitations = "cancel_invitations"

    # Projects
    create_projects = "create_projects"
    manage_projects = "manage_projects"
    delete_projects = "delete_projects"

    # Tasks
    create_tasks = "create_tasks"
    manage_tasks = "manage_tasks"
    delete_tasks = "delete_tasks"

    view_audit_log = "view_audit_log"

    # Cross-tenant, read-only
    view_platform = "view_platform"


_TENANT_PERMISSIONS = frozenset(p for p in Permission if p is not Permission.view_platform)

_ADMIN_PERMISSIONS = frozenset(
    {
        Permission.manage_organization,
        Permission.invite_users,
        Permission.manage_members,
        Permission.cancel_invitations,
        Permission.create_projects,
        Permission.manage_projects,
        Permission.create_tasks,
        Permission.manage_tasks,
        Permission.view_audit_log,
    }
)

_MEMBER_PERMISSIONS = frozenset({Permission.create_tasks})


def permissions_for(role: UserRole) -> FrozenSet[Permission]:
    match role:
        case UserRole.owner:
            return _TENANT_PERMISSIONS
        case UserRole.admin:
            return _ADMIN_PERMISSIONS
        case UserRole.member:
            return _MEMBER_PERMISSIONS
        case UserRole.super_admin:
            return frozenset({Permission.view_platform})
        case _:
            assert_never(role)


def has_permission(role: UserRole, permission: Permission) -> bool:
    return permission in permissions_for(role)


def check_role(
    context: Optional[TenantContext], allowed: Iterable[UserRole]
) -> Result[TenantContext]:
    allowed = tuple(allowed)
    if context is None:
        return Return.err(
            Error("NO_ROLE", "Access denied: No role found", ErrorKind.forbidden)
        )

    if context.role not in allowed:
        return Return.err(
            Error(
                "INSUFFICIENT_ROLE",
                "Access denied: Insufficient permissions",
                ErrorKind.forbidden,
            )
        )

    return Return.ok(context)


def check_permission(
    context: Optional[TenantContext], permission: Permission
) -> Result[TenantContext]:
    if context is None:
        return Return.err(
            Error("NO_ROLE", "Access denied: No role found", ErrorKind.forbidden)
        )

    if not has_permission(context.role, permission):
        return Return.err(
            Error(
                "INSUFFICIENT_ROLE",
                f"Access denied: {permission.value} is not granted to {context.role.value}",
                ErrorKind.forbidden,
            )
        )

    return Return.ok(context)
