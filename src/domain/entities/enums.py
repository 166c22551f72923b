"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role of a user; super_admin has no tenant of its own"""

    owner = "owner"
    admin = "admin"
    member = "member"
    super_admin = "super_admin"


class SubscriptionPlan(str, Enum):
    free = "free"
    pro = "pro"


class InvitationStatus(str, Enum):
    """Invitation status"""

    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    expired = "expired"


class AuditAction(str, Enum):
    """Actions recorded in the audit log"""

    login_success = "login_success"
    login_failure = "login_failure"
    logout = "logout"
    signup = "signup"
    password_reset_request = "password_reset_request"
    password_reset_success = "password_reset_success"
    invitation_sent = "invitation_sent"
    invitation_accepted = "invitation_accepted"
    invitation_rejected = "invitation_rejected"
    invitation_cancelled = "invitation_cancelled"
    project_create = "project_create"
    project_update = "project_update"
    project_delete = "project_delete"
    task_create = "task_create"
    task_update = "task_update"
    task_delete = "task_delete"
    billing_checkout_started = "billing_checkout_started"
    billing_portal_accessed = "billing_portal_accessed"


class AuditResource(str, Enum):
    auth = "auth"
    invitation = "invitation"
    project = "project"
    task = "task"
    billing = "billing"


# Roles that may be granted through an invitation
INVITABLE_ROLES = (UserRole.admin, UserRole.member)
