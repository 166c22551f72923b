"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    INVITABLE_ROLES,
    AuditAction,
    AuditResource,
    InvitationStatus,
    SubscriptionPlan,
    UserRole,
)

# Export all entities
from .organization import Organization
from .user import User
from .invitation import INVITATION_TTL, Invitation
from .audit_entry import AuditEntry

__all__ = [
    # Enums
    "UserRole",
    "SubscriptionPlan",
    "InvitationStatus",
    "AuditAction",
    "AuditResource",
    "INVITABLE_ROLES",
    # Entities
    "Organization",
    "User",
    "Invitation",
    "INVITATION_TTL",
    "AuditEntry",
]
