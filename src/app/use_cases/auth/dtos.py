"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Organization, User


# ============================================================================
# Command DTOs
# ============================================================================


class SignupCommand(BaseModel):
    """Validated intent to register an organization and its owner"""

    email: str
    password: str
    organization_name: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User as exposed over the API (no credential fields)"""

    id: str
    email: str
    role: str
    organization_id: Optional[str] = None
    tenant_id: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            role=user.role.value,
            organization_id=str(user.organization_id) if user.organization_id else None,
            tenant_id=user.tenant_id,
        )


class OrganizationInfo(BaseModel):
    """Organization summary in authentication responses"""

    id: str
    name: str
    tenant_id: str
    subscription_plan: str

    @classmethod
    def from_entity(cls, organization: Organization) -> "OrganizationInfo":
        return cls(
            id=str(organization.id),
            name=organization.name,
            tenant_id=organization.tenant_id,
            subscription_plan=organization.subscription_plan.value,
        )


class AuthResponse(BaseModel):
    """Body returned by signup, login, me and the flows that sign a user in"""

    user: UserInfo
    organization: Optional[OrganizationInfo] = None


class IssuedSession(BaseModel):
    """A freshly signed session token plus the body to return alongside it"""

    token: str
    body: AuthResponse


class MessageResponse(BaseModel):
    """Plain acknowledgement"""

    message: str
