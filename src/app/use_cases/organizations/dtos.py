"""
Organization Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from src.domain.entities import Organization, User


class UpdateOrganizationCommand(BaseModel):
    """Only profile fields; scope always comes from the caller"""

    name: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None


class OrganizationDetails(BaseModel):
    id: str
    name: str
    tenant_id: str
    subscription_plan: str
    settings: Dict[str, Any]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, organization: Organization) -> "OrganizationDetails":
        return cls(
            id=str(organization.id),
            name=organization.name,
            tenant_id=organization.tenant_id,
            subscription_plan=organization.subscription_plan.value,
            settings=organization.settings or {},
            created_at=organization.created_at,
            updated_at=organization.updated_at,
        )


class MemberInfo(BaseModel):
    id: str
    email: str
    role: str
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "MemberInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            role=user.role.value,
            created_at=user.created_at,
        )


class MemberList(BaseModel):
    members: List[MemberInfo]
    count: int
