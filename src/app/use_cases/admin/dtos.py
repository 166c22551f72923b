from datetime import datetime
from typing import List

from pydantic import BaseModel

from src.domain.entities import Organization


class TenantSummary(BaseModel):
    id: str
    name: str
    tenant_id: str
    subscription_plan: str
    created_at: datetime

    @classmethod
    def from_entity(cls, organization: Organization) -> "TenantSummary":
        return cls(
            id=str(organization.id),
            name=organization.name,
            tenant_id=organization.tenant_id,
            subscription_plan=organization.subscription_plan.value,
            created_at=organization.created_at,
        )


class PlatformCounts(BaseModel):
    users: int
    organizations: int


class PlatformStats(BaseModel):
    counts: PlatformCounts
    recent_organizations: List[TenantSummary]


class TenantList(BaseModel):
    tenants: List[TenantSummary]
    count: int
