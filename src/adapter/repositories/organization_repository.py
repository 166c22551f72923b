from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.organization_repository import IOrganizationRepository
from src.domain.base import utc_now
from src.domain.entities import Organization


class OrganizationRepository(IOrganizationRepository):
    """Organization repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, organization_id: UUID) -> Optional[Organization]:
        """Get organization by ID"""
        stmt = select(Organization).where(Organization.id == organization_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id_and_tenant(
        self, organization_id: UUID, tenant_id: str
    ) -> Optional[Organization]:
        """Get organization by ID, scoped to its tenant"""
        stmt = select(Organization).where(
            Organization.id == organization_id, Organization.tenant_id == tenant_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_recent(self, limit: Optional[int] = None) -> List[Organization]:
        """Get organizations, newest first"""
        stmt = select(Organization).order_by(Organization.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(self) -> int:
        """Count all organizations"""
        result = await self.session.exec(select(func.count()).select_from(Organization))
        return result.one()

    async def create(self, organization: Organization) -> Organization:
        """Create a new organization"""
        self.session.add(organization)
        await self.session.flush()
        await self.session.refresh(organization)
        return organization

    async def update_profile(
        self,
        organization_id: UUID,
        tenant_id: str,
        name: Optional[str] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> Optional[Organization]:
        """
        Update name and/or settings of a tenant's organization.

        tenant_id only ever appears in the WHERE clause: it is written once,
        on insert.
        """
        values: Dict[str, Any] = {"updated_at": utc_now()}
        if name is not None:
            values["name"] = name
        if settings is not None:
            values["settings"] = settings

        stmt = (
            update(Organization)
            .where(Organization.id == organization_id, Organization.tenant_id == tenant_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None

        organization = await self.get_by_id_and_tenant(organization_id, tenant_id)
        await self.session.refresh(organization)
        return organization
