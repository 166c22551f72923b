from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return

from .dtos import TenantList, TenantSummary


class ListTenantsUseCase:
    """Every organization on the platform, newest first (super admin only)"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[TenantList]:
        async with self.uow:
            organizations = await self.uow.organizations.list_recent()
            tenants = [TenantSummary.from_entity(org) for org in organizations]

        return Return.ok(TenantList(tenants=tenants, count=len(tenants)))
