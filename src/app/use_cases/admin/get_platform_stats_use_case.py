from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return

from .dtos import PlatformCounts, PlatformStats, TenantSummary

RECENT_ORGANIZATIONS_LIMIT = 5


class GetPlatformStatsUseCase:
    """Platform-wide counts and the newest organizations (super admin only)"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[PlatformStats]:
        async with self.uow:
            total_users = await self.uow.users.count()
            total_organizations = await self.uow.organizations.count()
            recent = await self.uow.organizations.list_recent(limit=RECENT_ORGANIZATIONS_LIMIT)
            recent_organizations = [TenantSummary.from_entity(org) for org in recent]

        return Return.ok(
            PlatformStats(
                counts=PlatformCounts(users=total_users, organizations=total_organizations),
                recent_organizations=recent_organizations,
            )
        )
