from src.app.services.unit_of_work import UnitOfWork
from src.domain.tenant_context import TenantContext
from src.libs.result import Result, Return

from .dtos import MemberInfo, MemberList


class ListMembersUseCase:
    """Users of the caller's tenant, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: TenantContext) -> Result[MemberList]:
        async with self.uow:
            users = await self.uow.users.list_by_organization(
                context.organization_id, context.tenant_id
            )
            members = [MemberInfo.from_entity(user) for user in users]

        return Return.ok(MemberList(members=members, count=len(members)))
