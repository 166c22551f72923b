from src.app.services.unit_of_work import UnitOfWork
from src.domain.tenant_context import TenantContext
from src.libs.result import Error, ErrorKind, Result, Return

from .dtos import OrganizationDetails


def organization_not_found() -> Error:
    return Error("ORGANIZATION_NOT_FOUND", "Organization not found", ErrorKind.not_found)


class GetOrganizationUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: TenantContext) -> Result[OrganizationDetails]:
        async with self.uow:
            organization = await self.uow.organizations.get_by_id_and_tenant(
                context.organization_id, context.tenant_id
            )
            if organization is None:
                return Return.err(organization_not_found())

            return Return.ok(OrganizationDetails.from_entity(organization))
