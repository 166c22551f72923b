from src.app.services.unit_of_work import UnitOfWork
from src.domain.tenant_context import Caller
from src.libs.result import Error, ErrorKind, Result, Return

from .dtos import AuthResponse, OrganizationInfo, UserInfo


class GetMeUseCase:
    """Current user and their organization; platform admins have none"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller) -> Result[AuthResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(caller.id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found", ErrorKind.unauthorized))

            if caller.is_platform_admin:
                return Return.ok(AuthResponse(user=UserInfo.from_entity(user)))

            organization = await self.uow.organizations.get_by_id_and_tenant(
                user.organization_id, user.tenant_id
            )
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found", ErrorKind.internal)
                )

            return Return.ok(
                AuthResponse(
                    user=UserInfo.from_entity(user),
                    organization=OrganizationInfo.from_entity(organization),
                )
            )
