"""
Provision Super Admin Use Case

Creates a platform admin, or promotes an existing account to one.
"""

import logging

from src.app.services.credential_store import CredentialStore
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo
from src.domain.base import normalize_email
from src.domain.entities import UserRole
from src.libs.result import Error, ErrorKind, Result, Return

logger = logging.getLogger(__name__)


class ProvisionSuperAdminUseCase:
    """
    Business Rules:
    - A super admin has no organization and no tenant
    - An existing admin or member account with the email is promoted, its
      scope cleared and its password replaced
    - An owner is never promoted, so no organization is left without one
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, email: str, password: str) -> Result[UserInfo]:
        email = normalize_email(email)

        async with self.uow:
            credentials = CredentialStore(self.uow, self.hasher)
            user = await self.uow.users.get_by_email(email)

            if user is None:
                user_result = await credentials.create(
                    email=email,
                    password=password,
                    role=UserRole.super_admin,
                    organization_id=None,
                    tenant_id=None,
                )
                if user_result.is_err():
                    return Return.err(user_result.error)
                user = user_result.value
                logger.info(f"Created super admin: {email}")
            elif user.role == UserRole.owner:
                return Return.err(
                    Error(
                        "OWNER_CANNOT_BE_PROMOTED",
                        "Account owns an organization and cannot become a super admin",
                        ErrorKind.conflict,
                    )
                )
            else:
                user.role = UserRole.super_admin
                user.organization_id = None
                user.tenant_id = None
                user_result = await credentials.set_password(user, password)
                if user_result.is_err():
                    return Return.err(user_result.error)
                user = user_result.value
                logger.info(f"Promoted existing user to super admin: {email}")

            await self.uow.commit()
            return Return.ok(UserInfo.from_entity(user))
