"""
Signup Use Case

Registers a new organization together with its owner account.
"""

import logging

from src.api.utils.jwt import TokenService
from src.app.services.credential_store import CredentialStore
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Organization, UserRole
from src.libs.result import Result, Return

from .dtos import AuthResponse, IssuedSession, OrganizationInfo, SignupCommand, UserInfo

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Use case for self-service signup.

    Business Rules:
    - A fresh organization is created with a newly generated tenant id
    - The registering user becomes its owner
    - Duplicate email is a conflict, nothing is persisted
    - A session token is issued on success
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher, token_service: TokenService):
        self.uow = uow
        self.hasher = hasher
        self.token_service = token_service

    async def execute(self, command: SignupCommand) -> Result[IssuedSession]:
        async with self.uow:
            credentials = CredentialStore(self.uow, self.hasher)

            organization = await self.uow.organizations.create(
                Organization(name=command.organization_name.strip())
            )

            user_result = await credentials.create(
                email=command.email,
                password=command.password,
                role=UserRole.owner,
                organization_id=organization.id,
                tenant_id=organization.tenant_id,
            )
            if user_result.is_err():
                # Leaving the block rolls the organization back
                return Return.err(user_result.error)
            user = user_result.value

            token_result = self.token_service.issue(user.id)
            if token_result.is_err():
                return Return.err(token_result.error)

            await self.uow.commit()

            logger.info(f"New user registered: {user.email} (Organization: {organization.name})")

            return Return.ok(
                IssuedSession(
                    token=token_result.value,
                    body=AuthResponse(
                        user=UserInfo.from_entity(user),
                        organization=OrganizationInfo.from_entity(organization),
                    ),
                )
            )
