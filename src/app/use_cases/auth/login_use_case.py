"""
Login Use Case

Checks credentials and issues a session token.
"""

import logging

from src.api.utils.jwt import TokenService
from src.app.services.credential_store import CredentialStore
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.libs.result import Error, ErrorKind, Result, Return

from .dtos import AuthResponse, IssuedSession, OrganizationInfo, UserInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password are indistinguishable to the caller
    - Tenant users must still belong to an existing organization
    - Platform admins sign in without an organization
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher, token_service: TokenService):
        self.uow = uow
        self.hasher = hasher
        self.token_service = token_service

    async def execute(self, email: str, password: str) -> Result[IssuedSession]:
        async with self.uow:
            email = normalize_email(email)
            user = await self.uow.users.get_by_email(email)

            if user is None:
                # Hash check anyway to keep timing uniform
                await self.hasher.verify_dummy(password)
                logger.warning(f"Login failed: unknown email {email}")
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid credentials", ErrorKind.unauthorized)
                )

            credentials = CredentialStore(self.uow, self.hasher)
            if not await credentials.match_password(user, password):
                logger.warning(f"Login failed: invalid password for {email}")
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid credentials", ErrorKind.unauthorized)
                )

            organization = None
            if user.organization_id is not None:
                organization = await self.uow.organizations.get_by_id(user.organization_id)
                if organization is None:
                    return Return.err(
                        Error("ORGANIZATION_NOT_FOUND", "Organization not found", ErrorKind.internal)
                    )

            token_result = self.token_service.issue(user.id)
            if token_result.is_err():
                return Return.err(token_result.error)

            logger.info(f"User logged in: {email}")

            return Return.ok(
                IssuedSession(
                    token=token_result.value,
                    body=AuthResponse(
                        user=UserInfo.from_entity(user),
                        organization=(
                            OrganizationInfo.from_entity(organization) if organization else None
                        ),
                    ),
                )
            )
