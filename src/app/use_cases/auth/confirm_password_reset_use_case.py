"""
Confirm Password Reset Use Case

Consumes a reset token, sets the new password and signs the user in.
"""

import logging

from src.api.utils.jwt import TokenService
from src.app.services.credential_store import CredentialStore, validate_password
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return

from .dtos import AuthResponse, IssuedSession, UserInfo

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - The token is invalidated by a single conditional update, so it works once
    - Unknown, expired or already used tokens fail alike
    - Success issues a new session token
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher, token_service: TokenService):
        self.uow = uow
        self.hasher = hasher
        self.token_service = token_service

    async def execute(self, raw_token: str, password: str) -> Result[IssuedSession]:
        password_check = validate_password(password)
        if password_check.is_err():
            return Return.err(password_check.error)

        async with self.uow:
            credentials = CredentialStore(self.uow, self.hasher)

            user_result = await credentials.consume_reset_token(raw_token)
            if user_result.is_err():
                return Return.err(user_result.error)

            user_result = await credentials.set_password(user_result.value, password)
            if user_result.is_err():
                return Return.err(user_result.error)
            user = user_result.value

            token_result = self.token_service.issue(user.id)
            if token_result.is_err():
                return Return.err(token_result.error)

            await self.uow.commit()

            body = AuthResponse(user=UserInfo.from_entity(user))

        logger.info(f"Password reset completed for {body.user.email}")
        return Return.ok(IssuedSession(token=token_result.value, body=body))
