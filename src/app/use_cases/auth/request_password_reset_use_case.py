"""
Request Password Reset Use Case

Issues a reset token and emails the reset link.
"""

import logging

from src.app.services.credential_store import CredentialStore
from src.app.services.email_sender import IEmailSender, deliver_best_effort
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.libs.result import Result, Return

from .dtos import MessageResponse

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If an account exists with that email, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for starting a password reset.

    Business Rules:
    - Same response whether or not the email is registered (no enumeration)
    - Only the SHA-256 digest of the token is stored, valid for 1 hour
    - Email delivery is best-effort and never fails the request
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        email_sender: IEmailSender,
        frontend_url: str,
    ):
        self.uow = uow
        self.hasher = hasher
        self.email_sender = email_sender
        self.frontend_url = frontend_url.rstrip("/")

    async def execute(self, email: str) -> Result[MessageResponse]:
        email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                logger.info(f"Password reset requested for unknown email {email}")
                return Return.ok(MessageResponse(message=RESET_REQUESTED_MESSAGE))

            raw_token = await CredentialStore(self.uow, self.hasher).issue_reset_token(user)
            await self.uow.commit()

        reset_url = f"{self.frontend_url}/reset-password/{raw_token}"
        await deliver_best_effort(
            self.email_sender,
            email,
            "Password reset request",
            "You requested a password reset.\n\n"
            f"Reset your password here (valid for 1 hour):\n{reset_url}\n\n"
            "If you did not request this, you can ignore this email.",
        )

        return Return.ok(MessageResponse(message=RESET_REQUESTED_MESSAGE))
