"""
Credential Store

Owns everything that touches a user's secret material: the password hash
and the password reset token.
"""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utc_now
from src.domain.entities import User, UserRole
from src.domain.tenant_context import check_user_scope
from src.libs.result import Error, ErrorKind, Result, Return

MIN_PASSWORD_LENGTH = 6
RESET_TOKEN_BYTES = 20
RESET_TOKEN_TTL = timedelta(hours=1)


def hash_reset_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def validate_password(password: Optional[str]) -> Result[None]:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                "INVALID_PASSWORD",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                ErrorKind.validation,
            )
        )
    return Return.ok(None)


class CredentialStore:
    """
    Credential store over the users repository.

    Business Rules:
    - Email is trimmed and lower-cased before lookup and storage
    - Passwords are bcrypt-hashed before persistence, never stored in clear
    - set_password is the only writer of password_hash, with a fresh salt each call
    - Reset tokens: 20 random bytes, only the SHA-256 digest is stored, 1 hour TTL
    - Must be used inside an entered UnitOfWork; committing is the caller's job
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def create(
        self,
        email: str,
        password: str,
        role: UserRole,
        organization_id: Optional[UUID],
        tenant_id: Optional[str],
    ) -> Result[User]:
        scope_check = check_user_scope(role, organization_id, tenant_id)
        if scope_check.is_err():
            return Return.err(scope_check.error)

        password_check = validate_password(password)
        if password_check.is_err():
            return Return.err(password_check.error)

        email = normalize_email(email)
        if await self.uow.users.get_by_email(email) is not None:
            return Return.err(
                Error(
                    "EMAIL_ALREADY_REGISTERED",
                    "User already exists with this email",
                    ErrorKind.conflict,
                )
            )

        user = User(
            email=email,
            password_hash=await self.hasher.hash(password),
            role=role,
            organization_id=organization_id,
            tenant_id=tenant_id,
        )
        try:
            user = await self.uow.users.create(user)
        except IntegrityError:
            # Lost a race against a concurrent registration of the same email
            await self.uow.rollback()
            return Return.err(
                Error(
                    "EMAIL_ALREADY_REGISTERED",
                    "User already exists with this email",
                    ErrorKind.conflict,
                )
            )

        return Return.ok(user)

    async def match_password(self, user: User, candidate: str) -> bool:
        return await self.hasher.verify(candidate, user.password_hash)

    async def set_password(self, user: User, password: str) -> Result[User]:
        password_check = validate_password(password)
        if password_check.is_err():
            return Return.err(password_check.error)

        user.password_hash = await self.hasher.hash(password)
        return Return.ok(await self.uow.users.update(user))

    async def issue_reset_token(self, user: User) -> str:
        """Store the digest of a fresh reset token and return the raw token once"""
        raw_token = secrets.token_hex(RESET_TOKEN_BYTES)
        user.reset_password_token_hash = hash_reset_token(raw_token)
        user.reset_password_expires_at = utc_now() + RESET_TOKEN_TTL
        await self.uow.users.update(user)
        return raw_token

    async def consume_reset_token(
        self, raw_token: str, now: Optional[datetime] = None
    ) -> Result[User]:
        """Atomically invalidate a reset token, returning its owner"""
        token_hash = hash_reset_token(raw_token)
        user = await self.uow.users.get_by_reset_token_hash(token_hash, now or utc_now())
        if user is None:
            return Return.err(
                Error(
                    "INVALID_RESET_TOKEN",
                    "Invalid or expired reset token",
                    ErrorKind.not_found,
                )
            )

        if not await self.uow.users.clear_reset_token(user.id, token_hash):
            # Consumed concurrently
            return Return.err(
                Error(
                    "INVALID_RESET_TOKEN",
                    "Invalid or expired reset token",
                    ErrorKind.not_found,
                )
            )

        return Return.ok(user)
