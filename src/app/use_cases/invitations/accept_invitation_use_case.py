"""
Accept Invitation Use Case

Turns a pending invitation into a user account in the inviting tenant.
"""

import logging
from typing import Optional

from src.api.utils.jwt import TokenService
from src.app.services.password_hasher import PasswordHasher
from src.app.services.credential_store import CredentialStore, validate_password
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import AuthResponse, IssuedSession, OrganizationInfo, UserInfo
from src.domain.base import utc_now
from src.domain.entities import Invitation, InvitationStatus
from src.libs.result import Error, ErrorKind, Result, Return

logger = logging.getLogger(__name__)


def invitation_not_found() -> Error:
    return Error("INVITATION_NOT_FOUND", "Invitation not found", ErrorKind.not_found)


def invitation_closed() -> Error:
    return Error(
        "INVITATION_NOT_PENDING", "Invitation has already been resolved", ErrorKind.conflict
    )


def invitation_expired() -> Error:
    return Error("INVITATION_EXPIRED", "Invitation has expired", ErrorKind.validation)


async def check_invitation_open(uow: UnitOfWork, invitation: Invitation) -> Result[None]:
    """
    Fail unless the invitation can still be acted upon.

    A pending invitation found past its expiry is marked expired on the way.
    """
    now = utc_now()
    if invitation.is_valid(now):
        return Return.ok(None)

    if invitation.has_lapsed(now):
        if await uow.invitations.transition_status(
            invitation.id, InvitationStatus.pending, InvitationStatus.expired
        ):
            await uow.commit()
        return Return.err(invitation_expired())

    if invitation.status == InvitationStatus.expired:
        return Return.err(invitation_expired())

    return Return.err(invitation_closed())


class AcceptInvitationUseCase:
    """
    Use case for accepting an invitation.

    Business Rules:
    - Invitation must be pending and unexpired
    - Emails registered anywhere already cannot accept (one tenant per email)
    - The pending -> accepted transition is a single conditional update, so
      concurrent accepts create at most one user
    - The new user gets the invitation's organization, tenant and role
    - A session token is issued on success
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher, token_service: TokenService):
        self.uow = uow
        self.hasher = hasher
        self.token_service = token_service

    async def execute(self, token: str, password: Optional[str]) -> Result[IssuedSession]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token(token)
            if invitation is None:
                return Return.err(invitation_not_found())

            open_check = await check_invitation_open(self.uow, invitation)
            if open_check.is_err():
                return Return.err(open_check.error)

            existing_user = await self.uow.users.get_by_email(invitation.email)
            if existing_user is not None:
                if existing_user.tenant_id == invitation.tenant_id:
                    return Return.err(
                        Error(
                            "ALREADY_MEMBER",
                            "User is already a member of this organization",
                            ErrorKind.conflict,
                        )
                    )
                return Return.err(
                    Error(
                        "EMAIL_REGISTERED_ELSEWHERE",
                        "This email is already registered with another organization",
                        ErrorKind.conflict,
                    )
                )

            if not password:
                return Return.err(
                    Error(
                        "PASSWORD_REQUIRED",
                        "Password is required to accept invitation",
                        ErrorKind.validation,
                    )
                )
            password_check = validate_password(password)
            if password_check.is_err():
                return Return.err(password_check.error)

            claimed = await self.uow.invitations.transition_status(
                invitation.id,
                InvitationStatus.pending,
                InvitationStatus.accepted,
                valid_at=utc_now(),
            )
            if not claimed:
                return Return.err(invitation_closed())

            user_result = await CredentialStore(self.uow, self.hasher).create(
                email=invitation.email,
                password=password,
                role=invitation.role,
                organization_id=invitation.organization_id,
                tenant_id=invitation.tenant_id,
            )
            if user_result.is_err():
                return Return.err(user_result.error)
            user = user_result.value

            token_result = self.token_service.issue(user.id)
            if token_result.is_err():
                return Return.err(token_result.error)

            organization = await self.uow.organizations.get_by_id_and_tenant(
                invitation.organization_id, invitation.tenant_id
            )

            await self.uow.commit()

            body = AuthResponse(
                user=UserInfo.from_entity(user),
                organization=OrganizationInfo.from_entity(organization) if organization else None,
            )

        logger.info(f"Invitation accepted by {body.user.email}")
        return Return.ok(IssuedSession(token=token_result.value, body=body))
