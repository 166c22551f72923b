"""
Create Invitation Use Case

Invites an email address to join the caller's organization.
"""

import logging
import secrets

from sqlalchemy.exc import IntegrityError

from src.app.services.email_sender import IEmailSender, deliver_best_effort
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utc_now
from src.domain.entities import (
    INVITABLE_ROLES,
    INVITATION_TTL,
    Invitation,
    InvitationStatus,
    UserRole,
)
from src.domain.tenant_context import TenantContext
from src.libs.result import Error, ErrorKind, Result, Return

from .dtos import CreateInvitationCommand, CreatedInvitation, InvitationInfo

logger = logging.getLogger(__name__)

INVITATION_TOKEN_BYTES = 32


class CreateInvitationUseCase:
    """
    Use case for inviting a user to an organization.

    Business Rules:
    - Only admin and member roles can be granted; owner is never invitable
    - The invitee must not already belong to this tenant
    - At most one pending invitation per (email, organization); a pending one
      past its expiry is marked expired and no longer blocks a new invite
    - Token is 32 random bytes (hex), expiry 7 days from creation
    - Invitation email is sent after commit, best-effort
    """

    def __init__(self, uow: UnitOfWork, email_sender: IEmailSender, frontend_url: str):
        self.uow = uow
        self.email_sender = email_sender
        self.frontend_url = frontend_url.rstrip("/")

    async def execute(
        self, context: TenantContext, command: CreateInvitationCommand
    ) -> Result[CreatedInvitation]:
        if command.role == UserRole.owner:
            return Return.err(
                Error("CANNOT_INVITE_OWNER", "Cannot invite users as owner", ErrorKind.validation)
            )
        if command.role not in INVITABLE_ROLES:
            return Return.err(
                Error("INVALID_ROLE", "Role must be admin or member", ErrorKind.validation)
            )

        email = normalize_email(command.email)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user is not None and existing_user.tenant_id == context.tenant_id:
                return Return.err(
                    Error(
                        "ALREADY_MEMBER",
                        "User is already a member of this organization",
                        ErrorKind.conflict,
                    )
                )

            pending = await self.uow.invitations.get_pending_by_organization_and_email(
                context.organization_id, email
            )
            if pending is not None and pending.has_lapsed():
                await self.uow.invitations.transition_status(
                    pending.id, InvitationStatus.pending, InvitationStatus.expired
                )
                logger.info(f"Invitation {pending.id} expired before re-invite of {email}")
                pending = None

            if pending is not None:
                return Return.err(
                    Error(
                        "INVITATION_PENDING",
                        "Pending invitation already exists for this email",
                        ErrorKind.conflict,
                    )
                )

            organization = await self.uow.organizations.get_by_id_and_tenant(
                context.organization_id, context.tenant_id
            )
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found", ErrorKind.not_found)
                )

            inviter = await self.uow.users.get_by_id(context.user_id)

            invitation = Invitation(
                email=email,
                organization_id=context.organization_id,
                tenant_id=context.tenant_id,
                role=command.role,
                token=secrets.token_hex(INVITATION_TOKEN_BYTES),
                invited_by=context.user_id,
                expires_at=utc_now() + INVITATION_TTL,
            )
            try:
                invitation = await self.uow.invitations.create(invitation)
                await self.uow.commit()
            except IntegrityError:
                # Concurrent invite for the same (email, organization) won the race
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "INVITATION_PENDING",
                        "Pending invitation already exists for this email",
                        ErrorKind.conflict,
                    )
                )

            info = InvitationInfo.from_entity(invitation, inviter.email if inviter else None)
            organization_name = organization.name
            invitation_url = f"{self.frontend_url}/accept-invitation/{invitation.token}"

        email_sent = await deliver_best_effort(
            self.email_sender,
            email,
            f"You've been invited to join {organization_name}",
            f"You have been invited to join {organization_name} as {command.role.value}.\n\n"
            f"Accept the invitation here (valid for 7 days):\n{invitation_url}",
        )

        logger.info(f"Invitation created for {email} to {organization_name}")

        return Return.ok(CreatedInvitation(invitation=info, email_sent=email_sent))
