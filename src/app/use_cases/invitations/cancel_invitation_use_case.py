import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.tenant_context import TenantContext
from src.libs.result import Error, ErrorKind, Result, Return

from .accept_invitation_use_case import invitation_closed, invitation_not_found
from .dtos import InvitationInfo

logger = logging.getLogger(__name__)


class CancelInvitationUseCase:
    """
    Use case for cancelling a pending invitation.

    Business Rules:
    - Only invitations of the caller's own tenant are visible
    - Only pending invitations can be cancelled
    - The invitation is hard-deleted by a single conditional statement
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: TenantContext, invitation_id: UUID) -> Result[InvitationInfo]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if (
                invitation is None
                or invitation.organization_id != context.organization_id
                or invitation.tenant_id != context.tenant_id
            ):
                return Return.err(invitation_not_found())

            snapshot = InvitationInfo.from_entity(invitation)

            deleted = await self.uow.invitations.delete_pending(
                invitation_id, context.organization_id, context.tenant_id
            )
            if not deleted:
                return Return.err(
                    Error(
                        invitation_closed().code,
                        "Can only cancel pending invitations",
                        ErrorKind.conflict,
                    )
                )

            await self.uow.commit()

        logger.info(f"Invitation {invitation_id} cancelled")
        return Return.ok(snapshot)
