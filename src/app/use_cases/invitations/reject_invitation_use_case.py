from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import InvitationStatus
from src.libs.result import Result, Return

from .accept_invitation_use_case import (
    check_invitation_open,
    invitation_closed,
    invitation_not_found,
)
from .dtos import InvitationInfo


class RejectInvitationUseCase:
    """Declines a pending invitation; only pending -> rejected is allowed"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[InvitationInfo]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token(token)
            if invitation is None:
                return Return.err(invitation_not_found())

            open_check = await check_invitation_open(self.uow, invitation)
            if open_check.is_err():
                return Return.err(open_check.error)

            rejected = await self.uow.invitations.transition_status(
                invitation.id, InvitationStatus.pending, InvitationStatus.rejected
            )
            if not rejected:
                return Return.err(invitation_closed())

            await self.uow.commit()

            invitation.status = InvitationStatus.rejected
            return Return.ok(InvitationInfo.from_entity(invitation))
