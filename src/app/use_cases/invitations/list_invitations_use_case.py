from src.app.services.unit_of_work import UnitOfWork
from src.domain.tenant_context import TenantContext
from src.libs.result import Result, Return

from .dtos import InvitationInfo, InvitationList


class ListInvitationsUseCase:
    """All invitations of the caller's tenant, newest first, with inviter email"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: TenantContext) -> Result[InvitationList]:
        async with self.uow:
            invitations = await self.uow.invitations.list_by_tenant(
                context.organization_id, context.tenant_id
            )

            inviter_emails = {}
            for invitation in invitations:
                if invitation.invited_by and invitation.invited_by not in inviter_emails:
                    inviter = await self.uow.users.get_by_id(invitation.invited_by)
                    inviter_emails[invitation.invited_by] = inviter.email if inviter else None

            items = [
                InvitationInfo.from_entity(
                    invitation, inviter_emails.get(invitation.invited_by)
                )
                for invitation in invitations
            ]

        return Return.ok(InvitationList(invitations=items, count=len(items)))
