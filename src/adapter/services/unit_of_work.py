from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_entry_repository import AuditEntryRepository
from src.adapter.repositories.invitation_repository import InvitationRepository
from src.adapter.repositories.organization_repository import OrganizationRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.organizations = OrganizationRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.audit_entries = AuditEntryRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
