from abc import ABC, abstractmethod

from src.app.repositories.audit_entry_repository import IAuditEntryRepository
from src.app.repositories.invitation_repository import IInvitationRepository
from src.app.repositories.organization_repository import IOrganizationRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    organizations: IOrganizationRepository
    invitations: IInvitationRepository
    audit_entries: IAuditEntryRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
