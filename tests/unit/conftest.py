from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.api.utils.jwt import TokenService
from src.app.services.password_hasher import PasswordHasher
from src.domain.entities import Organization, User, UserRole
from src.domain.tenant_context import TenantContext

# Lowest cost bcrypt accepts; keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.list_by_organization = AsyncMock(return_value=[])
    uow.users.get_by_reset_token_hash = AsyncMock(return_value=None)
    uow.users.clear_reset_token = AsyncMock(return_value=True)
    uow.users.count = AsyncMock(return_value=0)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.organizations = MagicMock()
    uow.organizations.get_by_id = AsyncMock(return_value=None)
    uow.organizations.get_by_id_and_tenant = AsyncMock(return_value=None)
    uow.organizations.list_recent = AsyncMock(return_value=[])
    uow.organizations.count = AsyncMock(return_value=0)
    uow.organizations.create = AsyncMock(side_effect=lambda organization: organization)
    uow.organizations.update_profile = AsyncMock(return_value=None)

    uow.invitations = MagicMock()
    uow.invitations.get_by_id = AsyncMock(return_value=None)
    uow.invitations.get_by_token = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_organization_and_email = AsyncMock(return_value=None)
    uow.invitations.list_by_tenant = AsyncMock(return_value=[])
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.transition_status = AsyncMock(return_value=True)
    uow.invitations.delete_pending = AsyncMock(return_value=True)

    uow.audit_entries = MagicMock()
    uow.audit_entries.create = AsyncMock(side_effect=lambda entry: entry)
    uow.audit_entries.get_by_tenant_paginated = AsyncMock(return_value=([], None))
    return uow


@pytest.fixture(scope="session")
def hasher():
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def token_service():
    return TokenService("unit-test-secret")


@pytest.fixture
def organization():
    return Organization(name="Acme Corp")


@pytest.fixture
def owner(organization, hasher):
    return User(
        email="owner@acme.com",
        password_hash=hasher.hash_sync("SecurePass123"),
        role=UserRole.owner,
        organization_id=organization.id,
        tenant_id=organization.tenant_id,
    )


@pytest.fixture
def admin_context(organization):
    return TenantContext(
        tenant_id=organization.tenant_id,
        organization_id=organization.id,
        user_id=uuid4(),
        role=UserRole.admin,
    )
