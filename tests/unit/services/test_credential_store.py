from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.app.services.credential_store import CredentialStore, hash_reset_token
from src.domain.base import utc_now
from src.domain.entities import User, UserRole
from src.libs.result import ErrorKind


@pytest.mark.asyncio
async def test_create_hashes_password_and_normalizes_email(mock_uow, hasher, organization):
    store = CredentialStore(mock_uow, hasher)

    result = await store.create(
        "  New.User@Acme.com ",
        "SecurePass123",
        UserRole.member,
        organization.id,
        organization.tenant_id,
    )

    assert result.is_ok()
    user = result.value
    assert user.email == "new.user@acme.com"
    assert user.password_hash != "SecurePass123"
    assert user.password_hash.startswith("$2b$")
    mock_uow.users.create.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_rejects_registered_email(mock_uow, hasher, owner, organization):
    mock_uow.users.get_by_email.return_value = owner
    store = CredentialStore(mock_uow, hasher)

    result = await store.create(
        owner.email, "SecurePass123", UserRole.member, organization.id, organization.tenant_id
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_REGISTERED"
    assert result.error.kind == ErrorKind.conflict
    mock_uow.users.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_maps_unique_violation_to_conflict(mock_uow, hasher, organization):
    mock_uow.users.create = AsyncMock(side_effect=IntegrityError("insert", {}, Exception("unique")))
    store = CredentialStore(mock_uow, hasher)

    result = await store.create(
        "race@acme.com", "SecurePass123", UserRole.member, organization.id, organization.tenant_id
    )

    assert result.is_err()
    assert result.error.kind == ErrorKind.conflict
    mock_uow.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_enforces_scope_invariant(mock_uow, hasher, organization):
    store = CredentialStore(mock_uow, hasher)

    tenant_user_without_scope = await store.create(
        "member@acme.com", "SecurePass123", UserRole.member, None, None
    )
    platform_admin_with_scope = await store.create(
        "root@acme.com", "SecurePass123", UserRole.super_admin, organization.id, organization.tenant_id
    )

    assert tenant_user_without_scope.error.code == "INVALID_SCOPE"
    assert platform_admin_with_scope.error.code == "INVALID_SCOPE"


@pytest.mark.asyncio
async def test_create_rejects_short_password(mock_uow, hasher, organization):
    store = CredentialStore(mock_uow, hasher)

    result = await store.create(
        "member@acme.com", "12345", UserRole.member, organization.id, organization.tenant_id
    )

    assert result.is_err()
    assert result.error.kind == ErrorKind.validation


@pytest.mark.asyncio
async def test_match_password(mock_uow, hasher, owner):
    store = CredentialStore(mock_uow, hasher)

    assert await store.match_password(owner, "SecurePass123") is True
    assert await store.match_password(owner, "WrongPass123") is False


@pytest.mark.asyncio
async def test_setting_same_password_twice_yields_different_hashes(mock_uow, hasher, owner):
    store = CredentialStore(mock_uow, hasher)

    first = (await store.set_password(owner, "AnotherPass1")).value.password_hash
    second = (await store.set_password(owner, "AnotherPass1")).value.password_hash

    assert first != second
    assert await store.match_password(owner, "AnotherPass1") is True


@pytest.mark.asyncio
async def test_issue_reset_token_stores_only_digest(mock_uow, hasher, owner):
    store = CredentialStore(mock_uow, hasher)

    raw_token = await store.issue_reset_token(owner)

    assert len(raw_token) == 40
    assert owner.reset_password_token_hash == hash_reset_token(raw_token)
    assert owner.reset_password_token_hash != raw_token
    assert owner.reset_password_expires_at > utc_now() + timedelta(minutes=59)


@pytest.mark.asyncio
async def test_consume_reset_token_is_single_use(mock_uow, hasher, owner):
    store = CredentialStore(mock_uow, hasher)
    mock_uow.users.get_by_reset_token_hash.return_value = owner
    mock_uow.users.clear_reset_token = AsyncMock(side_effect=[True, False])

    first = await store.consume_reset_token("raw-token")
    second = await store.consume_reset_token("raw-token")

    assert first.is_ok()
    assert second.is_err()
    assert second.error.kind == ErrorKind.not_found
    mock_uow.users.clear_reset_token.assert_awaited_with(owner.id, hash_reset_token("raw-token"))


@pytest.mark.asyncio
async def test_consume_unknown_reset_token(mock_uow, hasher):
    store = CredentialStore(mock_uow, hasher)

    result = await store.consume_reset_token("unknown")

    assert result.is_err()
    assert result.error.code == "INVALID_RESET_TOKEN"
