from uuid import uuid4

import pytest

from src.app.use_cases.auth import (
    GetMeUseCase,
    LoginUseCase,
    ResolveCallerUseCase,
    SignupCommand,
    SignupUseCase,
)
from src.domain.entities import User, UserRole
from src.domain.tenant_context import Caller
from src.libs.result import ErrorKind


@pytest.mark.asyncio
async def test_signup_creates_organization_and_owner(mock_uow, hasher, token_service):
    use_case = SignupUseCase(mock_uow, hasher, token_service)

    result = await use_case.execute(
        SignupCommand(email="Founder@Acme.com", password="SecurePass123", organization_name="Acme Corp")
    )

    assert result.is_ok()
    session = result.value
    assert session.body.user.email == "founder@acme.com"
    assert session.body.user.role == "owner"
    assert session.body.organization.name == "Acme Corp"
    assert session.body.user.tenant_id == session.body.organization.tenant_id
    assert str(token_service.verify(session.token).value.user_id) == session.body.user.id
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_signup_with_registered_email_commits_nothing(mock_uow, hasher, token_service, owner):
    mock_uow.users.get_by_email.return_value = owner
    use_case = SignupUseCase(mock_uow, hasher, token_service)

    result = await use_case.execute(
        SignupCommand(email=owner.email, password="SecurePass123", organization_name="Other")
    )

    assert result.is_err()
    assert result.error.kind == ErrorKind.conflict
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_login_success(mock_uow, hasher, token_service, owner, organization):
    mock_uow.users.get_by_email.return_value = owner
    mock_uow.organizations.get_by_id.return_value = organization

    result = await LoginUseCase(mock_uow, hasher, token_service).execute(
        " OWNER@acme.com", "SecurePass123"
    )

    assert result.is_ok()
    assert result.value.body.user.id == str(owner.id)
    assert result.value.body.organization.tenant_id == organization.tenant_id
    mock_uow.users.get_by_email.assert_awaited_once_with("owner@acme.com")


@pytest.mark.asyncio
async def test_login_wrong_password_and_unknown_email_look_the_same(
    mock_uow, hasher, token_service, owner
):
    use_case = LoginUseCase(mock_uow, hasher, token_service)

    mock_uow.users.get_by_email.return_value = owner
    wrong_password = await use_case.execute(owner.email, "WrongPass123")
    mock_uow.users.get_by_email.return_value = None
    unknown_email = await use_case.execute("ghost@acme.com", "WrongPass123")

    assert wrong_password.error == unknown_email.error
    assert wrong_password.error.kind == ErrorKind.unauthorized


@pytest.mark.asyncio
async def test_super_admin_logs_in_without_organization(mock_uow, hasher, token_service):
    admin = User(
        email="root@platform.io",
        password_hash=hasher.hash_sync("SecurePass123"),
        role=UserRole.super_admin,
    )
    mock_uow.users.get_by_email.return_value = admin

    result = await LoginUseCase(mock_uow, hasher, token_service).execute(admin.email, "SecurePass123")

    assert result.is_ok()
    assert result.value.body.organization is None
    mock_uow.organizations.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_resolve_caller_reads_role_from_store(mock_uow, token_service, owner):
    mock_uow.users.get_by_id.return_value = owner
    token = token_service.issue(owner.id).value

    result = await ResolveCallerUseCase(mock_uow, token_service).execute(token)

    assert result.is_ok()
    assert result.value == Caller.from_user(owner)
    assert not hasattr(result.value, "password_hash")


@pytest.mark.asyncio
async def test_resolve_caller_without_token(mock_uow, token_service):
    result = await ResolveCallerUseCase(mock_uow, token_service).execute(None)

    assert result.error.kind == ErrorKind.unauthorized
    mock_uow.users.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_resolve_caller_for_deleted_user(mock_uow, token_service):
    token = token_service.issue(uuid4()).value

    result = await ResolveCallerUseCase(mock_uow, token_service).execute(token)

    assert result.error.code == "USER_NOT_FOUND"
    assert result.error.kind == ErrorKind.unauthorized


@pytest.mark.asyncio
async def test_me_for_platform_admin_has_no_organization(mock_uow, hasher):
    admin = User(email="root@platform.io", password_hash="x", role=UserRole.super_admin)
    mock_uow.users.get_by_id.return_value = admin

    result = await GetMeUseCase(mock_uow).execute(Caller.from_user(admin))

    assert result.value.organization is None
    assert result.value.user.role == "super_admin"
