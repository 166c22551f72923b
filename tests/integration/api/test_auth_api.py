import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from tests.integration.helpers import API, login, signup, token_from_link


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get(f"{API}/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_signup_creates_owner_and_sets_cookie(client):
    response = await signup(client)

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == "founder@acme.com"
    assert data["user"]["role"] == "owner"
    assert data["organization"]["name"] == "Acme Corp"
    assert data["organization"]["subscription_plan"] == "free"
    assert data["user"]["tenant_id"] == data["organization"]["tenant_id"]
    assert "password_hash" not in data["user"]

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("token=")
    assert "httponly" in set_cookie.lower()
    assert "samesite=lax" in set_cookie.lower()


@pytest.mark.asyncio
async def test_signup_normalizes_email_and_rejects_duplicate(client):
    first = await signup(client, email="Founder@Acme.com")
    assert first.status_code == 201
    assert first.json()["user"]["email"] == "founder@acme.com"

    second = await signup(client, email="FOUNDER@acme.com", organization_name="Other")

    assert second.status_code == 409
    assert second.json()["error"]["code"] == "EMAIL_ALREADY_REGISTERED"


@pytest.mark.asyncio
async def test_signup_rejects_short_password(client):
    response = await signup(client, password="12345")

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_me_logout_flow(client):
    await signup(client)

    response = await login(client, "founder@acme.com")
    assert response.status_code == 200
    assert response.json()["organization"]["name"] == "Acme Corp"

    me = await client.get(f"{API}/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "founder@acme.com"

    logout = await client.post(f"{API}/auth/logout")
    assert logout.status_code == 200
    assert logout.json()["message"] == "Logged out successfully"
    assert "max-age=0" in logout.headers["set-cookie"].lower()

    after = await client.get(f"{API}/auth/me")
    assert after.status_code == 401


@pytest.mark.asyncio
async def test_login_failure_is_uniform(client):
    await signup(client)

    wrong_password = await login(client, "founder@acme.com", "WrongPass999")
    unknown_email = await login(client, "nobody@acme.com", "WrongPass999")

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_logout_without_session_still_clears_cookie(client):
    response = await client.post(f"{API}/auth/logout")

    assert response.status_code == 200
    assert "token=" in response.headers["set-cookie"]


@pytest.mark.asyncio
async def test_me_rejects_garbage_token(client):
    client.cookies.set("token", "not-a-jwt")

    response = await client.get(f"{API}/auth/me")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_password_reset_flow(client, outbox):
    await signup(client)
    client.cookies.clear()

    response = await client.post(
        f"{API}/auth/forgot-password", json={"email": "founder@acme.com"}
    )
    assert response.status_code == 200
    assert len(outbox.outbox) == 1
    to, _, body = outbox.outbox[0]
    assert to == "founder@acme.com"
    reset_token = token_from_link(body, "reset-password")

    reset = await client.post(
        f"{API}/auth/reset-password/{reset_token}", json={"password": "BrandNew456"}
    )
    assert reset.status_code == 200
    assert reset.json()["user"]["email"] == "founder@acme.com"
    assert reset.headers["set-cookie"].startswith("token=")

    reused = await client.post(
        f"{API}/auth/reset-password/{reset_token}", json={"password": "Another789"}
    )
    assert reused.status_code == 404
    assert reused.json()["error"]["code"] == "INVALID_RESET_TOKEN"

    assert (await login(client, "founder@acme.com", "SecurePass123")).status_code == 401
    assert (await login(client, "founder@acme.com", "BrandNew456")).status_code == 200


@pytest.mark.asyncio
async def test_forgot_password_does_not_reveal_unknown_email(client, outbox):
    await signup(client)

    known = await client.post(f"{API}/auth/forgot-password", json={"email": "founder@acme.com"})
    unknown = await client.post(f"{API}/auth/forgot-password", json={"email": "ghost@acme.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert [to for to, _, _ in outbox.outbox] == ["founder@acme.com"]


@pytest.mark.asyncio
async def test_reset_password_with_unknown_token(client):
    response = await client.post(
        f"{API}/auth/reset-password/deadbeef", json={"password": "BrandNew456"}
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_auth_rate_limit_returns_429(client, test_config, client_factory):
    config = test_config.model_copy(
        update={"RATE_LIMIT_ENABLED": True, "AUTH_RATE_LIMIT": "2/minute"}
    )

    async with client_factory(config) as limited:
        statuses = [
            (await login(limited, "nobody@acme.com", "WrongPass999")).status_code
            for _ in range(3)
        ]
        blocked = await login(limited, "nobody@acme.com", "WrongPass999")
        other_scope = await limited.post(
            f"{API}/auth/forgot-password", json={"email": "nobody@acme.com"}
        )

    assert statuses == [401, 401, 429]
    assert blocked.json()["error"]["code"] == "TOO_MANY_REQUESTS"
    assert other_scope.status_code == 200

    # Limits belong to the app that configured them
    unlimited = await login(client, "nobody@acme.com", "WrongPass999")
    assert unlimited.status_code == 401


@pytest.mark.asyncio
async def test_store_unreachable_is_503(test_config, client_factory):
    engine = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/unreachable.db")
    store = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with client_factory(test_config, store) as unreachable:
            response = await login(unreachable, "founder@acme.com")
    finally:
        await engine.dispose()

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"
