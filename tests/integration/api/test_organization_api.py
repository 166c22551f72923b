import pytest

from tests.integration.helpers import API, invite_and_accept, login, signup


@pytest.mark.asyncio
async def test_get_organization(client):
    created = await signup(client)

    response = await client.get(f"{API}/organization")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created.json()["organization"]["id"]
    assert data["name"] == "Acme Corp"
    assert data["settings"] == {}


@pytest.mark.asyncio
async def test_update_organization_ignores_scope_fields(client):
    await signup(client, email="a@alpha.com", organization_name="Alpha")
    client.cookies.clear()
    beta = await signup(client, email="b@beta.com", organization_name="Beta")
    beta_org = beta.json()["organization"]

    await login(client, "a@alpha.com")
    response = await client.put(
        f"{API}/organization",
        json={
            "name": "  Alpha Renamed  ",
            "settings": {"theme": "dark"},
            "organization_id": beta_org["id"],
            "tenant_id": beta_org["tenant_id"],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Alpha Renamed"
    assert data["settings"] == {"theme": "dark"}
    assert data["id"] != beta_org["id"]

    await login(client, "b@beta.com")
    beta_view = await client.get(f"{API}/organization")
    assert beta_view.json()["name"] == "Beta"
    assert beta_view.json()["settings"] == {}


@pytest.mark.asyncio
async def test_update_organization_rejects_blank_name(client):
    await signup(client)

    response = await client.put(f"{API}/organization", json={"name": "   "})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ORGANIZATION_NAME"


@pytest.mark.asyncio
async def test_member_can_read_but_not_update(client, outbox):
    await signup(client)
    await invite_and_accept(client, outbox, "member@acme.com")

    assert (await client.get(f"{API}/organization")).status_code == 200
    update = await client.put(f"{API}/organization", json={"name": "Hijacked"})
    assert update.status_code == 403


@pytest.mark.asyncio
async def test_list_members(client, outbox):
    await signup(client)
    await invite_and_accept(client, outbox, "member@acme.com")

    response = await client.get(f"{API}/organization/members")

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    assert {m["email"] for m in data["members"]} == {"founder@acme.com", "member@acme.com"}
    assert all("password_hash" not in m for m in data["members"])


@pytest.mark.asyncio
async def test_organization_requires_session(client):
    response = await client.get(f"{API}/organization")

    assert response.status_code == 401
