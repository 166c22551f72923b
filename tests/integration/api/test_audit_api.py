from datetime import timedelta
from uuid import UUID

import pytest

from src.domain.base import utc_now
from src.domain.entities import AuditAction, AuditEntry, AuditResource
from tests.integration.helpers import API, invite_and_accept, login, signup


@pytest.mark.asyncio
async def test_owner_sees_tenant_audit_trail(client):
    await signup(client)
    await login(client, "founder@acme.com")

    response = await client.get(f"{API}/audit-logs")

    assert response.status_code == 200
    actions = [entry["action"] for entry in response.json()["entries"]]
    assert actions == ["login_success", "signup"]
    assert response.json()["entries"][0]["user_email"] == "founder@acme.com"


@pytest.mark.asyncio
async def test_audit_trail_filters_and_pages(client, outbox):
    await signup(client)
    await client.post(f"{API}/invitations", json={"email": "one@acme.com"})
    await client.post(f"{API}/invitations", json={"email": "two@acme.com"})

    filtered = await client.get(f"{API}/audit-logs", params={"action": "invitation_sent"})
    assert [e["details"]["email"] for e in filtered.json()["entries"]] == [
        "two@acme.com",
        "one@acme.com",
    ]

    first_page = await client.get(f"{API}/audit-logs", params={"limit": 1})
    assert len(first_page.json()["entries"]) == 1
    cursor = first_page.json()["next_cursor"]
    assert cursor is not None

    second_page = await client.get(f"{API}/audit-logs", params={"limit": 1, "cursor": cursor})
    assert second_page.json()["entries"][0]["id"] != first_page.json()["entries"][0]["id"]


@pytest.mark.asyncio
async def test_audit_trail_is_tenant_scoped(client):
    await signup(client, email="a@alpha.com", organization_name="Alpha")
    client.cookies.clear()
    await signup(client, email="b@beta.com", organization_name="Beta")

    response = await client.get(f"{API}/audit-logs")

    emails = {entry["user_email"] for entry in response.json()["entries"]}
    assert emails == {"b@beta.com"}


@pytest.mark.asyncio
async def test_member_cannot_read_audit_trail(client, outbox):
    await signup(client)
    await invite_and_accept(client, outbox, "member@acme.com")

    response = await client.get(f"{API}/audit-logs")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_audit_pages_do_not_skip_entries_sharing_a_timestamp(client, db_session):
    created = await signup(client)
    organization = created.json()["organization"]
    same_instant = utc_now() - timedelta(minutes=5)
    tied = [
        AuditEntry(
            tenant_id=organization["tenant_id"],
            organization_id=UUID(organization["id"]),
            action=AuditAction.project_update,
            resource=AuditResource.project,
            created_at=same_instant,
        )
        for _ in range(5)
    ]
    db_session.add_all(tied)
    await db_session.commit()

    seen = []
    cursor = None
    while True:
        params = {"limit": 2, "action": "project_update"}
        if cursor:
            params["cursor"] = cursor
        page = (await client.get(f"{API}/audit-logs", params=params)).json()
        seen.extend(entry["id"] for entry in page["entries"])
        cursor = page["next_cursor"]
        if cursor is None:
            break

    assert sorted(seen) == sorted(str(entry.id) for entry in tied)
