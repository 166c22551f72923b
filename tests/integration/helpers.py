from httpx import AsyncClient

API = "/api"


async def signup(
    client: AsyncClient,
    email: str = "founder@acme.com",
    password: str = "SecurePass123",
    organization_name: str = "Acme Corp",
):
    return await client.post(
        f"{API}/auth/signup",
        json={"email": email, "password": password, "organization_name": organization_name},
    )


async def login(client: AsyncClient, email: str, password: str = "SecurePass123"):
    client.cookies.clear()
    return await client.post(f"{API}/auth/login", json={"email": email, "password": password})


def token_from_link(body: str, path: str) -> str:
    return body.split(f"http://frontend.test/{path}/")[1].split()[0]


async def invite_and_accept(client: AsyncClient, outbox, email: str, role: str = "member"):
    """Invite email as the signed-in admin, then accept; leaves the invitee signed in"""
    response = await client.post(f"{API}/invitations", json={"email": email, "role": role})
    assert response.status_code == 201, response.text
    token = token_from_link(outbox.outbox[-1][2], "accept-invitation")

    client.cookies.clear()
    response = await client.post(
        f"{API}/invitations/{token}/accept", json={"password": "SecurePass123"}
    )
    assert response.status_code == 200, response.text
    return response
