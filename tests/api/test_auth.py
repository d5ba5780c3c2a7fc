"""Bearer authentication and the current-user endpoint."""

from httpx import AsyncClient

from app.infrastructure.security.jwt import create_user_token


async def test_missing_token_is_401(client: AsyncClient):
    response = await client.get("/api/v1/auth/user")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_invalid_token_is_401(client: AsyncClient):
    response = await client.get(
        "/api/v1/auth/user", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


async def test_first_request_creates_user_from_claims(client: AsyncClient):
    token = create_user_token("new-user", email="new@example.com", first_name="Grace")
    response = await client.get(
        "/api/v1/auth/user", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "new-user"
    assert body["email"] == "new@example.com"
    assert body["firstName"] == "Grace"
    assert body["roles"] == []
    assert body["officeId"] is None


async def test_existing_roles_survive_sync(client: AsyncClient, auth_headers):
    headers = await auth_headers("boss", "ADMIN")
    response = await client.get("/api/v1/auth/user", headers=headers)
    assert response.json()["roles"] == ["ADMIN"]
