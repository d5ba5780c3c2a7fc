"""Office administration, office session login and dashboards over HTTP."""

import pytest
from httpx import AsyncClient

API = "/api/v1"


@pytest.fixture
async def admin(auth_headers):
    return await auth_headers("admin", "ADMIN")


@pytest.fixture
async def office(client: AsyncClient, admin) -> dict:
    response = await client.post(
        f"{API}/offices",
        json={
            "officeId": "OFF-REG",
            "name": "Registry",
            "officeCode": "REG-01",
            "password": "front-desk-pw",
        },
        headers=admin,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def _login(client: AsyncClient, code: str = "REG-01", password: str = "front-desk-pw"):
    return await client.post(
        f"{API}/office/login", json={"officeCode": code, "password": password}
    )


async def test_create_office_hides_password(office):
    assert office["officeCode"] == "REG-01"
    assert "password" not in office
    assert "officePasswordHash" not in office


async def test_duplicate_code_is_409(client: AsyncClient, admin, office):
    response = await client.post(
        f"{API}/offices",
        json={"officeId": "OFF-2", "name": "Other", "officeCode": "REG-01", "password": "x"},
        headers=admin,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "CONFLICT"


async def test_non_admin_cannot_manage_offices(client: AsyncClient, auth_headers):
    officer = await auth_headers("officer", "OFFICER")
    response = await client.get(f"{API}/offices", headers=officer)
    assert response.status_code == 403


async def test_login_dashboard_and_logout(client: AsyncClient, admin, office):
    await client.post(
        f"{API}/messages",
        json={
            "title": "Files due",
            "content": "Friday",
            "messageType": "office_specific",
            "targetOfficeId": "OFF-REG",
            "priority": "high",
        },
        headers=admin,
    )
    await client.post(
        f"{API}/messages", json={"title": "Holiday", "content": "Monday"}, headers=admin
    )

    login = await _login(client)
    assert login.status_code == 200
    body = login.json()
    assert body["office"] == {
        "id": office["id"],
        "officeId": "OFF-REG",
        "name": "Registry",
        "description": None,
    }
    session = {"X-Office-Session": body["sessionToken"]}

    dashboard = await client.get(f"{API}/office/dashboard/OFF-REG", headers=session)
    assert dashboard.status_code == 200
    data = dashboard.json()
    assert data["stats"] == {"totalMembers": 0, "totalMessages": 2, "unreadMessages": 2}

    message_id = data["messages"][0]["id"]
    read = await client.patch(f"{API}/office/messages/{message_id}/read", headers=session)
    assert read.json()["isRead"] == {"office_OFF-REG": True}

    via_query = await client.get(
        f"{API}/office/dashboard/OFF-REG", params={"session": body["sessionToken"]}
    )
    assert via_query.json()["stats"]["unreadMessages"] == 1

    other = await client.get(f"{API}/office/dashboard/OFF-OTHER", headers=session)
    assert other.status_code == 403

    logout = await client.post(f"{API}/office/logout", headers=session)
    assert logout.json() == {"message": "Logged out"}
    after = await client.get(f"{API}/office/dashboard/OFF-REG", headers=session)
    assert after.status_code == 401
    assert after.json()["error"] == "INVALID_OFFICE_SESSION"


async def test_wrong_password_is_401(client: AsyncClient, office):
    response = await _login(client, password="guess")
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid office code or password"


async def test_missing_credentials_is_400(client: AsyncClient):
    response = await client.post(f"{API}/office/login", json={"officeCode": "REG-01"})
    assert response.status_code == 400


async def test_dashboard_without_session_is_401(client: AsyncClient):
    response = await client.get(f"{API}/office/dashboard/OFF-REG")
    assert response.status_code == 401


async def test_member_dashboard_via_user_path(client: AsyncClient, auth_headers, admin, office):
    clerk = await auth_headers("clerk")
    denied = await client.get(f"{API}/offices/OFF-REG/dashboard", headers=clerk)
    assert denied.status_code == 403

    assigned = await client.post(
        f"{API}/users/clerk/assign-office", json={"officeId": "OFF-REG"}, headers=admin
    )
    assert assigned.json()["officeId"] == "OFF-REG"

    dashboard = await client.get(f"{API}/offices/OFF-REG/dashboard", headers=clerk)
    assert dashboard.status_code == 200
    assert [m["id"] for m in dashboard.json()["members"]] == ["clerk"]


async def test_roles_and_departments(client: AsyncClient, auth_headers, admin):
    await auth_headers("u1")
    roles = await client.patch(
        f"{API}/users/u1/roles", json={"roles": ["REVIEWER"]}, headers=admin
    )
    assert roles.json()["roles"] == ["REVIEWER"]
    bad_role = await client.patch(
        f"{API}/users/u1/roles", json={"roles": ["ROOT"]}, headers=admin
    )
    assert bad_role.status_code == 422

    created = await client.post(f"{API}/departments", json={"name": "Finance"}, headers=admin)
    assert created.status_code == 201
    listed = await client.get(f"{API}/departments", headers=admin)
    assert [d["name"] for d in listed.json()] == ["Finance"]
