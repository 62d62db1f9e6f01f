from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.api.utils.jwt import generate_session_token


async def register_ann(client: AsyncClient) -> dict:
    response = await client.post("/api/auth/register", json={
        "name": "Ann", "email": "ann@example.com", "password": "secret1"
    })
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_me_with_cookie(client: AsyncClient):
    """Cookie set at registration authenticates subsequent requests"""
    registered = await register_ann(client)

    response = await client.get("/api/auth/me")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["data"]["id"] == registered["user"]["id"]
    assert data["data"]["email"] == "ann@example.com"
    assert "created_at" in data["data"]
    assert "password" not in response.text


@pytest.mark.asyncio
async def test_me_with_bearer_header(client: AsyncClient):
    registered = await register_ann(client)
    client.cookies.clear()

    response = await client.get("/api/auth/me", headers={
        "Authorization": f"Bearer {registered['token']}"
    })

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Ann"


@pytest.mark.asyncio
async def test_me_without_token(client: AsyncClient):
    response = await client.get("/api/auth/me")

    assert response.status_code == 401
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "UNAUTHORIZED"
    assert data["message"] == "Not authorized to access this route"


@pytest.mark.asyncio
async def test_me_with_tampered_token(client: AsyncClient):
    registered = await register_ann(client)
    client.cookies.clear()
    header, payload, signature = registered["token"].split(".")

    response = await client.get("/api/auth/me", headers={
        "Authorization": f"Bearer {header}.{payload}.{signature[::-1]}"
    })

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_me_with_expired_token(client: AsyncClient):
    registered = await register_ann(client)
    client.cookies.clear()
    expired = generate_session_token(
        registered["user"]["id"], expires_delta=timedelta(seconds=-1)
    )

    response = await client.get("/api/auth/me", headers={
        "Authorization": f"Bearer {expired}"
    })

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_for_missing_user(client: AsyncClient):
    token = generate_session_token(uuid4())

    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "User not found"


@pytest.mark.asyncio
async def test_cookie_takes_precedence_over_header(client: AsyncClient):
    registered = await register_ann(client)
    client.cookies.clear()

    response = await client.get("/api/auth/me", headers={
        "Authorization": f"Bearer {registered['token']}",
        "Cookie": "token=garbage",
    })

    assert response.status_code == 401
