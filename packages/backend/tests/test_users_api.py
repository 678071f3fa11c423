"""Registration and credential update."""

import pytest
from sqlalchemy import select

from chirpy.db.models import User
from conftest import bearer, signup


@pytest.mark.asyncio
async def test_register_user(client, db_session):
    r = await client.post(
        "/api/users", json={"email": "walt@example.com", "password": "04151959"}
    )
    assert r.status_code == 201
    user = r.json()
    assert set(user) == {"id", "created_at", "updated_at", "email", "is_chirpy_red"}
    assert user["email"] == "walt@example.com"
    assert user["is_chirpy_red"] is False

    stored = (await db_session.execute(select(User))).scalars().one()
    assert stored.hashed_password != "04151959"
    assert stored.hashed_password.startswith("$2")


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    body = {"email": "dup@example.com", "password": "password_123"}
    assert (await client.post("/api/users", json=body)).status_code == 201
    assert (await client.post("/api/users", json=body)).status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"email": "a@example.com"},
        {"password": "x"},
        {"email": "a@example.com", "password": ""},
    ],
)
async def test_register_validation(client, body):
    r = await client.post("/api/users", json=body)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_update_credentials(client):
    body = await signup(client, "old@example.com", "old-password")
    r = await client.put(
        "/api/users",
        json={"email": "new@example.com", "password": "new-password"},
        headers=bearer(body["token"]),
    )
    assert r.status_code == 200
    assert r.json()["email"] == "new@example.com"
    assert r.json()["id"] == body["id"]

    old = await client.post(
        "/api/login", json={"email": "old@example.com", "password": "old-password"}
    )
    assert old.status_code == 401
    new = await client.post(
        "/api/login", json={"email": "new@example.com", "password": "new-password"}
    )
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_update_requires_token(client):
    r = await client.put("/api/users", json={"email": "x@example.com", "password": "pw"})
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_update_to_taken_email(client):
    await signup(client, "taken@example.com")
    body = await signup(client, "mine@example.com")
    r = await client.put(
        "/api/users",
        json={"email": "taken@example.com", "password": "whatever"},
        headers=bearer(body["token"]),
    )
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_update_keeping_same_email(client):
    body = await signup(client, "same@example.com", "first")
    r = await client.put(
        "/api/users",
        json={"email": "same@example.com", "password": "second"},
        headers=bearer(body["token"]),
    )
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_update_after_user_deleted_is_401(client):
    body = await signup(client, "gone@example.com")
    r = await client.post("/admin/reset")
    assert r.status_code == 200
    r = await client.put(
        "/api/users",
        json={"email": "gone@example.com", "password": "whatever"},
        headers=bearer(body["token"]),
    )
    assert r.status_code == 401
    assert r.json() == {"detail": "Unauthorized"}
    assert r.headers["WWW-Authenticate"] == "Bearer"
