"""Integration tests for user, auth and health endpoints."""

import pytest

USERS = "/api/v1/users"
LOGIN = "/api/v1/auth/login"


class TestUserEndpoints:
    """Registration and lookup."""

    @pytest.mark.asyncio
    async def test_register_user(self, client):
        response = await client.post(USERS, json={"username": "Alice", "password": "password123"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == ["User successfully added", "success"]
        assert body["data"] == {"id": 1, "username": "Alice"}

    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, client):
        await client.post(USERS, json={"username": "Alice", "password": "password123"})

        response = await client.post(USERS, json={"username": "alice", "password": "password456"})

        assert response.status_code == 409
        assert response.json()["message"] == ["Username already exists", "warn"]

    @pytest.mark.asyncio
    async def test_register_short_password(self, client):
        response = await client.post(USERS, json={"username": "Alice", "password": "short"})

        assert response.status_code == 422
        assert response.json()["message"][0].startswith("'password' ")

    @pytest.mark.asyncio
    async def test_get_user(self, client):
        created = (
            await client.post(USERS, json={"username": "Alice", "password": "password123"})
        ).json()["data"]

        response = await client.get(f"{USERS}/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"] == {"id": created["id"], "username": "Alice"}

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, client):
        response = await client.get(f"{USERS}/9000")

        assert response.status_code == 404
        assert response.json()["message"] == ["User not found", "warn"]


class TestLoginEndpoint:
    """Credential checks."""

    @pytest.mark.asyncio
    async def test_login(self, client):
        await client.post(USERS, json={"username": "Alice", "password": "password123"})

        response = await client.post(LOGIN, json={"username": "ALICE", "password": "password123"})

        assert response.status_code == 200
        assert response.json()["message"] == ["Login successful", "success"]
        assert response.json()["data"]["username"] == "Alice"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client):
        await client.post(USERS, json={"username": "Alice", "password": "password123"})

        response = await client.post(LOGIN, json={"username": "Alice", "password": "password999"})

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "message": ["Invalid username or password", "warn"],
            "data": None,
        }

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, client):
        response = await client.post(LOGIN, json={"username": "nobody", "password": "password123"})

        assert response.status_code == 401


class TestHealthEndpoints:
    """Liveness, readiness and server time."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_ready(self, client):
        response = await client.get("/api/v1/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    @pytest.mark.asyncio
    async def test_time_in_milliseconds(self, client):
        response = await client.get("/api/v1/health/time")

        assert response.status_code == 200
        assert response.json()["timestamp"] > 1_600_000_000_000
