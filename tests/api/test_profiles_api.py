"""
API tests for user profile endpoints.
"""

import uuid

from httpx import AsyncClient


class TestProfilesAPI:
    """Test profile endpoints end to end."""

    async def test_create_profile(self, async_client: AsyncClient, auth_headers, user_id):
        response = await async_client.post(
            "/api/profiles", json={"bio": "Hobbyist compiler writer"}, headers=auth_headers
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] == str(user_id)
        assert data["bio"] == "Hobbyist compiler writer"
        assert data["follower_count"] == 0
        assert data["user"] is None

    async def test_create_profile_twice(self, async_client: AsyncClient, auth_headers, test_profile):
        response = await async_client.post("/api/profiles", json={}, headers=auth_headers)

        assert response.status_code == 409

    async def test_get_profile_is_public(self, async_client: AsyncClient, test_profile):
        response = await async_client.get(f"/api/profiles/{test_profile.user_id}")

        assert response.status_code == 200
        assert response.json()["data"]["bio"] == "Writes about compilers"

    async def test_get_missing_profile(self, async_client: AsyncClient):
        response = await async_client.get(f"/api/profiles/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "User profile not found"

    async def test_get_my_profile(
        self, async_client: AsyncClient, auth_headers, auth_provider, test_profile, user_id
    ):
        auth_provider.respond(
            "GET",
            "/api/auth/user",
            json={
                "data": {
                    "id": str(user_id),
                    "email": "writer@example.com",
                    "first_name": "Ada",
                    "last_name": "Lovelace",
                    "email_verified": True,
                }
            },
        )

        response = await async_client.get("/api/profiles/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == str(user_id)
        assert data["bio"] == "Writes about compilers"
        assert data["user"]["email"] == "writer@example.com"
        assert auth_provider.last_request.headers["Authorization"] == auth_headers["Authorization"]

    async def test_get_my_profile_provider_down(
        self, async_client: AsyncClient, auth_headers, auth_provider, test_profile
    ):
        auth_provider.respond("GET", "/api/auth/user", status_code=503, json={})

        response = await async_client.get("/api/profiles/me", headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["status"] == "error"

    async def test_update_own_profile(
        self, async_client: AsyncClient, auth_headers, test_profile, user_id
    ):
        response = await async_client.put(
            f"/api/profiles/{user_id}", json={"bio": "Now into databases"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["bio"] == "Now into databases"

    async def test_update_someone_elses_profile(
        self, async_client: AsyncClient, auth_headers, test_profile
    ):
        response = await async_client.put(
            f"/api/profiles/{uuid.uuid4()}", json={"bio": "Hijacked"}, headers=auth_headers
        )

        assert response.status_code == 404
