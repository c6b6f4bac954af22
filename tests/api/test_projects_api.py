"""
API tests for project endpoints.
"""

import uuid
from datetime import timedelta

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import PrivateProjectFactory, ProjectFactory


class TestProjectsAPI:
    """Test project endpoints end to end."""

    async def test_create_project(self, async_client: AsyncClient, auth_headers, test_tags, user_id):
        alpha, beta, _ = test_tags
        response = await async_client.post(
            "/api/projects",
            json={
                "title": "Shipping a roguelike",
                "description": "Devlog for a small game",
                "tag_ids": [str(alpha.id), str(beta.id)],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        assert body["message"] == "project created"
        data = body["data"]
        assert data["user_id"] == str(user_id)
        assert data["is_public"] is True
        assert data["slug"].startswith("shipping-a-roguel-")
        assert [tag["name"] for tag in data["tags"]] == ["alpha", "beta"]

    async def test_create_project_requires_token(self, async_client: AsyncClient):
        response = await async_client.post("/api/projects", json={"title": "No token here"})

        assert response.status_code == 401
        body = response.json()
        assert body["status"] == "error"
        assert "no token provided" in body["message"]

    async def test_create_project_with_expired_token(self, async_client: AsyncClient, make_token):
        token = make_token(uuid.uuid4(), expires_in=timedelta(minutes=-5))
        response = await async_client.post(
            "/api/projects",
            json={"title": "Expired caller"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401

    async def test_create_project_unknown_tag(self, async_client: AsyncClient, auth_headers):
        missing = str(uuid.uuid4())
        response = await async_client.post(
            "/api/projects",
            json={"title": "Bad tag project", "tag_ids": [missing]},
            headers=auth_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert missing in body["message"]
        assert body["errors"] == [missing]

    async def test_create_project_invalid_body(self, async_client: AsyncClient, auth_headers):
        response = await async_client.post(
            "/api/projects", json={"title": "abc"}, headers=auth_headers
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid request"
        assert any(error.startswith("body.title") for error in body["errors"])

    async def test_list_projects_pagination(
        self, async_client: AsyncClient, auth_headers, db_session: AsyncSession
    ):
        ProjectFactory.create_batch(5)
        PrivateProjectFactory()
        await db_session.commit()

        response = await async_client.get(
            "/api/projects",
            params={"page": 2, "limit": 2, "sort_by": "title", "sort_order": "asc"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 2
        assert body["pagination"] == {
            "limit": 2,
            "page": 2,
            "total_rows": 5,
            "total_pages": 3,
            "sort_by": "title",
            "sort_order": "asc",
        }

    async def test_list_projects_page_far_past_the_end(
        self, async_client: AsyncClient, auth_headers, test_project
    ):
        response = await async_client.get(
            "/api/projects", params={"page": 10**18, "limit": 100}, headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["pagination"]["total_rows"] == 1
        assert body["pagination"]["page"] == 10**18

    async def test_list_projects_defaults(
        self, async_client: AsyncClient, auth_headers, test_project
    ):
        response = await async_client.get("/api/projects", headers=auth_headers)

        pagination = response.json()["pagination"]
        assert pagination["limit"] == 10
        assert pagination["page"] == 1
        assert pagination["total_rows"] == 1
        assert pagination["total_pages"] == 1

    async def test_list_my_projects_includes_private(
        self, async_client: AsyncClient, auth_headers, db_session: AsyncSession, user_id
    ):
        ProjectFactory(user_id=user_id)
        PrivateProjectFactory(user_id=user_id)
        ProjectFactory()
        await db_session.commit()

        mine = await async_client.get("/api/projects/me", headers=auth_headers)
        theirs = await async_client.get(f"/api/projects/users/{user_id}", headers=auth_headers)

        assert mine.json()["pagination"]["total_rows"] == 2
        assert theirs.json()["pagination"]["total_rows"] == 2

    async def test_list_other_users_projects_hides_private(
        self, async_client: AsyncClient, auth_headers, db_session: AsyncSession
    ):
        other = uuid.uuid4()
        ProjectFactory(user_id=other)
        PrivateProjectFactory(user_id=other)
        await db_session.commit()

        response = await async_client.get(f"/api/projects/users/{other}", headers=auth_headers)

        assert response.json()["pagination"]["total_rows"] == 1

    async def test_get_project_by_id_and_slug(
        self, async_client: AsyncClient, auth_headers, test_project
    ):
        by_id = await async_client.get(f"/api/projects/{test_project.id}", headers=auth_headers)
        by_slug = await async_client.get(
            f"/api/projects/slug/{test_project.slug}", headers=auth_headers
        )

        assert by_id.status_code == 200
        assert by_slug.status_code == 200
        assert by_id.json()["data"]["id"] == by_slug.json()["data"]["id"] == str(test_project.id)

    async def test_get_private_project_of_another_user(
        self, async_client: AsyncClient, auth_headers, db_session: AsyncSession
    ):
        project = PrivateProjectFactory()
        await db_session.commit()

        response = await async_client.get(f"/api/projects/{project.id}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["status"] == "error"

    async def test_get_project_bad_id(self, async_client: AsyncClient, auth_headers):
        response = await async_client.get("/api/projects/not-a-uuid", headers=auth_headers)

        assert response.status_code == 400

    async def test_update_project(
        self, async_client: AsyncClient, auth_headers, test_project, test_tags
    ):
        gamma = test_tags[2]
        response = await async_client.put(
            f"/api/projects/{test_project.id}",
            json={"is_public": False, "tag_ids": [str(gamma.id)]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["is_public"] is False
        assert data["title"] == "Building a tiny compiler"
        assert [tag["name"] for tag in data["tags"]] == ["gamma"]

    async def test_update_project_of_another_user(
        self, async_client: AsyncClient, make_token, test_project
    ):
        headers = {"Authorization": f"Bearer {make_token(uuid.uuid4())}"}

        response = await async_client.put(
            f"/api/projects/{test_project.id}", json={"title": "Not mine"}, headers=headers
        )

        assert response.status_code == 404

    async def test_delete_project(self, async_client: AsyncClient, auth_headers, test_project):
        project_id = test_project.id

        response = await async_client.delete(f"/api/projects/{project_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "status": "success",
            "message": "project deleted",
            "data": None,
        }
        again = await async_client.get(f"/api/projects/{project_id}", headers=auth_headers)
        assert again.status_code == 404
