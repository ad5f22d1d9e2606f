# tests/routes/test_blog_api.py
"""Tests for the /api/blogs endpoints."""

from collections.abc import Awaitable, Callable
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete
from sqlmodel import col

from bloglist.configs import settings
from bloglist.db import Database
from bloglist.main import create_app
from bloglist.managers.token_manager import JWTTokenCodec
from bloglist.models import BlogDB, UserDB

BlogsInDb = Callable[[], Awaitable[list[BlogDB]]]


class TestGetBlogs:
    """Tests for GET /api/blogs."""

    async def test_blogs_are_returned_as_json(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
    ) -> None:
        """Listing returns every stored blog as JSON."""
        response = await client.get("/api/blogs")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert len(response.json()) == len(initial_blogs)

    async def test_blogs_expose_id_and_owner(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        root_user: UserDB,
    ) -> None:
        """Each blog carries an `id` and the owner's username and name."""
        response = await client.get("/api/blogs")

        for blog in response.json():
            assert "id" in blog
            assert blog["user"]["id"] == str(root_user.id)
            assert blog["user"]["username"] == "root"
            assert blog["user"]["name"] == "Superuser"
            assert "password_hash" not in blog["user"]

    async def test_empty_listing(self, client: AsyncClient) -> None:
        """No blogs gives an empty list."""
        response = await client.get("/api/blogs")

        assert response.status_code == 200
        assert response.json() == []

    async def test_blog_with_missing_owner_is_listed(
        self,
        client: AsyncClient,
        database: Database,
        initial_blogs: list[BlogDB],
        root_user: UserDB,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A blog whose owner row is gone is still listed, with `user: null`."""
        async with database.engine.connect() as conn:
            await conn.exec_driver_sql("PRAGMA foreign_keys=OFF")
            await conn.execute(delete(UserDB).where(col(UserDB.id) == root_user.id))
            await conn.commit()
            await conn.exec_driver_sql("PRAGMA foreign_keys=ON")
            await conn.commit()

        response = await client.get("/api/blogs")

        assert response.status_code == 200
        blogs = response.json()
        assert len(blogs) == len(initial_blogs)
        assert all(blog["user"] is None for blog in blogs)
        assert any(
            "references missing user" in r.getMessage()
            for r in caplog.records
            if r.name == "bloglist.routes.blog"
        )


class TestCreateBlog:
    """Tests for POST /api/blogs."""

    async def test_valid_blog_is_added(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        auth_headers: dict[str, str],
        root_user: UserDB,
        blogs_in_db: BlogsInDb,
    ) -> None:
        """A valid blog is stored, owned by the token's user and recorded on them."""
        new_blog = {
            "title": "Canonical string reduction",
            "author": "Edsger W. Dijkstra",
            "url": "http://www.cs.utexas.edu/~EWD/transcriptions/EWD08xx/EWD808.html",
            "likes": 12,
        }

        response = await client.post("/api/blogs", json=new_blog, headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == new_blog["title"]
        assert body["likes"] == 12
        assert body["user"] == str(root_user.id)

        blogs = await blogs_in_db()
        assert len(blogs) == len(initial_blogs) + 1
        assert new_blog["title"] in [b.title for b in blogs]

        users = (await client.get("/api/users")).json()
        root = next(u for u in users if u["username"] == "root")
        assert body["id"] in [b["id"] for b in root["blogs"]]

    async def test_likes_default_to_zero(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        """A blog posted without likes is stored with zero likes."""
        response = await client.post(
            "/api/blogs",
            json={"title": "T", "url": "http://x"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["likes"] == 0

    async def test_missing_title_is_rejected(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        auth_headers: dict[str, str],
        blogs_in_db: BlogsInDb,
    ) -> None:
        """A blog without a title is not stored."""
        response = await client.post(
            "/api/blogs",
            json={"author": "Nobody", "url": "http://x"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert "Path `title` is required." in response.json()["error"]
        assert len(await blogs_in_db()) == len(initial_blogs)

    async def test_missing_url_is_rejected(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        auth_headers: dict[str, str],
        blogs_in_db: BlogsInDb,
    ) -> None:
        """A blog without a url is not stored."""
        response = await client.post(
            "/api/blogs",
            json={"title": "No url"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert "Path `url` is required." in response.json()["error"]
        assert len(await blogs_in_db()) == len(initial_blogs)

    async def test_negative_likes_are_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        """Likes below zero fail validation."""
        response = await client.post(
            "/api/blogs",
            json={"title": "T", "url": "http://x", "likes": -1},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert "less than minimum allowed value (0)" in response.json()["error"]

    async def test_likes_beyond_column_range_are_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsInDb,
    ) -> None:
        """Likes too large for the likes column fail validation instead of the insert."""
        response = await client.post(
            "/api/blogs",
            json={"title": "T", "url": "http://x", "likes": 10**20},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "Blog validation failed: likes: Path `likes` (100000000000000000000) "
            "is more than maximum allowed value (2147483647).",
        }
        assert await blogs_in_db() == []

    async def test_overlong_fields_are_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsInDb,
    ) -> None:
        """Title, author and url longer than their columns fail validation."""
        response = await client.post(
            "/api/blogs",
            json={
                "title": "t" * 301,
                "author": "a" * 201,
                "url": "http://x/" + "u" * 2000,
            },
            headers=auth_headers,
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert "Path `title`" in error
        assert "longer than the maximum allowed length (300)." in error
        assert "longer than the maximum allowed length (200)." in error
        assert "longer than the maximum allowed length (2000)." in error
        assert await blogs_in_db() == []

    async def test_fields_at_column_limits_are_accepted(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        """Values exactly at the column limits are stored."""
        response = await client.post(
            "/api/blogs",
            json={"title": "t" * 300, "url": "u" * 2000, "likes": 2**31 - 1},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["likes"] == 2**31 - 1

    async def test_unparseable_body_is_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        """A body that is not valid JSON gives 400."""
        response = await client.post(
            "/api/blogs",
            content=b"{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    async def test_without_token_is_unauthorized(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        blogs_in_db: BlogsInDb,
    ) -> None:
        """Creating a blog requires a token."""
        response = await client.post("/api/blogs", json={"title": "T", "url": "http://x"})

        assert response.status_code == 401
        assert response.json() == {"error": "token missing or invalid"}
        assert len(await blogs_in_db()) == len(initial_blogs)

    async def test_garbage_token_is_unauthorized(self, client: AsyncClient) -> None:
        """A token that does not decode gives 401."""
        response = await client.post(
            "/api/blogs",
            json={"title": "T", "url": "http://x"},
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401
        assert response.json()["error"]

    async def test_expired_token_is_unauthorized(
        self,
        client: AsyncClient,
        expired_auth_headers: dict[str, str],
    ) -> None:
        """An expired token gives 401 `token expired`."""
        response = await client.post(
            "/api/blogs",
            json={"title": "T", "url": "http://x"},
            headers=expired_auth_headers,
        )

        assert response.status_code == 401
        assert response.json() == {"error": "token expired"}

    async def test_token_for_unknown_user_is_unauthorized(
        self,
        client: AsyncClient,
        token_codec: JWTTokenCodec,
    ) -> None:
        """A well-formed token naming no stored user gives 401."""
        token = token_codec.encode(uuid4(), "ghost")

        response = await client.post(
            "/api/blogs",
            json={"title": "T", "url": "http://x"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "user not found"}


class TestDeleteBlog:
    """Tests for DELETE /api/blogs/{id}."""

    async def test_owner_can_delete(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        auth_headers: dict[str, str],
        blogs_in_db: BlogsInDb,
    ) -> None:
        """The owner deletes exactly one blog and it leaves the owner's list."""
        target = initial_blogs[0]

        response = await client.delete(f"/api/blogs/{target.id}", headers=auth_headers)

        assert response.status_code == 204
        assert response.content == b""

        remaining = await blogs_in_db()
        assert len(remaining) == len(initial_blogs) - 1
        assert target.id not in [b.id for b in remaining]

        users = (await client.get("/api/users")).json()
        root = next(u for u in users if u["username"] == "root")
        assert str(target.id) not in [b["id"] for b in root["blogs"]]

    async def test_non_owner_cannot_delete(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        other_auth_headers: dict[str, str],
        blogs_in_db: BlogsInDb,
    ) -> None:
        """Another user's token gives 401 and leaves the blogs untouched."""
        target = initial_blogs[0]

        response = await client.delete(f"/api/blogs/{target.id}", headers=other_auth_headers)

        assert response.status_code == 401
        assert response.json() == {"error": "token don't have right to delete the blog"}
        assert len(await blogs_in_db()) == len(initial_blogs)

    async def test_without_token_is_unauthorized(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        blogs_in_db: BlogsInDb,
    ) -> None:
        """Deleting requires a token."""
        response = await client.delete(f"/api/blogs/{initial_blogs[0].id}")

        assert response.status_code == 401
        assert len(await blogs_in_db()) == len(initial_blogs)

    async def test_malformed_id(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        """An id that is not a UUID gives 400 `malformatted id`."""
        response = await client.delete("/api/blogs/12345", headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "malformatted id"}

    async def test_unknown_id(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        """A well-formed id with no blog gives 404."""
        response = await client.delete(f"/api/blogs/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "blog not found"}


class TestUpdateBlog:
    """Tests for PUT /api/blogs/{id}."""

    async def test_owner_can_update(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        auth_headers: dict[str, str],
    ) -> None:
        """The owner overwrites the blog's fields."""
        target = initial_blogs[0]
        payload = {
            "title": target.title,
            "author": target.author,
            "url": target.url,
            "likes": target.likes + 1,
        }

        response = await client.put(
            f"/api/blogs/{target.id}",
            json=payload,
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(target.id)
        assert body["likes"] == target.likes + 1

        listing = (await client.get("/api/blogs")).json()
        updated = next(b for b in listing if b["id"] == str(target.id))
        assert updated["likes"] == target.likes + 1

    async def test_absent_likes_become_zero(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        auth_headers: dict[str, str],
    ) -> None:
        """An update without likes resets them to zero."""
        target = initial_blogs[0]

        response = await client.put(
            f"/api/blogs/{target.id}",
            json={"title": target.title, "url": target.url},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["likes"] == 0

    async def test_invalid_update_is_rejected(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        auth_headers: dict[str, str],
    ) -> None:
        """An update that drops the title fails validation."""
        response = await client.put(
            f"/api/blogs/{initial_blogs[0].id}",
            json={"url": "http://x"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert "Path `title` is required." in response.json()["error"]

    async def test_without_token_is_unauthorized(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
    ) -> None:
        """Updating requires a token by default."""
        response = await client.put(
            f"/api/blogs/{initial_blogs[0].id}",
            json={"title": "T", "url": "http://x"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "token missing or invalid"}

    async def test_non_owner_cannot_update(
        self,
        client: AsyncClient,
        initial_blogs: list[BlogDB],
        other_auth_headers: dict[str, str],
    ) -> None:
        """Another user's token gives 401."""
        response = await client.put(
            f"/api/blogs/{initial_blogs[0].id}",
            json={"title": "T", "url": "http://x"},
            headers=other_auth_headers,
        )

        assert response.status_code == 401
        assert response.json() == {"error": "token don't have right to update the blog"}

    async def test_unknown_id(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        """A well-formed id with no blog gives 404."""
        response = await client.put(
            f"/api/blogs/{uuid4()}",
            json={"title": "T", "url": "http://x"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json() == {"error": "blog not found"}

    async def test_malformed_id(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        """An id that is not a UUID gives 400 `malformatted id`."""
        response = await client.put(
            "/api/blogs/12345",
            json={"title": "T", "url": "http://x"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"error": "malformatted id"}

    async def test_unknown_id_without_token_is_unauthorized(
        self,
        client: AsyncClient,
    ) -> None:
        """Without a token the caller learns nothing about which ids exist."""
        response = await client.put(
            f"/api/blogs/{uuid4()}",
            json={"title": "T", "url": "http://x"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "token missing or invalid"}

    async def test_open_update_when_ownership_disabled(
        self,
        database: Database,
        token_codec: JWTTokenCodec,
        initial_blogs: list[BlogDB],
    ) -> None:
        """With BLOG_UPDATE_REQUIRES_OWNER off, anyone may update."""
        open_app: FastAPI = create_app(
            config=settings.model_copy(update={"BLOG_UPDATE_REQUIRES_OWNER": False}),
            database=database,
            token_codec=token_codec,
        )
        target = initial_blogs[0]

        async with AsyncClient(
            base_url="http://test",
            transport=ASGITransport(app=open_app),
        ) as open_client:
            response = await open_client.put(
                f"/api/blogs/{target.id}",
                json={"title": target.title, "url": target.url, "likes": 99},
            )

        assert response.status_code == 200
        assert response.json()["likes"] == 99


class TestUnknownEndpoint:
    """Tests for requests that match no route."""

    async def test_unknown_path(self, client: AsyncClient) -> None:
        """An unrouted path gives 404 `unknown endpoint`."""
        response = await client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"error": "unknown endpoint"}

    async def test_unsupported_method(self, client: AsyncClient) -> None:
        """A routed path with an unsupported method is also an unknown endpoint."""
        response = await client.patch("/api/blogs")

        assert response.status_code == 404
        assert response.json() == {"error": "unknown endpoint"}
