"""Tests for API routes."""

import time

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from artmarket.auth.tokens import TokenService
from artmarket.models import Identity

from tests.conftest import TEST_PASSWORD, TEST_SECRET, auth_headers


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_check(self, client: TestClient):
        """Test GET /health returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestArtistAccount:
    """Test artist registration, login and session endpoints."""

    def test_register(self, client: TestClient):
        response = client.post(
            "/artist/register",
            json={
                "email": "new@x.com",
                "password": TEST_PASSWORD,
                "fullname": {"firstname": "Nadia", "lastname": "Kahlo"},
                "city": "Oaxaca",
                "profilePic": "http://img/me.png",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["token"]
        assert data["artist"]["email"] == "new@x.com"
        assert data["artist"]["role"] == "artist"
        assert data["artist"]["profilePic"] == "http://img/me.png"
        assert data["artist"]["ownedListingIds"] == []
        assert "password" not in data["artist"]
        assert "passwordHash" not in data["artist"]
        assert "password_hash" not in data["artist"]

    def test_register_duplicate_email(self, client: TestClient, artist_a: dict):
        """Test registering the same email twice is a 400."""
        response = client.post(
            "/artist/register",
            json={
                "email": "a@x.com",
                "password": TEST_PASSWORD,
                "fullname": {"firstname": "Again"},
                "city": "Lisbon",
            },
        )
        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Artist Already Exists"
        assert body["error_type"] == "validation"
        assert "error_id" in body

    def test_register_invalid_body(self, client: TestClient):
        """Test schema violations are reported as 400 with field details."""
        response = client.post(
            "/artist/register",
            json={"email": "not-an-email", "password": "123", "fullname": {"firstname": "Al"}},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error_type"] == "validation"
        fields = {error["field"] for error in body["errors"]}
        assert "body.email" in fields
        assert "body.password" in fields

    def test_login_returns_token_and_cookie(self, client: TestClient, artist_a: dict):
        response = client.post(
            "/artist/login", json={"email": "a@x.com", "password": TEST_PASSWORD}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["artist"]["id"] == artist_a["id"]
        assert data["token"]
        assert response.cookies.get("token") == data["token"]

    def test_login_wrong_password(self, client: TestClient, artist_a: dict):
        response = client.post(
            "/artist/login", json={"email": "a@x.com", "password": "wrong-pass"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Email Or Password Is Incorrect"

    def test_login_as_user_with_artist_account(self, client: TestClient, artist_a: dict):
        """Test artist credentials do not log in on the user side."""
        response = client.post(
            "/user/login", json={"email": "a@x.com", "password": TEST_PASSWORD}
        )
        assert response.status_code == 400

    def test_get_artist(self, client: TestClient, artist_a: dict):
        response = client.get("/artist/getArtist", headers=auth_headers(artist_a["token"]))
        assert response.status_code == 200
        assert response.json()["artist"]["id"] == artist_a["id"]

    def test_get_artist_requires_token(self, client: TestClient):
        response = client.get("/artist/getArtist")
        assert response.status_code == 401
        assert response.json()["error_type"] == "auth"

    def test_get_artist_with_garbage_token(self, client: TestClient):
        response = client.get("/artist/getArtist", headers=auth_headers("garbage"))
        assert response.status_code == 401

    def test_cookie_authenticates(self, client: TestClient, artist_a: dict):
        """Test the login cookie works without an Authorization header."""
        client.post("/artist/login", json={"email": "a@x.com", "password": TEST_PASSWORD})

        response = client.get("/artist/getArtist")
        assert response.status_code == 200
        assert response.json()["artist"]["id"] == artist_a["id"]

    def test_logout(self, client: TestClient, artist_a: dict):
        response = client.get("/artist/logout", headers=auth_headers(artist_a["token"]))
        assert response.status_code == 200
        assert response.json() == {"message": "Logged Out"}
        assert "token=" in response.headers["set-cookie"]

    def test_expired_token(self, client: TestClient, artist_a: dict):
        """Test an expired token is rejected by a protected endpoint."""
        issued_an_hour_ago = TokenService(
            secret=TEST_SECRET, expires_in_seconds=60, clock=lambda: time.time() - 3600
        )
        token = issued_an_hour_ago.issue(artist_a["id"])

        response = client.get("/artist/getArtist", headers=auth_headers(token))
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_token_for_deleted_identity(
        self, client: TestClient, session: Session, artist_a: dict
    ):
        """Test a token outliving its identity is rejected."""
        session.delete(session.get(Identity, artist_a["id"]))
        session.commit()

        response = client.get("/artist/getArtist", headers=auth_headers(artist_a["token"]))
        assert response.status_code == 401


class TestLoggedIn:
    """Test role resolution for the frontend navbar."""

    def test_artist(self, client: TestClient, artist_a: dict):
        response = client.get("/artist/loggedIn", headers=auth_headers(artist_a["token"]))
        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "artist"
        assert data["artist"]["id"] == artist_a["id"]
        assert "user" not in data

    def test_user(self, client: TestClient, user_account: dict):
        response = client.get("/artist/loggedIn", headers=auth_headers(user_account["token"]))
        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "user"
        assert data["user"]["email"] == "reader@x.com"
        assert "artist" not in data

    def test_no_token(self, client: TestClient):
        response = client.get("/artist/loggedIn")
        assert response.status_code == 401


class TestListings:
    """Test listing CRUD through the artist router."""

    def test_create_then_show(self, client: TestClient, artist_a: dict, listing_body: dict):
        """Test a created listing shows up with its creator as owner."""
        response = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        )
        assert response.status_code == 201
        listing = response.json()["listing"]
        assert listing["title"] == "Sun"
        assert listing["typeOfArt"] == "Digital Art"
        assert listing["imageUrl"] == "http://img/1.png"
        assert listing["ownerId"] == artist_a["id"]

        response = client.get("/artist/show")
        assert response.status_code == 200
        shown = [item for item in response.json() if item["id"] == listing["id"]]
        assert len(shown) == 1
        assert shown[0]["ownerId"] == artist_a["id"]

        artist = client.get(
            "/artist/getArtist", headers=auth_headers(artist_a["token"])
        ).json()["artist"]
        assert artist["ownedListingIds"] == [listing["id"]]

    def test_create_with_numeric_price(
        self, client: TestClient, artist_a: dict, listing_body: dict
    ):
        response = client.post(
            "/artist/create",
            json={**listing_body, "price": 250},
            headers=auth_headers(artist_a["token"]),
        )
        assert response.status_code == 201
        assert response.json()["listing"]["price"] == "250"

    def test_create_requires_token(self, client: TestClient, listing_body: dict):
        response = client.post("/artist/create", json=listing_body)
        assert response.status_code == 401

    def test_create_as_user_forbidden(
        self, client: TestClient, user_account: dict, listing_body: dict
    ):
        response = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(user_account["token"])
        )
        assert response.status_code == 403
        assert client.get("/artist/show").json() == []

    def test_create_invalid(self, client: TestClient, artist_a: dict, listing_body: dict):
        """Test a too-short title and a missing image are rejected."""
        body = {**listing_body, "title": "ab"}
        del body["image"]
        response = client.post(
            "/artist/create", json=body, headers=auth_headers(artist_a["token"])
        )
        assert response.status_code == 400
        assert client.get("/artist/show").json() == []

    def test_show_empty(self, client: TestClient):
        response = client.get("/artist/show")
        assert response.status_code == 200
        assert response.json() == []

    def test_show_one_includes_owner(
        self, client: TestClient, artist_a: dict, listing_body: dict
    ):
        created = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        ).json()["listing"]

        response = client.get(f"/artist/show/{created['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["owner"]["id"] == artist_a["id"]
        assert data["owner"]["firstname"] == "Alice"
        assert "email" not in data["owner"]

    def test_show_one_is_repeatable(
        self, client: TestClient, artist_a: dict, listing_body: dict
    ):
        created = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        ).json()["listing"]

        first = client.get(f"/artist/show/{created['id']}").json()
        second = client.get(f"/artist/show/{created['id']}").json()
        assert first == second

    def test_show_one_not_found(self, client: TestClient):
        response = client.get("/artist/show/nonexistent-id")
        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"

    def test_update_by_owner(self, client: TestClient, artist_a: dict, listing_body: dict):
        created = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        ).json()["listing"]

        response = client.put(
            f"/artist/update/{created['id']}",
            json={"title": "Sunrise", "location": "Porto", "country": "Portugal"},
            headers=auth_headers(artist_a["token"]),
        )
        assert response.status_code == 200
        listing = response.json()["listing"]
        assert listing["title"] == "Sunrise"
        assert listing["location"] == "Porto"
        assert listing["description"] == "desc"
        assert listing["ownerId"] == artist_a["id"]

    def test_update_by_other_artist(
        self, client: TestClient, artist_a: dict, artist_b: dict, listing_body: dict
    ):
        """Test artist B cannot change artist A's listing."""
        created = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        ).json()["listing"]

        response = client.put(
            f"/artist/update/{created['id']}",
            json={"title": "Hijacked"},
            headers=auth_headers(artist_b["token"]),
        )
        assert response.status_code == 403

        unchanged = client.get(f"/artist/show/{created['id']}").json()
        assert unchanged["title"] == "Sun"
        assert unchanged["ownerId"] == artist_a["id"]

    def test_user_cannot_update_or_delete(
        self,
        client: TestClient,
        artist_a: dict,
        user_account: dict,
        listing_body: dict,
    ):
        """Test a user-role token cannot modify an artist's listing."""
        created = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        ).json()["listing"]
        headers = auth_headers(user_account["token"])

        response = client.put(
            f"/artist/update/{created['id']}", json={"title": "Hijacked"}, headers=headers
        )
        assert response.status_code == 403

        response = client.delete(f"/artist/delete/{created['id']}", headers=headers)
        assert response.status_code == 403

        unchanged = client.get(f"/artist/show/{created['id']}").json()
        assert unchanged["title"] == "Sun"

    def test_update_not_found(self, client: TestClient, artist_a: dict):
        response = client.put(
            "/artist/update/nonexistent-id",
            json={"title": "Nothing"},
            headers=auth_headers(artist_a["token"]),
        )
        assert response.status_code == 404

    def test_delete_by_other_artist(
        self, client: TestClient, artist_a: dict, artist_b: dict, listing_body: dict
    ):
        created = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        ).json()["listing"]

        response = client.delete(
            f"/artist/delete/{created['id']}", headers=auth_headers(artist_b["token"])
        )
        assert response.status_code == 403
        assert client.get(f"/artist/show/{created['id']}").status_code == 200

    def test_delete_by_owner(self, client: TestClient, artist_a: dict, listing_body: dict):
        created = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        ).json()["listing"]

        response = client.delete(
            f"/artist/delete/{created['id']}", headers=auth_headers(artist_a["token"])
        )
        assert response.status_code == 200
        assert response.json()["listing"]["id"] == created["id"]

        assert client.get(f"/artist/show/{created['id']}").status_code == 404
        artist = client.get(
            "/artist/getArtist", headers=auth_headers(artist_a["token"])
        ).json()["artist"]
        assert artist["ownedListingIds"] == []

    def test_delete_not_found(self, client: TestClient, artist_a: dict):
        """Test deleting an unknown id is a 404."""
        response = client.delete(
            "/artist/delete/nonexistent-id", headers=auth_headers(artist_a["token"])
        )
        assert response.status_code == 404

    def test_art_owner(
        self, client: TestClient, artist_a: dict, artist_b: dict, listing_body: dict
    ):
        created = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        ).json()["listing"]

        response = client.get(
            f"/artist/artOwner/{created['id']}", headers=auth_headers(artist_a["token"])
        )
        assert response.status_code == 200
        assert response.json() == {"isOwner": True}

        response = client.get(
            f"/artist/artOwner/{created['id']}", headers=auth_headers(artist_b["token"])
        )
        assert response.status_code == 403


class TestUserRouter:
    """Test user accounts and saved listings."""

    def test_register_without_city(self, client: TestClient):
        response = client.post(
            "/user/register",
            json={
                "email": "plain@x.com",
                "password": TEST_PASSWORD,
                "fullname": {"firstname": "Plain"},
            },
        )
        assert response.status_code == 201
        assert response.json()["user"]["role"] == "user"

    def test_duplicate_email_across_roles(self, client: TestClient, artist_a: dict):
        """Test an artist's email cannot be reused for a user account."""
        response = client.post(
            "/user/register",
            json={
                "email": "a@x.com",
                "password": TEST_PASSWORD,
                "fullname": {"firstname": "Alice"},
            },
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "User Already Exists"

    def test_login_and_get_user(self, client: TestClient, user_account: dict):
        response = client.post(
            "/user/login", json={"email": "reader@x.com", "password": TEST_PASSWORD}
        )
        assert response.status_code == 200
        token = response.json()["token"]

        response = client.get("/user/getUser", headers=auth_headers(token))
        assert response.status_code == 200
        assert response.json()["user"]["id"] == user_account["id"]

    def test_artist_token_on_user_endpoint(self, client: TestClient, artist_a: dict):
        response = client.get("/user/getUser", headers=auth_headers(artist_a["token"]))
        assert response.status_code == 403

    def test_logout(self, client: TestClient, user_account: dict):
        response = client.get("/user/logout", headers=auth_headers(user_account["token"]))
        assert response.status_code == 200
        assert response.json() == {"message": "Logged Out"}

    def test_save_and_unsave(
        self,
        client: TestClient,
        artist_a: dict,
        user_account: dict,
        listing_body: dict,
    ):
        created = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        ).json()["listing"]
        headers = auth_headers(user_account["token"])

        response = client.post(f"/user/save/{created['id']}", headers=headers)
        assert response.status_code == 200
        assert response.json()["user"]["savedListingIds"] == [created["id"]]

        # Saving again keeps a single entry
        client.post(f"/user/save/{created['id']}", headers=headers)
        saved = client.get("/user/saved", headers=headers).json()
        assert [item["id"] for item in saved] == [created["id"]]

        response = client.delete(f"/user/save/{created['id']}", headers=headers)
        assert response.status_code == 200
        assert response.json()["user"]["savedListingIds"] == []
        assert client.get("/user/saved", headers=headers).json() == []

    def test_save_missing_listing(self, client: TestClient, user_account: dict):
        response = client.post(
            "/user/save/nonexistent-id", headers=auth_headers(user_account["token"])
        )
        assert response.status_code == 404

    def test_deleted_listing_leaves_saved(
        self,
        client: TestClient,
        artist_a: dict,
        user_account: dict,
        listing_body: dict,
    ):
        created = client.post(
            "/artist/create", json=listing_body, headers=auth_headers(artist_a["token"])
        ).json()["listing"]
        headers = auth_headers(user_account["token"])
        client.post(f"/user/save/{created['id']}", headers=headers)

        client.delete(
            f"/artist/delete/{created['id']}", headers=auth_headers(artist_a["token"])
        )

        assert client.get("/user/saved", headers=headers).json() == []
