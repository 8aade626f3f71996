"""Integration tests for authentication endpoints."""

SIGN_UP = {
    "email": "a@b.com",
    "password": "p",
    "first_name": "A",
    "last_name": "B",
}


class TestSignUp:
    def test_creates_user_and_session(self, client, appwrite):
        response = client.post("/api/auth/sign-up", json=SIGN_UP)

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "a@b.com"
        assert data["first_name"] == "A"
        assert data["user_id"] == appwrite.accounts["a@b.com"]["$id"]
        assert "password_hash" not in data
        assert "ssn" not in data

        set_cookie = response.headers["set-cookie"].lower()
        assert set_cookie.startswith("appwrite-session=")
        assert "httponly" in set_cookie
        assert "samesite=strict" in set_cookie

    def test_session_is_usable(self, client):
        client.post("/api/auth/sign-up", json=SIGN_UP)

        response = client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["email"] == "a@b.com"

    def test_duplicate_email_returns_409(self, client):
        client.post("/api/auth/sign-up", json=SIGN_UP)
        client.cookies.clear()

        response = client.post("/api/auth/sign-up", json=SIGN_UP)

        assert response.status_code == 409
        assert "set-cookie" not in response.headers

    def test_store_outage_returns_502(self, client, appwrite):
        appwrite.fail_on = {"create_account"}
        response = client.post("/api/auth/sign-up", json=SIGN_UP)
        assert response.status_code == 502

    def test_not_configured_returns_400(self, client, appwrite):
        appwrite.configured = False

        response = client.post("/api/auth/sign-up", json=SIGN_UP)

        assert response.status_code == 400
        assert appwrite.accounts == {}

    def test_missing_fields(self, client):
        response = client.post("/api/auth/sign-up", json={"email": "a@b.com"})
        assert response.status_code == 422


class TestSignIn:
    def test_valid_credentials(self, client, seeded_user):
        document, _ = seeded_user

        response = client.post(
            "/api/auth/sign-in",
            json={"email": "jane@example.com", "password": "password123"},
        )

        assert response.status_code == 200
        assert response.json()["id"] == document["$id"]
        assert "appwrite-session=" in response.headers["set-cookie"]

    def test_wrong_password_returns_401(self, client, seeded_user):
        response = client.post(
            "/api/auth/sign-in",
            json={"email": "jane@example.com", "password": "wrong"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_user_lookup_outage_returns_401_and_deletes_session(self, client, appwrite, seeded_user):
        appwrite.fail_on = {"list_documents"}

        response = client.post(
            "/api/auth/sign-in",
            json={"email": "jane@example.com", "password": "password123"},
        )

        assert response.status_code == 401
        assert len(appwrite.collections["users"]) == 1
        assert len(appwrite.deleted_sessions) == 1
        assert appwrite.deleted_sessions[0] not in appwrite.sessions

    def test_not_configured_returns_400(self, client, appwrite, seeded_user):
        appwrite.configured = False

        response = client.post(
            "/api/auth/sign-in",
            json={"email": "jane@example.com", "password": "password123"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Appwrite is not configured"
        assert len(appwrite.sessions) == 1


class TestLogout:
    def test_clears_cookie_and_session(self, auth_client, appwrite, seeded_user):
        _, secret = seeded_user

        response = auth_client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert appwrite.deleted_sessions == [secret]
        assert auth_client.get("/api/auth/me").status_code == 401

    def test_logout_without_session(self, client):
        response = client.post("/api/auth/logout")
        assert response.status_code == 200


class TestMe:
    def test_requires_session(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_returns_logged_in_user(self, auth_client):
        response = auth_client.get("/api/auth/me")
        assert response.status_code == 200
        assert response.json()["first_name"] == "Jane"

    def test_stale_cookie(self, client, seeded_user):
        client.cookies.set("appwrite-session", "stale")
        assert client.get("/api/auth/me").status_code == 401
