"""Admin login, session cookies and access control."""

from __future__ import annotations

from datetime import datetime
from unittest.mock import patch

from sqlalchemy import select

from kaptan.auth import create_session_token, verify_session_token
from kaptan.errors import StoreUnavailableError
from kaptan.models import ROLE_USER, User

from .conftest import ADMIN_PASSWORD, ADMIN_USERNAME, OWNER_OPEN_ID, login

LOGIN = {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}


def set_cookie_header(response) -> str:
    return response.headers["set-cookie"].lower()


class TestAdminLogin:
    def test_login_sets_http_only_cookie_for_plain_http(self, client):
        response = client.post("/api/admin-login", json=LOGIN)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        header = set_cookie_header(response)
        assert header.startswith("app_session_id=")
        assert "httponly" in header
        assert "max-age=31536000" in header
        assert "path=/" in header
        assert "samesite=lax" in header
        assert "; secure" not in header
        assert "domain=" not in header

    def test_login_behind_https_proxy_shares_cookie_across_subdomains(self, client):
        response = client.post(
            "/api/admin-login",
            json=LOGIN,
            headers={"host": "admin.kaptan.com", "x-forwarded-proto": "https"},
        )

        header = set_cookie_header(response)
        assert "domain=.kaptan.com" in header
        assert "; secure" in header
        assert "samesite=none" in header

    def test_wrong_password_is_rejected(self, client):
        response = client.post(
            "/api/admin-login",
            json={"username": ADMIN_USERNAME, "password": "wrong"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "Unauthenticated"
        assert "set-cookie" not in response.headers

    def test_login_promotes_owner_to_admin(self, client):
        client.post("/api/admin-login", json=LOGIN)

        me = client.get("/api/rpc/auth.me").json()

        assert me["open_id"] == OWNER_OPEN_ID
        assert me["role"] == "admin"
        assert me["name"] == "Admin"

    def test_login_survives_store_outage_during_bookkeeping(self, client):
        with patch(
            "kaptan.repositories.upserts.apply_upsert",
            side_effect=StoreUnavailableError(),
        ):
            response = client.post("/api/admin-login", json=LOGIN)

        assert response.status_code == 200
        assert "app_session_id=" in set_cookie_header(response)


class TestSession:
    def test_anonymous_me_is_null(self, client):
        response = client.get("/api/rpc/auth.me")

        assert response.status_code == 200
        assert response.json() is None

    def test_garbage_cookie_is_anonymous(self, client):
        client.cookies.set("app_session_id", "not-a-token")

        assert client.get("/api/rpc/auth.me").json() is None

    def test_token_signed_with_other_secret_is_rejected(self, client, settings):
        other = settings.model_copy(update={"secret_key": "another-secret"})
        token = create_session_token(OWNER_OPEN_ID, "Admin", other)

        assert verify_session_token(token, settings) is None
        client.cookies.set("app_session_id", token)
        assert client.get("/api/rpc/auth.me").json() is None

    def test_token_round_trip(self, settings):
        token = create_session_token("u-42", "Deniz", settings)

        claims = verify_session_token(token, settings)

        assert claims["sub"] == "u-42"
        assert claims["name"] == "Deniz"

    def test_store_outage_resolves_to_anonymous(self, admin_client):
        with patch(
            "kaptan.auth.UserRepository.get_by_open_id",
            side_effect=StoreUnavailableError(),
        ):
            response = admin_client.get("/api/rpc/auth.me")

        assert response.status_code == 200
        assert response.json() is None

    def test_logout_clears_cookie(self, admin_client):
        response = admin_client.post("/api/rpc/auth.logout")

        assert response.status_code == 200
        header = set_cookie_header(response)
        assert header.startswith("app_session_id=")
        assert "max-age=0" in header
        assert "samesite=lax" in header
        assert admin_client.get("/api/rpc/auth.me").json() is None


class TestAccessControl:
    NEW_CATEGORY = {"name": "Denizcilik", "slug": "denizcilik"}

    def test_anonymous_mutation_is_unauthenticated(self, client):
        response = client.post("/api/rpc/categories.create", json=self.NEW_CATEGORY)

        assert response.status_code == 401
        assert response.json() == {"detail": "Please login", "code": "Unauthenticated"}

    def test_regular_user_is_forbidden(self, client, db_session, settings):
        db_session.add(User(open_id="guest-1", name="Misafir", role=ROLE_USER))
        db_session.commit()
        client.cookies.set(
            "app_session_id", create_session_token("guest-1", "Misafir", settings)
        )

        assert client.get("/api/rpc/auth.me").json()["role"] == "user"
        response = client.post("/api/rpc/categories.create", json=self.NEW_CATEGORY)
        assert response.status_code == 403
        assert response.json()["code"] == "Forbidden"

    def test_admin_mutation_succeeds(self, admin_client):
        response = admin_client.post(
            "/api/rpc/categories.create", json=self.NEW_CATEGORY
        )

        assert response.status_code == 200
        assert "id" in response.json()


class TestLastSignedIn:
    @staticmethod
    def stored_last_signed_in(db_session) -> datetime:
        db_session.expire_all()
        owner = db_session.scalars(
            select(User).where(User.open_id == OWNER_OPEN_ID)
        ).one()
        return owner.last_signed_in.replace(tzinfo=None)

    def test_repeated_login_advances_owner_timestamp(self, client, db_session, clock):
        login(client)
        first = self.stored_last_signed_in(db_session)

        later = clock.advance(days=2)
        login(client)

        assert self.stored_last_signed_in(db_session) == later.replace(tzinfo=None)
        assert self.stored_last_signed_in(db_session) > first

    def test_authenticated_request_advances_owner_timestamp(self, admin_client, clock):
        later = clock.advance(hours=3)

        me = admin_client.get("/api/rpc/auth.me").json()

        seen = datetime.fromisoformat(me["last_signed_in"]).replace(tzinfo=None)
        assert seen == later.replace(tzinfo=None)
        assert me["role"] == "admin"
