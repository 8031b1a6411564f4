"""End-to-end API tests: FastAPI TestClient over an in-memory SQLite database."""

import unittest

from fastapi.testclient import TestClient

from app.core.database import get_db
from app.main import create_app
from tests.fakes import make_settings, make_sqlite_session_factory

API = "/api/v1"


class ApiTestCase(unittest.TestCase):
    settings_overrides: dict = {}

    def setUp(self) -> None:
        session_factory = make_sqlite_session_factory()

        def override_get_db():
            db = session_factory()
            try:
                yield db
            finally:
                db.close()

        self.app = create_app(make_settings(**self.settings_overrides), session_factory=session_factory)
        self.app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(self.app)
        # Entering the client runs the lifespan, which bootstraps the super admin.
        self.client.__enter__()

    def tearDown(self) -> None:
        self.client.__exit__(None, None, None)

    def login(self, username: str = "superadmin", password: str = "superadmin123") -> dict:
        response = self.client.post(f"{API}/auth/login", json={"username": username, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def create_admin(self, token: str, username: str = "bob", email: str = "bob@example.com"):
        return self.client.post(
            f"{API}/super-admin/admins",
            json={"username": username, "email": email, "password": "secret1"},
            headers=self.bearer(token),
        )


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        body = self.client.get(f"{API}/health").json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")

    def test_root(self) -> None:
        self.assertEqual(self.client.get("/").status_code, 200)


class TestLoginLogoutFlow(ApiTestCase):
    def test_superadmin_session_lifecycle(self) -> None:
        body = self.login()
        self.assertEqual(body["user"]["role"], "super_admin")
        self.assertEqual(body["token_type"], "bearer")
        self.assertEqual(body["expires_in"], 15 * 60)
        token = body["access_token"]

        response = self.client.get(f"{API}/admin/news", headers=self.bearer(token))
        self.assertEqual(response.status_code, 200)

        response = self.client.post(f"{API}/auth/logout", headers=self.bearer(token))
        self.assertEqual(response.status_code, 200)

        response = self.client.get(f"{API}/admin/news", headers=self.bearer(token))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "token_revoked")
        self.assertEqual(response.headers.get("WWW-Authenticate"), "Bearer")

    def test_login_sets_refresh_cookie(self) -> None:
        response = self.client.post(
            f"{API}/auth/login", json={"username": "superadmin", "password": "superadmin123"}
        )
        self.assertIn("refresh_token", response.cookies)
        set_cookie = response.headers["set-cookie"].lower()
        self.assertIn("httponly", set_cookie)

    def test_malformed_login_body_is_400(self) -> None:
        response = self.client.post(f"{API}/auth/login", json={"username": "superadmin"})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["code"], "invalid_input")
        self.assertIn("password", body["detail"])

    def test_bad_credentials(self) -> None:
        wrong = self.client.post(f"{API}/auth/login", json={"username": "superadmin", "password": "nope"})
        unknown = self.client.post(f"{API}/auth/login", json={"username": "ghost", "password": "nope"})
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())


class TestRefreshEndpoint(ApiTestCase):
    def test_refresh_token_is_single_use(self) -> None:
        refresh_token = self.login()["refresh_token"]
        first = self.client.post(f"{API}/auth/refresh", json={"refresh_token": refresh_token})
        self.assertEqual(first.status_code, 200, first.text)
        self.assertNotEqual(first.json()["refresh_token"], refresh_token)

        second = self.client.post(f"{API}/auth/refresh", json={"refresh_token": refresh_token})
        self.assertEqual(second.status_code, 401)
        self.assertEqual(second.json()["code"], "refresh_token_revoked")

    def test_refresh_from_cookie(self) -> None:
        self.login()
        response = self.client.post(f"{API}/auth/refresh")
        self.assertEqual(response.status_code, 200, response.text)

    def test_access_token_is_not_a_refresh_token(self) -> None:
        access = self.login()["access_token"]
        response = self.client.post(f"{API}/auth/refresh", json={"refresh_token": access})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "invalid_refresh_token")


class TestAccessGate(ApiTestCase):
    def test_missing_header(self) -> None:
        response = self.client.get(f"{API}/admin/news")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "missing_auth_header")

    def test_malformed_header(self) -> None:
        for header in ("Token abc", "Bearer", "Bearer a b"):
            with self.subTest(header=header):
                response = self.client.get(f"{API}/admin/news", headers={"Authorization": header})
                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json()["code"], "malformed_auth_header")

    def test_garbage_token(self) -> None:
        response = self.client.get(f"{API}/admin/news", headers=self.bearer("garbage"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "invalid_or_expired_token")

    def test_refresh_token_rejected_as_access_token(self) -> None:
        refresh_token = self.login()["refresh_token"]
        response = self.client.get(f"{API}/admin/news", headers=self.bearer(refresh_token))
        self.assertEqual(response.status_code, 401)

    def test_admin_cannot_reach_super_admin_routes(self) -> None:
        super_token = self.login()["access_token"]
        self.assertEqual(self.create_admin(super_token).status_code, 201)
        admin_token = self.login("bob", "secret1")["access_token"]

        response = self.create_admin(admin_token, "carol", "carol@example.com")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["code"], "insufficient_permissions")

        response = self.client.get(f"{API}/admin/news", headers=self.bearer(admin_token))
        self.assertEqual(response.status_code, 200)


class TestAdminManagement(ApiTestCase):
    def test_create_admin_then_duplicate(self) -> None:
        token = self.login()["access_token"]
        response = self.create_admin(token)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["role"], "admin")
        self.assertNotIn("password_hash", response.json())

        response = self.create_admin(token, "bob", "new@example.com")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "username_taken")

        response = self.create_admin(token, "robert", "bob@example.com")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "email_taken")

    def test_invalid_payload_is_400(self) -> None:
        token = self.login()["access_token"]
        response = self.client.post(
            f"{API}/super-admin/admins",
            json={"username": "bob", "email": "not-an-email", "password": "123"},
            headers=self.bearer(token),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "invalid_input")


class TestProfile(ApiTestCase):
    def test_own_profile_and_others(self) -> None:
        super_token = self.login()["access_token"]
        bob_id = self.create_admin(super_token).json()["id"]
        bob_token = self.login("bob", "secret1")["access_token"]

        self.assertEqual(self.client.get(f"{API}/auth/profile", headers=self.bearer(bob_token)).json()["id"], bob_id)
        response = self.client.get(f"{API}/auth/profile/1", headers=self.bearer(bob_token))
        self.assertEqual(response.status_code, 403)
        response = self.client.get(f"{API}/auth/profile/{bob_id}", headers=self.bearer(super_token))
        self.assertEqual(response.status_code, 200)

    def test_update_profile(self) -> None:
        token = self.login()["access_token"]
        response = self.client.put(
            f"{API}/auth/profile",
            json={"username": "root", "email": "root@example.com", "password": ""},
            headers=self.bearer(token),
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["username"], "root")
        # Password unchanged.
        self.login("root", "superadmin123")

    def test_short_password_rejected(self) -> None:
        token = self.login()["access_token"]
        response = self.client.put(
            f"{API}/auth/profile",
            json={"username": "superadmin", "email": "superadmin@haslaw.com", "password": "a"},
            headers=self.bearer(token),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "invalid_input")
        wrong = self.client.post(f"{API}/auth/login", json={"username": "superadmin", "password": "a"})
        self.assertEqual(wrong.status_code, 401)
        self.login()


class TestContentEndpoints(ApiTestCase):
    def test_news_publish_flow(self) -> None:
        token = self.login()["access_token"]
        response = self.client.post(
            f"{API}/admin/news",
            json={"news_title": "Big News", "category": "firm", "status": "Drafted", "content": "..."},
            headers=self.bearer(token),
        )
        self.assertEqual(response.status_code, 201, response.text)
        news = response.json()

        self.assertEqual(self.client.get(f"{API}/news").json()["meta"]["total"], 0)
        self.assertEqual(self.client.get(f"{API}/news/{news['id']}").status_code, 404)

        response = self.client.post(f"{API}/admin/news/drafts/{news['id']}/publish", headers=self.bearer(token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "Posted")

        listing = self.client.get(f"{API}/news").json()
        self.assertEqual(listing["meta"], {"page": 1, "limit": 10, "total": 1, "total_pages": 1})
        self.assertEqual(self.client.get(f"{API}/news/slug/{news['slug']}").status_code, 200)

        response = self.client.post(f"{API}/admin/news/drafts/{news['id']}/publish", headers=self.bearer(token))
        self.assertEqual(response.status_code, 400)

        response = self.client.delete(f"{API}/admin/news/{news['id']}", headers=self.bearer(token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(f"{API}/news/{news['id']}").status_code, 404)

    def test_news_write_requires_auth(self) -> None:
        response = self.client.post(f"{API}/admin/news", json={"news_title": "x", "category": "y"})
        self.assertEqual(response.status_code, 401)

    def test_members_crud(self) -> None:
        token = self.login()["access_token"]
        response = self.client.post(
            f"{API}/admin/members",
            json={
                "full_name": "Ann Lee",
                "title_position": "Partner",
                "email": "ann@example.com",
                "practice_focus": ["Tax"],
            },
            headers=self.bearer(token),
        )
        self.assertEqual(response.status_code, 201, response.text)
        member_id = response.json()["id"]

        public = self.client.get(f"{API}/members").json()
        self.assertEqual(public["total"], 1)
        self.assertEqual(public["items"][0]["practice_focus"], ["Tax"])

        response = self.client.put(
            f"{API}/admin/members/{member_id}", json={"biography": "Bio"}, headers=self.bearer(token)
        )
        self.assertEqual(response.json()["biography"], "Bio")

        self.client.delete(f"{API}/admin/members/{member_id}", headers=self.bearer(token))
        self.assertEqual(self.client.get(f"{API}/members/{member_id}").status_code, 404)


class TestLoginRateLimit(ApiTestCase):
    settings_overrides = {"LOGIN_RATE_LIMIT_PER_MINUTE": 2}

    def test_third_attempt_is_throttled(self) -> None:
        payload = {"username": "superadmin", "password": "wrong"}
        codes = [self.client.post(f"{API}/auth/login", json=payload).status_code for _ in range(3)]
        self.assertEqual(codes, [401, 401, 429])


if __name__ == "__main__":
    unittest.main()
