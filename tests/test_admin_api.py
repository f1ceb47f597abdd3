"""
Tests for /api/admin (user management behind the admin gate).
"""

from datetime import datetime, timedelta, timezone


class TestListUsers:

    def test_no_token_is_401(self, client):
        assert client.get("/api/admin/users").status_code == 401

    def test_user_role_is_403(self, client, user_headers):
        response = client.get("/api/admin/users", headers=user_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    def test_admin_sees_every_account(self, client, admin_headers, user_account):
        response = client.get("/api/admin/users", headers=admin_headers)

        assert response.status_code == 200
        users = {u["email"]: u["role"] for u in response.json()}
        assert users == {"admin@example.com": "admin", "operator@example.com": "user"}

    def test_password_hashes_never_returned(self, client, admin_headers, user_account):
        response = client.get("/api/admin/users", headers=admin_headers)

        for user in response.json():
            assert set(user) == {"id", "email", "role"}
        assert "$2b$" not in response.text

    def test_expired_admin_token_is_401(self, client, auth_service, admin_account):
        stale = auth_service.issue_token(
            admin_account, now=datetime.now(timezone.utc) - timedelta(hours=6)
        )
        response = client.get("/api/admin/users", headers={"Authorization": f"Bearer {stale}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"
