"""
HTTP-level tests: routing, dependency wiring and error-to-status mapping.

Supabase is replaced by a MagicMock resolving the fixed tokens in conftest;
the database is the per-test in-memory SQLite.
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from conftest import ALICE, BOB, CAROL, auth_header

API = "/api/v1"


def _provision(client, token, org_name=None):
    body = {"org_name": org_name} if org_name is not None else None
    response = client.post(f"{API}/provision", json=body, headers=auth_header(token))
    assert response.status_code == 200, response.text
    return response.json()


class TestHealth:

    def test_root(self, client):
        assert client.get("/").json()["status"] == "healthy"

    def test_health_and_ready(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
        assert client.get("/ready").json() == {"status": "ready"}

    def test_security_headers(self, client):
        response = client.get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestAuthentication:

    def test_missing_token_is_401(self, client):
        response = client.get(f"{API}/organizations")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_is_401(self, client):
        response = client.post(f"{API}/provision", headers=auth_header("forged"))
        assert response.status_code == 401

    def test_me_lists_memberships(self, client):
        tenant = _provision(client, "alice-token", "Cafe Luna")

        response = client.get(f"{API}/auth/me", headers=auth_header("alice-token"))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == ALICE
        assert body["email"] == "alice@example.com"
        assert [(m["org_id"], m["role"]) for m in body["memberships"]] == [(tenant["org_id"], "owner")]

    def test_login_bad_credentials_is_401(self, client, supabase_mock):
        supabase_mock.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")
        response = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_logout_revokes_callers_own_session(self, client, supabase_mock):
        response = client.post(f"{API}/auth/logout", headers=auth_header("bob-token"))

        assert response.status_code == 200
        supabase_mock.auth.admin.sign_out.assert_called_once_with("bob-token")
        supabase_mock.auth.sign_out.assert_not_called()


class TestProvisioning:

    def test_provision_and_repeat(self, client):
        first = _provision(client, "alice-token", "Cafe Luna")
        again = _provision(client, "alice-token", "Something Else")
        assert again == first

        org = client.get(f"{API}/organizations/{first['org_id']}", headers=auth_header("alice-token"))
        assert org.json()["name"] == "Cafe Luna"

    def test_provision_without_body_uses_default_name(self, client):
        tenant = _provision(client, "bob-token")
        org = client.get(f"{API}/organizations/{tenant['org_id']}", headers=auth_header("bob-token"))
        assert org.json()["name"] == "My Organisation"

    def test_subscription_visible_after_provisioning(self, client):
        tenant = _provision(client, "alice-token")
        response = client.get(
            f"{API}/subscriptions", params={"org_id": tenant["org_id"]}, headers=auth_header("alice-token")
        )
        subscriptions = response.json()
        assert len(subscriptions) == 1
        assert subscriptions[0]["plan_id"] == "free"
        assert subscriptions[0]["status"] == "active"


class TestSubscriptions:

    def _subscription_path(self, client):
        tenant = _provision(client, "alice-token")
        subscriptions = client.get(
            f"{API}/subscriptions", params={"org_id": tenant["org_id"]}, headers=auth_header("alice-token")
        ).json()
        return f"{API}/subscriptions/{subscriptions[0]['id']}"

    @pytest.mark.parametrize("body", [{"status": None}, {"plan_id": None}, {"status": "  "}])
    def test_null_required_field_is_422(self, client, body):
        path = self._subscription_path(client)

        response = client.patch(path, json=body, headers=auth_header("alice-token"))

        assert response.status_code == 422
        assert client.get(path, headers=auth_header("alice-token")).json()["status"] == "active"

    def test_period_end_can_be_cleared(self, client):
        path = self._subscription_path(client)
        client.patch(path, json={"period_end": "2027-01-01T00:00:00Z"}, headers=auth_header("alice-token"))

        response = client.patch(path, json={"period_end": None}, headers=auth_header("alice-token"))

        assert response.status_code == 200
        assert response.json()["period_end"] is None

    def test_unknown_plan_is_409(self, client):
        path = self._subscription_path(client)
        response = client.patch(path, json={"plan_id": "enterprise"}, headers=auth_header("alice-token"))
        assert response.status_code == 409


class TestListParameters:

    @pytest.mark.parametrize("path", ["branches", "menu-items"])
    @pytest.mark.parametrize("params", [{"limit": -1}, {"limit": 0}, {"limit": 100000}, {"offset": -1}])
    def test_out_of_range_paging_is_422(self, client, path, params):
        _provision(client, "alice-token")
        response = client.get(f"{API}/{path}", params=params, headers=auth_header("alice-token"))
        assert response.status_code == 422

    def test_paging_within_range(self, client):
        tenant = _provision(client, "alice-token")
        response = client.get(
            f"{API}/branches", params={"limit": 1, "offset": 0}, headers=auth_header("alice-token")
        )
        assert [b["id"] for b in response.json()] == [tenant["branch_id"]]


class TestTimestamps:

    def test_created_at_carries_utc_offset(self, client):
        tenant = _provision(client, "alice-token")

        org = client.get(f"{API}/organizations/{tenant['org_id']}", headers=auth_header("alice-token")).json()

        created_at = datetime.fromisoformat(org["created_at"].replace("Z", "+00:00"))
        assert created_at.utcoffset() == timedelta(0)


class TestTenantIsolation:

    def test_cafe_luna_walkthrough(self, client):
        tenant = _provision(client, "alice-token", "Cafe Luna")
        org_id = tenant["org_id"]
        item = {"org_id": org_id, "name": "Iced Latte", "price": 80}

        created = client.post(f"{API}/menu-items", json=item, headers=auth_header("alice-token"))
        assert created.status_code == 201
        assert Decimal(created.json()["price"]) == Decimal("80")

        denied = client.post(f"{API}/menu-items", json=item, headers=auth_header("bob-token"))
        assert denied.status_code == 403
        assert denied.json()["detail"] == "Operation not permitted"

        branches = client.get(f"{API}/branches", params={"org_id": org_id}, headers=auth_header("bob-token"))
        assert branches.status_code == 200
        assert branches.json() == []

    def test_hidden_org_is_404(self, client):
        tenant = _provision(client, "alice-token")
        response = client.get(f"{API}/organizations/{tenant['org_id']}", headers=auth_header("bob-token"))
        assert response.status_code == 404
        assert response.json()["detail"] == "Not found"

    def test_hidden_branch_update_is_404(self, client):
        tenant = _provision(client, "alice-token")
        response = client.patch(
            f"{API}/branches/{tenant['branch_id']}", json={"name": "Hijacked"}, headers=auth_header("bob-token")
        )
        assert response.status_code == 404

    def test_list_organizations_only_own(self, client):
        alice = _provision(client, "alice-token")
        _provision(client, "bob-token")
        response = client.get(f"{API}/organizations", headers=auth_header("alice-token"))
        assert [o["id"] for o in response.json()] == [alice["org_id"]]


class TestMembers:

    def test_invite_then_staff_cannot_write(self, client):
        tenant = _provision(client, "alice-token")
        org_id = tenant["org_id"]

        added = client.post(
            f"{API}/organizations/{org_id}/members",
            json={"user_id": BOB, "role": "staff"},
            headers=auth_header("alice-token"),
        )
        assert added.status_code == 201

        # Bob now reads the org's rows but cannot create branches
        branches = client.get(f"{API}/branches", params={"org_id": org_id}, headers=auth_header("bob-token"))
        assert [b["id"] for b in branches.json()] == [tenant["branch_id"]]
        denied = client.post(
            f"{API}/branches", json={"org_id": org_id, "name": "Second"}, headers=auth_header("bob-token")
        )
        assert denied.status_code == 403

        promoted = client.patch(
            f"{API}/organizations/{org_id}/members/{BOB}", json={"role": "manager"}, headers=auth_header("alice-token")
        )
        assert promoted.json()["role"] == "manager"
        created = client.post(
            f"{API}/branches", json={"org_id": org_id, "name": "Second"}, headers=auth_header("bob-token")
        )
        assert created.status_code == 201

    def test_duplicate_member_is_409(self, client):
        tenant = _provision(client, "alice-token")
        path = f"{API}/organizations/{tenant['org_id']}/members"
        client.post(path, json={"user_id": CAROL, "role": "viewer"}, headers=auth_header("alice-token"))

        response = client.post(path, json={"user_id": CAROL, "role": "staff"}, headers=auth_header("alice-token"))
        assert response.status_code == 409

    def test_invalid_role_is_rejected(self, client):
        tenant = _provision(client, "alice-token")
        response = client.post(
            f"{API}/organizations/{tenant['org_id']}/members",
            json={"user_id": CAROL, "role": "superuser"},
            headers=auth_header("alice-token"),
        )
        assert response.status_code == 422

    def test_remove_member(self, client):
        tenant = _provision(client, "alice-token")
        path = f"{API}/organizations/{tenant['org_id']}/members"
        client.post(path, json={"user_id": BOB, "role": "viewer"}, headers=auth_header("alice-token"))

        response = client.delete(f"{path}/{BOB}", headers=auth_header("alice-token"))
        assert response.status_code == 204
        members = client.get(path, headers=auth_header("alice-token")).json()
        assert [m["user_id"] for m in members] == [ALICE]


class TestPlans:

    def test_plans_are_public(self, client):
        response = client.get(f"{API}/plans")
        assert response.status_code == 200
        plans = response.json()
        assert [p["id"] for p in plans] == ["free"]
        assert plans[0]["features"]["max_branches"] == 1

    def test_unknown_plan_is_404(self, client):
        assert client.get(f"{API}/plans/enterprise").status_code == 404


class TestOrganizationDelete:

    def test_delete_cascades(self, client):
        tenant = _provision(client, "alice-token")
        org_id = tenant["org_id"]
        client.post(
            f"{API}/menu-items", json={"org_id": org_id, "name": "Tea", "price": "2.50"},
            headers=auth_header("alice-token"),
        )

        response = client.delete(f"{API}/organizations/{org_id}", headers=auth_header("alice-token"))
        assert response.status_code == 204

        assert client.get(f"{API}/menu-items", headers=auth_header("alice-token")).json() == []
        me = client.get(f"{API}/auth/me", headers=auth_header("alice-token")).json()
        assert me["memberships"] == []

    def test_manager_cannot_delete(self, client):
        tenant = _provision(client, "alice-token")
        org_id = tenant["org_id"]
        client.post(
            f"{API}/organizations/{org_id}/members",
            json={"user_id": BOB, "role": "manager"},
            headers=auth_header("alice-token"),
        )
        response = client.delete(f"{API}/organizations/{org_id}", headers=auth_header("bob-token"))
        assert response.status_code == 403
