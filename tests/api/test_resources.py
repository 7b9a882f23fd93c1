"""API resource tests."""

from decimal import Decimal
from uuid import uuid4

import pytest
from falcon.testing import TestClient

from samplepool.domain.value_objects import DonationStatus, PoolStatus

from tests.conftest import FakePaymentGateway, make_permission, make_pool, make_role


def _anonymous_order(client: TestClient, pool_id, amount=20, **extra):
    body = {
        "pool_id": str(pool_id),
        "amount": amount,
        "anonymous_donor_name": "Asha",
        "anonymous_donor_email": "asha@example.com",
    }
    body.update(extra)
    return client.simulate_post("/v1/donations", json=body)


class TestHealth:
    def test_liveness(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/health")
        assert result.status_code == 200
        assert result.json == {"status": "ok"}

    def test_readiness_touches_database(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/health/ready")
        assert result.status_code == 200
        assert result.json["status"] == "ready"


class TestAccessControl:
    """401 for anonymous callers, 403 for missing permissions."""

    def test_anonymous_protected_operation(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/users")
        assert result.status_code == 401
        assert result.json == {"error": "Authentication required"}

    def test_missing_permission(self, client: TestClient, principal, member) -> None:
        principal.user = member
        result = client.simulate_post("/v1/roles", json={"name": "sneaky"})
        assert result.status_code == 403
        assert result.json == {"error": "Insufficient permissions"}

    def test_hard_delete_needs_manage_all(self, client: TestClient, principal, member) -> None:
        principal.user = member
        result = client.simulate_delete(f"/v1/pools/{uuid4()}/hard")
        assert result.status_code == 403

    @pytest.mark.parametrize(
        ("method", "path", "body"),
        [
            ("POST", "/v1/roles", {"name": "sneaky"}),
            ("POST", "/v1/users", {"name": "Sneaky", "email": "sneaky@example.com"}),
            ("POST", "/v1/permissions", {"name": "x.read", "resource": "x", "action": "read"}),
            ("POST", "/v1/sample-products", {"name": "Gainer"}),
            ("GET", "/v1/donations", None),
        ],
    )
    def test_pool_creator_gets_no_admin_access(
        self, client: TestClient, principal, member, product, method, path, body
    ) -> None:
        """Creating pools needs no grant, so it never unlocks admin operations."""
        principal.user = member
        created = client.simulate_post(
            "/v1/pools",
            json={
                "name": "Whey lot 1",
                "sample_source": "Gym",
                "batch_number": "W-1",
                "category_id": str(product.id),
                "pool_price": 100,
            },
        )
        assert created.status_code == 201
        result = client.simulate_request(method, path, json=body)
        assert result.status_code == 403

    def test_superadmin_bypasses_checks(self, client: TestClient, principal, superadmin) -> None:
        principal.user = superadmin
        result = client.simulate_post("/v1/roles", json={"name": "auditor"})
        assert result.status_code == 201
        assert result.json["name"] == "auditor"

    def test_roleless_user_reads_only_self(self, client: TestClient, principal, roleless, member) -> None:
        principal.user = roleless
        assert client.simulate_get(f"/v1/users/{roleless.id}").status_code == 200
        assert client.simulate_get(f"/v1/users/{member.id}").status_code == 403
        assert client.simulate_get("/v1/users").status_code == 403

    def test_me(self, client: TestClient, principal, member) -> None:
        principal.user = member
        result = client.simulate_get("/v1/me")
        assert result.status_code == 200
        assert result.json["email"] == "member@example.com"
        assert [r["name"] for r in result.json["roles"]] == ["member"]

    def test_me_requires_authentication(self, client: TestClient) -> None:
        assert client.simulate_get("/v1/me").status_code == 401


class TestResponseShaping:
    def test_user_list_hides_admin_fields_from_members(
        self, client: TestClient, principal, member, superadmin
    ) -> None:
        principal.user = member
        items = client.simulate_get("/v1/users").json["items"]
        assert items
        assert all("is_active" not in u and "created_at" not in u for u in items)
        assert all("password_hash" not in u for u in items)

        principal.user = superadmin
        items = client.simulate_get("/v1/users").json["items"]
        assert all("is_active" in u and "created_at" in u for u in items)
        assert all("password_hash" not in u for u in items)

    def test_public_pool_list(self, client: TestClient, fake_uow, open_pool, owner, product) -> None:
        """Anonymous callers see approved pools without owner or moderation fields."""
        fake_uow.pools.add(make_pool(owner.id, product.id, is_approved=False))

        result = client.simulate_get("/v1/pools")
        assert result.status_code == 200
        items = result.json["items"]
        assert [p["id"] for p in items] == [str(open_pool.id)]
        assert items[0]["pool_price"] == "100.00"
        assert items[0]["remaining_amount"] == "100.00"
        assert items[0]["status"] == "Created"
        assert "user_id" not in items[0]
        assert "is_approved" not in items[0]

    def test_unapproved_pool_visible_to_owner_only(
        self, client: TestClient, principal, fake_uow, owner, product, member
    ) -> None:
        pending = make_pool(owner.id, product.id, is_approved=False)
        fake_uow.pools.add(pending)

        assert client.simulate_get(f"/v1/pools/{pending.id}").status_code == 404
        principal.user = member
        assert client.simulate_get(f"/v1/pools/{pending.id}").status_code == 404
        principal.user = owner
        assert client.simulate_get(f"/v1/pools/{pending.id}").status_code == 200

    def test_donation_email_hidden_from_public(
        self, client: TestClient, principal, superadmin, open_pool
    ) -> None:
        donation_id = _anonymous_order(client, open_pool.id).json["donation_id"]

        public = client.simulate_get(f"/v1/donations/{donation_id}").json
        assert public["status"] == "Pending"
        assert "anonymous_donor_name" not in public
        assert "anonymous_donor_email" not in public
        assert "payment_order_id" not in public

        principal.user = superadmin
        listed = client.simulate_get("/v1/donations").json["items"]
        assert listed[0]["anonymous_donor_name"] == "Asha"
        assert listed[0]["anonymous_donor_email"] == "asha@example.com"


class TestDonationFlow:
    def test_order_then_verify(
        self, client: TestClient, payment_gateway: FakePaymentGateway, fake_uow, open_pool
    ) -> None:
        open_pool.amount_received = Decimal("80.00")

        too_much = _anonymous_order(client, open_pool.id, amount=25)
        assert too_much.status_code == 400
        assert "Maximum allowed: 20.00" in too_much.json["error"]

        order = _anonymous_order(client, open_pool.id, amount=20)
        assert order.status_code == 201
        assert order.json["amount"] == 2000
        assert order.json["currency"] == "INR"
        assert order.json["key_id"] == "rzp_test_key"

        order_id = order.json["order_id"]
        callback = {
            "order_id": order_id,
            "payment_id": "pay_1",
            "signature": payment_gateway.sign(order_id, "pay_1"),
        }
        verified = client.simulate_post("/v1/donations/verify", json=callback)
        assert verified.status_code == 200
        assert verified.json["message"] == "Payment verified successfully"
        assert verified.json["donation"]["status"] == "Success"
        assert verified.json["pool"]["amount_received"] == "100.00"
        assert verified.json["pool"]["status"] == "Target Reached"
        assert verified.json["target_reached"] is True

        again = client.simulate_post("/v1/donations/verify", json=callback)
        assert again.status_code == 409
        assert open_pool.amount_received == Decimal("100.00")
        assert open_pool.status is PoolStatus.TARGET_REACHED

    def test_bad_signature(self, client: TestClient, fake_uow, open_pool) -> None:
        order = _anonymous_order(client, open_pool.id)
        result = client.simulate_post(
            "/v1/donations/verify",
            json={"order_id": order.json["order_id"], "payment_id": "pay_1", "signature": "nope"},
        )
        assert result.status_code == 400
        assert result.json == {"error": "Invalid payment signature"}
        donation = next(iter(fake_uow.donations._by_id.values()))
        assert donation.status is DonationStatus.FAILED

    def test_anonymous_requires_email(
        self, client: TestClient, payment_gateway: FakePaymentGateway, open_pool
    ) -> None:
        result = _anonymous_order(client, open_pool.id, anonymous_donor_email=None)
        assert result.status_code == 400
        assert result.json["error"] == "Email is required for anonymous donations"
        assert payment_gateway.orders == []

    def test_authenticated_donor_appears_in_my_donations(
        self, client: TestClient, principal, member, open_pool
    ) -> None:
        principal.user = member
        order = client.simulate_post(
            "/v1/donations", json={"pool_id": str(open_pool.id), "amount": "5.50"}
        )
        assert order.status_code == 201
        mine = client.simulate_get("/v1/me/donations").json["items"]
        assert [d["amount"] for d in mine] == ["5.50"]

    def test_gateway_failure_is_bad_gateway(self, client: TestClient, payment_gateway, open_pool) -> None:
        payment_gateway.fail = True
        result = _anonymous_order(client, open_pool.id)
        assert result.status_code == 502
        assert result.json == {"error": "Failed to create payment order"}

    def test_pool_stats_and_donations(
        self, client: TestClient, payment_gateway: FakePaymentGateway, open_pool
    ) -> None:
        order_id = _anonymous_order(client, open_pool.id, amount=40).json["order_id"]
        client.simulate_post(
            "/v1/donations/verify",
            json={
                "order_id": order_id,
                "payment_id": "pay_9",
                "signature": payment_gateway.sign(order_id, "pay_9"),
            },
        )
        _anonymous_order(client, open_pool.id, amount=10)

        stats = client.simulate_get(f"/v1/pools/{open_pool.id}/donations/stats").json
        assert stats["percentage_reached"] == 40.0
        assert stats["remaining_amount"] == "60.00"
        assert stats["total_donations"] == 1

        donations = client.simulate_get(f"/v1/pools/{open_pool.id}/donations").json["items"]
        assert len(donations) == 1
        assert donations[0]["amount"] == "40.00"


class TestPools:
    def test_member_creates_pool(self, client: TestClient, principal, member, product) -> None:
        principal.user = member
        result = client.simulate_post(
            "/v1/pools",
            json={
                "name": "Creatine lot 7",
                "sample_source": "Marketplace",
                "batch_number": "CR-7",
                "category_id": str(product.id),
                "pool_price": 300,
            },
        )
        assert result.status_code == 201
        assert result.json["status"] == "Created"
        assert result.json["pool_price"] == "300.00"

        mine = client.simulate_get("/v1/me/pools").json["items"]
        assert [p["batch_number"] for p in mine] == ["CR-7"]
        # unapproved pools stay out of the public list
        assert client.simulate_get("/v1/pools").json["items"] == []

    def test_moderator_approves(self, client: TestClient, principal, superadmin, fake_uow, owner, product) -> None:
        pending = make_pool(owner.id, product.id, is_approved=False)
        fake_uow.pools.add(pending)
        principal.user = superadmin
        result = client.simulate_post(f"/v1/pools/{pending.id}/approve")
        assert result.status_code == 200
        assert result.json["is_approved"] is True

    def test_owner_cannot_set_price(self, client: TestClient, principal, fake_uow, member, product) -> None:
        pool = make_pool(member.id, product.id)
        fake_uow.pools.add(pool)
        principal.user = member
        result = client.simulate_patch(f"/v1/pools/{pool.id}", json={"pool_price": 1})
        assert result.status_code == 403
        result = client.simulate_patch(f"/v1/pools/{pool.id}", json={"name": "Better name"})
        assert result.status_code == 200
        assert result.json["name"] == "Better name"

    def test_other_members_pool_is_off_limits(
        self, client: TestClient, principal, fake_uow, owner, member, product
    ) -> None:
        pool = make_pool(owner.id, product.id)
        fake_uow.pools.add(pool)
        principal.user = member
        assert client.simulate_patch(f"/v1/pools/{pool.id}", json={"name": "Mine"}).status_code == 403
        assert client.simulate_delete(f"/v1/pools/{pool.id}").status_code == 403
        assert pool.name == "Batch pool"
        assert pool.deleted_at is None

    def test_anonymous_cannot_create_pool(self, client: TestClient, product) -> None:
        result = client.simulate_post("/v1/pools", json={"name": "x"})
        assert result.status_code == 401


class TestErrors:
    def test_invalid_uuid_is_bad_request(self, client: TestClient, principal, superadmin) -> None:
        principal.user = superadmin
        result = client.simulate_get("/v1/roles/not-a-uuid")
        assert result.status_code == 400

    def test_malformed_json(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/donations", body="{oops", headers={"Content-Type": "application/json"}
        )
        assert result.status_code == 400

    def test_invalid_amount(self, client: TestClient, open_pool) -> None:
        result = _anonymous_order(client, open_pool.id, amount="lots")
        assert result.status_code == 400
        assert result.json["error"] == "amount must be a number"

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "-Infinity", "sNaN"])
    def test_non_finite_amount(self, client: TestClient, payment_gateway, open_pool, amount) -> None:
        result = _anonymous_order(client, open_pool.id, amount=amount)
        assert result.status_code == 400
        assert result.json["error"] == "amount must be a finite number"
        assert payment_gateway.orders == []

    def test_oversized_amount(self, client: TestClient, open_pool) -> None:
        result = _anonymous_order(client, open_pool.id, amount="1e40")
        assert result.status_code == 400
        assert result.json["error"] == "Amount is out of range"

    def test_non_finite_pool_price(self, client: TestClient, principal, member, product) -> None:
        principal.user = member
        result = client.simulate_post(
            "/v1/pools",
            json={
                "name": "Whey lot 2",
                "sample_source": "Gym",
                "batch_number": "W-2",
                "category_id": str(product.id),
                "pool_price": "NaN",
            },
        )
        assert result.status_code == 400

    def test_malformed_anonymous_email(self, client: TestClient, payment_gateway, open_pool) -> None:
        result = _anonymous_order(client, open_pool.id, anonymous_donor_email="asha@")
        assert result.status_code == 400
        assert result.json["error"] == "A valid email is required"
        assert payment_gateway.orders == []

    def test_unknown_pool_is_not_found(self, client: TestClient) -> None:
        result = client.simulate_get(f"/v1/pools/{uuid4()}")
        assert result.status_code == 404

    def test_superadmin_role_delete_conflict(
        self, client: TestClient, principal, superadmin
    ) -> None:
        principal.user = superadmin
        role_id = superadmin.roles[0].id
        result = client.simulate_delete(f"/v1/roles/{role_id}")
        assert result.status_code == 409
        assert result.json == {"error": "Cannot delete superadmin role"}

    @pytest.mark.parametrize("name", ["", "   "])
    def test_missing_required_field(self, client: TestClient, principal, superadmin, name) -> None:
        principal.user = superadmin
        result = client.simulate_post("/v1/roles", json={"name": name})
        assert result.status_code == 400


def test_role_permission_assignment(client: TestClient, principal, superadmin, fake_uow) -> None:
    """Assign replaces the set; remove detaches; unknown ids are 404."""
    read, write = make_permission("user", "read"), make_permission("user", "update")
    role = make_role("editor", [read])
    fake_uow.roles.add(role)
    fake_uow.permissions.add(write)
    principal.user = superadmin
    url = f"/v1/roles/{role.id}/permissions"

    assigned = client.simulate_post(url, json={"permission_ids": [str(read.id), str(write.id)]})
    assert assigned.status_code == 200
    assert {p["name"] for p in assigned.json["permissions"]} == {"users.read", "users.update"}

    removed = client.simulate_delete(url, json={"permission_ids": [str(read.id)]})
    assert removed.status_code == 200
    assert [p["name"] for p in removed.json["permissions"]] == ["users.update"]

    missing = client.simulate_post(url, json={"permission_ids": [str(uuid4())]})
    assert missing.status_code == 404
    assert missing.json == {"error": "One or more permissions not found"}


def test_permissions_filtered_by_resource(client: TestClient, principal, superadmin, fake_uow) -> None:
    """?resource= returns active permissions of that resource only."""
    for p in (
        make_permission("user", "read"),
        make_permission("user", "delete", is_active=False),
        make_permission("role", "read"),
    ):
        fake_uow.permissions.add(p)
    principal.user = superadmin

    result = client.simulate_get("/v1/permissions", params={"resource": "user"})
    assert result.status_code == 200
    assert [p["name"] for p in result.json["items"]] == ["users.read"]
    assert len(client.simulate_get("/v1/permissions").json["items"]) == 3
