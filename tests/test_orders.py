import pytest

from api.orders import db_manager as orders_db
from core.deps import Identity
from core.errors import InvalidTransition, NotFound


ORDERS_URL = "/api/v1/orders"


async def place(client, headers, product_id="p1", qty=2, **details):
    resp = await client.post(
        ORDERS_URL,
        json={"productId": product_id, "qty": qty, "details": details},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


@pytest.mark.anyio
async def test_order_lifecycle_scenario(async_client, buyer_headers, manager_headers):
    """Place -> approve -> track -> reject refused, status stays Approved"""
    resp = await async_client.post(
        ORDERS_URL,
        json={"productId": "p1", "qty": 2},
        headers=buyer_headers,
    )
    assert resp.status_code == 201, resp.text
    created = resp.json()
    assert created["status"] == "Pending"
    order_id = created["id"]

    resp = await async_client.get(f"{ORDERS_URL}/{order_id}/tracking", headers=buyer_headers)
    assert resp.status_code == 200
    assert resp.json() == []

    resp = await async_client.post(f"{ORDERS_URL}/{order_id}/approve", headers=manager_headers)
    assert resp.status_code == 200, resp.text
    approved = resp.json()
    assert approved["status"] == "Approved"
    assert approved["approved_at"] is not None

    resp = await async_client.post(
        f"{ORDERS_URL}/{order_id}/tracking",
        json={"status": "Cutting Completed", "location": "Line 1", "note": "on schedule"},
        headers=manager_headers,
    )
    assert resp.status_code == 201, resp.text
    entry = resp.json()
    assert entry["status"] == "Cutting Completed"
    assert entry["location"] == "Line 1"
    assert entry["note"] == "on schedule"
    assert entry["sequence"] == 1
    assert entry["created_at"]

    resp = await async_client.get(f"{ORDERS_URL}/{order_id}/tracking", headers=buyer_headers)
    assert [e["status"] for e in resp.json()] == ["Cutting Completed"]

    resp = await async_client.post(f"{ORDERS_URL}/{order_id}/reject", headers=manager_headers)
    assert resp.status_code == 409
    assert resp.json()["error"] == "invalid_transition"

    resp = await async_client.get(f"{ORDERS_URL}/mine", headers=buyer_headers)
    order = resp.json()[0]
    assert order["status"] == "Approved"
    assert order["current_status"] == "Cutting Completed"
    assert order["product_id"] == "p1"
    assert order["quantity"] == 2


@pytest.mark.anyio
async def test_double_approve_is_rejected(async_client, buyer_headers, manager_headers):
    order_id = await place(async_client, buyer_headers)

    resp = await async_client.post(f"{ORDERS_URL}/{order_id}/approve", headers=manager_headers)
    assert resp.status_code == 200

    resp = await async_client.post(f"{ORDERS_URL}/{order_id}/approve", headers=manager_headers)
    assert resp.status_code == 409
    assert resp.json()["error"] == "invalid_transition"


@pytest.mark.anyio
async def test_reject_is_terminal(async_client, buyer_headers, manager_headers):
    order_id = await place(async_client, buyer_headers)

    resp = await async_client.post(f"{ORDERS_URL}/{order_id}/reject", headers=manager_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "Rejected"
    assert data["approved_at"] is None

    for action in ("approve", "reject"):
        resp = await async_client.post(f"{ORDERS_URL}/{order_id}/{action}", headers=manager_headers)
        assert resp.status_code == 409


@pytest.mark.anyio
async def test_tracking_is_appended_in_call_order(async_client, buyer_headers, manager_headers):
    order_id = await place(async_client, buyer_headers)
    stages = ["Fabric Sourced", "Cutting Completed", "Sewing Started", "Finishing", "Packed"]

    for stage in stages:
        resp = await async_client.post(
            f"{ORDERS_URL}/{order_id}/tracking",
            json={"status": stage, "location": "Factory A"},
            headers=manager_headers,
        )
        assert resp.status_code == 201

    resp = await async_client.get(f"{ORDERS_URL}/{order_id}/tracking", headers=manager_headers)
    entries = resp.json()
    assert [e["status"] for e in entries] == stages
    assert [e["sequence"] for e in entries] == [1, 2, 3, 4, 5]

    resp = await async_client.get(f"{ORDERS_URL}/pending", headers=manager_headers)
    order = next(o for o in resp.json() if o["id"] == order_id)
    assert order["current_status"] == "Packed"
    # Tracking does not touch the coarse status
    assert order["status"] == "Pending"


@pytest.mark.anyio
async def test_tracking_allowed_after_rejection(async_client, buyer_headers, manager_headers):
    order_id = await place(async_client, buyer_headers)
    await async_client.post(f"{ORDERS_URL}/{order_id}/reject", headers=manager_headers)

    resp = await async_client.post(
        f"{ORDERS_URL}/{order_id}/tracking",
        json={"status": "Materials Returned"},
        headers=manager_headers,
    )
    assert resp.status_code == 201


@pytest.mark.anyio
async def test_my_orders_newest_first(async_client, buyer_headers, other_buyer_headers):
    first = await place(async_client, buyer_headers, product_id="p1")
    second = await place(async_client, buyer_headers, product_id="p2")
    third = await place(async_client, buyer_headers, product_id="p3")
    await place(async_client, other_buyer_headers, product_id="p9")

    resp = await async_client.get(f"{ORDERS_URL}/mine", headers=buyer_headers)
    assert resp.status_code == 200
    assert [o["id"] for o in resp.json()] == [third, second, first]


@pytest.mark.anyio
async def test_owner_comes_from_session(async_client, buyer_headers, buyer_user):
    resp = await async_client.post(
        ORDERS_URL,
        json={"productId": "p1", "qty": 1, "owner_id": 999, "owner_email": "x@garments.com"},
        headers=buyer_headers,
    )
    assert resp.status_code == 201

    resp = await async_client.get(f"{ORDERS_URL}/mine", headers=buyer_headers)
    order = resp.json()[0]
    assert order["owner_id"] == buyer_user.id
    assert order["owner_email"] == "buyer@garments.com"


@pytest.mark.anyio
async def test_pending_lists_only_pending(async_client, buyer_headers, manager_headers):
    approved = await place(async_client, buyer_headers)
    pending = await place(async_client, buyer_headers)
    await async_client.post(f"{ORDERS_URL}/{approved}/approve", headers=manager_headers)

    resp = await async_client.get(f"{ORDERS_URL}/pending", headers=manager_headers)
    assert [o["id"] for o in resp.json()] == [pending]


@pytest.mark.anyio
async def test_list_all_admin_only(async_client, buyer_headers, other_buyer_headers, admin_headers, manager_headers):
    first = await place(async_client, buyer_headers)
    second = await place(async_client, other_buyer_headers)

    resp = await async_client.get(ORDERS_URL, headers=admin_headers)
    assert resp.status_code == 200
    assert [o["id"] for o in resp.json()] == [second, first]

    for headers in (manager_headers, buyer_headers):
        resp = await async_client.get(ORDERS_URL, headers=headers)
        assert resp.status_code == 403


@pytest.mark.anyio
async def test_role_gates(async_client, buyer_headers, manager_headers, admin_headers):
    order_id = await place(async_client, buyer_headers)

    # Buyers and admins cannot decide or track orders
    for headers in (buyer_headers, admin_headers):
        resp = await async_client.post(f"{ORDERS_URL}/{order_id}/approve", headers=headers)
        assert resp.status_code == 403
        resp = await async_client.post(
            f"{ORDERS_URL}/{order_id}/tracking",
            json={"status": "Cutting Completed"},
            headers=headers,
        )
        assert resp.status_code == 403

    # Only buyers place orders
    resp = await async_client.post(ORDERS_URL, json={"productId": "p1", "qty": 1}, headers=manager_headers)
    assert resp.status_code == 403

    resp = await async_client.get(f"{ORDERS_URL}/pending", headers=buyer_headers)
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_rejected_request_has_no_side_effects(async_client, buyer_headers, manager_headers):
    order_id = await place(async_client, buyer_headers)

    resp = await async_client.post(f"{ORDERS_URL}/{order_id}/approve", headers=buyer_headers)
    assert resp.status_code == 403

    resp = await async_client.get(f"{ORDERS_URL}/pending", headers=manager_headers)
    assert [o["id"] for o in resp.json()] == [order_id]


@pytest.mark.anyio
async def test_unauthenticated_order_requests(async_client):
    resp = await async_client.post(ORDERS_URL, json={"productId": "p1", "qty": 1})
    assert resp.status_code == 401

    resp = await async_client.get(f"{ORDERS_URL}/1/tracking")
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_unknown_order(async_client, manager_headers, buyer_headers):
    for action in ("approve", "reject"):
        resp = await async_client.post(f"{ORDERS_URL}/999/{action}", headers=manager_headers)
        assert resp.status_code == 404
        assert resp.json()["error"] == "not_found"

    resp = await async_client.post(
        f"{ORDERS_URL}/999/tracking",
        json={"status": "Cutting Completed"},
        headers=manager_headers,
    )
    assert resp.status_code == 404

    resp = await async_client.get(f"{ORDERS_URL}/999/tracking", headers=buyer_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_buyer_cannot_read_other_buyers_tracking(
    async_client, buyer_headers, other_buyer_headers, admin_headers, manager_headers
):
    order_id = await place(async_client, buyer_headers)

    resp = await async_client.get(f"{ORDERS_URL}/{order_id}/tracking", headers=other_buyer_headers)
    assert resp.status_code == 403

    for headers in (admin_headers, manager_headers):
        resp = await async_client.get(f"{ORDERS_URL}/{order_id}/tracking", headers=headers)
        assert resp.status_code == 200


@pytest.mark.anyio
async def test_invalid_order_payload(async_client, buyer_headers, manager_headers):
    resp = await async_client.post(ORDERS_URL, json={"productId": "p1", "qty": 0}, headers=buyer_headers)
    assert resp.status_code == 422

    resp = await async_client.post(ORDERS_URL, json={"qty": 1}, headers=buyer_headers)
    assert resp.status_code == 422

    order_id = await place(async_client, buyer_headers)
    resp = await async_client.post(
        f"{ORDERS_URL}/{order_id}/tracking",
        json={"location": "Line 1"},
        headers=manager_headers,
    )
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_decision_on_stale_read_is_refused(app_context, buyer_user):
    """A manager acting on a Pending view loses to a decision committed meanwhile"""
    buyer = Identity(id=buyer_user.id, email=buyer_user.email, role=buyer_user.role)
    async with app_context.session_factory() as db:
        order = await orders_db.place_order(db, buyer, product_id="p1", quantity=3)

    async with app_context.session_factory() as first, app_context.session_factory() as second:
        seen = await orders_db.get_order(first, order.id)
        assert seen.status == "Pending"
        await first.commit()

        await orders_db.approve(second, order.id)

        with pytest.raises(InvalidTransition):
            await orders_db.reject(first, order.id)

    async with app_context.session_factory() as db:
        stored = await orders_db.get_order(db, order.id)
    assert stored.status == "Approved"
    assert stored.rejected_at is None


@pytest.mark.anyio
async def test_transition_on_missing_order_raises_not_found(db_session):
    with pytest.raises(NotFound):
        await orders_db.approve(db_session, 12345)


@pytest.mark.anyio
async def test_out_of_range_order_id_is_invalid_input(async_client, manager_headers, buyer_headers):
    for order_id in (2**70, 2**31, 0, -5):
        resp = await async_client.post(f"{ORDERS_URL}/{order_id}/approve", headers=manager_headers)
        assert resp.status_code == 422, resp.text
        assert resp.json()["error"] == "invalid_input"

    resp = await async_client.get(f"{ORDERS_URL}/{2**70}/tracking", headers=buyer_headers)
    assert resp.status_code == 422

    # Largest key the column holds is still a plain lookup
    resp = await async_client.post(f"{ORDERS_URL}/{2**31 - 1}/reject", headers=manager_headers)
    assert resp.status_code == 404
