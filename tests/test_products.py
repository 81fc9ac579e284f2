import pytest

from conftest import create_user, headers_for


PRODUCTS_URL = "/api/v1/products"

SHIRT = {
    "name": "Oxford Shirt",
    "description": "Long sleeve cotton oxford",
    "category": "Shirts",
    "price": 18.5,
    "min_order_quantity": 50,
    "available_quantity": 1200,
}


async def add_product(client, headers, **overrides):
    resp = await client.post(PRODUCTS_URL, json={**SHIRT, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.anyio
async def test_create_product(async_client, manager_headers, manager_user):
    product = await add_product(async_client, manager_headers)
    assert product["name"] == "Oxford Shirt"
    assert product["price"] == 18.5
    assert product["min_order_quantity"] == 50
    assert product["show_on_home"] is False
    assert product["created_by_id"] == manager_user.id


@pytest.mark.anyio
async def test_create_product_requires_manager(async_client, buyer_headers, admin_headers):
    for headers in (buyer_headers, admin_headers):
        resp = await async_client.post(PRODUCTS_URL, json=SHIRT, headers=headers)
        assert resp.status_code == 403
        assert resp.json()["error"] == "forbidden"


@pytest.mark.anyio
async def test_suspended_manager_cannot_create(async_client, app_context):
    suspended = await create_user(
        app_context,
        name="Suspended Manager",
        email="suspended.manager@garments.com",
        password="managerpass",
        role="manager",
        status="suspended",
    )
    resp = await async_client.post(PRODUCTS_URL, json=SHIRT, headers=headers_for(app_context, suspended))
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_create_product_invalid_payload(async_client, manager_headers):
    resp = await async_client.post(PRODUCTS_URL, json={**SHIRT, "price": -1}, headers=manager_headers)
    assert resp.status_code == 422

    resp = await async_client.post(PRODUCTS_URL, json={"price": 10}, headers=manager_headers)
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_input"


@pytest.mark.anyio
async def test_partial_update(async_client, manager_headers):
    product = await add_product(async_client, manager_headers)

    resp = await async_client.put(
        f"{PRODUCTS_URL}/{product['id']}",
        json={"price": 21.0, "show_on_home": True, "category": None},
        headers=manager_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["price"] == 21.0
    assert data["show_on_home"] is True
    assert data["category"] is None
    # Untouched fields keep their values
    assert data["name"] == "Oxford Shirt"
    assert data["available_quantity"] == 1200


@pytest.mark.anyio
async def test_update_cannot_null_required_field(async_client, manager_headers):
    product = await add_product(async_client, manager_headers)

    resp = await async_client.put(
        f"{PRODUCTS_URL}/{product['id']}",
        json={"name": None},
        headers=manager_headers,
    )
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_delete_product(async_client, manager_headers):
    product = await add_product(async_client, manager_headers)

    resp = await async_client.delete(f"{PRODUCTS_URL}/{product['id']}", headers=manager_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    resp = await async_client.delete(f"{PRODUCTS_URL}/{product['id']}", headers=manager_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_unknown_product(async_client, manager_headers, buyer_headers):
    resp = await async_client.put(f"{PRODUCTS_URL}/777", json={"price": 5}, headers=manager_headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"

    # Role is checked before existence
    resp = await async_client.delete(f"{PRODUCTS_URL}/777", headers=buyer_headers)
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_out_of_range_ids_are_invalid_input(async_client, manager_headers, admin_headers):
    resp = await async_client.delete(f"{PRODUCTS_URL}/{2**70}", headers=manager_headers)
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_input"

    resp = await async_client.get(f"/api/v1/users/{2**40}", headers=admin_headers)
    assert resp.status_code == 422
