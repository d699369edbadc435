from datetime import datetime
from decimal import Decimal

import pytest

from app.version import API_PREFIX
from models import db, utcnow
from models.order import Order, OrderItem

ORDERS = f"{API_PREFIX}/orders"
ADMIN_ORDERS = f"{API_PREFIX}/admin/orders"


@pytest.fixture
def make_order(app):
    counter = {"n": 0}

    def _make(user_id, status="processing", total="30.00", created_at=None, first_name="Sam", last_name="Shopper"):
        counter["n"] += 1
        with app.app_context():
            order = Order(
                user_id=user_id,
                status=status,
                total_amount=Decimal(total),
                subtotal=Decimal(total),
                order_number=f"ORD-20260101-{counter['n']:06d}",
                payment_intent_id=f"pi_seed_{counter['n']}",
                shipping_first_name=first_name,
                shipping_last_name=last_name,
                shipping_address_line_1="1 Market Street",
                shipping_city="N/A",
                shipping_state="N/A",
                shipping_postal_code="00000",
                shipping_country="US",
                created_at=created_at or utcnow(),
            )
            db.session.add(order)
            db.session.flush()
            db.session.add(OrderItem(
                order_id=order.id, product_id=1, quantity=1,
                unit_price=Decimal(total), total_price=Decimal(total), product_name="Linen Shirt",
            ))
            db.session.commit()
            return order.id

    return _make


def test_user_sees_only_own_orders(client, make_user, make_order):
    alice_id, alice = make_user()
    bob_id, bob = make_user()
    mine = make_order(alice_id)
    theirs = make_order(bob_id)

    listed = client.get(ORDERS, headers=alice).get_json()["data"]
    assert [o["id"] for o in listed] == [mine]
    assert listed[0]["items"][0]["product_name"] == "Linen Shirt"

    assert client.get(f"{ORDERS}/{mine}", headers=alice).status_code == 200
    resp = client.get(f"{ORDERS}/{theirs}", headers=alice)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Order not found"


def test_orders_newest_first(client, user_headers, make_order):
    user_id, headers = user_headers
    old = make_order(user_id, created_at=datetime(2026, 1, 1))
    new = make_order(user_id, created_at=datetime(2026, 3, 1))
    assert [o["id"] for o in client.get(ORDERS, headers=headers).get_json()["data"]] == [new, old]


def test_admin_order_list_filters(client, make_user, admin_headers, make_order):
    _, headers = admin_headers
    alice_id, _ = make_user(email="alice@example.com")
    bob_id, _ = make_user(email="bob@example.com")
    a1 = make_order(alice_id, status="processing", created_at=datetime(2026, 2, 10, 18, 30))
    a2 = make_order(alice_id, status="shipped", created_at=datetime(2026, 2, 12))
    b1 = make_order(bob_id, status="processing", first_name="Robert", last_name="Stone", created_at=datetime(2026, 2, 11))

    body = client.get(ADMIN_ORDERS, headers=headers).get_json()["data"]
    assert body["total"] == 3
    assert [o["id"] for o in body["orders"]] == [a2, b1, a1]
    assert body["orders"][0]["customer_email"] == "alice@example.com"

    processing = client.get(f"{ADMIN_ORDERS}?status=processing", headers=headers).get_json()["data"]
    assert {o["id"] for o in processing["orders"]} == {a1, b1}

    by_email = client.get(f"{ADMIN_ORDERS}?search=ALICE@", headers=headers).get_json()["data"]
    assert {o["id"] for o in by_email["orders"]} == {a1, a2}

    by_name = client.get(f"{ADMIN_ORDERS}?search=robert stone", headers=headers).get_json()["data"]
    assert [o["id"] for o in by_name["orders"]] == [b1]

    window = client.get(f"{ADMIN_ORDERS}?date_from=2026-02-10&date_to=2026-02-10", headers=headers).get_json()["data"]
    assert [o["id"] for o in window["orders"]] == [a1]

    page = client.get(f"{ADMIN_ORDERS}?limit=1&offset=1", headers=headers).get_json()["data"]
    assert page["total"] == 3
    assert [o["id"] for o in page["orders"]] == [b1]


def test_admin_order_list_rejects_bad_dates(client, admin_headers):
    _, headers = admin_headers
    resp = client.get(f"{ADMIN_ORDERS}?date_from=yesterday", headers=headers)
    assert resp.status_code == 400


def test_admin_status_update(client, app, admin_headers, make_user, make_order):
    _, headers = admin_headers
    user_id, _ = make_user()
    order_id = make_order(user_id)

    bad = client.put(f"{ADMIN_ORDERS}/{order_id}/status", json={"status": "lost"}, headers=headers)
    assert bad.status_code == 400
    assert bad.get_json()["error"] == "Invalid status"

    shipped = client.put(f"{ADMIN_ORDERS}/{order_id}/status", json={"status": "shipped"}, headers=headers)
    assert shipped.status_code == 200
    assert shipped.get_json()["data"]["shipped_at"] is not None

    delivered = client.put(f"{ADMIN_ORDERS}/{order_id}/status", json={"status": "delivered"}, headers=headers)
    assert delivered.get_json()["data"]["delivered_at"] is not None

    missing = client.put(f"{ADMIN_ORDERS}/999/status", json={"status": "shipped"}, headers=headers)
    assert missing.status_code == 404
    with app.app_context():
        assert OrderItem.query.filter_by(order_id=order_id).count() == 1


def test_admin_tracking_appends_notes(client, admin_headers, make_user, make_order):
    _, headers = admin_headers
    user_id, _ = make_user()
    order_id = make_order(user_id)
    resp = client.put(
        f"{ADMIN_ORDERS}/{order_id}/tracking",
        json={"tracking_number": "1Z999", "carrier": "UPS", "estimated_delivery": "2026-03-01"},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["tracking_number"] == "1Z999"
    assert data["admin_notes"] == "\nCarrier: UPS\nEstimated Delivery: 2026-03-01"

    again = client.put(f"{ADMIN_ORDERS}/{order_id}/tracking", json={"tracking_number": "1Z1000"}, headers=headers)
    assert again.get_json()["data"]["admin_notes"] == "\nCarrier: UPS\nEstimated Delivery: 2026-03-01"

    assert client.put(f"{ADMIN_ORDERS}/{order_id}/tracking", json={}, headers=headers).status_code == 400
    assert client.put(f"{ADMIN_ORDERS}/999/tracking", json={"tracking_number": "x"}, headers=headers).status_code == 404
