from datetime import datetime, timedelta, timezone

import pytest

from supplier_hub.models.order import PurchaseOrder
from supplier_hub.services.analytics_service import AnalyticsService, last_months
from supplier_hub.services.invoice_service import invoice_number_for
from tests.conftest import MAIN_SYSTEM_URL, MENU_PLATFORM_URL


def product_payload(**overrides):
    data = {
        "name": "Tomatoes",
        "category": "Produce",
        "unit_price": 2.5,
        "unit": "kg",
        "stock_quantity": 40,
        "images": ["https://img.test/tomato.png"],
    }
    data.update(overrides)
    return data


def incoming_order(supplier_id, restaurant_id="rest-1", **overrides):
    data = {
        "orderId": "ord-100",
        "restaurantId": restaurant_id,
        "supplierId": str(supplier_id),
        "items": [
            {"productId": "p1", "productName": "Tomatoes", "quantity": 2, "unitPrice": 10.0,
             "unit": "kg", "total": 20.0},
        ],
        "subtotal": 20.0,
        "tax": 1.6,
        "shipping": 0.0,
        "discount": 0.0,
        "total": 21.6,
        "status": "sent",
        "orderDate": "2024-01-15T10:00:00.000Z",
        "requestedDeliveryDate": "2024-01-18T10:00:00.000Z",
        "paymentStatus": "pending",
        "createdBy": "menu_platform",
    }
    data.update(overrides)
    return data


@pytest.fixture
def received_order(client, portal_user, relay_headers):
    response = client.post(
        "/api/v1/orders/receive",
        json=incoming_order(portal_user["supplier_id"]),
        headers=relay_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def move_order(client, headers, order_id, *statuses):
    response = None
    for status in statuses:
        response = client.patch(f"/api/v1/orders/{order_id}/status", json={"status": status}, headers=headers)
        assert response.status_code == 200, response.text
    return response


# ============================================
# AUTH
# ============================================

def test_register_login_and_me(client, portal_user):
    me = client.get("/api/v1/auth/me", headers=portal_user["headers"])
    assert me.status_code == 200
    assert me.json()["email"] == "owner@freshfoods.test"
    assert me.json()["role"] == "admin"

    login = client.post("/api/v1/auth/login", json={"email": "owner@freshfoods.test", "password": "secret-pass-1"})
    assert login.status_code == 200
    assert login.json()["token_type"] == "bearer"
    assert login.json()["supplier_id"] == portal_user["supplier_id"]


def test_register_duplicate_email(client, portal_user):
    response = client.post("/api/v1/auth/register", json={
        "supplier_name": "Other Foods",
        "supplier_email": "other@foods.test",
        "name": "Someone",
        "email": "OWNER@freshfoods.test",
        "password": "another-pass",
    })

    assert response.status_code == 400
    assert response.json()["message"] == "This email is already registered"


def test_login_wrong_password(client, portal_user):
    response = client.post("/api/v1/auth/login", json={"email": "owner@freshfoods.test", "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json()["message"] == "Incorrect email or password"


def test_portal_requires_token(client):
    response = client.get("/api/v1/products")

    assert response.status_code == 401
    assert response.json()["message"] == "Not authenticated"


def test_portal_rejects_bad_token(client):
    response = client.get("/api/v1/products", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


def test_register_validation_names_field(client):
    response = client.post("/api/v1/auth/register", json={
        "supplier_name": "Fresh Foods",
        "supplier_email": "sales@freshfoods.test",
        "name": "Ana",
        "email": "ana@freshfoods.test",
        "password": "short",
    })

    assert response.status_code == 400
    assert response.json()["data"] == {"field": "password"}


# ============================================
# SUPPLIER
# ============================================

def test_supplier_profile_defaults_and_update(client, portal_user):
    profile = client.get("/api/v1/supplier", headers=portal_user["headers"])
    assert profile.status_code == 200
    assert profile.json()["payment_terms"]["daysNet"] == 30

    response = client.patch(
        "/api/v1/supplier",
        json={"phone": "+51 999 000 111", "payment_terms": {"method": "cash", "daysNet": 15}},
        headers=portal_user["headers"],
    )

    assert response.status_code == 200
    assert response.json()["phone"] == "+51 999 000 111"
    assert response.json()["payment_terms"]["daysNet"] == 15


# ============================================
# PRODUCTS
# ============================================

def test_product_crud(client, portal_user):
    headers = portal_user["headers"]

    created = client.post("/api/v1/products", json=product_payload(), headers=headers)
    assert created.status_code == 201
    product_id = created.json()["id"]
    assert created.json()["supplier_id"] == portal_user["supplier_id"]

    client.post("/api/v1/products", json=product_payload(name="Apples", category="Fruit"), headers=headers)
    listed = client.get("/api/v1/products", headers=headers).json()
    assert [p["name"] for p in listed] == ["Apples", "Tomatoes"]

    updated = client.patch(f"/api/v1/products/{product_id}", json={"unit_price": 3.0}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["unit_price"] == 3.0
    assert updated.json()["name"] == "Tomatoes"

    deleted = client.delete(f"/api/v1/products/{product_id}", headers=headers)
    assert deleted.status_code == 200

    missing = client.get(f"/api/v1/products/{product_id}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Product not found"


def test_available_only_filter(client, portal_user):
    headers = portal_user["headers"]
    client.post("/api/v1/products", json=product_payload(), headers=headers)
    client.post("/api/v1/products", json=product_payload(name="Leeks", is_available=False), headers=headers)

    listed = client.get("/api/v1/products?available_only=true", headers=headers).json()

    assert [p["name"] for p in listed] == ["Tomatoes"]


# ============================================
# ORDERS
# ============================================

def test_receive_order(client, portal_user, received_order):
    assert received_order["order_number"].startswith("PO-")
    assert received_order["status"] == "sent"
    assert received_order["total"] == 21.6

    orders = client.get("/api/v1/orders", headers=portal_user["headers"]).json()
    assert len(orders) == 1
    assert orders[0]["external_order_id"] == "ord-100"
    assert orders[0]["items"][0]["quantity"] == 2
    assert orders[0]["tax"] == 1.6


@pytest.mark.parametrize("incoming_status, stored_status", [("draft", "draft"), ("archived", "sent")])
def test_receive_order_keeps_known_status(client, portal_user, relay_headers, incoming_status, stored_status):
    payload = incoming_order(portal_user["supplier_id"], status=incoming_status)

    response = client.post("/api/v1/orders/receive", json=payload, headers=relay_headers)

    assert response.status_code == 201, response.text
    assert response.json()["status"] == stored_status


def test_receive_order_requires_api_key(client, portal_user):
    response = client.post("/api/v1/orders/receive", json=incoming_order(portal_user["supplier_id"]))

    assert response.status_code == 401


def test_receive_order_unknown_supplier(client, relay_headers):
    response = client.post("/api/v1/orders/receive", json=incoming_order(999), headers=relay_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Supplier not found"


def test_status_change_notifies_restaurant(client, portal_user, received_order, downstream):
    response = move_order(client, portal_user["headers"], received_order["id"], "confirmed")

    body = response.json()
    assert body["order"]["status"] == "confirmed"
    assert body["order"]["confirmed_delivery_date"] is not None
    assert body["restaurant_notified"] is True

    request = downstream.last
    assert request.method == "PUT"
    assert str(request.url) == f"{MAIN_SYSTEM_URL}/api/purchase-orders/{received_order['id']}/status"
    assert downstream.last_json()["status"] == "confirmed"


def test_status_change_survives_notification_failure(client, portal_user, received_order, downstream):
    downstream.respond(500, {"error": "down"})

    response = move_order(client, portal_user["headers"], received_order["id"], "confirmed")

    assert response.json()["order"]["status"] == "confirmed"
    assert response.json()["restaurant_notified"] is False


def test_invalid_status_transition(client, portal_user, received_order):
    response = client.patch(
        f"/api/v1/orders/{received_order['id']}/status",
        json={"status": "paid"},
        headers=portal_user["headers"],
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot change order status from sent to paid"


def test_unknown_status_is_rejected(client, portal_user, received_order, downstream):
    response = client.patch(
        f"/api/v1/orders/{received_order['id']}/status",
        json={"status": "lost"},
        headers=portal_user["headers"],
    )

    assert response.status_code == 400
    assert response.json()["data"] == {"field": "status"}
    assert downstream.calls == []


def test_paid_order_records_payment(client, portal_user, received_order):
    response = client.patch(
        f"/api/v1/orders/{received_order['id']}/status",
        json={"status": "confirmed"},
        headers=portal_user["headers"],
    )
    assert response.status_code == 200
    move_order(client, portal_user["headers"], received_order["id"], "shipped", "delivered", "invoiced")

    paid = client.patch(
        f"/api/v1/orders/{received_order['id']}/status",
        json={"status": "paid", "payment_method": "bank_transfer"},
        headers=portal_user["headers"],
    ).json()["order"]

    assert paid["status"] == "paid"
    assert paid["payment_status"] == "paid"
    assert paid["payment_method"] == "bank_transfer"
    assert paid["actual_delivery_date"] is not None
    assert paid["payment_due_date"] is not None


def test_order_of_other_supplier_is_hidden(client, portal_user, received_order):
    other = client.post("/api/v1/auth/register", json={
        "supplier_name": "Other Foods",
        "supplier_email": "other@foods.test",
        "name": "Bob",
        "email": "bob@foods.test",
        "password": "bob-password",
    }).json()

    response = client.get(
        f"/api/v1/orders/{received_order['id']}",
        headers={"Authorization": f"Bearer {other['access_token']}"},
    )

    assert response.status_code == 404


# ============================================
# INVOICES
# ============================================

def test_invoice_for_delivered_order(client, portal_user, received_order):
    assert client.get("/api/v1/invoices", headers=portal_user["headers"]).json()["invoices"] == []

    move_order(client, portal_user["headers"], received_order["id"], "confirmed", "shipped", "delivered")

    body = client.get("/api/v1/invoices", headers=portal_user["headers"]).json()
    assert len(body["invoices"]) == 1
    invoice = body["invoices"][0]
    assert invoice["invoice_number"] == invoice_number_for(received_order["order_number"])
    assert invoice["status"] == "pending"
    assert invoice["total"] == 21.6
    assert body["totals"] == {"pending": 21.6, "paid": 0.0, "overdue": 0.0}

    paid_only = client.get("/api/v1/invoices?status=paid", headers=portal_user["headers"]).json()
    assert paid_only["invoices"] == []


def test_invoice_number_format():
    assert invoice_number_for("PO-2024-01-15-123456") == "INV-2024-01-15-123456"


# ============================================
# CONNECTIONS
# ============================================

def test_connection_lifecycle_and_order_totals(client, portal_user, relay_headers):
    headers = portal_user["headers"]

    created = client.post(
        "/api/v1/connections",
        json={"restaurant_id": "rest-1", "restaurant_name": "La Cevicheria"},
        headers=headers,
    )
    assert created.status_code == 201
    connection = created.json()
    assert connection["connection_status"] == "pending"

    duplicate = client.post(
        "/api/v1/connections",
        json={"restaurant_id": "rest-1", "restaurant_name": "La Cevicheria"},
        headers=headers,
    )
    assert duplicate.status_code == 400

    accepted = client.post(f"/api/v1/connections/{connection['id']}/accept", headers=headers)
    assert accepted.json()["connection_status"] == "active"

    client.post("/api/v1/orders/receive", json=incoming_order(portal_user["supplier_id"]), headers=relay_headers)

    listed = client.get("/api/v1/connections", headers=headers).json()
    assert listed[0]["total_orders"] == 1
    assert listed[0]["total_spent"] == 21.6
    assert listed[0]["last_order_date"] is not None


def test_reject_unknown_connection(client, portal_user):
    response = client.post("/api/v1/connections/999/reject", headers=portal_user["headers"])

    assert response.status_code == 404
    assert response.json()["message"] == "Connection not found"


# ============================================
# SYNC
# ============================================

def test_sync_pushes_catalog_and_logs(client, portal_user, downstream):
    headers = portal_user["headers"]
    product = client.post("/api/v1/products", json=product_payload(), headers=headers).json()
    client.post("/api/v1/products", json=product_payload(name="Leeks", is_available=False), headers=headers)

    response = client.post("/api/v1/sync/products", json={}, headers=headers)

    assert response.status_code == 200
    log = response.json()
    assert log["status"] == "success"
    assert log["items_processed"] == 1
    assert log["items_succeeded"] == 1

    assert str(downstream.last.url) == f"{MENU_PLATFORM_URL}/api/suppliers/products/sync"
    sent = downstream.last_json()
    assert sent["supplierId"] == str(portal_user["supplier_id"])
    assert sent["products"][0]["id"] == product["id"]
    assert sent["products"][0]["price"] == 2.5
    assert sent["products"][0]["stock"] == 40
    assert sent["products"][0]["imageUrl"] == "https://img.test/tomato.png"


def test_sync_failure_is_logged(client, portal_user, downstream):
    headers = portal_user["headers"]
    client.post("/api/v1/products", json=product_payload(), headers=headers)
    downstream.respond(500, {"error": "boom"})

    response = client.post("/api/v1/sync/products", json={"restaurant_id": "rest-1"}, headers=headers)

    assert response.status_code == 200
    log = response.json()
    assert log["status"] == "failed"
    assert log["items_failed"] == 1
    assert log["errors"] == ["Failed to sync products to Menu Platform"]
    assert log["restaurant_id"] == "rest-1"

    logs = client.get("/api/v1/sync/logs?limit=1", headers=headers).json()
    assert len(logs) == 1
    assert logs[0]["status"] == "failed"


# ============================================
# ANALYTICS
# ============================================

def test_analytics_endpoint(client, portal_user, received_order):
    body = client.get("/api/v1/analytics", headers=portal_user["headers"]).json()

    assert body["total_orders"] == 1
    assert body["total_revenue"] == 21.6
    assert body["average_order_value"] == 21.6
    assert body["orders_by_status"] == {"sent": 1}
    assert len(body["monthly_trends"]) == 12
    assert body["top_products"][0]["id"] == "p1"
    assert body["top_products"][0]["orders"] == 2


def test_last_months_wraps_year():
    months = last_months(datetime(2024, 2, 10), count=3)

    assert months == [(2023, 12), (2024, 1), (2024, 2)]


def test_on_time_delivery_rate(db_session, client, portal_user, received_order):
    order = db_session.query(PurchaseOrder).filter(PurchaseOrder.id == received_order["id"]).first()
    now = datetime.now(timezone.utc)
    order.status = "delivered"
    order.requested_delivery_date = now + timedelta(days=1)
    order.actual_delivery_date = now
    db_session.commit()

    analytics = AnalyticsService(db_session, portal_user["supplier_id"]).compute()

    assert analytics.performance_metrics.on_time_delivery_rate == 100.0
    assert analytics.performance_metrics.order_fulfillment_rate == 100.0
