from types import SimpleNamespace

import pytest

from supplier_hub.core.errors import PayloadError
from supplier_hub.services.order_relay import compute_order_totals, project_order, to_money
from supplier_hub.services.validation_service import is_missing, to_int, to_number, validate_order_webhook


def line(quantity, unit_price):
    return SimpleNamespace(quantity=quantity, unit_price=unit_price)


def test_totals_for_single_line():
    totals = compute_order_totals([line(2, 10)])

    assert totals.subtotal == 20.0
    assert totals.tax == 1.6
    assert totals.shipping == 0.0
    assert totals.discount == 0.0
    assert totals.total == 21.6


def test_totals_are_rounded_to_cents():
    totals = compute_order_totals([line(3, 0.1), line(1, 19.99)], shipping=4.5)

    assert totals.subtotal == 20.29
    assert totals.tax == 1.62
    assert totals.total == 26.41


def test_total_identity_holds():
    totals = compute_order_totals([line(7, 3.33), line(2, 12.5)], shipping=2)

    expected = round(totals.subtotal + totals.tax + totals.shipping - totals.discount, 2)
    assert totals.total == expected


def test_to_money_rounds_half_up():
    assert float(to_money(0.125)) == 0.13
    assert float(to_money("2.675")) == 2.68


@pytest.mark.parametrize("value,expected", [
    (5, 5.0),
    ("12.5", 12.5),
    (" 3 ", 3.0),
    (True, None),
    ("abc", None),
    ("nan", None),
    (None, None),
    ([1], None),
])
def test_to_number(value, expected):
    assert to_number(value) == expected


def test_to_int_truncates():
    assert to_int("2.9") == 2
    assert to_int("x", 7) == 7


def test_blank_strings_are_missing():
    assert is_missing("   ")
    assert is_missing(None)
    assert not is_missing(0)
    assert not is_missing(False)


def test_numeric_ids_are_coerced_to_strings():
    intake = validate_order_webhook({
        "orderId": 42,
        "restaurantId": 7,
        "supplierId": 3,
        "items": [{"productId": 9, "productName": "Rice", "quantity": "2.7", "unitPrice": "1.5", "unit": "kg"}],
    })

    assert intake.order_id == "42"
    assert intake.supplier_id == "3"
    assert intake.items[0].product_id == "9"
    assert intake.items[0].quantity == 2
    assert intake.items[0].unit_price == 1.5


def test_non_object_body_is_rejected():
    with pytest.raises(PayloadError) as exc:
        validate_order_webhook([1, 2])

    assert exc.value.message == "Request body must be a JSON object"
    assert exc.value.status_code == 400


def test_project_order_fills_absent_fields_with_none():
    projected = project_order({"id": "o1", "secret": "x"})

    assert projected["id"] == "o1"
    assert projected["orderNumber"] is None
    assert "secret" not in projected
