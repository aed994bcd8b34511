from decimal import Decimal

import pytest

from storefront.checkout.flow import (
    BILLING,
    PAYMENT,
    SHIPPING,
    CheckoutState,
    checkout_totals,
    clean_step_data,
    validate_billing,
    validate_payment,
    validate_shipping,
)

BILLING_DATA = {
    "first_name": "Jo",
    "last_name": "Park",
    "email": "jo@example.com",
    "phone": "555-0100",
}
SHIPPING_DATA = {
    "address": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "",
    "shipping_method": "express",
}
PAYMENT_DATA = {
    "card_number": "4111 1111 1111 1111",
    "card_name": "Jo Park",
    "expiry_date": "12/30",
    "cvv": "123",
}


@pytest.mark.parametrize(
    "method, shipping, tax, total",
    [
        ("standard", "0.00", "15.00", "164.97"),
        ("express", "9.99", "16.00", "175.96"),
        ("overnight", "24.99", "17.50", "192.46"),
    ],
)
def test_checkout_totals(method, shipping, tax, total):
    totals = checkout_totals(Decimal("149.97"), method)
    assert totals["subtotal"] == Decimal("149.97")
    assert totals["shipping"] == Decimal(shipping)
    assert totals["tax"] == Decimal(tax)
    assert totals["total"] == Decimal(total)


def test_unknown_shipping_method_costs_standard():
    assert checkout_totals("10.00", "teleport")["shipping"] == Decimal("0.00")


def test_billing_validation():
    assert validate_billing(BILLING_DATA) == {}
    errors = validate_billing({**BILLING_DATA, "email": "jo@", "phone": ""})
    assert set(errors) == {"email", "phone"}


def test_shipping_validation():
    cleaned = clean_step_data(SHIPPING, SHIPPING_DATA)
    assert cleaned["country"] == "United States"
    assert validate_shipping(cleaned) == {}
    errors = validate_shipping({**cleaned, "shipping_method": "drone"})
    assert errors == {"shipping_method": "Choose a shipping method"}


@pytest.mark.parametrize(
    "field, value",
    [
        ("card_number", "4111"),
        ("card_number", "4111-1111-1111-111x"),
        ("expiry_date", "13/30"),
        ("expiry_date", "1230"),
        ("cvv", "12"),
        ("cvv", "12345"),
    ],
)
def test_payment_validation_rejects(field, value):
    assert field in validate_payment({**PAYMENT_DATA, field: value})


def test_payment_validation_accepts_dashes_and_amex_cvv():
    data = {**PAYMENT_DATA, "card_number": "4111-1111-1111-1111", "cvv": "1234"}
    assert validate_payment(data) == {}


def test_state_moves_one_step_at_a_time():
    store = {}
    state = CheckoutState(store)
    assert state.step == BILLING

    errors = state.advance({**BILLING_DATA, "email": ""})
    assert "email" in errors
    assert state.step == BILLING
    # what was typed is kept for the re-render
    assert state.values(BILLING)["first_name"] == "Jo"

    assert state.advance(BILLING_DATA) == {}
    assert state.step == SHIPPING
    assert state.step_number == 2

    assert state.advance(SHIPPING_DATA) == {}
    assert state.step == PAYMENT
    assert state.is_ready()

    assert state.back() == SHIPPING
    assert not state.is_ready()


def test_payment_is_terminal_and_not_stored():
    store = {}
    state = CheckoutState(store)
    state.advance(BILLING_DATA)
    state.advance(SHIPPING_DATA)

    assert state.advance(PAYMENT_DATA) == {}
    assert state.step == PAYMENT
    assert PAYMENT not in store[CheckoutState.SESSION_KEY]


def test_back_from_first_step_stays_put():
    state = CheckoutState({})
    assert state.back() == BILLING


def test_reset_clears_state():
    store = {}
    state = CheckoutState(store)
    state.advance(BILLING_DATA)
    state.reset()
    assert store == {}
    assert state.step == BILLING
