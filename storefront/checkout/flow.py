# storefront/checkout/flow.py
"""
Checkout wizard: billing -> shipping -> payment.

Each step owns a set of fields and a validator. ``CheckoutState`` keeps the
validated billing/shipping data and the current step in the session; it only
ever moves one step forward (after a clean validation) or one step back.
Payment data is validated per request and never stored.
"""
from __future__ import annotations

import re
from decimal import Decimal

from flask import session

from storefront.data.access import money, to_decimal
from storefront.services.catalog import is_valid_email

BILLING = "billing"
SHIPPING = "shipping"
PAYMENT = "payment"
STEPS = (BILLING, SHIPPING, PAYMENT)

STEP_TITLES = {
    BILLING: "Billing information",
    SHIPPING: "Shipping",
    PAYMENT: "Payment",
}

FIELDS = {
    BILLING: ("first_name", "last_name", "email", "phone"),
    SHIPPING: ("address", "city", "state", "zip_code", "country", "shipping_method"),
    PAYMENT: ("card_number", "card_name", "expiry_date", "cvv"),
}

LABELS = {
    "first_name": "First name",
    "last_name": "Last name",
    "email": "Email",
    "phone": "Phone",
    "address": "Address",
    "city": "City",
    "state": "State",
    "zip_code": "ZIP code",
    "country": "Country",
    "shipping_method": "Shipping method",
    "card_number": "Card number",
    "card_name": "Name on card",
    "expiry_date": "Expiry date",
    "cvv": "CVV",
}

DEFAULT_COUNTRY = "United States"

SHIPPING_METHODS = {
    "standard": ("Standard (5-7 business days)", Decimal("0.00")),
    "express": ("Express (2-3 business days)", Decimal("9.99")),
    "overnight": ("Overnight", Decimal("24.99")),
}

DEFAULT_TAX_RATE = Decimal("0.10")

_EXPIRY_RE = re.compile(r"^(\d{2})\s*/\s*(\d{2})$")
_CVV_RE = re.compile(r"^\d{3,4}$")


# ========================= Validation =========================

def _required(data: dict, step: str) -> dict[str, str]:
    errors = {}
    for field in FIELDS[step]:
        if not str(data.get(field) or "").strip():
            errors[field] = f"{LABELS[field]} is required"
    return errors


def card_digits(number: str | None) -> str:
    return re.sub(r"[\s-]", "", number or "")


def validate_billing(data: dict) -> dict[str, str]:
    errors = _required(data, BILLING)
    if "email" not in errors and not is_valid_email(str(data.get("email"))):
        errors["email"] = "Enter a valid email address"
    return errors


def validate_shipping(data: dict) -> dict[str, str]:
    errors = _required(data, SHIPPING)
    if "shipping_method" not in errors and data.get("shipping_method") not in SHIPPING_METHODS:
        errors["shipping_method"] = "Choose a shipping method"
    return errors


def validate_payment(data: dict) -> dict[str, str]:
    errors = _required(data, PAYMENT)

    if "card_number" not in errors:
        digits = card_digits(data.get("card_number"))
        if not digits.isdigit() or not 13 <= len(digits) <= 19:
            errors["card_number"] = "Card number must be 13 to 19 digits"

    if "expiry_date" not in errors:
        m = _EXPIRY_RE.match(str(data.get("expiry_date")).strip())
        if not m or not 1 <= int(m.group(1)) <= 12:
            errors["expiry_date"] = "Use the MM/YY format"

    if "cvv" not in errors and not _CVV_RE.match(str(data.get("cvv")).strip()):
        errors["cvv"] = "CVV must be 3 or 4 digits"

    return errors


VALIDATORS = {
    BILLING: validate_billing,
    SHIPPING: validate_shipping,
    PAYMENT: validate_payment,
}


def validate_step(step: str, data: dict) -> dict[str, str]:
    return VALIDATORS[step](data)


def clean_step_data(step: str, data) -> dict[str, str]:
    """Keep only the step's own fields, stripped."""
    cleaned = {field: str(data.get(field) or "").strip() for field in FIELDS[step]}
    if step == SHIPPING and not cleaned["country"]:
        cleaned["country"] = DEFAULT_COUNTRY
    return cleaned


# ========================= Pricing =========================

def shipping_cost(method: str | None) -> Decimal:
    return SHIPPING_METHODS.get(method or "standard", SHIPPING_METHODS["standard"])[1]


def checkout_totals(subtotal, shipping_method: str | None = None, tax_rate=DEFAULT_TAX_RATE) -> dict:
    """Tax is charged on subtotal plus shipping."""
    subtotal = money(subtotal)
    shipping = shipping_cost(shipping_method)
    rate = to_decimal(tax_rate, DEFAULT_TAX_RATE)
    tax = money((subtotal + shipping) * rate)
    return {
        "subtotal": subtotal,
        "shipping": shipping,
        "tax": tax,
        "total": subtotal + shipping + tax,
    }


# ========================= State =========================

class CheckoutState:
    SESSION_KEY = "checkout"

    def __init__(self, store=None):
        self._store = session if store is None else store

    def _data(self) -> dict:
        return dict(self._store.get(self.SESSION_KEY) or {"step": BILLING})

    def _save(self, data: dict) -> None:
        self._store[self.SESSION_KEY] = data
        if hasattr(self._store, "modified"):
            self._store.modified = True

    @property
    def step(self) -> str:
        step = self._data().get("step")
        return step if step in STEPS else BILLING

    @property
    def step_number(self) -> int:
        return STEPS.index(self.step) + 1

    def values(self, step: str) -> dict:
        return dict(self._data().get(step) or {})

    def advance(self, data) -> dict[str, str]:
        """
        Validate the current step against ``data``. On success the step's
        fields are stored and the state moves to the next step. Returns the
        validation errors (empty on success). The payment step is terminal.
        """
        step = self.step
        cleaned = clean_step_data(step, data)
        errors = validate_step(step, cleaned)

        state = self._data()
        if step != PAYMENT:
            # keep what was typed even when invalid, so the form re-renders filled in
            state[step] = cleaned
        if not errors and step != PAYMENT:
            state["step"] = STEPS[STEPS.index(step) + 1]
        self._save(state)
        return errors

    def back(self) -> str:
        state = self._data()
        idx = STEPS.index(self.step)
        if idx > 0:
            state["step"] = STEPS[idx - 1]
            self._save(state)
        return self.step

    def is_ready(self) -> bool:
        """Billing and shipping both validated and stored."""
        return (
            self.step == PAYMENT
            and not validate_billing(self.values(BILLING))
            and not validate_shipping(self.values(SHIPPING))
        )

    def reset(self) -> None:
        self._store.pop(self.SESSION_KEY, None)
        if hasattr(self._store, "modified"):
            self._store.modified = True
