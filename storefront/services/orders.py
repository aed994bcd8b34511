# storefront/services/orders.py
"""
Order placement and lookup.

``place_order`` is the one entry point that creates orders; both the REST
endpoint and the checkout wizard go through it. Prices are read from the
product table at submission time and copied onto each order item, so an
order's total never moves when a product is repriced later.
"""
from __future__ import annotations

from decimal import Decimal

from flask import current_app

from storefront.data.access import (
    execute,
    fetch_all,
    fetch_count,
    fetch_one,
    money,
    to_decimal,
    transaction,
)
from storefront.data.queries import ORDER_ITEM_QUERIES, ORDER_QUERIES, PRODUCT_QUERIES, USER_QUERIES
from storefront.errors import NotFoundError, ValidationError
from storefront.models.order import ORDER_STATUSES
from storefront.services.catalog import parse_int
from storefront.services.notifications import send_order_confirmation

PENDING = "pending"


def _order_item_row(row: dict) -> dict:
    row = dict(row)
    row["price"] = money(row.get("price"))
    row["quantity"] = parse_int(row.get("quantity"), 0)
    row["subtotal"] = (row["price"] * row["quantity"]).quantize(Decimal("0.01"))
    return row


def _with_items(order: dict) -> dict:
    order = dict(order)
    order["total"] = money(order.get("total"))
    order["items"] = [
        _order_item_row(r)
        for r in fetch_all(ORDER_ITEM_QUERIES["SELECT_BY_ORDER_ID"], {"order_id": order["id"]})
    ]
    return order


def _parse_id(val, message: str) -> int:
    if isinstance(val, bool):
        raise ValidationError(message)
    try:
        return int(str(val).strip())
    except (TypeError, ValueError):
        raise ValidationError(message)


def _parse_quantity(val, product_id: int) -> int:
    """Absent means 1; ``2``, ``2.0`` and ``"2"`` mean 2; anything fractional is rejected."""
    if val is None:
        return 1
    message = f"Quantity for product {product_id} must be a whole number"
    if isinstance(val, bool):
        raise ValidationError(message)
    qty = to_decimal(val)
    if qty is None or not qty.is_finite() or qty != qty.to_integral_value():
        raise ValidationError(message)
    return int(qty)


def _parse_lines(items) -> list[dict]:
    if not items or not isinstance(items, list):
        raise ValidationError("Items are required")

    lines = []
    for it in items:
        if not isinstance(it, dict) or it.get("product_id") in (None, ""):
            raise ValidationError("Each item needs a product_id")
        product_id = _parse_id(it.get("product_id"), "product_id must be an integer")
        quantity = _parse_quantity(it.get("quantity"), product_id)
        if quantity < 1:
            raise ValidationError(f"Quantity for product {product_id} must be at least 1")
        lines.append({"product_id": product_id, "quantity": quantity})
    return lines


def calculate_total(lines: list[dict]) -> Decimal:
    """Σ price × quantity over priced lines, in cents."""
    total = Decimal("0")
    for line in lines:
        total += to_decimal(line["price"], Decimal("0")) * line["quantity"]
    return total.quantize(Decimal("0.01"))


def place_order(payload: dict) -> dict:
    """
    Validate ``{user_id, items: [{product_id, quantity}]}``, price every line
    from the current catalog, then write the order and its items in one
    transaction. Returns the stored order joined with user and items.
    """
    payload = payload or {}
    if payload.get("user_id") in (None, ""):
        raise ValidationError("User ID is required")
    user_id = _parse_id(payload.get("user_id"), "User ID must be an integer")
    lines = _parse_lines(payload.get("items"))

    if fetch_one(USER_QUERIES["SELECT_BY_ID"], {"id": user_id}) is None:
        raise NotFoundError("User not found")

    for line in lines:
        product = fetch_one(PRODUCT_QUERIES["SELECT_PRICE"], {"id": line["product_id"]})
        if product is None:
            raise NotFoundError(f"Product {line['product_id']} not found")
        line["price"] = money(product["price"])

    total = calculate_total(lines)

    with transaction():
        result = execute(
            ORDER_QUERIES["INSERT"],
            {"user_id": user_id, "total": total, "status": PENDING},
        )
        order_id = result.lastrowid
        for line in lines:
            execute(
                ORDER_ITEM_QUERIES["INSERT"],
                {
                    "order_id": order_id,
                    "product_id": line["product_id"],
                    "quantity": line["quantity"],
                    "price": line["price"],
                },
            )

    current_app.logger.info(
        "order #%s created for user %s: %d line(s), total %s", order_id, user_id, len(lines), total
    )

    order = get_order(order_id)

    send_order_confirmation(order)

    return order


def get_order(order_id) -> dict:
    row = fetch_one(ORDER_QUERIES["SELECT_BY_ID"], {"id": order_id})
    if row is None:
        raise NotFoundError("Order not found")
    return _with_items(row)


def list_orders(user_id=None) -> list[dict]:
    if user_id not in (None, ""):
        rows = fetch_all(
            ORDER_QUERIES["SELECT_BY_USER"],
            {"user_id": _parse_id(user_id, "User ID must be an integer")},
        )
    else:
        rows = fetch_all(ORDER_QUERIES["SELECT_ALL"])
    return [_with_items(r) for r in rows]


def update_order_status(order_id, status: str) -> dict:
    status = (status or "").strip().lower()
    if status not in ORDER_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(ORDER_STATUSES)}")
    with transaction():
        result = execute(ORDER_QUERIES["UPDATE_STATUS"], {"id": order_id, "status": status})
    if result.rowcount == 0:
        raise NotFoundError("Order not found")
    current_app.logger.info("order #%s status -> %s", order_id, status)
    return get_order(order_id)


def order_stats() -> dict:
    stats = {"total": fetch_count(ORDER_QUERIES["COUNT"])}
    for status in ORDER_STATUSES:
        stats[status] = fetch_count(ORDER_QUERIES["COUNT_BY_STATUS"], {"status": status})
    return stats
