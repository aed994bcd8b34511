# storefront/services/notifications.py
from __future__ import annotations

from smtplib import SMTPException

from flask import current_app

from storefront.api.utils.email import send_email


def _order_lines(order: dict) -> list[str]:
    lines = [
        f"Hello {order.get('user_name') or 'there'},",
        "",
        f"thank you for your order #{order['id']}. Here is a summary:",
        "",
    ]
    for it in order.get("items", []):
        name = it.get("product_name") or f"Product {it['product_id']}"
        lines.append(f"- {name} x {it['quantity']} @ ${it['price']:.2f}")
    lines += [
        "",
        f"Order total: ${order['total']:.2f}",
        f"Status: {order.get('status')}",
        "",
        "We will let you know when it ships.",
    ]
    return lines


def send_order_confirmation(order: dict) -> bool:
    """
    Mail the buyer (and the shop owner, if ORDER_NOTIFY_EMAIL is set).
    The order is already committed, so mail trouble is logged and swallowed.
    """
    cfg = current_app.config
    if not cfg.get("SEND_ORDER_EMAILS", True):
        return False

    sent = False
    email = order.get("user_email")
    if email:
        try:
            send_email(
                subject=f"Order confirmation #{order['id']}",
                recipients=[email],
                body="\n".join(_order_lines(order)),
            )
            sent = True
        except (SMTPException, OSError):
            current_app.logger.exception("confirmation e-mail for order #%s failed", order["id"])

    owner = cfg.get("ORDER_NOTIFY_EMAIL")
    if owner:
        try:
            send_email(
                subject=f"New order #{order['id']}",
                recipients=[owner],
                body=(
                    f"Order #{order['id']}\n"
                    f"Customer: {order.get('user_name')} <{email}>\n"
                    f"Items: {len(order.get('items', []))}\n"
                    f"Total: ${order['total']:.2f}"
                ),
            )
        except (SMTPException, OSError):
            current_app.logger.exception("owner e-mail for order #%s failed", order["id"])

    return sent
