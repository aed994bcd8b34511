# storefront/checkout/routes.py
from flask import current_app, flash, redirect, render_template, request, session, url_for

from storefront.cart import get_cart
from storefront.errors import ApiError
from storefront.services import catalog, orders
from . import checkout_bp
from .flow import (
    BILLING,
    PAYMENT,
    SHIPPING,
    SHIPPING_METHODS,
    STEP_TITLES,
    STEPS,
    CheckoutState,
    card_digits,
    checkout_totals,
    clean_step_data,
)

LAST_ORDER_KEY = "last_order"


def _totals(cart, state: CheckoutState) -> dict:
    method = state.values(SHIPPING).get("shipping_method") or "standard"
    return checkout_totals(cart.subtotal(), method, current_app.config.get("TAX_RATE", "0.10"))


def _render(state: CheckoutState, cart, values=None, errors=None, form_error=None, status=200):
    step = state.step
    return render_template(
        "checkout/step.html",
        step=step,
        steps=STEPS,
        step_titles=STEP_TITLES,
        step_number=state.step_number,
        values=values if values is not None else state.values(step),
        billing=state.values(BILLING),
        shipping=state.values(SHIPPING),
        shipping_methods=SHIPPING_METHODS,
        errors=errors or {},
        form_error=form_error,
        lines=cart.lines(),
        totals=_totals(cart, state),
    ), status


@checkout_bp.get("/")
def checkout():
    cart = get_cart()
    if cart.is_empty():
        flash("Your cart is empty.", "info")
        return redirect(url_for("cart.view_cart"))
    return _render(CheckoutState(), cart)


@checkout_bp.get("/<step>")
def checkout_step(step: str):
    # steps are only entered through Next/Back; direct links land on the current one
    return redirect(url_for("checkout.checkout"))


@checkout_bp.post("/")
def checkout_post():
    cart = get_cart()
    if cart.is_empty():
        return redirect(url_for("cart.view_cart"))

    state = CheckoutState()
    action = request.form.get("action", "next")

    if action == "back":
        state.back()
        return redirect(url_for("checkout.checkout"))

    if request.form.get("step") != state.step:
        # stale form (e.g. a second tab); show the step the session is really on
        return redirect(url_for("checkout.checkout"))

    if state.step != PAYMENT:
        errors = state.advance(request.form)
        if errors:
            return _render(state, cart, errors=errors, status=400)
        return redirect(url_for("checkout.checkout"))

    return _place_order(state, cart)


def _place_order(state: CheckoutState, cart):
    payment = clean_step_data(PAYMENT, request.form)
    # the card number and CVV never leave this request; re-render with what was typed
    errors = state.advance(payment)
    if errors:
        return _render(state, cart, values=payment, errors=errors, status=400)
    if not state.is_ready():
        flash("Please complete the previous steps.", "warning")
        return redirect(url_for("checkout.checkout"))

    billing = state.values(BILLING)
    shipping = state.values(SHIPPING)
    totals = _totals(cart, state)

    try:
        user = catalog.find_user_by_email(billing["email"])
        if user is None:
            user = catalog.create_user({
                "name": f"{billing['first_name']} {billing['last_name']}",
                "email": billing["email"],
            })
        order = orders.place_order({
            "user_id": user["id"],
            "items": cart.order_items(),
            "shipping_method": shipping["shipping_method"],
        })
    except ApiError as e:
        current_app.logger.warning("checkout failed: %s", e.message)
        return _render(state, cart, values=payment, form_error=e.message, status=e.status_code)

    cart.clear()
    state.reset()
    session[LAST_ORDER_KEY] = {
        "order_id": order["id"],
        "shipping_method": shipping["shipping_method"],
        "shipping": str(totals["shipping"]),
        "tax": str(totals["tax"]),
        "total": str(totals["total"]),
        "card_last4": card_digits(payment["card_number"])[-4:],
    }
    return redirect(url_for("checkout.success", order_id=order["id"]))


@checkout_bp.get("/success/<int:order_id>")
def success(order_id: int):
    last = session.get(LAST_ORDER_KEY) or {}
    if last.get("order_id") != order_id:
        return redirect(url_for("shop.index"))
    order = orders.get_order(order_id)
    return render_template("checkout/success.html", order=order, summary=last)
