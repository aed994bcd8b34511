# storefront/cart/routes.py
from flask import abort, flash, redirect, render_template, request, url_for

from storefront.services.catalog import find_product, parse_int
from . import cart_bp
from .store import get_cart


def _back(default: str):
    nxt = request.form.get("next") or ""
    # only same-site relative paths
    if nxt.startswith("/") and not nxt.startswith("//"):
        return redirect(nxt)
    return redirect(default)


@cart_bp.get("/")
def view_cart():
    cart = get_cart()
    return render_template("cart/cart.html", lines=cart.lines(), subtotal=cart.subtotal())


@cart_bp.post("/add")
def add_to_cart():
    product_id = parse_int(request.form.get("product_id"), 0)
    product = find_product(product_id) if product_id else None
    if product is None:
        abort(404, description="Product not found")
    quantity = max(parse_int(request.form.get("quantity"), 1), 1)
    get_cart().add(product_id, quantity)
    flash(f"Added {product['name']} to your cart.", "success")
    return _back(url_for("cart.view_cart"))


@cart_bp.post("/update")
def update_cart():
    product_id = parse_int(request.form.get("product_id"), 0)
    quantity = parse_int(request.form.get("quantity"), 0)
    get_cart().update(product_id, quantity)
    return redirect(url_for("cart.view_cart"))


@cart_bp.post("/remove")
def remove_from_cart():
    get_cart().remove(parse_int(request.form.get("product_id"), 0))
    flash("Item removed.", "info")
    return redirect(url_for("cart.view_cart"))


@cart_bp.post("/clear")
def clear_cart():
    get_cart().clear()
    flash("Cart cleared.", "info")
    return redirect(url_for("cart.view_cart"))
