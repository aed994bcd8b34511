# storefront/shop/routes.py
from flask import abort, render_template, request

from storefront.errors import NotFoundError
from storefront.services import catalog, orders
from . import shop_bp

SHOP_SORTS = {
    "newest": ("id", True),
    "price_asc": ("price", False),
    "price_desc": ("price", True),
    "name_asc": ("name", False),
}

SEARCH_FIELDS = ("name", "description", "category", "brand", "tags")


@shop_bp.get("/")
def index():
    return render_template("shop/index.html", products=catalog.featured_products())


@shop_bp.get("/shop")
def shop():
    products = catalog.list_products()
    categories = sorted({p["category"] for p in products if p.get("category")})

    q = (request.args.get("q") or "").strip()
    category = (request.args.get("category") or "").strip()
    sort = request.args.get("sort") or "newest"

    if category:
        products = [p for p in products if p.get("category") == category]
    products = catalog.search_rows(products, q, SEARCH_FIELDS)
    products = catalog.sort_rows(products, sort, SHOP_SORTS, "newest")

    return render_template(
        "shop/list.html",
        products=products,
        categories=categories,
        q=q,
        selected_category=category,
        selected_sort=sort,
        sorts=SHOP_SORTS,
    )


@shop_bp.get("/product/<slug_or_id>")
def product_detail(slug_or_id: str):
    try:
        product = catalog.get_product_by_slug(slug_or_id)
    except NotFoundError:
        abort(404)
    return render_template("shop/product.html", product=product)


@shop_bp.get("/orders")
def order_history():
    """Look up a customer's orders by the e-mail used at checkout."""
    email = (request.args.get("email") or "").strip()
    user = catalog.find_user_by_email(email) if email else None
    history = orders.list_orders(user["id"]) if user else []
    return render_template("shop/orders.html", email=email, user=user, orders=history)
