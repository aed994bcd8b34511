# storefront/admin/product_routes.py
from flask import abort, flash, redirect, render_template, request, url_for
from flask_login import login_required

from storefront.data.access import fetch_count
from storefront.data.queries import ORDER_ITEM_QUERIES
from storefront.errors import NotFoundError, ValidationError
from storefront.services import catalog
from . import admin_bp

PRODUCT_SORTS = {
    "date_desc": ("created_at", True),
    "date_asc": ("created_at", False),
    "name_asc": ("name", False),
    "name_desc": ("name", True),
    "price_asc": ("price", False),
    "price_desc": ("price", True),
    "stock_asc": ("stock", False),
    "stock_desc": ("stock", True),
}


def _product_or_404(product_id: int) -> dict:
    try:
        return catalog.get_product(product_id)
    except NotFoundError:
        abort(404)


def _form_values() -> dict:
    values = request.form.to_dict()
    # unchecked checkboxes are simply absent from the form
    values["is_featured"] = "is_featured" in request.form
    values["is_bestseller"] = "is_bestseller" in request.form
    return values


@admin_bp.route("/products", endpoint="products")
@login_required
def product_list():
    q = (request.args.get("q") or "").strip()
    sort = request.args.get("sort") or "date_desc"
    products = catalog.search_rows(
        catalog.list_products(), q, ("name", "sku", "category", "brand", "slug")
    )
    products = catalog.sort_rows(products, sort, PRODUCT_SORTS, "date_desc")
    return render_template(
        "admin/products/list.html", products=products, q=q, selected_sort=sort
    )


@admin_bp.route("/products/add", methods=["GET", "POST"], endpoint="add_product")
@login_required
def product_add():
    if request.method == "POST":
        values = _form_values()
        try:
            product = catalog.create_product(values)
        except ValidationError as e:
            flash(e.message, "danger")
            return render_template("admin/products/form.html", product=None, values=values), 400
        flash(f"Product {product['name']} created.", "success")
        return redirect(url_for("admin.products"))
    return render_template("admin/products/form.html", product=None, values={})


@admin_bp.route("/products/<int:product_id>/edit", methods=["GET", "POST"], endpoint="edit_product")
@login_required
def product_edit(product_id: int):
    product = _product_or_404(product_id)
    if request.method == "POST":
        values = _form_values()
        try:
            catalog.update_product(product_id, values)
        except ValidationError as e:
            flash(e.message, "danger")
            return render_template("admin/products/form.html", product=product, values=values), 400
        flash("Product updated.", "success")
        return redirect(url_for("admin.products"))
    return render_template("admin/products/form.html", product=product, values=product)


@admin_bp.route(
    "/products/<int:product_id>/delete", methods=["GET", "POST"], endpoint="delete_product"
)
@login_required
def product_delete(product_id: int):
    product = _product_or_404(product_id)
    if request.method == "GET":
        lines = fetch_count(ORDER_ITEM_QUERIES["COUNT_BY_PRODUCT"], {"product_id": product_id})
        return render_template(
            "admin/confirm_delete.html",
            kind="product",
            label=product["name"],
            warning=f"{lines} order line(s) referencing it are deleted too." if lines else None,
            cancel_url=url_for("admin.products"),
        )
    catalog.delete_product(product_id)
    flash("Product deleted.", "success")
    return redirect(url_for("admin.products"))
