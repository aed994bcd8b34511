# storefront/admin/order_routes.py
from flask import abort, flash, redirect, render_template, request, url_for
from flask_login import login_required

from storefront.errors import NotFoundError, ValidationError
from storefront.models.order import ORDER_STATUSES
from storefront.services import catalog, orders
from . import admin_bp

ORDER_SORTS = {
    "date_desc": ("created_at", True),
    "date_asc": ("created_at", False),
    "total_desc": ("total", True),
    "total_asc": ("total", False),
    "status": ("status", False),
}


@admin_bp.route("/orders", endpoint="orders")
@login_required
def order_list():
    q = (request.args.get("q") or "").strip()
    status = (request.args.get("status") or "").strip()
    sort = request.args.get("sort") or "date_desc"

    rows = orders.list_orders()
    if status:
        rows = [o for o in rows if o["status"] == status]
    rows = catalog.search_rows(rows, q, ("id", "user_name", "user_email"))
    rows = catalog.sort_rows(rows, sort, ORDER_SORTS, "date_desc")

    return render_template(
        "admin/orders/list.html",
        orders=rows,
        q=q,
        selected_status=status,
        selected_sort=sort,
        statuses=ORDER_STATUSES,
        stats=orders.order_stats(),
    )


@admin_bp.route("/orders/<int:order_id>", endpoint="order_detail")
@login_required
def order_detail(order_id: int):
    try:
        order = orders.get_order(order_id)
    except NotFoundError:
        abort(404)
    return render_template("admin/orders/detail.html", order=order, statuses=ORDER_STATUSES)


@admin_bp.post("/orders/<int:order_id>/status", endpoint="order_status")
@login_required
def order_status(order_id: int):
    try:
        orders.update_order_status(order_id, request.form.get("status"))
    except NotFoundError:
        abort(404)
    except ValidationError as e:
        flash(e.message, "danger")
        return redirect(url_for("admin.order_detail", order_id=order_id))
    flash("Order status updated.", "success")
    return redirect(url_for("admin.order_detail", order_id=order_id))
