# storefront/admin/routes.py
from flask import render_template
from flask_login import login_required

from storefront.data.access import fetch_count
from storefront.data.queries import PRODUCT_QUERIES, USER_QUERIES
from storefront.services.orders import list_orders, order_stats
from . import admin_bp


@admin_bp.route("/")
@login_required
def dashboard():
    return render_template(
        "admin/dashboard.html",
        user_count=fetch_count(USER_QUERIES["COUNT"]),
        product_count=fetch_count(PRODUCT_QUERIES["COUNT"]),
        order_stats=order_stats(),
        recent_orders=list_orders()[:5],
    )
