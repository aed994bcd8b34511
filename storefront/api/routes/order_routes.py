# storefront/api/routes/order_routes.py
from flask import Blueprint, request

from storefront.api.utils.responses import HTTP_CREATED, get_payload, success
from storefront.services import orders

order_bp = Blueprint("order_bp", __name__, url_prefix="/api/orders")


@order_bp.get("")
def list_orders():
    return success(orders.list_orders(request.args.get("user_id")))


@order_bp.post("")
def create_order():
    """
    Body JSON:
    {
      "user_id": 1,
      "items": [{"product_id": 2, "quantity": 1}, ...]
    }
    Prices come from the catalog, never from the request.
    """
    order = orders.place_order(get_payload())
    return success(order, HTTP_CREATED, "Order created successfully")


@order_bp.get("/<int:order_id>")
def get_order(order_id: int):
    return success(orders.get_order(order_id))
