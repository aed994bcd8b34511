from flask import Blueprint

cart_bp = Blueprint("cart", __name__, url_prefix="/cart")

from . import routes  # noqa: E402,F401
from .store import Cart, get_cart  # noqa: E402,F401
