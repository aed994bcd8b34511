from flask import Blueprint

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")

from . import routes          # noqa: E402,F401  dashboard
from . import user_routes     # noqa: E402,F401  users
from . import product_routes  # noqa: E402,F401  products
from . import order_routes    # noqa: E402,F401  orders
