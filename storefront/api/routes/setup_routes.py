# storefront/api/routes/setup_routes.py
from flask import Blueprint

from storefront.api.utils.responses import success
from storefront.services.setup import init_database

setup_bp = Blueprint("setup_bp", __name__, url_prefix="/api/setup")


@setup_bp.post("/init")
def init():
    return success(init_database())
