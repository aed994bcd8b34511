# storefront/auth/__init__.py
from .login_routes import auth_bp  # noqa: F401
