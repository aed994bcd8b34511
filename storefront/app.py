# storefront/app.py
import logging

from flask import Flask

from storefront.config import Config

# Extensions
from storefront.extensions import bcrypt, cors, db, init_mail, login_manager, migrate

# Blueprints
from storefront.admin import admin_bp
from storefront.auth import auth_bp
from storefront.api.routes.order_routes import order_bp
from storefront.api.routes.product_routes import api_products
from storefront.api.routes.setup_routes import setup_bp
from storefront.api.routes.user_routes import api_users
from storefront.api.utils.responses import register_error_handlers
from storefront.cart import cart_bp, get_cart
from storefront.checkout import checkout_bp
from storefront.cli import register_cli
from storefront.shop import shop_bp
from storefront import models as _models  # noqa: F401


def create_app(config_object=Config, **overrides) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.update(overrides)

    logging.basicConfig(level=app.config.get("LOG_LEVEL", "INFO"))
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    init_mail(app)

    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": app.config.get("CORS_ORIGINS", []),
                "supports_credentials": True,
            }
        },
    )

    login_manager.login_view = "auth.login"
    login_manager.login_message_category = "warning"

    # Register blueprints
    app.register_blueprint(api_users)
    app.register_blueprint(api_products)
    app.register_blueprint(order_bp)
    app.register_blueprint(setup_bp)
    app.register_blueprint(shop_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(checkout_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)

    register_error_handlers(app)
    register_cli(app)

    @app.context_processor
    def _cart_badge():
        # lazily evaluated so pages that never render the badge skip the session read
        return {"cart_count": lambda: get_cart().count()}

    @app.template_filter("money")
    def _money(value):
        return f"${float(value or 0):,.2f}"

    # Diagnostics: list all routes
    @app.get("/__routes")
    def __routes():
        lines = []
        for r in sorted(app.url_map.iter_rules(), key=lambda x: x.rule):
            methods = ",".join(
                sorted(m for m in r.methods if m in {"GET", "POST", "PUT", "DELETE", "PATCH"})
            )
            lines.append(f"{r.rule:35s} -> {r.endpoint} [{methods}]")
        return "<pre>" + "\n".join(lines) + "</pre>"

    return app
