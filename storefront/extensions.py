# storefront/extensions.py
from __future__ import annotations

import sqlite3

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_cors import CORS
from flask_mail import Mail
from sqlalchemy import event
from sqlalchemy.engine import Engine

from storefront.config import as_bool

# Keep extension instances in one place to avoid circular imports
db = SQLAlchemy()
login_manager = LoginManager()
bcrypt = Bcrypt()
migrate = Migrate()
cors = CORS()
mail = Mail()


@login_manager.user_loader
def load_admin(admin_id):
    # Lazy import to avoid circular dependency when loading the model
    from storefront.models.admin import Admin
    try:
        return db.session.get(Admin, int(admin_id))
    except (TypeError, ValueError):
        return None


@event.listens_for(Engine, "connect")
def _sqlite_foreign_keys(dbapi_connection, connection_record):
    # ON DELETE CASCADE is a no-op on SQLite unless enabled per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _clean_hostname(server: str | None) -> str:
    """Return hostname without scheme/path/spaces."""
    s = (server or "").strip()
    if "://" in s:
        s = s.split("://", 1)[1]
    if "/" in s:
        s = s.split("/", 1)[0]
    return s


def init_mail(app):
    """
    Initialize Flask-Mail after normalizing the MAIL_* settings, so a
    half-configured environment still yields a consistent server/port/TLS triple.
    """
    cfg = app.config

    server = _clean_hostname(cfg.get("MAIL_SERVER"))
    if not server:
        server = "localhost"
        app.logger.warning("MAIL_SERVER was not set -> using 'localhost'.")
    cfg["MAIL_SERVER"] = server

    use_ssl = as_bool(cfg.get("MAIL_USE_SSL"), False)
    use_tls = as_bool(cfg.get("MAIL_USE_TLS"), False)
    if use_ssl and use_tls:
        use_tls = False
        cfg["MAIL_USE_TLS"] = False
        app.logger.info("MAIL_USE_SSL and MAIL_USE_TLS were both set -> disabling TLS (prefer SSL).")

    try:
        int(cfg.get("MAIL_PORT"))
    except (TypeError, ValueError):
        port = 465 if use_ssl else (587 if use_tls else 25)
        cfg["MAIL_PORT"] = port
        app.logger.info("MAIL_PORT was invalid -> setting %s (SSL=%s, TLS=%s).", port, use_ssl, use_tls)

    if not cfg.get("MAIL_DEFAULT_SENDER"):
        cfg["MAIL_DEFAULT_SENDER"] = cfg.get("MAIL_USERNAME")

    app.logger.info(
        "MAIL cfg -> server=%s port=%s ssl=%s tls=%s sender=%s suppress=%s",
        cfg.get("MAIL_SERVER"),
        cfg.get("MAIL_PORT"),
        bool(cfg.get("MAIL_USE_SSL")),
        bool(cfg.get("MAIL_USE_TLS")),
        cfg.get("MAIL_DEFAULT_SENDER"),
        bool(cfg.get("MAIL_SUPPRESS_SEND")),
    )

    mail.init_app(app)
