# storefront/config.py
import os
from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(BASE_DIR, ".env"))

INSTANCE_DIR = os.path.join(BASE_DIR, "instance")


def _env(key: str, default=None):
    v = os.getenv(key)
    return v if v not in (None, "", "None") else default


TRUTHY = ("1", "true", "t", "yes", "y", "on")


def as_bool(val, default: bool = False) -> bool:
    """Booleans from env strings, form checkboxes and JSON alike."""
    if val is None or val == "":
        return default
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in TRUTHY


def _env_bool(key: str, default: bool = False) -> bool:
    return as_bool(_env(key), default)


def _env_list(key: str, default: list[str]) -> list[str]:
    v = _env(key)
    if not v:
        return default
    return [part.strip() for part in v.split(",") if part.strip()]


def _resolve_sqlite_uri(db_url: str | None) -> str:
    if not db_url:
        os.makedirs(INSTANCE_DIR, exist_ok=True)
        db_path = os.path.join(INSTANCE_DIR, "storefront.db")
        return "sqlite:///" + db_path.replace("\\", "/")

    if db_url.startswith("sqlite:///") and db_url != "sqlite:///:memory:":
        raw_path = db_url.replace("sqlite:///", "", 1)
        if not os.path.isabs(raw_path):
            raw_path = os.path.join(BASE_DIR, raw_path)
        db_path = os.path.normpath(raw_path)
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        return "sqlite:///" + db_path.replace("\\", "/")

    return db_url


def engine_options(uri: str, pool_size: int) -> dict:
    """SQLite gets the driver's default pool; server databases get a fixed-size one."""
    if uri.startswith("sqlite"):
        return {}
    return {"pool_size": pool_size, "pool_pre_ping": True, "pool_recycle": 1800}


class Config:
    SECRET_KEY = _env("SECRET_KEY", "dev-please-change-me")
    LOG_LEVEL = _env("LOG_LEVEL", "INFO")

    SQLALCHEMY_DATABASE_URI = _resolve_sqlite_uri(_env("DATABASE_URL"))
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    DB_POOL_SIZE = int(_env("DB_POOL_SIZE", 10))
    SQLALCHEMY_ENGINE_OPTIONS = engine_options(SQLALCHEMY_DATABASE_URI, DB_POOL_SIZE)

    CORS_ORIGINS = _env_list("CORS_ORIGINS", ["http://localhost:3000", "http://localhost:5173"])

    TAX_RATE = _env("TAX_RATE", "0.10")

    MAIL_SERVER = _env("MAIL_SERVER", "localhost")
    MAIL_PORT = int(_env("MAIL_PORT", 25))
    MAIL_USE_SSL = _env_bool("MAIL_USE_SSL", False)
    MAIL_USE_TLS = _env_bool("MAIL_USE_TLS", False)
    MAIL_USERNAME = _env("MAIL_USERNAME")
    MAIL_PASSWORD = _env("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = _env("MAIL_DEFAULT_SENDER", _env("MAIL_USERNAME", "shop@localhost"))
    MAIL_SUPPRESS_SEND = _env_bool("MAIL_SUPPRESS_SEND", False)
    SEND_ORDER_EMAILS = _env_bool("SEND_ORDER_EMAILS", True)
    ORDER_NOTIFY_EMAIL = _env("ORDER_NOTIFY_EMAIL")

    LOGIN_DISABLED = _env_bool("LOGIN_DISABLED", False)


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = "shop@example.com"
    SEND_ORDER_EMAILS = True
    ORDER_NOTIFY_EMAIL = None
    LOGIN_DISABLED = True
    BCRYPT_LOG_ROUNDS = 4
