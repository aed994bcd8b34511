# storefront/data/access.py
"""
Thin data-access layer over the Flask-SQLAlchemy session.

Statements come from :mod:`storefront.data.queries` and are always executed
with bound parameters. Rows are returned as plain dicts. Database errors are
not caught here; they propagate as ``SQLAlchemyError`` to the caller, which
decides between rolling back and surfacing a 500.
"""
from __future__ import annotations

from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from sqlalchemy import text

from storefront.extensions import db


def _bind(params: dict | None) -> dict:
    # sqlite3 cannot bind Decimal; the string form is exact on every backend
    return {k: (str(v) if isinstance(v, Decimal) else v) for k, v in (params or {}).items()}


def execute(sql: str, params: dict | None = None):
    """Run a write statement; returns the cursor result (``lastrowid``, ``rowcount``)."""
    return db.session.execute(text(sql), _bind(params))


def fetch_all(sql: str, params: dict | None = None) -> list[dict]:
    result = db.session.execute(text(sql), _bind(params))
    return [dict(row) for row in result.mappings()]


def fetch_one(sql: str, params: dict | None = None) -> dict | None:
    row = db.session.execute(text(sql), _bind(params)).mappings().first()
    return dict(row) if row is not None else None


def fetch_count(sql: str, params: dict | None = None) -> int:
    return int(db.session.execute(text(sql), _bind(params)).scalar() or 0)


@contextmanager
def transaction():
    """Commit everything executed inside the block, or roll all of it back."""
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


def to_decimal(val, default: Decimal | None = None) -> Decimal | None:
    # SQLite hands NUMERIC back as float; go through str to keep the cents exact
    if val is None or val == "":
        return default
    try:
        return Decimal(str(val))
    except (InvalidOperation, ValueError):
        return default


CENT = Decimal("0.01")


def money(val) -> Decimal:
    return (to_decimal(val, Decimal("0")) or Decimal("0")).quantize(CENT, rounding=ROUND_HALF_UP)
