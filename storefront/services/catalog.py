# storefront/services/catalog.py
from __future__ import annotations

import re
import unicodedata
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from storefront.config import as_bool
from storefront.data.access import execute, fetch_all, fetch_one, to_decimal, transaction
from storefront.data.queries import PRODUCT_QUERIES, USER_QUERIES
from storefront.errors import NotFoundError, ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NAME_REQUIRED = "Name is required"
EMAIL_REQUIRED = "Email is required"
PRICE_REQUIRED = "Price is required"
INVALID_EMAIL = "Invalid email format"


# ========================= Helpers =========================

def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_RE.match(email.strip()) is not None


def missing_fields(data: dict, required: list[str]) -> list[str]:
    missing = []
    for field in required:
        val = data.get(field)
        if val is None or (isinstance(val, str) and not val.strip()):
            missing.append(field)
    return missing


def parse_int(val, default: int = 0) -> int:
    try:
        return int(str(val).strip())
    except (TypeError, ValueError):
        return default


def _clean(val) -> str | None:
    s = str(val).strip() if val is not None else ""
    return s or None


def slugify(val: str | None) -> str:
    """URL-safe slug: ASCII-folded, lowercase, words joined by single dashes."""
    raw = (val or "").strip().lower()
    normalized = unicodedata.normalize("NFKD", raw)
    normalized = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    normalized = re.sub(r"[^\w\s-]", "", normalized, flags=re.ASCII)
    normalized = re.sub(r"[\s_-]+", "-", normalized)
    return normalized.strip("-")


def unique_slug(base: str, exclude_id: int | None = None) -> str:
    taken = {
        row["slug"]
        for row in fetch_all(PRODUCT_QUERIES["SELECT_SLUGS"])
        if exclude_id is None or row["id"] != exclude_id
    }
    slug = base or "product"
    candidate = slug
    counter = 1
    while candidate in taken:
        candidate = f"{slug}-{counter}"
        counter += 1
    return candidate


def search_rows(rows: list[dict], q: str | None, fields: tuple[str, ...]) -> list[dict]:
    """Case-insensitive substring match over the given fields."""
    needle = (q or "").strip().lower()
    if not needle:
        return rows
    return [
        r for r in rows
        if any(needle in str(r.get(f) or "").lower() for f in fields)
    ]


def sort_rows(rows: list[dict], sort: str | None, sort_map: dict, default: str) -> list[dict]:
    key, reverse = sort_map.get(sort or default, sort_map[default])
    present = [r for r in rows if r.get(key) is not None]
    absent = [r for r in rows if r.get(key) is None]
    return sorted(present, key=lambda r: _sort_key(r[key]), reverse=reverse) + absent


def _sort_key(val):
    return val.lower() if isinstance(val, str) else val


# ========================= Users =========================

def _validate_user(data: dict) -> tuple[str, str]:
    if missing_fields(data, ["name", "email"]):
        raise ValidationError(f"{NAME_REQUIRED} and {EMAIL_REQUIRED}")
    name = str(data["name"]).strip()
    email = str(data["email"]).strip()
    if not is_valid_email(email):
        raise ValidationError(INVALID_EMAIL)
    return name, email


def list_users() -> list[dict]:
    return fetch_all(USER_QUERIES["SELECT_ALL"])


def get_user(user_id) -> dict:
    row = fetch_one(USER_QUERIES["SELECT_BY_ID"], {"id": user_id})
    if row is None:
        raise NotFoundError("User not found")
    return row


def find_user_by_email(email: str) -> dict | None:
    return fetch_one(USER_QUERIES["SELECT_BY_EMAIL"], {"email": (email or "").strip()})


def create_user(data: dict) -> dict:
    name, email = _validate_user(data)
    try:
        with transaction():
            result = execute(USER_QUERIES["INSERT"], {"name": name, "email": email})
    except IntegrityError:
        raise ValidationError("Email already exists")
    return get_user(result.lastrowid)


def update_user(user_id, data: dict) -> dict:
    name, email = _validate_user(data)
    get_user(user_id)
    try:
        with transaction():
            execute(USER_QUERIES["UPDATE"], {"id": user_id, "name": name, "email": email})
    except IntegrityError:
        raise ValidationError("Email already exists")
    return get_user(user_id)


def delete_user(user_id) -> None:
    with transaction():
        result = execute(USER_QUERIES["DELETE"], {"id": user_id})
    if result.rowcount == 0:
        raise NotFoundError("User not found")


# ========================= Products =========================

def product_row(row: dict | None) -> dict | None:
    """Normalize driver-specific column types (SQLite floats/ints) for a product row."""
    if row is None:
        return None
    row = dict(row)
    row["price"] = to_decimal(row.get("price"), Decimal("0"))
    row["stock"] = parse_int(row.get("stock"), 0)
    row["is_featured"] = bool(row.get("is_featured"))
    row["is_bestseller"] = bool(row.get("is_bestseller"))
    return row


def _product_params(data: dict) -> dict:
    if missing_fields(data, ["name", "price"]):
        raise ValidationError(f"{NAME_REQUIRED} and {PRICE_REQUIRED}")

    price = to_decimal(data.get("price"))
    if price is None or not price.is_finite() or price <= 0:
        raise ValidationError("Price must be greater than 0")

    stock = parse_int(data.get("stock"), 0)
    if stock < 0:
        raise ValidationError("Stock cannot be negative")

    return {
        "name": str(data["name"]).strip(),
        "category": _clean(data.get("category")),
        "brand": _clean(data.get("brand")),
        "sku": _clean(data.get("sku")),
        "description": str(data.get("description") or "").strip(),
        "short_description": _clean(data.get("short_description")),
        "price": price.quantize(Decimal("0.01")),
        "stock": stock,
        "is_featured": as_bool(data.get("is_featured", data.get("isFeatured"))),
        "is_bestseller": as_bool(data.get("is_bestseller", data.get("isBestseller"))),
        "image_url": _clean(data.get("image_url")),
        "tags": _clean(data.get("tags")),
    }


def list_products() -> list[dict]:
    return [product_row(r) for r in fetch_all(PRODUCT_QUERIES["SELECT_ALL"])]


def featured_products(limit: int = 8) -> list[dict]:
    rows = fetch_all(PRODUCT_QUERIES["SELECT_FEATURED"], {"flag": True})
    if not rows:
        rows = fetch_all(PRODUCT_QUERIES["SELECT_ALL"])
    return [product_row(r) for r in rows[:limit]]


def find_product(product_id) -> dict | None:
    return product_row(fetch_one(PRODUCT_QUERIES["SELECT_BY_ID"], {"id": product_id}))


def get_product(product_id) -> dict:
    row = find_product(product_id)
    if row is None:
        raise NotFoundError("Product not found")
    return row


def get_product_by_slug(slug: str) -> dict:
    row = fetch_one(PRODUCT_QUERIES["SELECT_BY_SLUG"], {"slug": slug})
    if row is None and str(slug).isdigit():
        # products created before slugs existed are still reachable by id
        row = fetch_one(PRODUCT_QUERIES["SELECT_BY_ID"], {"id": int(slug)})
    if row is None:
        raise NotFoundError("Product not found")
    return product_row(row)


def create_product(data: dict) -> dict:
    params = _product_params(data)
    params["slug"] = unique_slug(slugify(data.get("slug") or params["name"]))
    with transaction():
        result = execute(PRODUCT_QUERIES["INSERT"], params)
    return get_product(result.lastrowid)


def update_product(product_id, data: dict) -> dict:
    params = _product_params(data)
    current = get_product(product_id)

    slug = current.get("slug")
    requested = slugify(data.get("slug")) if data.get("slug") else None
    if requested and requested != slug:
        slug = unique_slug(requested, exclude_id=current["id"])
    elif current.get("name") != params["name"] or not slug:
        slug = unique_slug(slugify(params["name"]), exclude_id=current["id"])

    params.update({"id": current["id"], "slug": slug})
    with transaction():
        execute(PRODUCT_QUERIES["UPDATE"], params)
    return get_product(current["id"])


def delete_product(product_id) -> None:
    """Hard delete; the order_items FK cascade removes the product's lines."""
    with transaction():
        result = execute(PRODUCT_QUERIES["DELETE"], {"id": product_id})
    if result.rowcount == 0:
        raise NotFoundError("Product not found")


def backfill_slugs() -> int:
    """Give every product without a slug a unique one; returns how many were set."""
    rows = fetch_all(PRODUCT_QUERIES["SELECT_WITHOUT_SLUG"])
    with transaction():
        for row in rows:
            base = slugify(row["name"]) or f"product-{row['id']}"
            execute(PRODUCT_QUERIES["UPDATE_SLUG"], {"id": row["id"], "slug": unique_slug(base)})
    return len(rows)
