# storefront/services/setup.py
from __future__ import annotations

from decimal import Decimal

from flask import current_app

from storefront import models as _models  # noqa: F401  (registers tables on db.metadata)
from storefront.data.access import execute, fetch_one, transaction
from storefront.data.queries import PRODUCT_QUERIES, USER_QUERIES
from storefront.extensions import db
from storefront.services.catalog import slugify, unique_slug

SAMPLE_USERS = [
    ("John Doe", "john@example.com"),
    ("Jane Smith", "jane@example.com"),
]

SAMPLE_PRODUCTS = [
    ("Laptop", "High-performance laptop with latest processor", "999.99", 10, "Computers", True),
    ("Wireless Mouse", "Ergonomic wireless mouse with long battery life", "29.99", 50, "Accessories", False),
    ("Mechanical Keyboard", "RGB mechanical keyboard with blue switches", "79.99", 30, "Accessories", True),
    ("Monitor", "27-inch 4K UHD monitor with HDR support", "349.99", 15, "Displays", True),
    ("Webcam", "1080p HD webcam with auto-focus", "89.99", 25, "Accessories", False),
    ("Headphones", "Wireless noise-cancelling headphones", "199.99", 20, "Audio", False),
]


def create_schema() -> None:
    db.create_all()


def seed() -> dict:
    """Insert the sample rows that are not there yet. Safe to run repeatedly."""
    added = {"users": 0, "products": 0}
    with transaction():
        for name, email in SAMPLE_USERS:
            if fetch_one(USER_QUERIES["SELECT_BY_EMAIL"], {"email": email}) is None:
                execute(USER_QUERIES["INSERT"], {"name": name, "email": email})
                added["users"] += 1

        for name, description, price, stock, category, featured in SAMPLE_PRODUCTS:
            if fetch_one(PRODUCT_QUERIES["SELECT_BY_NAME"], {"name": name}) is not None:
                continue
            execute(
                PRODUCT_QUERIES["INSERT"],
                {
                    "name": name,
                    "slug": unique_slug(slugify(name)),
                    "category": category,
                    "brand": None,
                    "sku": None,
                    "description": description,
                    "short_description": None,
                    "price": Decimal(price),
                    "stock": stock,
                    "is_featured": featured,
                    "is_bestseller": False,
                    "image_url": None,
                    "tags": None,
                },
            )
            added["products"] += 1
    return added


def init_database() -> dict:
    create_schema()
    added = seed()
    current_app.logger.info(
        "database initialized: %s new user(s), %s new product(s)", added["users"], added["products"]
    )
    return {"message": "Database initialized successfully with sample data", "seeded": added}
