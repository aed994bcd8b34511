"""product catalog fields and unique slug

Revision ID: 9b7d3f51c2e4
Revises: 4e1a0c2b9d10
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
import re
import unicodedata

# revision identifiers, used by Alembic.
revision = "9b7d3f51c2e4"
down_revision = "4e1a0c2b9d10"
branch_labels = None
depends_on = None


def _slugify(val: str) -> str:
    raw = (val or "").strip().lower()
    normalized = unicodedata.normalize("NFKD", raw)
    normalized = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    normalized = re.sub(r"[^\w\s-]", "", normalized, flags=re.ASCII)
    return re.sub(r"[\s_-]+", "-", normalized).strip("-")


def _make_unique(existing: set[str], base: str) -> str:
    candidate = base
    idx = 1
    while candidate in existing:
        candidate = f"{base}-{idx}"
        idx += 1
    existing.add(candidate)
    return candidate


def upgrade():
    with op.batch_alter_table("products", schema=None) as batch_op:
        batch_op.add_column(sa.Column("slug", sa.String(length=255), nullable=True))
        batch_op.add_column(sa.Column("category", sa.String(length=100), nullable=True))
        batch_op.add_column(sa.Column("brand", sa.String(length=100), nullable=True))
        batch_op.add_column(sa.Column("sku", sa.String(length=100), nullable=True))
        batch_op.add_column(sa.Column("short_description", sa.String(length=500), nullable=True))
        batch_op.add_column(
            sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false())
        )
        batch_op.add_column(
            sa.Column("is_bestseller", sa.Boolean(), nullable=False, server_default=sa.false())
        )
        batch_op.add_column(sa.Column("image_url", sa.String(length=500), nullable=True))
        batch_op.add_column(sa.Column("tags", sa.String(length=500), nullable=True))

    # fill slugs before the unique index goes on
    bind = op.get_bind()
    existing: set[str] = set()
    rows = list(bind.execute(sa.text("SELECT id, name FROM products ORDER BY id")))
    for row in rows:
        slug = _make_unique(existing, _slugify(row.name) or f"product-{row.id}")
        bind.execute(
            sa.text("UPDATE products SET slug = :slug WHERE id = :id"),
            {"slug": slug, "id": row.id},
        )

    op.create_index("ix_products_slug", "products", ["slug"], unique=True)


def downgrade():
    op.drop_index("ix_products_slug", table_name="products")
    with op.batch_alter_table("products", schema=None) as batch_op:
        for col in (
            "tags", "image_url", "is_bestseller", "is_featured",
            "short_description", "sku", "brand", "category", "slug",
        ):
            batch_op.drop_column(col)
