# storefront/data/queries.py
"""
SQL catalog. Every statement the application runs lives here, keyed by
entity, and takes named bind parameters only (``:id``, ``:name`` ...).
"""

USERS = "users"
PRODUCTS = "products"
ORDERS = "orders"
ORDER_ITEMS = "order_items"


USER_QUERIES = {
    "SELECT_ALL": f"SELECT * FROM {USERS} ORDER BY created_at DESC, id DESC",
    "SELECT_BY_ID": f"SELECT * FROM {USERS} WHERE id = :id",
    "SELECT_BY_EMAIL": f"SELECT * FROM {USERS} WHERE email = :email",
    "INSERT": f"INSERT INTO {USERS} (name, email) VALUES (:name, :email)",
    "UPDATE": (
        f"UPDATE {USERS} SET name = :name, email = :email, updated_at = CURRENT_TIMESTAMP "
        "WHERE id = :id"
    ),
    "DELETE": f"DELETE FROM {USERS} WHERE id = :id",
    "COUNT": f"SELECT COUNT(*) AS n FROM {USERS}",
}


PRODUCT_QUERIES = {
    "SELECT_ALL": f"SELECT * FROM {PRODUCTS} ORDER BY created_at DESC, id DESC",
    "SELECT_BY_ID": f"SELECT * FROM {PRODUCTS} WHERE id = :id",
    "SELECT_BY_SLUG": f"SELECT * FROM {PRODUCTS} WHERE slug = :slug",
    "SELECT_PRICE": f"SELECT id, name, price FROM {PRODUCTS} WHERE id = :id",
    "SELECT_SLUGS": f"SELECT id, slug FROM {PRODUCTS} WHERE slug IS NOT NULL",
    "SELECT_WITHOUT_SLUG": f"SELECT id, name FROM {PRODUCTS} WHERE slug IS NULL OR slug = ''",
    "SELECT_FEATURED": (
        f"SELECT * FROM {PRODUCTS} WHERE is_featured = :flag ORDER BY created_at DESC, id DESC"
    ),
    "SELECT_BY_NAME": f"SELECT * FROM {PRODUCTS} WHERE name = :name",
    "INSERT": f"""
        INSERT INTO {PRODUCTS}
            (name, slug, category, brand, sku, description, short_description,
             price, stock, is_featured, is_bestseller, image_url, tags)
        VALUES
            (:name, :slug, :category, :brand, :sku, :description, :short_description,
             :price, :stock, :is_featured, :is_bestseller, :image_url, :tags)
    """,
    "UPDATE": f"""
        UPDATE {PRODUCTS}
        SET
            name = :name,
            slug = :slug,
            category = :category,
            brand = :brand,
            sku = :sku,
            description = :description,
            short_description = :short_description,
            price = :price,
            stock = :stock,
            is_featured = :is_featured,
            is_bestseller = :is_bestseller,
            image_url = :image_url,
            tags = :tags,
            updated_at = CURRENT_TIMESTAMP
        WHERE id = :id
    """,
    "UPDATE_SLUG": f"UPDATE {PRODUCTS} SET slug = :slug WHERE id = :id",
    "DELETE": f"DELETE FROM {PRODUCTS} WHERE id = :id",
    "COUNT": f"SELECT COUNT(*) AS n FROM {PRODUCTS}",
}


ORDER_QUERIES = {
    "SELECT_ALL": f"""
        SELECT
            o.*,
            u.name AS user_name,
            u.email AS user_email
        FROM {ORDERS} o
        LEFT JOIN {USERS} u ON o.user_id = u.id
        ORDER BY o.created_at DESC, o.id DESC
    """,
    "SELECT_BY_ID": f"""
        SELECT
            o.*,
            u.name AS user_name,
            u.email AS user_email
        FROM {ORDERS} o
        LEFT JOIN {USERS} u ON o.user_id = u.id
        WHERE o.id = :id
    """,
    "SELECT_BY_USER": f"""
        SELECT
            o.*,
            u.name AS user_name,
            u.email AS user_email
        FROM {ORDERS} o
        LEFT JOIN {USERS} u ON o.user_id = u.id
        WHERE o.user_id = :user_id
        ORDER BY o.created_at DESC, o.id DESC
    """,
    "INSERT": f"INSERT INTO {ORDERS} (user_id, total, status) VALUES (:user_id, :total, :status)",
    "UPDATE_STATUS": (
        f"UPDATE {ORDERS} SET status = :status, updated_at = CURRENT_TIMESTAMP WHERE id = :id"
    ),
    "COUNT": f"SELECT COUNT(*) AS n FROM {ORDERS}",
    "COUNT_BY_STATUS": f"SELECT COUNT(*) AS n FROM {ORDERS} WHERE status = :status",
}


ORDER_ITEM_QUERIES = {
    "SELECT_BY_ORDER_ID": f"""
        SELECT
            oi.*,
            p.name AS product_name,
            p.slug AS product_slug
        FROM {ORDER_ITEMS} oi
        LEFT JOIN {PRODUCTS} p ON oi.product_id = p.id
        WHERE oi.order_id = :order_id
        ORDER BY oi.id ASC
    """,
    "INSERT": (
        f"INSERT INTO {ORDER_ITEMS} (order_id, product_id, quantity, price) "
        "VALUES (:order_id, :product_id, :quantity, :price)"
    ),
    "COUNT_BY_PRODUCT": f"SELECT COUNT(*) AS n FROM {ORDER_ITEMS} WHERE product_id = :product_id",
}
