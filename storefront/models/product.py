# storefront/models/product.py
from storefront.extensions import db


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=True, index=True)
    category = db.Column(db.String(100), nullable=True)
    brand = db.Column(db.String(100), nullable=True)
    sku = db.Column(db.String(100), nullable=True)
    description = db.Column(db.Text, nullable=True)
    short_description = db.Column(db.String(500), nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    stock = db.Column(db.Integer, nullable=False, server_default="0")
    is_featured = db.Column(db.Boolean, nullable=False, server_default=db.false())
    is_bestseller = db.Column(db.Boolean, nullable=False, server_default=db.false())
    image_url = db.Column(db.String(500), nullable=True)
    tags = db.Column(db.String(500), nullable=True)

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    order_items = db.relationship("OrderItem", backref="product", lazy=True, passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Product {self.name}>"
