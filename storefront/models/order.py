# storefront/models/order.py
from storefront.extensions import db

ORDER_STATUSES = ("pending", "completed", "cancelled")


class Order(db.Model):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # sum of item price snapshots at creation; never recomputed
    total = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.String(50), nullable=False, server_default="pending")

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    items = db.relationship("OrderItem", backref="order", lazy=True, passive_deletes=True)

    def __repr__(self):
        return f"<Order #{self.id} user={self.user_id} total={self.total} {self.status}>"
