# storefront/models/user.py
from storefront.extensions import db


class User(db.Model):
    """A storefront customer. Orders reference it; back-office logins live in `Admin`."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    orders = db.relationship("Order", backref="user", lazy=True, passive_deletes=True)

    def __repr__(self):
        return f"<User {self.name} email={self.email}>"
