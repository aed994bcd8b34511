# storefront/cart/store.py
from __future__ import annotations

from decimal import Decimal

from flask import g, session

from storefront.data.access import money
from storefront.services.catalog import find_product

SESSION_KEY = "cart"


class Cart:
    """
    Shopping cart kept in the Flask session as ``{product_id: quantity}``.

    Only product ids and quantities are stored; names and prices are read
    from the catalog every time lines are built, so the cart never shows a
    stale price.
    """

    def __init__(self, store=None):
        self._store = session if store is None else store

    # --- raw state -----------------------------------------------------------
    def _items(self) -> dict[str, int]:
        return dict(self._store.get(SESSION_KEY) or {})

    def _save(self, items: dict[str, int]) -> None:
        self._store[SESSION_KEY] = items
        if hasattr(self._store, "modified"):
            self._store.modified = True

    def quantities(self) -> dict[int, int]:
        return {int(pid): int(qty) for pid, qty in self._items().items()}

    def count(self) -> int:
        return sum(line["quantity"] for line in self.lines())

    def is_empty(self) -> bool:
        return not self.lines()

    # --- mutations -----------------------------------------------------------
    def add(self, product_id: int, quantity: int = 1) -> int:
        items = self._items()
        key = str(int(product_id))
        items[key] = int(items.get(key, 0)) + max(int(quantity), 1)
        self._save(items)
        return items[key]

    def update(self, product_id: int, quantity: int) -> None:
        items = self._items()
        key = str(int(product_id))
        if int(quantity) <= 0:
            items.pop(key, None)
        else:
            items[key] = int(quantity)
        self._save(items)

    def remove(self, product_id: int) -> None:
        self.update(product_id, 0)

    def clear(self) -> None:
        self._store.pop(SESSION_KEY, None)
        if hasattr(self._store, "modified"):
            self._store.modified = True

    # --- priced view ---------------------------------------------------------
    def lines(self) -> list[dict]:
        lines = []
        gone = []
        for product_id, quantity in self.quantities().items():
            product = find_product(product_id)
            if product is None:
                gone.append(product_id)
                continue
            price = money(product["price"])
            lines.append({
                "product_id": product_id,
                "product": product,
                "quantity": quantity,
                "price": price,
                "line_total": (price * quantity).quantize(Decimal("0.01")),
            })
        if gone:
            # deleted from the catalog since they were added
            items = self._items()
            for product_id in gone:
                items.pop(str(product_id), None)
            self._save(items)
        return lines

    def subtotal(self) -> Decimal:
        return sum((line["line_total"] for line in self.lines()), Decimal("0.00"))

    def order_items(self) -> list[dict]:
        return [
            {"product_id": line["product_id"], "quantity": line["quantity"]}
            for line in self.lines()
        ]


def get_cart() -> Cart:
    """The cart for the current request."""
    if "cart" not in g:
        g.cart = Cart()
    return g.cart
