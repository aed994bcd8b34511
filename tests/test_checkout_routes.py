from storefront.errors import NotFoundError
from storefront.extensions import mail
from storefront.services import orders as order_service
from conftest import MOUSE, WEBCAM

BILLING = {
    "step": "billing",
    "action": "next",
    "first_name": "Jo",
    "last_name": "Park",
    "email": "jo@example.com",
    "phone": "555-0100",
}
SHIPPING = {
    "step": "shipping",
    "action": "next",
    "address": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "United States",
    "shipping_method": "express",
}
PAYMENT = {
    "step": "payment",
    "action": "place",
    "card_number": "4111 1111 1111 1234",
    "card_name": "Jo Park",
    "expiry_date": "12/30",
    "cvv": "123",
}


def _fill_cart(client):
    # 89.99 + 2 x 29.99 = 149.97
    client.post("/cart/add", data={"product_id": WEBCAM})
    client.post("/cart/add", data={"product_id": MOUSE, "quantity": 2})


def test_empty_cart_redirects_to_cart(client, seeded):
    res = client.get("/checkout/")
    assert res.status_code == 302
    assert res.headers["Location"].endswith("/cart/")


def test_full_checkout(client, seeded, app):
    _fill_cart(client)

    page = client.get("/checkout/")
    assert page.status_code == 200
    assert b"Billing information" in page.data
    assert b"$149.97" in page.data

    assert client.post("/checkout/", data=BILLING).status_code == 302
    assert b'name="address"' in client.get("/checkout/").data

    assert client.post("/checkout/", data=SHIPPING).status_code == 302
    page = client.get("/checkout/")
    assert b'name="card_number"' in page.data
    assert b"$175.96" in page.data

    with mail.record_messages() as outbox:
        res = client.post("/checkout/", data=PAYMENT)
    assert res.status_code == 302
    assert "/checkout/success/" in res.headers["Location"]

    page = client.get(res.headers["Location"])
    assert page.status_code == 200
    assert b"Order placed successfully!" in page.data
    assert b"$175.96" in page.data
    assert b"card ending 1234" in page.data

    users = client.get("/api/users").get_json()["data"]
    buyer = next(u for u in users if u["email"] == "jo@example.com")
    assert buyer["name"] == "Jo Park"

    orders = client.get(f"/api/orders?user_id={buyer['id']}").get_json()["data"]
    assert len(orders) == 1
    assert orders[0]["total"] == 149.97

    assert [m.recipients for m in outbox] == [["jo@example.com"]]

    # cart and wizard are reset
    assert b"Cart (0)" in client.get("/cart/").data
    with client.session_transaction() as sess:
        assert "checkout" not in sess


def test_invalid_step_rerenders_with_errors(client, seeded):
    _fill_cart(client)
    res = client.post("/checkout/", data={**BILLING, "email": "nope"})
    assert res.status_code == 400
    assert b"Enter a valid email address" in res.data
    # typed values survive the re-render
    assert b'value="Jo"' in res.data


def test_steps_cannot_be_skipped(client, seeded):
    _fill_cart(client)
    res = client.post("/checkout/", data=SHIPPING)
    assert res.status_code == 302
    assert b"Billing information" in client.get("/checkout/").data

    # deep links land on the current step
    res = client.get("/checkout/payment")
    assert res.status_code == 302
    assert res.headers["Location"].endswith("/checkout/")


def test_back_keeps_entered_values(client, seeded):
    _fill_cart(client)
    client.post("/checkout/", data=BILLING)
    client.post("/checkout/", data={"step": "shipping", "action": "back"})
    page = client.get("/checkout/")
    assert b"Billing information" in page.data
    assert b'value="jo@example.com"' in page.data


def test_bad_card_does_not_place_order(client, seeded):
    _fill_cart(client)
    client.post("/checkout/", data=BILLING)
    client.post("/checkout/", data=SHIPPING)

    res = client.post("/checkout/", data={**PAYMENT, "cvv": "1"})
    assert res.status_code == 400
    assert b"CVV must be 3 or 4 digits" in res.data
    assert client.get("/api/orders").get_json()["data"] == []


def test_existing_customer_is_reused(client, seeded):
    _fill_cart(client)
    client.post("/checkout/", data={**BILLING, "email": "john@example.com"})
    client.post("/checkout/", data=SHIPPING)
    client.post("/checkout/", data=PAYMENT)

    orders = client.get("/api/orders?user_id=1").get_json()["data"]
    assert len(orders) == 1
    assert len(client.get("/api/users").get_json()["data"]) == 2


def test_success_page_needs_matching_session(client, seeded):
    res = client.get("/checkout/success/1")
    assert res.status_code == 302
    assert res.headers["Location"].endswith("/")


def test_failed_order_keeps_cart_and_wizard(client, seeded, monkeypatch):
    _fill_cart(client)
    client.post("/checkout/", data=BILLING)
    client.post("/checkout/", data=SHIPPING)

    def out_of_catalog(payload):
        raise NotFoundError(f"Product {WEBCAM} not found")

    monkeypatch.setattr(order_service, "place_order", out_of_catalog)
    res = client.post("/checkout/", data=PAYMENT)

    assert res.status_code == 404
    assert f"Product {WEBCAM} not found".encode() in res.data
    # the payment step is shown again with what was typed
    assert b'name="card_number"' in res.data
    with client.session_transaction() as sess:
        assert sess["cart"] == {str(WEBCAM): 1, str(MOUSE): 2}
        assert sess["checkout"]["step"] == "payment"
        assert "last_order" not in sess
    assert client.get("/api/orders").get_json()["data"] == []
