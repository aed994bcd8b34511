from smtplib import SMTPException

from storefront.extensions import mail
from storefront.services import notifications

ORDER = {
    "id": 7,
    "user_name": "John Doe",
    "user_email": "john@example.com",
    "total": 59.98,
    "status": "pending",
    "items": [{"product_id": 2, "product_name": "Wireless Mouse", "quantity": 2, "price": 29.99}],
}


def test_confirmation_goes_to_buyer(app, ctx):
    with mail.record_messages() as outbox:
        assert notifications.send_order_confirmation(ORDER) is True

    assert len(outbox) == 1
    msg = outbox[0]
    assert msg.subject == "Order confirmation #7"
    assert msg.recipients == ["john@example.com"]
    assert msg.sender == "shop@example.com"
    assert msg.charset == "utf-8"
    assert "Wireless Mouse x 2 @ $29.99" in msg.body
    assert "Order total: $59.98" in msg.body


def test_shop_owner_copy(app, ctx):
    app.config["ORDER_NOTIFY_EMAIL"] = "owner@example.com"
    with mail.record_messages() as outbox:
        notifications.send_order_confirmation(ORDER)
    assert [m.recipients for m in outbox] == [["john@example.com"], ["owner@example.com"]]


def test_disabled(app, ctx):
    app.config["SEND_ORDER_EMAILS"] = False
    with mail.record_messages() as outbox:
        assert notifications.send_order_confirmation(ORDER) is False
    assert outbox == []


def test_mail_failure_does_not_raise(app, ctx, monkeypatch):
    def refuse(**kwargs):
        raise SMTPException("relay denied")

    monkeypatch.setattr(notifications, "send_email", refuse)
    assert notifications.send_order_confirmation(ORDER) is False


def test_order_survives_mail_failure(client, seeded, monkeypatch):
    def refuse(**kwargs):
        raise OSError("connection refused")

    monkeypatch.setattr(notifications, "send_email", refuse)
    res = client.post("/api/orders", json={"user_id": 1, "items": [{"product_id": 2}]})
    assert res.status_code == 201
    assert len(client.get("/api/orders").get_json()["data"]) == 1
