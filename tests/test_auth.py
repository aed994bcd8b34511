from storefront.extensions import db
from storefront.models import Admin


def _add_admin(app, username="admin", password="s3cret"):
    with app.app_context():
        admin = Admin(username=username)
        admin.set_password(password)
        db.session.add(admin)
        db.session.commit()


def test_back_office_requires_login(secured_app):
    client = secured_app.test_client()
    res = client.get("/admin/products")
    assert res.status_code == 302
    assert "/admin/login" in res.headers["Location"]


def test_login_and_logout(secured_app):
    _add_admin(secured_app)
    client = secured_app.test_client()

    res = client.post("/admin/login", data={"username": "admin", "password": "wrong"})
    assert res.status_code == 401
    assert b"Invalid username or password." in res.data

    res = client.post(
        "/admin/login?next=/admin/orders", data={"username": "admin", "password": "s3cret"}
    )
    assert res.status_code == 302
    assert res.headers["Location"].endswith("/admin/orders")
    assert client.get("/admin/").status_code == 200

    client.post("/admin/logout")
    assert client.get("/admin/").status_code == 302


def test_login_ignores_offsite_next(secured_app):
    _add_admin(secured_app)
    client = secured_app.test_client()
    res = client.post(
        "/admin/login?next=//evil.example", data={"username": "admin", "password": "s3cret"}
    )
    assert res.headers["Location"].endswith("/admin/")


def test_password_hashing(ctx):
    admin = Admin(username="x")
    admin.set_password("pw")
    assert admin.password_hash != "pw"
    assert admin.check_password("pw")
    assert not admin.check_password("other")
