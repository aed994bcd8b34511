from storefront.data.access import execute, fetch_one, transaction
from storefront.data.queries import PRODUCT_QUERIES
from storefront.models import Admin


def test_init_db_and_seed(app):
    runner = app.test_cli_runner()
    assert "Tables created." in runner.invoke(args=["init-db"]).output

    result = runner.invoke(args=["seed"])
    assert result.exit_code == 0
    assert "Seeded 2 user(s) and 6 product(s)." in result.output
    assert "Seeded 0 user(s) and 0 product(s)." in runner.invoke(args=["seed"]).output


def test_create_admin(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-admin", "--username", "boss", "--password", "pw1"])
    assert result.exit_code == 0
    assert "Admin ready: boss" in result.output

    result = runner.invoke(args=["create-admin", "--username", "boss", "--password", "pw2"])
    assert "already exists" in result.output

    runner.invoke(args=["create-admin", "--username", "boss", "--password", "pw2", "--force"])
    with app.app_context():
        assert Admin.query.filter_by(username="boss").one().check_password("pw2")


def test_backfill_slugs(app):
    with app.app_context():
        with transaction():
            execute(
                "INSERT INTO products (name, price, stock) VALUES (:name, :price, :stock)",
                {"name": "Old Item", "price": "5.00", "stock": 1},
            )

    result = app.test_cli_runner().invoke(args=["backfill-slugs"])
    assert "Updated 1 product(s)." in result.output

    with app.app_context():
        assert fetch_one(PRODUCT_QUERIES["SELECT_BY_SLUG"], {"slug": "old-item"}) is not None
