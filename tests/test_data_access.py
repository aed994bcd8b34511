from decimal import Decimal

import pytest

from storefront.config import as_bool, engine_options
from storefront.data.access import execute, fetch_count, money, to_decimal, transaction
from storefront.data.queries import USER_QUERIES
from storefront.services.catalog import slugify, sort_rows, unique_slug


def test_transaction_rolls_back_on_error(ctx):
    with pytest.raises(RuntimeError):
        with transaction():
            execute(USER_QUERIES["INSERT"], {"name": "Temp", "email": "temp@example.com"})
            raise RuntimeError("abort")
    assert fetch_count(USER_QUERIES["COUNT"]) == 0


def test_transaction_commits(ctx):
    with transaction():
        execute(USER_QUERIES["INSERT"], {"name": "Kept", "email": "kept@example.com"})
    assert fetch_count(USER_QUERIES["COUNT"]) == 1


def test_money_rounds_half_up():
    assert money("2.345") == Decimal("2.35")
    assert money(None) == Decimal("0.00")
    assert money(29.99) == Decimal("29.99")


def test_to_decimal():
    assert to_decimal("abc") is None
    assert to_decimal("", Decimal("1")) == Decimal("1")
    assert to_decimal(0.1) == Decimal("0.1")


def test_slugify():
    assert slugify("Crème Brûlée!  Deluxe") == "creme-brulee-deluxe"
    assert slugify("  --Hello__World--  ") == "hello-world"
    assert slugify(None) == ""


def test_unique_slug_skips_taken(seeded, ctx):
    assert unique_slug("laptop") == "laptop-1"
    assert unique_slug("laptop", exclude_id=1) == "laptop"
    assert unique_slug("") == "product"


def test_sort_rows_puts_missing_last():
    rows = [{"n": "b"}, {"n": None}, {"n": "A"}]
    sorts = {"asc": ("n", False)}
    assert [r["n"] for r in sort_rows(rows, "asc", sorts, "asc")] == ["A", "b", None]


def test_engine_options():
    assert engine_options("sqlite:///x.db", 5) == {}
    opts = engine_options("mysql+pymysql://u:p@h/db", 5)
    assert opts["pool_size"] == 5
    assert opts["pool_pre_ping"] is True


@pytest.mark.parametrize(
    "val, expected",
    [(True, True), (False, False), ("on", True), (" YES ", True), ("1", True),
     ("0", False), ("off", False), (None, False), ("", False)],
)
def test_as_bool(val, expected):
    assert as_bool(val) is expected


def test_as_bool_default_only_for_missing():
    assert as_bool(None, True) is True
    assert as_bool("", True) is True
    assert as_bool("no", True) is False
