import pytest

from storefront.app import create_app
from storefront.config import TestConfig
from storefront.extensions import db
from storefront.services.setup import init_database

# ids of the sample rows, in insert order
JOHN, JANE = 1, 2
LAPTOP, MOUSE, KEYBOARD, MONITOR, WEBCAM, HEADPHONES = 1, 2, 3, 4, 5, 6


def _make_app(tmp_path, **overrides):
    app = create_app(
        TestConfig,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'test.db'}",
        **overrides,
    )
    with app.app_context():
        db.create_all()
    return app


@pytest.fixture
def app(tmp_path):
    app = _make_app(tmp_path)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def secured_app(tmp_path):
    app = _make_app(tmp_path, LOGIN_DISABLED=False)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(app):
    with app.app_context():
        init_database()
    return app


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield
