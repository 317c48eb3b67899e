from unittest.mock import MagicMock

import bcrypt
import pytest
from flask import template_rendered

from cfp.config import Config
from cfp.models import Session, User, db
from cfp.webforms.webforms import create_app


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False


@pytest.fixture
def app():
    app = create_app(TestConfig)
    # fresh schema per test, dropped afterwards
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture(autouse=True)
def broker(mocker):
    """No test talks to a real RabbitMQ; returns the mocked channel."""
    channel = MagicMock()
    mocker.patch("cfp.producer.postman._get_channel", return_value=(MagicMock(), channel))
    return channel


@pytest.fixture
def captured_templates(app):
    recorded = []

    def record(sender, template, context, **extra):
        recorded.append((template, context))

    template_rendered.connect(record, app)
    yield recorded
    template_rendered.disconnect(record, app)


@pytest.fixture
def session_factory(app):
    def _session_factory(**attributes):
        defaults = {
            "title": "A Tale of Two Pythons",
            "description": "Subinterpreters in action.",
            "first_presenter_email": "presenter@example.com",
        }
        session = Session(**{**defaults, **attributes})
        session.build_presenters()
        db.session.add(session)
        db.session.commit()
        return session
    return _session_factory


@pytest.fixture
def user_factory(app):
    def _user_factory(email="presenter@example.com", password="secret", roles="presenter"):
        hashed = bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode()
        user = User(email=email, password=hashed, roles=roles)
        db.session.add(user)
        db.session.commit()
        return user
    return _user_factory


@pytest.fixture
def login_as(client, user_factory):
    def _login_as(roles):
        user = user_factory(email=f"{roles.replace(',', '-')}@example.com", roles=roles)
        with client.session_transaction() as sess:
            sess['user_id'] = user.id
        return user
    return _login_as


@pytest.fixture
def session_count(app):
    def _session_count():
        return db.session.scalar(db.select(db.func.count(Session.id)))
    return _session_count
