import dataclasses
import os
import sys
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault('APP_ENV', 'testing')

from app.exceptions import PaymentGatewayError  # noqa: E402
from app.services.gateway import PaymentIntent  # noqa: E402
from app.services.users import issue_session  # noqa: E402
from models import db  # noqa: E402
from models.address import UserAddress  # noqa: E402
from models.catalog import Product  # noqa: E402
from models.user import User  # noqa: E402


@pytest.fixture
def build_app():
    """Factory for a fresh app on its own in-memory database with config overrides."""
    from app import create_app
    from app.config import TestingConfig

    def _build(**overrides):
        config = type('OverrideConfig', (TestingConfig,), overrides)
        return create_app(config)

    return _build


@pytest.fixture(scope='session')
def app_instance():
    from app import create_app
    from app.config import TestingConfig
    return create_app(TestingConfig)


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
    yield app_instance
    with app_instance.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user with a live session; returns ``(user_id, headers)``."""
    counter = {'n': 0}

    def _make(email=None, role='user', password='secret123', first_name='Sam', last_name='Shopper'):
        counter['n'] += 1
        email = email or f'user{counter["n"]}@example.com'
        with app.app_context():
            user = User(
                email=email,
                password_hash=generate_password_hash(password),
                first_name=first_name,
                last_name=last_name,
                role=role,
            )
            db.session.add(user)
            db.session.flush()
            token = issue_session(user)
            db.session.commit()
            return user.id, {'Authorization': f'Bearer {token}'}

    return _make


@pytest.fixture
def user_headers(make_user):
    return make_user(email='shopper@example.com')


@pytest.fixture
def admin_headers(make_user):
    return make_user(email='boss@example.com', role='admin', first_name='Ada', last_name='Admin')


@pytest.fixture
def make_product(app):
    def _make(name='Linen Shirt', price='25.00', **fields):
        fields.setdefault('category', 'Apparel')
        with app.app_context():
            product = Product(name=name, price=Decimal(str(price)), **fields)
            db.session.add(product)
            db.session.commit()
            return product.id

    return _make


@pytest.fixture
def make_address(app):
    def _make(user_id, **fields):
        data = {
            'type': 'shipping',
            'first_name': 'Sam',
            'last_name': 'Shopper',
            'phone': '+15550100',
            'address': '1 Market Street',
            'country': 'US',
            'is_default': True,
        }
        data.update(fields)
        with app.app_context():
            address = UserAddress(user_id=user_id, **data)
            db.session.add(address)
            db.session.commit()
            return address.id

    return _make


class FakeGateway:
    """In-process stand-in for the Stripe adapter."""

    def __init__(self):
        self.intents = {}
        self.created = []
        self.fail = False

    def create_intent(self, amount_minor, currency, metadata):
        if self.fail:
            raise PaymentGatewayError('Failed to create payment intent')
        intent_id = f'pi_test_{len(self.intents) + 1}'
        intent = PaymentIntent(
            id=intent_id,
            status='requires_payment_method',
            amount=amount_minor,
            currency=currency,
            client_secret=f'{intent_id}_secret',
            metadata=dict(metadata),
        )
        self.intents[intent_id] = intent
        self.created.append(intent)
        return intent

    def retrieve_intent(self, intent_id):
        if self.fail or intent_id not in self.intents:
            raise PaymentGatewayError('Failed to retrieve payment intent')
        return self.intents[intent_id]

    def succeed(self, intent_id):
        self.intents[intent_id] = dataclasses.replace(self.intents[intent_id], status='succeeded')

    def add_intent(self, intent_id, amount, user_id, status='succeeded'):
        self.intents[intent_id] = PaymentIntent(
            id=intent_id,
            status=status,
            amount=amount,
            currency='usd',
            client_secret=f'{intent_id}_secret',
            metadata={'userId': str(user_id)},
        )
        return self.intents[intent_id]


@pytest.fixture
def gateway(app, monkeypatch):
    fake = FakeGateway()
    monkeypatch.setattr(app, 'payment_gateway', fake)
    return fake
