"""Tests for configuration selection via APP_ENV."""
import importlib

import pytest

import app.config as config_module


@pytest.fixture
def load_config(monkeypatch):
    def _load(env):
        for key, value in env.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)
        module = importlib.reload(config_module)
        return module.get_config_class()

    yield _load
    monkeypatch.undo()
    importlib.reload(config_module)


def test_testing_config_uses_memory_db(load_config):
    cfg = load_config({'APP_ENV': 'testing', 'TEST_DATABASE_URL': None})
    assert cfg.TESTING is True
    assert cfg.SQLALCHEMY_DATABASE_URI == 'sqlite:///:memory:'


def test_development_defaults(load_config):
    cfg = load_config({'APP_ENV': 'development', 'DATABASE_URL': None, 'PAYMENT_METADATA_VALUE_LIMIT': None})
    assert cfg.DEBUG is True
    assert cfg.SQLALCHEMY_DATABASE_URI == 'sqlite:///dev.db'
    assert cfg.ACCESS_TOKEN_LIFETIME_DAYS == 7
    assert cfg.PAYMENT_METADATA_VALUE_LIMIT == 500
    assert cfg.DEFAULT_CURRENCY == 'usd'


def test_env_overrides(load_config):
    cfg = load_config({'APP_ENV': 'development', 'MAX_PAGE_SIZE': '25', 'CHECKOUT_LIMIT_PER_IP': '5 per minute'})
    assert cfg.MAX_PAGE_SIZE == 25
    assert cfg.CHECKOUT_LIMIT_PER_IP == '5 per minute'


def test_production_requires_secrets(load_config):
    with pytest.raises(RuntimeError) as exc:
        load_config({
            'APP_ENV': 'production',
            'SECRET_KEY': 'prod-secret',
            'DATABASE_URL': 'postgresql://db/shop',
            'JWT_SECRET': None,
            'STRIPE_SECRET_KEY': None,
        })
    assert 'JWT_SECRET' in str(exc.value)
    assert 'STRIPE_SECRET_KEY' in str(exc.value)


def test_production_with_secrets(load_config):
    cfg = load_config({
        'APP_ENV': 'production',
        'SECRET_KEY': 'prod-secret',
        'DATABASE_URL': 'postgresql://db/shop',
        'JWT_SECRET': 'jwt',
        'STRIPE_SECRET_KEY': 'sk_live_x',
    })
    assert cfg.DEBUG is False
    assert cfg.SQLALCHEMY_DATABASE_URI == 'postgresql://db/shop'
