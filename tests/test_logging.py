import json
import logging

from app.logging import JsonFormatter, MaskingFilter


def test_request_id_header_and_propagation(client):
    resp = client.get("/__ok", headers={"X-Request-ID": "my-fixed-id-123"})
    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == "my-fixed-id-123"


def test_logs_include_request_id_attribute(client, caplog):
    caplog.set_level("INFO")
    resp = client.get("/__log", headers={"X-Request-ID": "rid-abc"})
    assert resp.status_code == 200
    line = next(r for r in caplog.records if r.getMessage() == "test log line")
    assert line.request_id == "rid-abc"
    assert line.user_id == "anonymous"
    assert len(line.trace_id) == 32


def test_logs_carry_user_id(client, caplog, gateway, user_headers):
    user_id, headers = user_headers
    caplog.set_level("INFO")
    client.post(
        "/api/stripe/create-payment-intent",
        json={"amount": 5, "cartItems": [{"id": 1, "name": "Cap", "quantity": 1, "price": 5}],
              "shippingAddress": {"first_name": "Sam", "address": "1 Market Street", "country": "US"}},
        headers=headers,
    )
    created = next(r for r in caplog.records if r.getMessage().startswith("payment intent created"))
    assert created.user_id == str(user_id)
    assert created.request_id != "n/a"


def test_sensitive_fields_masked_in_info(monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "testing")
    caplog.set_level("INFO")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test")
    logger.info({"email": "user@example.com", "password": "hunter2", "clientSecret": "cs_1", "order": 7})
    record = next(r for r in caplog.records if r.name == "mask_test")
    assert isinstance(record.msg, dict)
    assert record.msg["email"] == "[REDACTED]"
    assert record.msg["password"] == "[REDACTED]"
    assert record.msg["clientSecret"] == "[REDACTED]"
    assert record.msg["order"] == 7


def test_sensitive_fields_visible_in_debug(monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "development")
    caplog.set_level("DEBUG")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test_debug")
    logger.debug({"password": "secret"})
    record = next(r for r in caplog.records if r.name == "mask_test_debug")
    assert record.msg["password"] == "secret"


def test_debug_masked_in_production(monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "production")
    caplog.set_level("DEBUG")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test_prod")
    logger.debug({"token": "abc"})
    record = next(r for r in caplog.records if r.name == "mask_test_prod")
    assert record.msg["token"] == "[REDACTED]"


def test_json_formatter_output():
    record = logging.LogRecord("orders", logging.INFO, __file__, 1, "order created id=%s", (5,), None)
    record.request_id = "rid-1"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "order created id=5"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "rid-1"
    assert payload["trace_id"] == "n/a"
