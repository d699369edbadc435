from flask import request
from prometheus_client import Histogram, Counter
from sqlalchemy import event
import time

from models import db

DB_QUERY_DURATION = Histogram(
    "storefront_db_query_duration_seconds",
    "Database statement duration in seconds, by statement verb",
    ["verb"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

HTTP_ERRORS = Counter(
    "storefront_http_errors_total",
    "API responses with status >= 400",
    ["endpoint", "method", "code"],
)

PAYMENT_GATEWAY_ERRORS = Counter(
    "storefront_payment_gateway_errors_total",
    "Failed calls to the payment gateway",
    ["operation"],
)

ORDERS_CREATED = Counter(
    "storefront_orders_created_total",
    "Orders created from confirmed payments",
)

ORDER_VALUE = Histogram(
    "storefront_order_value",
    "Order totals in major currency units",
    buckets=(5, 10, 25, 50, 100, 250, 500, 1000, 2500),
)

_START_KEY = "storefront_statement_start"


def statement_verb(statement: str) -> str:
    """First keyword of a SQL statement, lower-cased (``select``, ``insert`` ...)."""
    words = (statement or "").lstrip().split(None, 1)
    return words[0].lower() if words else "unknown"


def record_order(order):
    ORDERS_CREATED.inc()
    if order.total_amount is not None:
        ORDER_VALUE.observe(float(order.total_amount))


def init_app(app):
    """Time every statement on the app's engine and count error responses."""

    with app.app_context():
        engine = db.engine

    @event.listens_for(engine, "before_cursor_execute")
    def _statement_started(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault(_START_KEY, []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def _statement_finished(conn, cursor, statement, parameters, context, executemany):
        starts = conn.info.get(_START_KEY)
        if starts:
            DB_QUERY_DURATION.labels(statement_verb(statement)).observe(time.perf_counter() - starts.pop())

    @app.after_request
    def _count_errors(resp):
        if resp.status_code >= 400:
            HTTP_ERRORS.labels(request.endpoint or "unknown", request.method, resp.status_code).inc()
        return resp
