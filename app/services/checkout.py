"""Checkout workflow: cart -> payment intent -> confirmed order.

Creating an intent touches only the gateway. Confirming re-reads the
caller's cart and default shipping address from the database and writes
the order, its items and the cart clear in one transaction. An order is
keyed by its payment intent, so a repeated confirm returns the order the
first one created.
"""
import json
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from sqlalchemy.exc import IntegrityError

from app.exceptions import ForbiddenError, MetadataTooLarge, ValidationError
from app.metrics import record_order
from app.services.addresses import default_shipping_address
from app.services.cart import active_cart_rows
from app.utils.db import transactional
from models import db, utcnow
from models.cart import CartItem
from models.order import Order, OrderItem

log = logging.getLogger(__name__)

CART_NAME_LIMIT = 30
ADDRESS_LIMIT = 50
SUCCEEDED = "succeeded"


def to_minor_units(amount) -> int:
    """Convert a major-unit amount to integer minor units, rounding half up."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a number")
    if not value.is_finite() or value <= 0:
        raise ValidationError("Amount must be greater than zero")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def condense_cart_items(cart_items):
    condensed = []
    for item in cart_items:
        condensed.append({
            "id": item.get("id"),
            "name": str(item.get("name") or "")[:CART_NAME_LIMIT],
            "qty": item.get("quantity", item.get("qty")),
            "price": item.get("price"),
        })
    return condensed


def condense_shipping_address(address):
    return {
        "name": f"{address.get('first_name', '')} {address.get('last_name', '')}".strip(),
        "address": str(address.get("address") or "")[:ADDRESS_LIMIT],
        "country": address.get("country"),
    }


def build_metadata(user_id, cart_items, shipping_address, value_limit):
    """Condensed metadata bag; refuses values the gateway would reject."""
    metadata = {
        "userId": str(user_id),
        "cartItems": json.dumps(condense_cart_items(cart_items), separators=(",", ":")),
        "shippingAddress": json.dumps(condense_shipping_address(shipping_address), separators=(",", ":")),
        "itemCount": str(len(cart_items)),
    }
    for key, value in metadata.items():
        if len(value) > value_limit:
            raise MetadataTooLarge(
                f"Payment metadata '{key}' is {len(value)} characters; the limit is {value_limit}"
            )
    return metadata


def create_payment_intent(user, payload, gateway, value_limit, default_currency="usd"):
    amount = payload.get("amount")
    cart_items = payload.get("cartItems")
    shipping_address = payload.get("shippingAddress")
    if not amount or not cart_items or not shipping_address:
        raise ValidationError("Missing required payment information")
    if not isinstance(cart_items, list) or not isinstance(shipping_address, dict):
        raise ValidationError("cartItems must be a list and shippingAddress an object")
    if not all(isinstance(item, dict) for item in cart_items):
        raise ValidationError("Each cart item must be an object")

    amount_minor = to_minor_units(amount)
    currency = str(payload.get("currency") or default_currency).lower()
    metadata = build_metadata(user.id, cart_items, shipping_address, value_limit)

    intent = gateway.create_intent(amount_minor, currency, metadata)
    log.info("payment intent created id=%s amount=%s currency=%s", intent.id, amount_minor, currency)
    return {"clientSecret": intent.client_secret, "paymentIntentId": intent.id}


def _existing_order(intent_id, user):
    order = Order.query.filter_by(payment_intent_id=intent_id).first()
    if order is not None and order.user_id != user.id:
        raise ForbiddenError("Payment belongs to another user")
    return order


def _apply_address(order, address):
    order.shipping_address = address.to_dict()
    for prefix in ("shipping", "billing"):
        setattr(order, f"{prefix}_first_name", address.first_name)
        setattr(order, f"{prefix}_last_name", address.last_name)
        setattr(order, f"{prefix}_phone", address.phone)
        setattr(order, f"{prefix}_address_line_1", address.address)
        setattr(order, f"{prefix}_city", address.region or "N/A")
        setattr(order, f"{prefix}_state", address.county or "N/A")
        setattr(order, f"{prefix}_postal_code", "00000")
        setattr(order, f"{prefix}_country", address.country)
    order.shipping_address_line_2 = address.additional_info


def _order_number(order):
    created = order.created_at or utcnow()
    return f"ORD-{created:%Y%m%d}-{order.id:06d}"


def confirm_payment(user, intent_id, gateway):
    """Turn a succeeded payment intent into an order.

    Returns ``(order, already_processed)``.
    """
    if not intent_id:
        raise ValidationError("paymentIntentId is required")

    existing = _existing_order(intent_id, user)
    if existing is not None:
        return existing, True

    intent = gateway.retrieve_intent(intent_id)
    owner = intent.metadata.get("userId")
    if owner is not None and owner != str(user.id):
        raise ForbiddenError("Payment belongs to another user")
    if intent.status != SUCCEEDED:
        raise ValidationError("Payment not completed")

    total = (Decimal(intent.amount) / 100).quantize(Decimal("0.01"))
    try:
        with transactional("Order creation failed"):
            address = default_shipping_address(user.id)
            if address is None:
                raise ValidationError("No shipping address found")
            rows = active_cart_rows(user.id)
            if not rows:
                log.warning("confirming payment %s with an empty cart for user %s", intent_id, user.id)

            order = Order(
                user_id=user.id,
                status="processing",
                total_amount=total,
                subtotal=total,
                payment_intent_id=intent_id,
            )
            _apply_address(order, address)
            db.session.add(order)
            db.session.flush()
            order.order_number = _order_number(order)

            for ci, product in rows:
                db.session.add(OrderItem(
                    order_id=order.id,
                    product_id=product.id,
                    quantity=ci.quantity,
                    unit_price=ci.unit_price,
                    total_price=ci.unit_price * ci.quantity,
                    product_name=product.name,
                    product_image=product.image,
                ))
            CartItem.query.filter_by(user_id=user.id).delete()
    except IntegrityError:
        # a concurrent confirm for the same intent committed first
        winner = _existing_order(intent_id, user)
        if winner is None:
            raise
        return winner, True

    record_order(order)
    log.info("order created id=%s number=%s items=%s", order.id, order.order_number, len(rows))
    return order, False
