"""Payment gateway adapter.

The rest of the application only sees :class:`PaymentIntent` values and
:class:`~app.exceptions.PaymentGatewayError`; nothing outside this module
imports ``stripe``.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict

import stripe

from app.exceptions import PaymentGatewayError
from app.metrics import PAYMENT_GATEWAY_ERRORS

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentIntent:
    id: str
    status: str
    amount: int
    currency: str
    client_secret: str = None
    metadata: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_stripe(cls, obj):
        return cls(
            id=obj.id,
            status=obj.status,
            amount=obj.amount,
            currency=obj.currency,
            client_secret=getattr(obj, "client_secret", None),
            metadata=dict(obj.metadata or {}),
        )


class StripeGateway:
    """Thin wrapper over the Stripe PaymentIntent API."""

    def __init__(self, api_key, api_version=None):
        self.api_key = api_key
        self.api_version = api_version

    def _opts(self):
        opts = {"api_key": self.api_key}
        if self.api_version:
            opts["stripe_version"] = self.api_version
        return opts

    def create_intent(self, amount_minor: int, currency: str, metadata: Dict[str, str]) -> PaymentIntent:
        try:
            obj = stripe.PaymentIntent.create(
                amount=amount_minor,
                currency=currency,
                metadata=metadata,
                automatic_payment_methods={"enabled": True},
                **self._opts(),
            )
        except stripe.StripeError as e:
            PAYMENT_GATEWAY_ERRORS.labels("create_intent").inc()
            log.error("Stripe create_intent failed: %s", e.user_message or e)
            raise PaymentGatewayError("Failed to create payment intent") from e
        return PaymentIntent.from_stripe(obj)

    def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        try:
            obj = stripe.PaymentIntent.retrieve(intent_id, **self._opts())
        except stripe.StripeError as e:
            PAYMENT_GATEWAY_ERRORS.labels("retrieve_intent").inc()
            log.error("Stripe retrieve_intent failed for %s: %s", intent_id, e.user_message or e)
            raise PaymentGatewayError("Failed to retrieve payment intent") from e
        return PaymentIntent.from_stripe(obj)


def init_payment_gateway(app):
    key = app.config.get("STRIPE_SECRET_KEY")
    if not key:
        logging.warning("STRIPE_SECRET_KEY missing; payment calls will fail until configured")
    app.payment_gateway = StripeGateway(key, app.config.get("STRIPE_API_VERSION"))
