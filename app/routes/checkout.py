from flask import Blueprint, request, current_app, g
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.exceptions import ServiceError
from app.services import checkout as checkout_service
from app.utils import ok, error, auth_required, internal_error_response

checkout_bp = Blueprint("checkout", __name__, url_prefix=f"{API_PREFIX}/stripe")


@checkout_bp.before_request
@auth_required
def _require_login():
    return None


@checkout_bp.route("/create-payment-intent", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["CHECKOUT_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many checkout attempts from this IP",
)
def create_payment_intent():
    """Create a gateway payment intent for the client's cart.
    ---
    tags: [Checkout]
    responses:
      200: {description: clientSecret and paymentIntentId}
      400: {description: Missing or oversized payment information}
      502: {description: Payment gateway failure}
    """
    cfg = current_app.config
    try:
        result = checkout_service.create_payment_intent(
            g.user,
            request.get_json(silent=True) or {},
            current_app.payment_gateway,
            cfg["PAYMENT_METADATA_VALUE_LIMIT"],
            cfg.get("DEFAULT_CURRENCY", "usd"),
        )
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(result)


@checkout_bp.route("/confirm-payment", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["CHECKOUT_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many checkout attempts from this IP",
)
def confirm_payment():
    """Turn a succeeded payment intent into an order.
    ---
    tags: [Checkout]
    responses:
      200: {description: The order and whether it already existed}
      400: {description: Payment not completed or no default shipping address}
      403: {description: The intent belongs to another user}
      502: {description: Payment gateway failure}
    """
    data = request.get_json(silent=True) or {}
    try:
        order, already = checkout_service.confirm_payment(
            g.user, data.get("paymentIntentId"), current_app.payment_gateway
        )
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    payload = {"orderId": order.id, "order": order.to_dict(), "already_processed": already}
    return ok(payload)
