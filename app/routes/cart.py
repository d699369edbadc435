from flask import Blueprint, request, g
from app.version import API_PREFIX
from app.exceptions import ServiceError
from app.services import cart as cart_service
from app.utils import ok, error, auth_required, transactional, internal_error_response

cart_bp = Blueprint("cart", __name__, url_prefix=f"{API_PREFIX}/cart")


@cart_bp.before_request
@auth_required
def _require_login():
    return None


@cart_bp.route("", methods=["GET"])
def view_cart():
    """The caller's cart, newest first.
    ---
    tags: [Cart]
    responses:
      200: {description: Cart rows joined to active products}
    """
    return ok(cart_service.cart_view(g.user.id))


@cart_bp.route("", methods=["POST"])
def add_to_cart():
    data = request.get_json(silent=True) or {}
    try:
        with transactional("Failed to add to cart"):
            item = cart_service.add_item(g.user.id, data.get("product_id"), data.get("quantity", 1))
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(item.to_dict(), message="Item added to cart")


@cart_bp.route("/<int:product_id>", methods=["PUT"])
def update_cart_item(product_id):
    data = request.get_json(silent=True) or {}
    try:
        with transactional("Failed to update cart quantity"):
            item = cart_service.update_quantity(g.user.id, product_id, data.get("quantity"))
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(item.to_dict(), message="Cart updated")


@cart_bp.route("/<int:product_id>", methods=["DELETE"])
def remove_cart_item(product_id):
    try:
        with transactional("Failed to remove cart item"):
            cart_service.remove_item(g.user.id, product_id)
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(message="Item removed from cart")


@cart_bp.route("", methods=["DELETE"])
def clear_cart():
    try:
        with transactional("Failed to clear cart"):
            removed = cart_service.clear(g.user.id)
    except Exception:
        return internal_error_response()
    return ok(message="Cart cleared", items_removed=removed)
