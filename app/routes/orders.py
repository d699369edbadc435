from flask import Blueprint, g
from sqlalchemy.orm import selectinload
from app.version import API_PREFIX
from app.utils import ok, error, auth_required
from models.order import Order

orders_bp = Blueprint("orders", __name__, url_prefix=f"{API_PREFIX}/orders")


@orders_bp.before_request
@auth_required
def _require_login():
    return None


@orders_bp.route("", methods=["GET"])
def list_orders():
    """The caller's orders with their items, newest first.
    ---
    tags: [Orders]
    responses:
      200: {description: List of orders}
    """
    rows = (
        Order.query.options(selectinload(Order.items))
        .filter_by(user_id=g.user.id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )
    return ok([o.to_dict() for o in rows])


@orders_bp.route("/<int:order_id>", methods=["GET"])
def get_order(order_id):
    order = Order.query.filter_by(id=order_id, user_id=g.user.id).first()
    if not order:
        return error("Order not found", status=404)
    return ok(order.to_dict())
