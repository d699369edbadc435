from datetime import timedelta
from flask import request
from sqlalchemy import func, or_
from sqlalchemy.orm import selectinload
from app.schemas.order import TrackingUpdate
from app.utils import (
    ok,
    error,
    transactional,
    internal_error_response,
    validate_schema,
    apply_filters,
    paginate_args,
)
from app.utils.query import parse_date
from models import db, utcnow
from models.order import Order, ORDER_STATUSES
from models.user import User
from . import admin_bp


def _search(term):
    pattern = f"%{term}%"
    shipping_name = func.coalesce(Order.shipping_first_name, "") + " " + func.coalesce(Order.shipping_last_name, "")
    return or_(
        Order.order_number.ilike(pattern),
        shipping_name.ilike(pattern),
        User.email.ilike(pattern),
    )


def _date_to(value):
    end = parse_date(value)
    # a bare date covers the whole day
    if len(str(value)) == 10:
        end = end + timedelta(days=1)
        return Order.created_at < end
    return Order.created_at <= end


ORDER_FILTERS = {
    "status": lambda v: Order.status == v,
    "search": _search,
    "date_from": lambda v: Order.created_at >= parse_date(v),
    "date_to": _date_to,
}


def _admin_view(order):
    data = order.to_dict()
    data.update({
        "total": data["total_amount"],
        "order_date": data["created_at"],
        "customer_name": order.shipping_name,
        "customer_email": order.user.email if order.user else None,
        "customer_phone": order.user.phone if order.user else None,
        "address": {
            "street": " ".join(p for p in (order.shipping_address_line_1, order.shipping_address_line_2) if p),
            "city": order.shipping_city,
            "state": order.shipping_state,
            "zipCode": order.shipping_postal_code,
            "country": order.shipping_country,
        },
    })
    return data


@admin_bp.route("/orders", methods=["GET"])
def list_orders():
    """All orders for delivery management.
    ---
    tags: [Admin]
    parameters:
      - {name: status, in: query, type: string}
      - {name: search, in: query, type: string}
      - {name: date_from, in: query, type: string}
      - {name: date_to, in: query, type: string}
      - {name: limit, in: query, type: integer}
      - {name: offset, in: query, type: integer}
    responses:
      200: {description: Page of orders with the total count}
    """
    limit, offset = paginate_args(request.args)
    q = apply_filters(Order.query.outerjoin(User, Order.user_id == User.id), request.args, ORDER_FILTERS)
    total = q.count()
    rows = (
        q.options(selectinload(Order.items))
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return ok({
        "orders": [_admin_view(o) for o in rows],
        "total": total,
        "limit": limit,
        "offset": offset,
    })


@admin_bp.route("/orders/<int:order_id>/status", methods=["PUT"])
def update_order_status(order_id):
    status = (request.get_json(silent=True) or {}).get("status")
    if status not in ORDER_STATUSES:
        return error("Invalid status", status=400)
    order = db.session.get(Order, order_id)
    if not order:
        return error("Order not found", status=404)
    try:
        with transactional("Failed to update order status"):
            order.status = status
            if status == "shipped":
                order.shipped_at = utcnow()
            elif status == "delivered":
                order.delivered_at = utcnow()
    except Exception:
        return internal_error_response()
    return ok(order.to_dict())


@admin_bp.route("/orders/<int:order_id>/tracking", methods=["PUT"])
@validate_schema(TrackingUpdate, message="Tracking number is required")
def update_order_tracking(order_id):
    data: TrackingUpdate = request.validated_data
    order = db.session.get(Order, order_id)
    if not order:
        return error("Order not found", status=404)
    notes = order.admin_notes or ""
    if data.carrier:
        notes += f"\nCarrier: {data.carrier}"
    if data.estimated_delivery:
        notes += f"\nEstimated Delivery: {data.estimated_delivery}"
    try:
        with transactional("Failed to update tracking information"):
            order.tracking_number = data.tracking_number
            order.admin_notes = notes
    except Exception:
        return internal_error_response()
    return ok(order.to_dict())
