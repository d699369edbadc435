from flask import request, g
from sqlalchemy import func
from app.auth.permissions import ROLES
from app.utils import ok, error, transactional, internal_error_response
from models import db
from models.order import Order
from models.user import User
from . import admin_bp


@admin_bp.route("/users", methods=["GET"])
def list_users():
    """Every user except the caller, with order activity.
    ---
    tags: [Admin]
    responses:
      200: {description: Users with order counts and totals}
    """
    rows = (
        db.session.query(
            User,
            func.count(Order.id),
            func.max(Order.created_at),
            func.coalesce(func.sum(Order.total_amount), 0),
        )
        .outerjoin(Order, Order.user_id == User.id)
        .filter(User.id != g.user.id)
        .group_by(User.id)
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )
    users = []
    for user, orders_count, last_order, total_spent in rows:
        last_seen = last_order or user.created_at
        users.append({
            **user.to_dict(),
            "status": "active",
            "ordersCount": orders_count,
            "totalSpent": float(total_spent or 0),
            "lastLogin": last_seen.isoformat() if last_seen else None,
            "createdAt": user.created_at.isoformat() if user.created_at else None,
            "updatedAt": user.updated_at.isoformat() if user.updated_at else None,
        })
    return ok({"users": users, "total": len(users)})


@admin_bp.route("/users/<int:user_id>/role", methods=["PUT"])
def update_user_role(user_id):
    role = (request.get_json(silent=True) or {}).get("role")
    if user_id == g.user.id:
        return error("Cannot change your own role", status=400)
    if role not in ROLES:
        return error('Invalid role. Must be "user" or "admin"', status=400)
    user = db.session.get(User, user_id)
    if not user:
        return error("User not found", status=404)
    try:
        with transactional("Failed to update user role"):
            user.role = role
    except Exception:
        return internal_error_response()
    return ok(user.to_dict(), message="User role updated successfully")
