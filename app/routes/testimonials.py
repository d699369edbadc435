from flask import Blueprint, request, g
from app.version import API_PREFIX
from app.exceptions import ServiceError
from app.services import testimonials as testimonial_service
from app.utils import (
    ok,
    error,
    auth_required,
    role_required,
    transactional,
    internal_error_response,
    paginate_args,
)
from models import db
from models.catalog import Product
from models.testimonial import Testimonial

testimonials_bp = Blueprint("testimonials", __name__, url_prefix=API_PREFIX)


@testimonials_bp.route("/testimonials", methods=["GET"])
def list_testimonials():
    """Approved testimonials, featured first.
    ---
    tags: [Testimonials]
    parameters:
      - {name: product_id, in: query, type: integer}
      - {name: rating, in: query, type: integer}
      - {name: featured_only, in: query, type: boolean}
      - {name: limit, in: query, type: integer}
      - {name: offset, in: query, type: integer}
    responses:
      200: {description: Page of testimonials with the total count}
    """
    limit, offset = paginate_args(request.args)
    rows, total = testimonial_service.list_public(request.args, limit, offset)
    return ok([t.to_dict() for t in rows], total=total, limit=limit, offset=offset)


@testimonials_bp.route("/testimonials/stats", methods=["GET"])
def testimonial_stats():
    product_id = request.args.get("product_id", type=int)
    return ok(testimonial_service.rating_stats(product_id))


@testimonials_bp.route("/products/<int:product_id>/testimonials", methods=["GET"])
def product_testimonials(product_id):
    if db.session.get(Product, product_id) is None:
        return error("Product not found", status=404)
    limit, offset = paginate_args(request.args, default_limit=20)
    rows, total = testimonial_service.list_public({"product_id": product_id}, limit, offset)
    return ok(
        [t.to_dict() for t in rows],
        stats=testimonial_service.rating_stats(product_id),
        total=total,
    )


@testimonials_bp.route("/testimonials", methods=["POST"])
@auth_required
@role_required(["user:write_testimonial", "admin"])
def submit_testimonial():
    data = request.get_json(silent=True) or {}
    try:
        with transactional("Failed to submit testimonial"):
            testimonial = testimonial_service.submit(g.user, data)
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(
        testimonial.to_dict(),
        message="Testimonial submitted successfully and is pending approval",
    )


@testimonials_bp.route("/user/testimonials", methods=["GET"])
@auth_required
def my_testimonials():
    rows = (
        Testimonial.query.filter_by(user_id=g.user.id)
        .order_by(Testimonial.created_at.desc(), Testimonial.id.desc())
        .all()
    )
    return ok([t.to_dict() for t in rows])


@testimonials_bp.route("/user/testimonials/<int:testimonial_id>", methods=["PUT"])
@auth_required
def update_my_testimonial(testimonial_id):
    data = request.get_json(silent=True) or {}
    try:
        with transactional("Failed to update testimonial"):
            testimonial = testimonial_service.update_own(g.user, testimonial_id, data)
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(testimonial.to_dict(), message="Testimonial updated successfully")


@testimonials_bp.route("/user/testimonials/<int:testimonial_id>", methods=["DELETE"])
@auth_required
def delete_my_testimonial(testimonial_id):
    try:
        with transactional("Failed to delete testimonial"):
            testimonial_service.delete_own(g.user, testimonial_id)
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(message="Testimonial deleted successfully")
