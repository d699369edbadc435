from flask import request, g
from app.exceptions import ServiceError
from app.services import testimonials as testimonial_service
from app.utils import (
    ok,
    error,
    transactional,
    internal_error_response,
    paginate_args,
    parse_flag,
)
from models import db
from models.testimonial import Testimonial
from . import admin_bp


@admin_bp.route("/testimonials", methods=["GET"])
def list_testimonials():
    """Testimonials for moderation, pending first.
    ---
    tags: [Admin]
    parameters:
      - {name: status, in: query, type: string}
      - {name: rating, in: query, type: integer}
      - {name: product_id, in: query, type: integer}
      - {name: search, in: query, type: string}
      - {name: limit, in: query, type: integer}
      - {name: offset, in: query, type: integer}
    responses:
      200: {description: Page of testimonials with the total count}
    """
    limit, offset = paginate_args(request.args)
    rows, total = testimonial_service.list_admin(request.args, limit, offset)
    return ok([t.to_dict(admin=True) for t in rows], total=total, limit=limit, offset=offset)


@admin_bp.route("/testimonials/<int:testimonial_id>/status", methods=["PATCH"])
def set_testimonial_status(testimonial_id):
    data = request.get_json(silent=True) or {}
    status = data.get("status")
    try:
        with transactional("Failed to update testimonial status"):
            testimonial = testimonial_service.set_status(
                g.user,
                testimonial_id,
                status,
                admin_notes=data.get("admin_notes"),
                notes_given="admin_notes" in data,
            )
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(testimonial.to_dict(admin=True), message=f"Testimonial {status} successfully")


@admin_bp.route("/testimonials/<int:testimonial_id>/featured", methods=["PATCH"])
def set_testimonial_featured(testimonial_id):
    try:
        is_featured = parse_flag((request.get_json(silent=True) or {}).get("is_featured"), "is_featured")
        with transactional("Failed to update featured status"):
            testimonial = testimonial_service.set_featured(testimonial_id, is_featured)
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    verb = "featured" if is_featured else "unfeatured"
    return ok(testimonial.to_dict(admin=True), message=f"Testimonial {verb} successfully")


@admin_bp.route("/testimonials/<int:testimonial_id>", methods=["DELETE"])
def delete_testimonial(testimonial_id):
    testimonial = db.session.get(Testimonial, testimonial_id)
    if not testimonial:
        return error("Testimonial not found", status=404)
    data = testimonial.to_dict(admin=True)
    try:
        with transactional("Failed to delete testimonial"):
            db.session.delete(testimonial)
    except Exception:
        return internal_error_response()
    return ok(data, message="Testimonial deleted successfully")


@admin_bp.route("/testimonials/dashboard", methods=["GET"])
def testimonial_dashboard():
    return ok(testimonial_service.dashboard())
