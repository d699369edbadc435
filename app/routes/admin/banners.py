from datetime import timedelta
from flask import request, g
from sqlalchemy import case, func
from app.schemas.banner import BannerRequest, BannerReorderRequest
from app.utils import (
    ok,
    error,
    transactional,
    internal_error_response,
    validate_schema,
    paginate_args,
)
from models import db, utcnow
from models.banner import Banner
from . import admin_bp

REQUIRED_MESSAGE = "Title and image URL are required"
OPTIONAL_TEXT = ("subtitle", "description", "button_text", "button_link")


def _ordered(query):
    return query.order_by(Banner.display_order.asc(), Banner.created_at.desc(), Banner.id.desc())


def _apply(banner, data: BannerRequest):
    banner.title = data.title
    banner.image_url = data.image_url
    for field in OPTIONAL_TEXT:
        setattr(banner, field, getattr(data, field) or None)
    banner.background_color = data.background_color or "#ffffff"
    banner.text_color = data.text_color or "#000000"
    banner.is_active = data.is_active is not False


@admin_bp.route("/banners", methods=["GET"])
def list_banners():
    limit, offset = paginate_args(request.args)
    q = Banner.query
    status = request.args.get("status", "all")
    if status in ("active", "inactive"):
        q = q.filter(Banner.is_active.is_(status == "active"))
    total = q.count()
    rows = _ordered(q).limit(limit).offset(offset).all()
    return ok([b.to_dict(admin=True) for b in rows], total=total, limit=limit, offset=offset)


@admin_bp.route("/banners", methods=["POST"])
@validate_schema(BannerRequest, message=REQUIRED_MESSAGE)
def create_banner():
    """Create a carousel banner; without display_order it goes last.
    ---
    tags: [Admin]
    responses:
      200: {description: The new banner}
      400: {description: Title and image URL are required}
    """
    data: BannerRequest = request.validated_data
    banner = Banner(created_by=g.user.id)
    _apply(banner, data)
    try:
        with transactional("Failed to create banner"):
            if data.display_order is None:
                highest = db.session.query(func.coalesce(func.max(Banner.display_order), 0)).scalar()
                banner.display_order = highest + 1
            else:
                banner.display_order = data.display_order
            db.session.add(banner)
    except Exception:
        return internal_error_response()
    return ok(banner.to_dict(admin=True), message="Banner created successfully")


@admin_bp.route("/banners/<int:banner_id>", methods=["PUT"])
@validate_schema(BannerRequest, message=REQUIRED_MESSAGE)
def update_banner(banner_id):
    banner = db.session.get(Banner, banner_id)
    if not banner:
        return error("Banner not found", status=404)
    data: BannerRequest = request.validated_data
    try:
        with transactional("Failed to update banner"):
            _apply(banner, data)
            banner.display_order = data.display_order or 0
    except Exception:
        return internal_error_response()
    return ok(banner.to_dict(admin=True), message="Banner updated successfully")


@admin_bp.route("/banners/<int:banner_id>", methods=["DELETE"])
def delete_banner(banner_id):
    banner = db.session.get(Banner, banner_id)
    if not banner:
        return error("Banner not found", status=404)
    data = banner.to_dict(admin=True)
    try:
        with transactional("Failed to delete banner"):
            db.session.delete(banner)
    except Exception:
        return internal_error_response()
    return ok(data, message="Banner deleted successfully")


@admin_bp.route("/banners/<int:banner_id>/status", methods=["PATCH"])
def set_banner_status(banner_id):
    is_active = (request.get_json(silent=True) or {}).get("is_active")
    if not isinstance(is_active, bool):
        return error("is_active must be a boolean value", status=400)
    banner = db.session.get(Banner, banner_id)
    if not banner:
        return error("Banner not found", status=404)
    try:
        with transactional("Failed to update banner status"):
            banner.is_active = is_active
    except Exception:
        return internal_error_response()
    verb = "activated" if is_active else "deactivated"
    return ok(banner.to_dict(admin=True), message=f"Banner {verb} successfully")


@admin_bp.route("/banners/reorder", methods=["PATCH"])
@validate_schema(BannerReorderRequest, message="Banners must be an array of {id, display_order} objects")
def reorder_banners():
    positions = request.validated_data.banners
    try:
        with transactional("Failed to reorder banners"):
            for pos in positions:
                Banner.query.filter_by(id=pos.id).update(
                    {Banner.display_order: pos.display_order, Banner.updated_at: utcnow()},
                    synchronize_session=False,
                )
    except Exception:
        return internal_error_response()
    db.session.expire_all()
    rows = _ordered(Banner.query).all()
    return ok([b.to_dict(admin=True) for b in rows], message="Banner order updated successfully")


@admin_bp.route("/banners/stats", methods=["GET"])
def banner_stats():
    since = utcnow() - timedelta(days=30)
    total, active, inactive, recent = db.session.query(
        func.count(Banner.id),
        func.sum(case((Banner.is_active.is_(True), 1), else_=0)),
        func.sum(case((Banner.is_active.is_(False), 1), else_=0)),
        func.sum(case((Banner.created_at >= since, 1), else_=0)),
    ).one()
    return ok({
        "total_banners": total or 0,
        "active_banners": int(active or 0),
        "inactive_banners": int(inactive or 0),
        "recent_banners": int(recent or 0),
    })
