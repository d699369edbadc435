import logging
from datetime import timedelta

from sqlalchemy import case, func, or_

from app.exceptions import NotFoundError, ValidationError
from app.utils.query import apply_filters, parse_bool, parse_whole
from models import db, utcnow
from models.catalog import Product
from models.order import Order, OrderItem, PURCHASED_STATUSES
from models.testimonial import Testimonial, TESTIMONIAL_STATUSES
from models.user import User

log = logging.getLogger(__name__)

STAR_NAMES = ((5, "five_star"), (4, "four_star"), (3, "three_star"), (2, "two_star"), (1, "one_star"))


def _equals(column):
    def build(value):
        parsed = parse_whole(value)
        return column == parsed if parsed is not None else None
    return build


def _search_clause(term):
    pattern = f"%{term}%"
    return or_(
        Testimonial.title.ilike(pattern),
        Testimonial.message.ilike(pattern),
        (func.coalesce(User.first_name, "") + " " + func.coalesce(User.last_name, "")).ilike(pattern),
        Product.name.ilike(pattern),
    )


PUBLIC_FILTERS = {
    "product_id": _equals(Testimonial.product_id),
    "rating": _equals(Testimonial.rating),
    "featured_only": lambda v: Testimonial.is_featured.is_(True) if parse_bool(v) else None,
}

ADMIN_FILTERS = {
    "status": lambda v: Testimonial.status == v,
    "rating": _equals(Testimonial.rating),
    "product_id": _equals(Testimonial.product_id),
    "search": _search_clause,
}


def validate_rating(rating):
    value = parse_whole(rating)
    if value is None or value < 1 or value > 5:
        raise ValidationError("Rating must be between 1 and 5")
    return value


def _joined_query():
    return (
        Testimonial.query.join(User, Testimonial.user_id == User.id)
        .outerjoin(Product, Testimonial.product_id == Product.id)
    )


def list_public(args, limit, offset):
    q = apply_filters(_joined_query().filter(Testimonial.status == "approved"), args, PUBLIC_FILTERS)
    total = q.count()
    rows = (
        q.order_by(Testimonial.is_featured.desc(), Testimonial.created_at.desc(), Testimonial.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return rows, total


def list_admin(args, limit, offset):
    q = apply_filters(_joined_query(), args, ADMIN_FILTERS)
    total = q.count()
    status_rank = case(
        (Testimonial.status == "pending", 1),
        (Testimonial.status == "approved", 2),
        else_=3,
    )
    rows = (
        q.order_by(status_rank, Testimonial.created_at.desc(), Testimonial.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return rows, total


def rating_stats(product_id=None):
    """Aggregate rating figures over approved testimonials."""
    q = db.session.query(
        func.avg(Testimonial.rating),
        func.count(Testimonial.id),
        func.sum(case((Testimonial.is_verified_purchase.is_(True), 1), else_=0)),
        *[func.sum(case((Testimonial.rating == stars, 1), else_=0)) for stars, _ in STAR_NAMES],
    ).filter(Testimonial.status == "approved")
    if product_id is not None:
        q = q.filter(Testimonial.product_id == product_id)
    avg, total, verified, *stars = q.one()
    stats = {
        "average_rating": round(float(avg), 2) if avg is not None else None,
        "total_reviews": total or 0,
        "verified_purchases": int(verified or 0),
    }
    for (_, name), count in zip(STAR_NAMES, stars):
        stats[name] = int(count or 0)
    return stats


def has_purchased(user_id, product_id) -> bool:
    count = (
        db.session.query(func.count(OrderItem.id))
        .join(Order, OrderItem.order_id == Order.id)
        .filter(
            Order.user_id == user_id,
            OrderItem.product_id == product_id,
            Order.status.in_(PURCHASED_STATUSES),
        )
        .scalar()
    )
    return bool(count)


def submit(user, data):
    title, message, rating = data.get("title"), data.get("message"), data.get("rating")
    if not title or not message or rating in (None, ""):
        raise ValidationError("Title, message, and rating are required")
    rating = validate_rating(rating)
    product_id = parse_whole(data.get("product_id"))
    verified = False
    if product_id:
        if Testimonial.query.filter_by(user_id=user.id, product_id=product_id).first():
            raise ValidationError("You have already reviewed this product")
        if db.session.get(Product, product_id) is None:
            raise NotFoundError("Product not found")
        verified = has_purchased(user.id, product_id)
    testimonial = Testimonial(
        user_id=user.id,
        product_id=product_id or None,
        title=title,
        message=message,
        rating=rating,
        status="pending",
        is_verified_purchase=verified,
    )
    db.session.add(testimonial)
    return testimonial


def _own_pending(user, testimonial_id, verb):
    testimonial = Testimonial.query.filter_by(id=testimonial_id, user_id=user.id).first()
    if testimonial is None:
        raise NotFoundError("Testimonial not found")
    if testimonial.status != "pending":
        raise ValidationError(f"Can only {verb} pending testimonials")
    return testimonial


def update_own(user, testimonial_id, data):
    testimonial = _own_pending(user, testimonial_id, "edit")
    if data.get("rating") not in (None, ""):
        testimonial.rating = validate_rating(data["rating"])
    if data.get("title"):
        testimonial.title = data["title"]
    if data.get("message"):
        testimonial.message = data["message"]
    return testimonial


def delete_own(user, testimonial_id):
    db.session.delete(_own_pending(user, testimonial_id, "delete"))


def set_status(admin, testimonial_id, status, admin_notes=None, notes_given=False):
    if status not in TESTIMONIAL_STATUSES:
        raise ValidationError("Invalid status. Must be approved, rejected, or pending")
    testimonial = db.session.get(Testimonial, testimonial_id)
    if testimonial is None:
        raise NotFoundError("Testimonial not found")
    testimonial.status = status
    if notes_given:
        testimonial.admin_notes = admin_notes
    if status == "approved":
        testimonial.approved_at = utcnow()
        testimonial.approved_by = admin.id
    else:
        testimonial.approved_at = None
        testimonial.approved_by = None
    log.info("testimonial %s set to %s by admin %s", testimonial.id, status, admin.id)
    return testimonial


def set_featured(testimonial_id, is_featured):
    testimonial = Testimonial.query.filter_by(id=testimonial_id, status="approved").first()
    if testimonial is None:
        raise NotFoundError("Testimonial not found or not approved")
    testimonial.is_featured = bool(is_featured)
    return testimonial


def dashboard():
    overall = db.session.query(
        func.count(Testimonial.id),
        func.sum(case((Testimonial.status == "pending", 1), else_=0)),
        func.sum(case((Testimonial.status == "approved", 1), else_=0)),
        func.sum(case((Testimonial.status == "rejected", 1), else_=0)),
        func.sum(case((Testimonial.is_featured.is_(True), 1), else_=0)),
        func.avg(Testimonial.rating),
        func.sum(case((Testimonial.is_verified_purchase.is_(True), 1), else_=0)),
    ).one()
    since = utcnow() - timedelta(days=30)
    recent_total, recent_pending = db.session.query(
        func.count(Testimonial.id),
        func.sum(case((Testimonial.status == "pending", 1), else_=0)),
    ).filter(Testimonial.created_at >= since).one()

    distribution = (
        db.session.query(Testimonial.rating, func.count(Testimonial.id))
        .filter(Testimonial.status == "approved")
        .group_by(Testimonial.rating)
        .order_by(Testimonial.rating.desc())
        .all()
    )
    review_count = func.count(Testimonial.id).label("testimonial_count")
    avg_rating = func.avg(Testimonial.rating).label("average_rating")
    top = (
        db.session.query(Product.id, Product.name, review_count, avg_rating)
        .join(Testimonial, (Testimonial.product_id == Product.id) & (Testimonial.status == "approved"))
        .group_by(Product.id, Product.name)
        .order_by(review_count.desc(), avg_rating.desc())
        .limit(10)
        .all()
    )

    total, pending, approved, rejected, featured, avg, verified = overall
    return {
        "overall": {
            "total_testimonials": total or 0,
            "pending_count": int(pending or 0),
            "approved_count": int(approved or 0),
            "rejected_count": int(rejected or 0),
            "featured_count": int(featured or 0),
            "average_rating": round(float(avg), 2) if avg is not None else None,
            "verified_purchases": int(verified or 0),
        },
        "recent": {"recent_total": recent_total or 0, "recent_pending": int(recent_pending or 0)},
        "rating_distribution": [{"rating": r, "count": c} for r, c in distribution],
        "top_products": [
            {
                "id": pid,
                "name": name,
                "testimonial_count": count,
                "average_rating": round(float(a), 2) if a is not None else None,
            }
            for pid, name, count, a in top
        ],
    }
