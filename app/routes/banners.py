from flask import Blueprint
from app.version import API_PREFIX
from app.utils import ok
from models.banner import Banner

banners_bp = Blueprint("banners", __name__, url_prefix=f"{API_PREFIX}/banners")


@banners_bp.route("", methods=["GET"])
def list_banners():
    """Active banners for the homepage carousel.
    ---
    tags: [Banners]
    responses:
      200: {description: Active banners in display order}
    """
    rows = (
        Banner.query.filter_by(is_active=True)
        .order_by(Banner.display_order.asc(), Banner.created_at.desc())
        .all()
    )
    return ok([b.to_dict() for b in rows])
