from flask import Blueprint
from app.version import API_PREFIX
from app.utils import ok
from models.catalog import Category

categories_bp = Blueprint("categories", __name__, url_prefix=f"{API_PREFIX}/categories")


@categories_bp.route("", methods=["GET"])
def list_categories():
    """Active categories in display order.
    ---
    tags: [Catalog]
    responses:
      200: {description: List of categories}
    """
    rows = (
        Category.query.filter_by(is_active=True)
        .order_by(Category.display_order.asc(), Category.name.asc())
        .all()
    )
    return ok([c.to_dict() for c in rows])
