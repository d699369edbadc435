from flask import request
from sqlalchemy.exc import IntegrityError
from app.utils import ok, error, transactional, internal_error_response
from models import db
from models.catalog import Category, Product
from . import admin_bp


def _apply(category, data):
    category.name = data["name"].strip()
    category.description = data.get("description") or None
    category.display_order = int(data.get("display_order") or 0)
    category.is_active = data.get("is_active") is not False


@admin_bp.route("/categories", methods=["GET"])
def list_categories():
    rows = Category.query.order_by(Category.display_order.asc(), Category.name.asc()).all()
    return ok([c.to_dict(admin=True) for c in rows])


@admin_bp.route("/categories", methods=["POST"])
def create_category():
    """Create a category.
    ---
    tags: [Admin]
    responses:
      200: {description: The new category}
      400: {description: Name missing or already taken}
    """
    data = request.get_json(silent=True) or {}
    if not (data.get("name") or "").strip():
        return error("Category name is required", status=400)
    category = Category()
    try:
        _apply(category, data)
        with transactional("Failed to create category"):
            db.session.add(category)
    except IntegrityError:
        return error("Category name already exists", status=400)
    except (TypeError, ValueError):
        return error("display_order must be an integer", status=400)
    except Exception:
        return internal_error_response()
    return ok(category.to_dict(admin=True))


@admin_bp.route("/categories/<int:category_id>", methods=["PUT"])
def update_category(category_id):
    data = request.get_json(silent=True) or {}
    if not (data.get("name") or "").strip():
        return error("Category name is required", status=400)
    category = db.session.get(Category, category_id)
    if not category:
        return error("Category not found", status=404)
    try:
        with transactional("Failed to update category"):
            _apply(category, data)
    except IntegrityError:
        return error("Category name already exists", status=400)
    except (TypeError, ValueError):
        return error("display_order must be an integer", status=400)
    except Exception:
        return internal_error_response()
    return ok(category.to_dict(admin=True))


@admin_bp.route("/categories/<int:category_id>", methods=["DELETE"])
def delete_category(category_id):
    category = db.session.get(Category, category_id)
    if not category:
        return error("Category not found", status=404)
    if Product.query.filter_by(category=category.name).count():
        return error("Cannot delete category that is being used by products", status=400)
    data = category.to_dict(admin=True)
    try:
        with transactional("Failed to delete category"):
            db.session.delete(category)
    except Exception:
        return internal_error_response()
    return ok(data, message="Category deleted")
