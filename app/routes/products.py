from flask import Blueprint, request
from sqlalchemy import or_
from app.version import API_PREFIX
from app.schemas.catalog import ProductCreate, ProductUpdate
from app.utils import (
    ok,
    error,
    auth_required,
    role_required,
    transactional,
    internal_error_response,
    validate_schema,
    apply_filters,
    parse_bool,
)
from models import db
from models.catalog import Product

products_bp = Blueprint("products", __name__, url_prefix=f"{API_PREFIX}/products")


def _search(term):
    pattern = f"%{term}%"
    return or_(Product.name.ilike(pattern), Product.brand.ilike(pattern), Product.description.ilike(pattern))


def _active(value):
    flag = parse_bool(value)
    return Product.is_active.is_(flag) if flag is not None else None


PRODUCT_FILTERS = {
    "category": lambda v: Product.category == v,
    "search": _search,
    "active": _active,
}


@products_bp.route("", methods=["GET"])
def list_products():
    """Products, newest first.
    ---
    tags: [Catalog]
    parameters:
      - {name: category, in: query, type: string}
      - {name: search, in: query, type: string}
      - {name: active, in: query, type: boolean}
    responses:
      200: {description: List of products}
    """
    q = apply_filters(Product.query, request.args, PRODUCT_FILTERS)
    rows = q.order_by(Product.created_at.desc(), Product.id.desc()).all()
    return ok([p.to_dict() for p in rows])


@products_bp.route("/<int:product_id>", methods=["GET"])
def get_product(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        return error("Product not found", status=404)
    return ok(product.to_dict())


@products_bp.route("", methods=["POST"])
@auth_required
@role_required("admin")
@validate_schema(ProductCreate)
def create_product():
    data: ProductCreate = request.validated_data
    product = Product(**data.model_dump())
    try:
        with transactional("Failed to create product"):
            db.session.add(product)
    except Exception:
        return internal_error_response()
    return ok(product.to_dict())


@products_bp.route("/<int:product_id>", methods=["PUT"])
@auth_required
@role_required("admin")
@validate_schema(ProductUpdate)
def update_product(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        return error("Product not found", status=404)
    changes = request.validated_data.model_dump(exclude_unset=True)
    for field in ("name", "price"):
        if field in changes and changes[field] is None:
            return error(f"{field} cannot be empty", status=400)
    try:
        with transactional("Failed to update product"):
            for field, value in changes.items():
                setattr(product, field, value)
    except Exception:
        return internal_error_response()
    return ok(product.to_dict())


@products_bp.route("/<int:product_id>", methods=["DELETE"])
@auth_required
@role_required("admin")
def delete_product(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        return error("Product not found", status=404)
    data = product.to_dict()
    try:
        with transactional("Failed to delete product"):
            db.session.delete(product)
    except Exception:
        return internal_error_response()
    return ok(data, message="Product deleted")
