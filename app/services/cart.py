from models import db
from models.cart import CartItem
from models.catalog import Product
from app.exceptions import NotFoundError, ValidationError
from app.utils.query import parse_whole


def active_cart_rows(user_id):
    """Cart rows joined to products that are still active, newest first."""
    return (
        db.session.query(CartItem, Product)
        .join(Product, CartItem.product_id == Product.id)
        .filter(CartItem.user_id == user_id, Product.is_active.is_(True))
        .order_by(CartItem.created_at.desc(), CartItem.id.desc())
        .all()
    )


def cart_view(user_id):
    items = []
    for ci, product in active_cart_rows(user_id):
        items.append({
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": float(product.price),
            "unit_price": float(ci.unit_price),
            "quantity": ci.quantity,
            "image": product.image,
            "cart_item_id": ci.id,
            "added_at": ci.created_at.isoformat() if ci.created_at else None,
        })
    return items


def _parse_quantity(value, message):
    quantity = parse_whole(value)
    if quantity is None or quantity < 1:
        raise ValidationError(message)
    return quantity


def add_item(user_id, product_id, quantity=1):
    """Add ``quantity`` of a product; repeat adds accumulate on the same row."""
    if not product_id:
        raise ValidationError("Product ID is required")
    quantity = _parse_quantity(quantity, "Quantity must be at least 1")
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    if not product.is_active:
        raise ValidationError("Product is not available")

    item = CartItem.query.filter_by(user_id=user_id, product_id=product.id).first()
    if item:
        item.quantity += quantity
    else:
        item = CartItem(
            user_id=user_id,
            product_id=product.id,
            quantity=quantity,
            unit_price=product.price,
        )
        db.session.add(item)
    return item


def update_quantity(user_id, product_id, quantity):
    quantity = _parse_quantity(quantity, "Valid quantity is required")
    item = CartItem.query.filter_by(user_id=user_id, product_id=product_id).first()
    if item is None:
        raise NotFoundError("Cart item not found")
    item.quantity = quantity
    return item


def remove_item(user_id, product_id):
    item = CartItem.query.filter_by(user_id=user_id, product_id=product_id).first()
    if item is None:
        raise NotFoundError("Cart item not found")
    db.session.delete(item)


def clear(user_id) -> int:
    return CartItem.query.filter_by(user_id=user_id).delete()
