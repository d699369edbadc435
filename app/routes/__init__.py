from .auth import auth_bp
from .categories import categories_bp
from .products import products_bp
from .cart import cart_bp
from .addresses import addresses_bp
from .checkout import checkout_bp
from .orders import orders_bp
from .banners import banners_bp
from .testimonials import testimonials_bp
from .admin import admin_bp


__all__ = [
    'auth_bp',
    'categories_bp',
    'products_bp',
    'cart_bp',
    'addresses_bp',
    'checkout_bp',
    'orders_bp',
    'banners_bp',
    'testimonials_bp',
    'admin_bp',
]
