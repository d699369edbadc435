from app.routes import (
    auth_bp,
    categories_bp,
    products_bp,
    cart_bp,
    addresses_bp,
    checkout_bp,
    orders_bp,
    banners_bp,
    testimonials_bp,
    admin_bp,
)


def register_api(app):
    """Register blueprint routes under the API prefix."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(addresses_bp)
    app.register_blueprint(checkout_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(banners_bp)
    app.register_blueprint(testimonials_bp)
    app.register_blueprint(admin_bp)
