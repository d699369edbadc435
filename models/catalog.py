from models import db, BIGINT, utcnow


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    display_order = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self, admin=False):
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "display_order": self.display_order,
        }
        if admin:
            data.update({
                "is_active": self.is_active,
                "created_at": _iso(self.created_at),
                "updated_at": _iso(self.updated_at),
            })
        return data


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    brand = db.Column(db.String(100), nullable=True)
    description = db.Column(db.Text, nullable=True)

    # Pricing
    price = db.Column(db.Numeric(10, 2), nullable=False)
    original_price = db.Column(db.Numeric(10, 2), nullable=True)

    image = db.Column(db.String(500), nullable=True)
    # Category name, matched against Category.name
    category = db.Column(db.String(100), nullable=True, index=True)
    rating = db.Column(db.Numeric(3, 2), nullable=True)
    reviews = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "description": self.description,
            "price": _num(self.price),
            "original_price": _num(self.original_price),
            "image": self.image,
            "category": self.category,
            "rating": _num(self.rating),
            "reviews": self.reviews,
            "is_active": self.is_active,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


def _num(value):
    return float(value) if value is not None else None


def _iso(value):
    return value.isoformat() if value else None
