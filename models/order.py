from sqlalchemy import Column, String, Numeric, Text, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from models import db, BIGINT

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled", "refunded")
# "completed" is accepted as a purchase proof for legacy rows
PURCHASED_STATUSES = ("delivered", "completed")


class Order(db.Model):
    __tablename__ = "orders"
    __table_args__ = (
        db.Index("ix_orders_status_created", "status", "created_at"),
    )
    id = Column(BIGINT, primary_key=True)
    order_number = Column(String(40), unique=True, nullable=True)
    user_id = Column(BIGINT, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")
    total_amount = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=True)
    # One order per gateway charge
    payment_intent_id = Column(String(255), unique=True, nullable=True)

    # Snapshot of the address row at checkout time
    shipping_address = Column(JSON, nullable=True)
    shipping_first_name = Column(String(100))
    shipping_last_name = Column(String(100))
    shipping_phone = Column(String(30))
    shipping_address_line_1 = Column(String(255))
    shipping_address_line_2 = Column(String(255))
    shipping_city = Column(String(100))
    shipping_state = Column(String(100))
    shipping_postal_code = Column(String(20))
    shipping_country = Column(String(100))

    billing_first_name = Column(String(100))
    billing_last_name = Column(String(100))
    billing_phone = Column(String(30))
    billing_address_line_1 = Column(String(255))
    billing_city = Column(String(100))
    billing_state = Column(String(100))
    billing_postal_code = Column(String(20))
    billing_country = Column(String(100))

    tracking_number = Column(String(100), nullable=True)
    admin_notes = Column(Text, nullable=True)
    shipped_at = Column(DateTime, nullable=True)
    delivered_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    user = db.relationship("User", backref=db.backref("orders", lazy=True))
    items = db.relationship(
        "OrderItem",
        backref="order",
        cascade="all, delete-orphan",
        lazy=True,
        order_by="OrderItem.id",
    )

    @property
    def shipping_name(self):
        return " ".join(p for p in (self.shipping_first_name, self.shipping_last_name) if p)

    def to_dict(self, include_items=True):
        data = {
            "id": self.id,
            "order_number": self.order_number,
            "user_id": self.user_id,
            "status": self.status,
            "total_amount": float(self.total_amount),
            "subtotal": float(self.subtotal) if self.subtotal is not None else None,
            "payment_intent_id": self.payment_intent_id,
            "shipping_address": self.shipping_address,
            "shipping_first_name": self.shipping_first_name,
            "shipping_last_name": self.shipping_last_name,
            "shipping_phone": self.shipping_phone,
            "shipping_address_line_1": self.shipping_address_line_1,
            "shipping_city": self.shipping_city,
            "shipping_state": self.shipping_state,
            "shipping_postal_code": self.shipping_postal_code,
            "shipping_country": self.shipping_country,
            "billing_first_name": self.billing_first_name,
            "billing_last_name": self.billing_last_name,
            "billing_phone": self.billing_phone,
            "billing_address_line_1": self.billing_address_line_1,
            "billing_city": self.billing_city,
            "billing_state": self.billing_state,
            "billing_postal_code": self.billing_postal_code,
            "billing_country": self.billing_country,
            "tracking_number": self.tracking_number,
            "admin_notes": self.admin_notes,
            "shipped_at": _iso(self.shipped_at),
            "delivered_at": _iso(self.delivered_at),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }
        if include_items:
            data["items"] = [oi.to_dict() for oi in self.items]
        return data


class OrderItem(db.Model):
    __tablename__ = "order_items"
    id = db.Column(BIGINT, primary_key=True)
    order_id = db.Column(BIGINT, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    # No FK: the snapshot outlives product deletion
    product_id = db.Column(BIGINT, nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    total_price = db.Column(db.Numeric(10, 2), nullable=False)
    product_name = db.Column(db.String(255))
    product_image = db.Column(db.String(500))

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "price": float(self.unit_price),
            "unit_price": float(self.unit_price),
            "total_price": float(self.total_price),
            "product_name": self.product_name,
            "product_image": self.product_image,
        }


def _iso(value):
    return value.isoformat() if value else None
