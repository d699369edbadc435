from models import db, BIGINT, utcnow

TESTIMONIAL_STATUSES = ("pending", "approved", "rejected")


class Testimonial(db.Model):
    __tablename__ = "testimonials"
    __table_args__ = (
        db.Index("ix_testimonials_status_product", "status", "product_id"),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = db.Column(BIGINT, db.ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    title = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="pending")
    is_verified_purchase = db.Column(db.Boolean, default=False)
    is_featured = db.Column(db.Boolean, default=False)
    admin_notes = db.Column(db.Text, nullable=True)
    approved_at = db.Column(db.DateTime, nullable=True)
    approved_by = db.Column(BIGINT, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    author = db.relationship("User", foreign_keys=[user_id])
    approver = db.relationship("User", foreign_keys=[approved_by])
    product = db.relationship("Product")

    def to_dict(self, admin=False):
        author = self.author
        data = {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "rating": self.rating,
            "status": self.status,
            "is_verified_purchase": self.is_verified_purchase,
            "is_featured": self.is_featured,
            "product_id": self.product_id,
            "product_name": self.product.name if self.product else None,
            "product_image": self.product.image if self.product else None,
            "customer_name": author.full_name if author else None,
            "first_name": author.first_name if author else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if admin:
            data.update({
                "admin_notes": self.admin_notes,
                "customer_email": author.email if author else None,
                "approved_at": self.approved_at.isoformat() if self.approved_at else None,
                "approved_by_name": self.approver.first_name if self.approver else None,
            })
        return data
