from models import db, BIGINT, utcnow


class Banner(db.Model):
    __tablename__ = "banners"

    id = db.Column(BIGINT, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    subtitle = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=False)
    button_text = db.Column(db.String(100), nullable=True)
    button_link = db.Column(db.String(500), nullable=True)
    background_color = db.Column(db.String(20), default="#ffffff")
    text_color = db.Column(db.String(20), default="#000000")
    display_order = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True)
    created_by = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    creator = db.relationship("User")

    PUBLIC_FIELDS = (
        "id", "title", "subtitle", "description", "image_url", "button_text",
        "button_link", "background_color", "text_color", "display_order",
    )

    def to_dict(self, admin=False):
        data = {field: getattr(self, field) for field in self.PUBLIC_FIELDS}
        if admin:
            data.update({
                "is_active": self.is_active,
                "created_by": self.created_by,
                "created_by_name": self.creator.first_name if self.creator else None,
                "created_at": self.created_at.isoformat() if self.created_at else None,
                "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            })
        return data
