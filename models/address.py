from models import db, BIGINT, utcnow


class UserAddress(db.Model):
    __tablename__ = "user_addresses"
    __table_args__ = (
        db.Index("ix_user_addresses_user_type_default", "user_id", "type", "is_default"),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = db.Column(db.String(20), nullable=False, default="shipping")  # shipping, billing
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(30), nullable=False)
    address = db.Column(db.String(255), nullable=False)
    additional_info = db.Column(db.String(255), nullable=True)
    country = db.Column(db.String(100), nullable=False)
    county = db.Column(db.String(100), nullable=True)
    region = db.Column(db.String(100), nullable=True)
    is_default = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "address": self.address,
            "additional_info": self.additional_info,
            "country": self.country,
            "county": self.county,
            "region": self.region,
            "is_default": self.is_default,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
