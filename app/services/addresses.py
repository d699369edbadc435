from models import db
from models.address import UserAddress
from app.exceptions import NotFoundError, ValidationError
from app.utils.query import parse_flag
from app.utils.validation import has_required_fields

REQUIRED_FIELDS = ("first_name", "last_name", "phone", "address", "country")
OPTIONAL_FIELDS = ("additional_info", "county", "region")


def list_for_user(user_id):
    return (
        UserAddress.query.filter_by(user_id=user_id)
        .order_by(UserAddress.is_default.desc(), UserAddress.created_at.desc(), UserAddress.id.desc())
        .all()
    )


def default_shipping_address(user_id):
    return UserAddress.query.filter_by(user_id=user_id, type="shipping", is_default=True).first()


def _unset_sibling_defaults(user_id, address_type, keep_id=None):
    # at most one default per (user, type)
    q = UserAddress.query.filter_by(user_id=user_id, type=address_type, is_default=True)
    if keep_id is not None:
        q = q.filter(UserAddress.id != keep_id)
    q.update({UserAddress.is_default: False}, synchronize_session="fetch")


def create_address(user_id, data):
    if not has_required_fields(data, REQUIRED_FIELDS):
        raise ValidationError("Missing required address fields")
    address = UserAddress(user_id=user_id, type=data.get("type") or "shipping")
    for field in REQUIRED_FIELDS + OPTIONAL_FIELDS:
        setattr(address, field, data.get(field))
    address.is_default = parse_flag(data.get("is_default"), "is_default")
    if address.is_default:
        _unset_sibling_defaults(user_id, address.type)
    db.session.add(address)
    return address


def update_address(user_id, address_id, data):
    address = UserAddress.query.filter_by(id=address_id, user_id=user_id).first()
    if address is None:
        raise NotFoundError("Address not found")
    for field in REQUIRED_FIELDS:
        if field in data:
            if not data[field]:
                raise ValidationError("Missing required address fields")
            setattr(address, field, data[field])
    for field in OPTIONAL_FIELDS:
        if field in data:
            setattr(address, field, data[field])
    if data.get("type"):
        address.type = data["type"]
    if "is_default" in data:
        address.is_default = parse_flag(data["is_default"], "is_default")
    if address.is_default:
        _unset_sibling_defaults(user_id, address.type, keep_id=address.id)
    return address


def delete_address(user_id, address_id):
    address = UserAddress.query.filter_by(id=address_id, user_id=user_id).first()
    if address is None:
        raise NotFoundError("Address not found")
    db.session.delete(address)
