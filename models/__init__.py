from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()


def utcnow():
    """Current UTC time as a naive datetime, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Re-export common models for convenience
from .user import User, UserSession  # noqa: F401,E402
from .catalog import Category, Product  # noqa: F401,E402
from .cart import CartItem  # noqa: F401,E402
from .address import UserAddress  # noqa: F401,E402
from .order import Order, OrderItem  # noqa: F401,E402
from .banner import Banner  # noqa: F401,E402
from .testimonial import Testimonial  # noqa: F401,E402
