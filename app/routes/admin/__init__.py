from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import auth_required, role_required

admin_bp = Blueprint("admin", __name__, url_prefix=f"{API_PREFIX}/admin")


@admin_bp.before_request
def _enforce_admin_role():
    """Ensure the requester is an authenticated admin."""
    if request.method == "OPTIONS":
        return None
    return _check_admin()


@auth_required
@role_required("admin")
def _check_admin():
    return None


from . import categories  # noqa: E402,F401
from . import orders  # noqa: E402,F401
from . import users  # noqa: E402,F401
from . import banners  # noqa: E402,F401
from . import testimonials  # noqa: E402,F401
