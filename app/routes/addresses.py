from flask import Blueprint, request, g
from app.version import API_PREFIX
from app.exceptions import ServiceError
from app.services import addresses as address_service
from app.utils import ok, error, auth_required, transactional, internal_error_response

addresses_bp = Blueprint("addresses", __name__, url_prefix=f"{API_PREFIX}/addresses")


@addresses_bp.before_request
@auth_required
def _require_login():
    return None


@addresses_bp.route("", methods=["GET"])
def list_addresses():
    rows = address_service.list_for_user(g.user.id)
    return ok([a.to_dict() for a in rows])


@addresses_bp.route("", methods=["POST"])
def create_address():
    """Add an address; ``is_default`` clears the flag on siblings of the same type.
    ---
    tags: [Addresses]
    responses:
      200: {description: The stored address}
      400: {description: Missing required address fields}
    """
    data = request.get_json(silent=True) or {}
    try:
        with transactional("Failed to create address"):
            address = address_service.create_address(g.user.id, data)
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(address.to_dict())


@addresses_bp.route("/<int:address_id>", methods=["PUT"])
def update_address(address_id):
    data = request.get_json(silent=True) or {}
    try:
        with transactional("Failed to update address"):
            address = address_service.update_address(g.user.id, address_id, data)
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(address.to_dict())


@addresses_bp.route("/<int:address_id>", methods=["DELETE"])
def delete_address(address_id):
    try:
        with transactional("Failed to delete address"):
            address_service.delete_address(g.user.id, address_id)
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok(message="Address deleted")
