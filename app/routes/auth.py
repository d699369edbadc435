from flask import Blueprint, request, current_app, g
from flask_limiter.util import get_remote_address
import logging
from extensions import limiter
from app.version import API_PREFIX
from app.exceptions import ServiceError
from app.schemas.auth import SignupRequest, SigninRequest
from app.services import users as user_service
from app.utils import ok, error, transactional, internal_error_response, auth_required, validate_schema

auth_bp = Blueprint("auth", __name__, url_prefix=f"{API_PREFIX}/auth")


@auth_bp.route("/signup", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["SIGNUP_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many signups from this IP",
)
@validate_schema(SignupRequest, message="Email, password, first name and last name are required")
def signup():
    """Register a new account.
    ---
    tags: [Auth]
    responses:
      200: {description: The new user and an access token}
      400: {description: Missing fields or the email is taken}
    """
    data: SignupRequest = request.validated_data
    try:
        with transactional("Signup failed"):
            user, token = user_service.register_user(
                data.email, data.password, data.firstName, data.lastName
            )
    except ServiceError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok({"user": user.to_dict(), "token": token})


@auth_bp.route("/signin", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["SIGNIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many sign-in attempts from this IP",
)
@validate_schema(SigninRequest, message="Invalid credentials")
def signin():
    """Exchange email and password for an access token.
    ---
    tags: [Auth]
    responses:
      200: {description: The user and an access token}
      400: {description: Invalid credentials}
    """
    data: SigninRequest = request.validated_data
    try:
        with transactional("Signin failed"):
            user, token = user_service.authenticate(data.email, data.password)
    except ServiceError as e:
        logging.info("signin rejected")
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
    return ok({"user": user.to_dict(), "token": token})


@auth_bp.route("/signout", methods=["POST"])
@auth_required
def signout():
    try:
        with transactional("Signout failed"):
            user_service.revoke_session(g.token)
    except Exception:
        return internal_error_response()
    return ok(message="Signed out")


@auth_bp.route("/session", methods=["GET"])
@auth_required
def session():
    return ok({"user": g.user.to_dict()})
