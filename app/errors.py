import logging
from flask import Blueprint
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from app.exceptions import ServiceError
from app.utils.responses import error
from models import db

errors_bp = Blueprint("errors_bp", __name__)


@errors_bp.app_errorhandler(ServiceError)
def handle_service_error(e):
    return error(e.message, status=e.status)


@errors_bp.app_errorhandler(IntegrityError)
def handle_integrity_error(e):
    db.session.rollback()
    logging.warning("Integrity error: %s", e.orig)
    return error("Record violates a uniqueness constraint", status=400)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=e.code)


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logging.exception("Unhandled exception")
    return error(
        "An unexpected error occurred. Please try again later.",
        status=500,
        code=500,
    )
