from .responses import ok, error, internal_error_response, validation_error_response
from .auth import auth_required, role_required
from .validation import has_required_fields, validate_schema
from .db import transactional
from .jwt import (
    create_access_token,
    decode_token,
    TokenError,
)
from .query import apply_filters, paginate_args, parse_bool, parse_flag, parse_whole

__all__ = [
    'ok',
    'error',
    'internal_error_response',
    'validation_error_response',
    'auth_required',
    'role_required',
    'create_access_token',
    'decode_token',
    'TokenError',
    'has_required_fields',
    'validate_schema',
    'transactional',
    'apply_filters',
    'paginate_args',
    'parse_bool',
    'parse_flag',
    'parse_whole',
]
