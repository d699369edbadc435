"""Query-string helpers shared by list endpoints.

Optional filters are declared per endpoint as a table mapping a query
parameter name to a builder that turns the raw value into a SQLAlchemy
clause. Builders may return ``None`` to skip a value they cannot use.
"""
from datetime import datetime
from typing import Callable, Dict, Mapping, Optional, Tuple

from flask import current_app

from app.exceptions import ValidationError

FilterTable = Dict[str, Callable]

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_bool(value) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return None


def parse_flag(value, name: str) -> bool:
    """Strict boolean for request bodies; ``None`` means False."""
    if value is None:
        return False
    flag = parse_bool(value)
    if flag is None:
        raise ValidationError(f"{name} must be a boolean")
    return flag


def parse_whole(value) -> Optional[int]:
    """Integer value of ``value``, or None when it is not a whole number.

    Booleans and fractional values (``5.5``, ``"2.9"``) are rejected rather
    than truncated.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def parse_date(value) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"Invalid date: {value}")


def apply_filters(query, args: Mapping, table: FilterTable):
    """Apply every filter of ``table`` whose name is present in ``args``."""
    for name, build in table.items():
        raw = args.get(name)
        if raw is None or raw == "" or raw == "all":
            continue
        clause = build(raw)
        if clause is not None:
            query = query.filter(clause)
    return query


def paginate_args(args: Mapping, default_limit: int = 50) -> Tuple[int, int]:
    """Return ``(limit, offset)`` clamped to ``MAX_PAGE_SIZE``."""
    max_size = current_app.config.get("MAX_PAGE_SIZE", 100)
    try:
        limit = int(args.get("limit", default_limit))
        offset = int(args.get("offset", 0))
    except (TypeError, ValueError):
        raise ValidationError("limit and offset must be integers")
    limit = min(max(limit, 1), max_size)
    return limit, max(offset, 0)
