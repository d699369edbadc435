import pytest

from app.exceptions import ValidationError
from app.utils.query import parse_flag, parse_whole


@pytest.mark.parametrize("value, expected", [
    (3, 3),
    (3.0, 3),
    ("4", 4),
    (" 2 ", 2),
    (5.5, None),
    (0.5, None),
    ("2.9", None),
    (True, None),
    (None, None),
    ("five", None),
])
def test_parse_whole(value, expected):
    assert parse_whole(value) == expected


@pytest.mark.parametrize("value, expected", [
    (True, True),
    ("true", True),
    ("1", True),
    (False, False),
    ("false", False),
    ("0", False),
    (None, False),
])
def test_parse_flag(value, expected):
    assert parse_flag(value, "is_default") is expected


def test_parse_flag_rejects_unreadable_values():
    with pytest.raises(ValidationError) as exc:
        parse_flag("perhaps", "is_active")
    assert exc.value.message == "is_active must be a boolean"
