import re

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Keeps (page - 1) * limit below 2**62, inside MongoDB's 64-bit integers.
MAX_PAGINATION_VALUE = 2**31 - 1

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_or_default(value: str | None, default: int) -> int:
    """
    Best-effort positive integer parse for query parameters.

    Reads the leading integer of the value (so "3", " 3", "3abc" and "3.9" all
    give 3). Missing, non-numeric, zero, negative and values above
    MAX_PAGINATION_VALUE give `default`.
    """
    if value is None:
        return default

    match = _LEADING_INT.match(str(value))
    if not match:
        return default

    parsed = int(match.group(1))
    if parsed <= 0 or parsed > MAX_PAGINATION_VALUE:
        return default
    return parsed


def parse_page(value: str | None) -> int:
    return parse_or_default(value, DEFAULT_PAGE)


def parse_limit(value: str | None) -> int:
    return parse_or_default(value, DEFAULT_LIMIT)
