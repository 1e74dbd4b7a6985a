"""
Offset cursor pagination

A cursor is an opaque URL-safe token wrapping a plain offset:
    encode_cursor(100) -> 'bzoxMDA'   ('o:100', base64url, no padding)

The codec never looks at the data. A missing, malformed, negative or
out-of-range token decodes to offset 0, so a bad cursor restarts the
listing from the first page instead of failing the request.
"""

import base64
import binascii

MAX_OFFSET = 2 ** 31 - 1

_PREFIX = 'o:'


def encode_cursor(offset: int) -> str:
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise TypeError(f"offset must be an int, got {type(offset).__name__}")
    if offset < 0 or offset > MAX_OFFSET:
        raise ValueError(f"offset must be between 0 and {MAX_OFFSET}, got {offset}")
    raw = f"{_PREFIX}{offset}".encode('ascii')
    return base64.urlsafe_b64encode(raw).decode('ascii').rstrip('=')


def decode_cursor(token) -> int:
    if not token:
        return 0

    text = str(token).strip()
    padded = text + '=' * (-len(text) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode('ascii')).decode('ascii')
    except (binascii.Error, UnicodeError, ValueError):
        return 0

    if not raw.startswith(_PREFIX):
        return 0
    digits = raw[len(_PREFIX):]
    if not digits.isdigit():
        return 0

    offset = int(digits)
    if offset > MAX_OFFSET:
        return 0
    return offset


def parse_limit(raw, config) -> int:
    """
    Page size from a query parameter, clamped to
    [config.min_limit, config.max_limit]; unusable input gives the default
    """
    try:
        limit = int(str(raw).strip())
    except (TypeError, ValueError):
        return config.default_limit
    return max(config.min_limit, min(limit, config.max_limit))


def page_window(offset: int, limit: int, total: int):
    """
    Inclusive [start, end] row range for one page, plus the cursor of
    the following page (None on the last page).
    """
    start = offset
    end = offset + limit - 1
    next_offset = end + 1
    next_cursor = encode_cursor(next_offset) if next_offset < total else None
    return start, end, next_cursor
