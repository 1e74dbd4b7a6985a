"""
Input normalization for public API payloads and query parameters.

Every function takes a raw, possibly absent value and returns its
canonical form or None. Date/timestamp parsing returns INVALID for
input that cannot be parsed; callers turn that into a validation
error naming the field.
"""

import re
import uuid
from datetime import date, timezone as dt_timezone

import phonenumbers
from dateutil import parser as date_parser

_ISO_DATE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
_NON_DIGITS = re.compile(r'\D+')


class _Invalid:

    def __repr__(self):
        return 'INVALID'


INVALID = _Invalid()


def normalize_text(value):
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_email(value):
    # No RFC validation: anything non-empty is kept, lower-cased
    text = normalize_text(value)
    return text.lower() if text else None


def normalize_phone(value, region=None):
    """
    Canonical phone form, identical for writes and lookups:
      '+55 (11) 98765-4321' -> '+5511987654321'
    Numbers phonenumbers cannot place are reduced to their digits,
    keeping a leading '+':
      '(11) 9876-5432' without a region -> '1198765432'
    """
    text = normalize_text(value)
    if text is None:
        return None

    try:
        parsed = phonenumbers.parse(text, region)
    except phonenumbers.NumberParseException:
        parsed = None

    if parsed is not None and phonenumbers.is_possible_number(parsed):
        return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)

    digits = _NON_DIGITS.sub('', text)
    if not digits:
        return None
    return f"+{digits}" if text.startswith('+') else digits


def sanitize_uuid(value):
    """Canonical UUID string, or None when the value is not a UUID"""
    text = normalize_text(value)
    if text is None:
        return None
    try:
        return str(uuid.UUID(text))
    except ValueError:
        return None


def is_valid_uuid(value):
    return sanitize_uuid(value) is not None


def _parse(text):
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        return None


def _to_utc(parsed):
    # Offsets can push dates at the calendar edges out of range
    if parsed is None or parsed.tzinfo is None:
        return parsed
    try:
        return parsed.astimezone(dt_timezone.utc)
    except OverflowError:
        return None


def normalize_date(value):
    """
    'YYYY-MM-DD' is kept as is (when it is a real date);
    anything else parseable is re-emitted as 'YYYY-MM-DD'.
    """
    text = normalize_text(value)
    if text is None:
        return None

    if _ISO_DATE.match(text):
        try:
            date.fromisoformat(text)
        except ValueError:
            return INVALID
        return text

    parsed = _to_utc(_parse(text))
    if parsed is None:
        return INVALID
    return parsed.date().isoformat()


def normalize_timestamp(value):
    """Parsed as an aware UTC datetime; naive input is taken as UTC"""
    text = normalize_text(value)
    if text is None:
        return None

    parsed = _to_utc(_parse(text))
    if parsed is None:
        return INVALID
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt_timezone.utc)
    return parsed


def is_invalid(value):
    return value is INVALID

