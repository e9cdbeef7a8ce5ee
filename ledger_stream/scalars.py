"""
Scalar token parsers for ledger-stream.

Converts single tokens into typed values:

- ``parse_date``: ``YYYY-MM-DD`` -> ``datetime.date`` (1-based month/day,
  exactly as written).
- ``parse_number``: ledger number literals -> ``Decimal``. Rules are tried in
  order: the symbolic literals ``ZERO``/``ONE``/``HALF`` first, then comma
  thousand separators are stripped and the rest is read as a decimal.
- ``unquote`` / ``coerce_value``: string helpers shared by the decoders.

The parsers never depend on locale, so the same file parses identically on
every platform.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal

from ledger_stream.exceptions import FieldParseError, InvalidDateError, NotANumberError

_SYMBOLIC_NUMBERS: dict[str, Decimal] = {
    "ZERO": Decimal("0"),
    "ONE": Decimal("1"),
    "HALF": Decimal("0.5"),
}

# Sign, digits with optional comma separators, optional fraction.
_NUMBER_SHAPE = re.compile(r"[+-]?[0-9][0-9,]*(?:\.[0-9]+)?")

_DATE_SHAPE = re.compile(r"\d{4}-\d{1,2}-\d{1,2}$")

_DATE_PARTS = ("year", "month", "day")


def parse_date(token: str, field: str = "date") -> date:
    """Parse a ``YYYY-MM-DD`` token.

    Raises:
        FieldParseError: If the token does not have three dash-separated
            parts, or one of year/month/day is not an integer. The error
            names the failing part.
        InvalidDateError: If the parts are integers but do not form a real
            date (e.g. month 13 or day 32).
    """
    parts = token.split("-")
    if len(parts) != 3:
        raise FieldParseError(field, token, "is not in YYYY-MM-DD form")
    values: list[int] = []
    for name, part in zip(_DATE_PARTS, parts):
        if not (part.isascii() and part.isdigit()):
            raise FieldParseError(name, part, "is not a number")
        values.append(int(part))
    year, month, day = values
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidDateError(field, token) from None


def parse_number(token: str, field: str = "number") -> Decimal:
    """Parse a ledger number token into a ``Decimal``.

    Recognises the case-sensitive literals ``ZERO``, ``ONE`` and ``HALF``;
    otherwise the token must be digits with optional ``,`` separators, an
    optional leading sign and an optional fraction. Every ``,`` is removed
    and the rest is parsed as a decimal.

    Raises:
        NotANumberError: If the token is not a number literal. Exponents,
            underscores, whitespace and ``NaN``/``Infinity`` are rejected.
    """
    literal = _SYMBOLIC_NUMBERS.get(token)
    if literal is not None:
        return literal
    if not _NUMBER_SHAPE.fullmatch(token):
        raise NotANumberError(field, token)
    return Decimal(token.replace(",", ""))


def is_quoted(token: str) -> bool:
    return len(token) >= 2 and token[0] == '"' and token[-1] == '"'


def unquote(token: str) -> str:
    """Strip one pair of surrounding double quotes, if present."""
    return token[1:-1] if is_quoted(token) else token


def looks_like_date(token: str) -> bool:
    return bool(_DATE_SHAPE.match(token))


def coerce_value(token: str) -> str | date | Decimal:
    """Best-effort typing of a free-form argument token.

    Quoted tokens become strings, date-shaped tokens become dates, numeric
    tokens become ``Decimal``; anything else (e.g. a currency code or
    ``TRUE``) is returned unchanged.
    """
    if is_quoted(token):
        return unquote(token)
    if looks_like_date(token):
        try:
            return parse_date(token)
        except FieldParseError:
            return token
    try:
        return parse_number(token)
    except NotANumberError:
        return token
