"""
Decoders for lines nested under a directive: postings and metadata.

Posting grammar::

    [!] account [number currency] [{cost}] [(@|@@) number currency]

Cost block grammar (``{`` and ``}`` may be glued to neighbouring tokens)::

    {}                                  any lot
    {number currency}                   per-unit cost
    {number currency, "label"}          cost + lot label
    {number currency, YYYY-MM-DD}       cost + acquisition date
    {YYYY-MM-DD}  /  {"label"}          lot qualifier only

Comma-separated components may appear in any order, at most one amount and
one lot qualifier. ``@`` is a per-unit price, ``@@`` a total price; both are
normalised into a ``PriceSpec`` with ``is_total`` recording which was used.

Metadata lines are ``key: value`` with a lowercase-initial key.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Sequence

from ledger_stream.decoders.base import TokenCursor
from ledger_stream.directives import Amount, CostSpec, Metadata, Posting, PriceSpec
from ledger_stream.exceptions import FieldParseError, MalformedCostOrPriceError
from ledger_stream.scalars import (
    coerce_value,
    is_quoted,
    looks_like_date,
    parse_date,
    parse_number,
    unquote,
)
from ledger_stream.tokenizer import tokenize_line

PRICE_MARKERS = ("@", "@@")

_METADATA_KEY = re.compile(r"[a-z][A-Za-z0-9_-]*:$")


def is_metadata_key(token: str) -> bool:
    return bool(_METADATA_KEY.match(token))


def _split_components(body: str) -> list[str]:
    """Split a cost body on commas that are not inside quotes."""
    components: list[str] = []
    current: list[str] = []
    in_quote = False
    for char in body:
        if char == '"':
            in_quote = not in_quote
        if char == "," and not in_quote:
            components.append("".join(current))
            current = []
        else:
            current.append(char)
    components.append("".join(current))
    return [c.strip() for c in components]


def _read_cost_amount(words: list[str], body: str) -> Amount:
    try:
        number = parse_number(words[0], "cost")
    except FieldParseError as exc:
        raise MalformedCostOrPriceError(
            f"Cost amount {words[0]!r} in {{{body}}} is not a number"
        ) from exc
    return Amount(number=number, currency=words[1])


def _read_lot(word: str, body: str) -> str | date:
    if is_quoted(word):
        return unquote(word)
    if looks_like_date(word):
        try:
            return parse_date(word, "lot date")
        except FieldParseError as exc:
            raise MalformedCostOrPriceError(
                f"Lot date {word!r} in {{{body}}} is not a valid date"
            ) from exc
    raise MalformedCostOrPriceError(
        f"Cannot read {word!r} in {{{body}}} as a cost amount, lot label or lot date"
    )


def decode_cost(cursor: TokenCursor) -> CostSpec:
    """Consume tokens from the one opening ``{`` through the one closing ``}``."""
    parts: list[str] = []
    while True:
        token = cursor.take_optional()
        if token is None:
            raise MalformedCostOrPriceError(
                f"Unterminated cost block {' '.join(parts)!r}, expected '}}'"
            )
        parts.append(token)
        if token.endswith("}"):
            break

    body = " ".join(parts)[1:-1].strip()
    if body.startswith("{"):
        raise MalformedCostOrPriceError(f"Total cost blocks {{{body}}} are not supported")
    if not body:
        return CostSpec(lot=True)

    amount: Amount | None = None
    lot = None
    for component in _split_components(body):
        words = tokenize_line(component)
        if len(words) == 2:
            if amount is not None:
                raise MalformedCostOrPriceError(f"More than one cost amount in {{{body}}}")
            amount = _read_cost_amount(words, body)
        elif len(words) == 1:
            if lot is not None:
                raise MalformedCostOrPriceError(f"More than one lot qualifier in {{{body}}}")
            lot = _read_lot(words[0], body)
        else:
            raise MalformedCostOrPriceError(f"Cannot read component {component!r} of {{{body}}}")
    return CostSpec(amount=amount, lot=lot)


def decode_price_annotation(cursor: TokenCursor) -> PriceSpec:
    marker = cursor.take("price")
    number_token = cursor.take_optional()
    currency = cursor.take_optional()
    if number_token is None or currency is None:
        raise MalformedCostOrPriceError(
            f"Price annotation {marker!r} needs a number and a currency"
        )
    try:
        number = parse_number(number_token, "price")
    except FieldParseError as exc:
        raise MalformedCostOrPriceError(
            f"Price {number_token!r} after {marker!r} is not a number"
        ) from exc
    return PriceSpec(amount=Amount(number=number, currency=currency), is_total=marker == "@@")


def decode_posting(tokens: Sequence[str]) -> Posting:
    cursor = TokenCursor(tokens, "posting")
    flag = None
    if cursor.peek() == "!":
        flag = cursor.take("flag")
    account = cursor.take("account")

    units = None
    token = cursor.peek()
    if token is not None and not token.startswith("{") and token not in PRICE_MARKERS:
        units = cursor.take_amount()

    cost = None
    if (cursor.peek() or "").startswith("{"):
        cost = decode_cost(cursor)

    price = None
    if cursor.peek() in PRICE_MARKERS:
        price = decode_price_annotation(cursor)

    cursor.expect_end()
    return Posting(account=account, flag=flag, units=units, cost=cost, price=price)


def decode_metadata(tokens: Sequence[str]) -> Metadata:
    key = tokens[0][:-1]
    rest = list(tokens[1:])
    if not rest:
        value = None
    elif len(rest) == 1:
        value = coerce_value(rest[0])
    else:
        value = unquote(" ".join(rest))
    return Metadata(key=key, value=value)
