"""
Decoders for date-prefixed directives.

Each decoder receives the already-parsed date and a ``TokenCursor``
positioned just after the keyword, and returns one directive. Grammar
violations are raised as ``LedgerParseError`` subclasses; the dispatcher
turns them into per-line error results.

``DATED_DECODERS`` maps the keyword after the date to its decoder. The
transaction flags ``*``/``!`` (and the ``txn`` alias) are dispatched here
too, since a transaction header is just another dated directive.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from ledger_stream.decoders.base import TokenCursor
from ledger_stream.directives import (
    Balance,
    Close,
    Commodity,
    Custom,
    Directive,
    Document,
    Event,
    Note,
    Open,
    Pad,
    Plugin,
    Price,
    Transaction,
)
from ledger_stream.exceptions import FieldParseError
from ledger_stream.scalars import coerce_value, is_quoted, unquote

TRANSACTION_FLAGS = {"*": "*", "!": "!", "txn": "*"}


def decode_open(day: date, cursor: TokenCursor) -> Open:
    account = cursor.take("account")
    currency = None
    booking = None
    token = cursor.take_optional()
    if token is not None and not is_quoted(token):
        currency = token
        token = cursor.take_optional()
    if token is not None:
        if not is_quoted(token):
            raise FieldParseError("booking", token, "must be a quoted string")
        booking = unquote(token)
    cursor.expect_end()
    return Open(date=day, account=account, currency=currency, booking=booking)


def decode_close(day: date, cursor: TokenCursor) -> Close:
    account = cursor.take("account")
    cursor.expect_end()
    return Close(date=day, account=account)


def decode_commodity(day: date, cursor: TokenCursor) -> Commodity:
    currency = cursor.take("currency")
    cursor.expect_end()
    return Commodity(date=day, currency=currency)


def decode_balance(day: date, cursor: TokenCursor) -> Balance:
    account = cursor.take("account")
    amount = cursor.take_amount()
    cursor.expect_end()
    return Balance(date=day, account=account, amount=amount)


def decode_pad(day: date, cursor: TokenCursor) -> Pad:
    account = cursor.take("account")
    target = cursor.take("target")
    cursor.expect_end()
    return Pad(date=day, account=account, target=target)


def decode_note(day: date, cursor: TokenCursor) -> Note:
    account = cursor.take("account")
    # Quoted or bare words; each token is unquoted, then the words rejoined.
    comment = " ".join(unquote(token) for token in cursor.take_rest("comment"))
    return Note(date=day, account=account, comment=comment)


def decode_document(day: date, cursor: TokenCursor) -> Document:
    account = cursor.take("account")
    path = cursor.take_string("path")
    cursor.expect_end()
    return Document(date=day, account=account, path=path)


def decode_price(day: date, cursor: TokenCursor) -> Price:
    commodity = cursor.take("commodity")
    amount = cursor.take_amount("price")
    cursor.expect_end()
    return Price(date=day, commodity=commodity, amount=amount)


def decode_event(day: date, cursor: TokenCursor) -> Event:
    name = cursor.take_string("name")
    value = cursor.take_string("value")
    cursor.expect_end()
    return Event(date=day, name=name, value=value)


def decode_dated_plugin(day: date, cursor: TokenCursor) -> Plugin:
    name = cursor.take_string("name")
    token = cursor.take_optional()
    cursor.expect_end()
    return Plugin(name=name, config=None if token is None else unquote(token), date=day)


def decode_custom(day: date, cursor: TokenCursor) -> Custom:
    name = cursor.take_string("name")
    args = tuple(coerce_value(token) for token in cursor.rest())
    return Custom(date=day, name=name, args=args)


def decode_transaction(day: date, flag: str, cursor: TokenCursor) -> Transaction:
    """Decode ``[payee] [narration] [#tag|^link ...]`` after the flag.

    One quoted string is the narration; two are payee then narration.
    """
    strings: list[str] = []
    tags: list[str] = []
    links: list[str] = []
    while not cursor.at_end():
        token = cursor.take("narration")
        if is_quoted(token):
            if tags or links:
                raise FieldParseError("narration", token, "must come before tags and links")
            if len(strings) == 2:
                raise FieldParseError("narration", token, "is a third string; expected at most payee and narration")
            strings.append(unquote(token))
        elif token.startswith("#") and len(token) > 1:
            if token[1:] not in tags:
                tags.append(token[1:])
        elif token.startswith("^") and len(token) > 1:
            if token[1:] not in links:
                links.append(token[1:])
        else:
            raise FieldParseError("tag", token, "is not a quoted string, #tag or ^link")

    payee = strings[0] if len(strings) == 2 else None
    narration = strings[-1] if strings else ""
    return Transaction(
        date=day,
        flag=TRANSACTION_FLAGS[flag],
        narration=narration,
        payee=payee,
        tags=tuple(tags),
        links=tuple(links),
    )


DATED_DECODERS: dict[str, Callable[[date, TokenCursor], Directive]] = {
    "open": decode_open,
    "close": decode_close,
    "commodity": decode_commodity,
    "balance": decode_balance,
    "pad": decode_pad,
    "note": decode_note,
    "document": decode_document,
    "price": decode_price,
    "event": decode_event,
    "plugin": decode_dated_plugin,
    "custom": decode_custom,
}
