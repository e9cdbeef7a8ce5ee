"""
pandas views of parsed directives.

Two tabular shapes for quick inspection or hand-off to analysis code:

- ``directives_to_frame``: one row per directive with the columns most
  directives share (type, date, account, number, currency). Fields a
  directive does not have are left as ``None``.
- ``postings_to_frame``: one row per posting, joined with its transaction
  header (date, flag, payee, narration) and with cost/price flattened into
  columns.

Numbers stay ``Decimal`` (object dtype) so no precision is lost; call
``.astype(float)`` on a column if float arithmetic is wanted.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import pandas as pd

from ledger_stream.directives import (
    Amount,
    Balance,
    Directive,
    Posting,
    Price,
    Transaction,
)

logger = logging.getLogger(__name__)

DIRECTIVE_COLUMNS = ["type", "date", "account", "number", "currency", "detail"]

POSTING_COLUMNS = [
    "txn_index",
    "date",
    "flag",
    "payee",
    "narration",
    "account",
    "posting_flag",
    "number",
    "currency",
    "cost_number",
    "cost_currency",
    "lot",
    "price_number",
    "price_currency",
    "price_is_total",
]


def _amount_fields(amount: Amount | None) -> tuple[Any, Any]:
    if amount is None:
        return None, None
    return amount.number, amount.currency


def _directive_row(directive: Directive) -> dict[str, Any]:
    amount = None
    if isinstance(directive, (Balance, Price)):
        amount = directive.amount
    elif isinstance(directive, Posting):
        amount = directive.units
    number, currency = _amount_fields(amount)

    if isinstance(directive, Price):
        detail = directive.commodity
    elif isinstance(directive, Transaction):
        detail = directive.narration
    else:
        detail = None

    return {
        "type": directive.type,
        "date": getattr(directive, "date", None),
        "account": getattr(directive, "account", None),
        "number": number,
        "currency": currency or getattr(directive, "currency", None),
        "detail": detail,
    }


def directives_to_frame(directives: Iterable[Directive]) -> pd.DataFrame:
    """Build a DataFrame with one row per directive."""
    rows = [_directive_row(d) for d in directives]
    df = pd.DataFrame(rows, columns=DIRECTIVE_COLUMNS)
    logger.debug("Built directive frame: %d rows", len(df))
    return df


def postings_to_frame(directives: Iterable[Directive]) -> pd.DataFrame:
    """Build a DataFrame with one row per posting.

    Postings are attributed to the nearest preceding ``Transaction``;
    postings with no preceding transaction are dropped.
    """
    rows: list[dict[str, Any]] = []
    txn: Transaction | None = None
    txn_index = -1
    for directive in directives:
        if isinstance(directive, Transaction):
            txn = directive
            txn_index += 1
            continue
        if not isinstance(directive, Posting) or txn is None:
            continue

        number, currency = _amount_fields(directive.units)
        cost = directive.cost
        cost_number, cost_currency = _amount_fields(cost.amount if cost else None)
        price = directive.price
        price_number, price_currency = _amount_fields(price.amount if price else None)
        rows.append({
            "txn_index": txn_index,
            "date": txn.date,
            "flag": txn.flag,
            "payee": txn.payee,
            "narration": txn.narration,
            "account": directive.account,
            "posting_flag": directive.flag,
            "number": number,
            "currency": currency,
            "cost_number": cost_number,
            "cost_currency": cost_currency,
            "lot": cost.lot if cost else None,
            "price_number": price_number,
            "price_currency": price_currency,
            "price_is_total": price.is_total if price else None,
        })

    df = pd.DataFrame(rows, columns=POSTING_COLUMNS)
    logger.debug("Built posting frame: %d rows from %d transactions", len(df), txn_index + 1)
    return df
