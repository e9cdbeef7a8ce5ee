"""
Directive model for ledger-stream.

The closed set of value types a ledger line can decode into. These are
plain frozen dataclasses with no parsing logic; every one carries a
``type`` discriminator so consumers can switch on ``directive.type`` or use
``isinstance``/``match``.

Grammar reminders (one per variant)::

    YYYY-MM-DD open {account} [{currency}] ["{booking}"]
    YYYY-MM-DD close {account}
    YYYY-MM-DD commodity {currency}
    YYYY-MM-DD balance {account} {number} {currency}
    YYYY-MM-DD pad {account} {account_to_pad_from}
    YYYY-MM-DD note {account} {comment...}
    YYYY-MM-DD document {account} {path}
    YYYY-MM-DD price {commodity} {number} {currency}
    YYYY-MM-DD event "{name}" "{value}"
    YYYY-MM-DD custom "{name}" {args...}
    YYYY-MM-DD (*|!|txn) ["{payee}"] ["{narration}"] [#tag ...] [^link ...]
    option "{key}" "{value}"
    pushtag #{tag}
    poptag #{tag}
    include "{path}"
    [YYYY-MM-DD] plugin "{module}" ["{config}"]
      [!] {account} [{number} {currency}] [{cost}] [(@|@@) {number} {currency}]
      {key}: {value}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Literal, Union


@dataclass(frozen=True)
class Amount:
    """A decimal quantity of a commodity."""
    number: Decimal
    currency: str


@dataclass(frozen=True)
class CostSpec:
    """A posting's ``{...}`` cost block.

    Attributes:
        amount: Per-unit cost, if written.
        lot: The lot qualifier: a label string, an acquisition date,
            ``True`` for the empty ``{}`` "any lot" marker, or ``None``.
    """
    amount: Amount | None = None
    lot: str | date | bool | None = None


@dataclass(frozen=True)
class PriceSpec:
    """A posting's ``@`` (per-unit) or ``@@`` (total) price annotation."""
    amount: Amount
    is_total: bool = False


@dataclass(frozen=True)
class Open:
    date: date
    account: str
    currency: str | None = None
    booking: str | None = None
    type: Literal["open"] = field(default="open", init=False)


@dataclass(frozen=True)
class Close:
    date: date
    account: str
    type: Literal["close"] = field(default="close", init=False)


@dataclass(frozen=True)
class Commodity:
    date: date
    currency: str
    type: Literal["commodity"] = field(default="commodity", init=False)


@dataclass(frozen=True)
class Balance:
    date: date
    account: str
    amount: Amount
    type: Literal["balance"] = field(default="balance", init=False)


@dataclass(frozen=True)
class Pad:
    date: date
    account: str
    target: str
    type: Literal["pad"] = field(default="pad", init=False)


@dataclass(frozen=True)
class Note:
    date: date
    account: str
    comment: str
    type: Literal["note"] = field(default="note", init=False)


@dataclass(frozen=True)
class Document:
    date: date
    account: str
    path: str
    type: Literal["document"] = field(default="document", init=False)


@dataclass(frozen=True)
class Option:
    key: str
    value: str
    type: Literal["option"] = field(default="option", init=False)


@dataclass(frozen=True)
class PushTag:
    tag: str
    type: Literal["pushtag"] = field(default="pushtag", init=False)


@dataclass(frozen=True)
class PopTag:
    tag: str
    type: Literal["poptag"] = field(default="poptag", init=False)


@dataclass(frozen=True)
class Include:
    path: str
    type: Literal["include"] = field(default="include", init=False)


@dataclass(frozen=True)
class Price:
    date: date
    commodity: str
    amount: Amount
    type: Literal["price"] = field(default="price", init=False)


@dataclass(frozen=True)
class Event:
    date: date
    name: str
    value: str
    type: Literal["event"] = field(default="event", init=False)


@dataclass(frozen=True)
class Plugin:
    """A plugin declaration; ``date`` is only set for the dated form."""
    name: str
    config: str | None = None
    date: date | None = None
    type: Literal["plugin"] = field(default="plugin", init=False)


@dataclass(frozen=True)
class Custom:
    """A free-form directive; ``args`` are typed best-effort (str/date/Decimal)."""
    date: date
    name: str
    args: tuple[str | date | Decimal, ...] = ()
    type: Literal["custom"] = field(default="custom", init=False)


@dataclass(frozen=True)
class Transaction:
    """A transaction header line. Its postings follow as separate directives.

    ``tags`` and ``links`` keep first-appearance order without duplicates;
    use ``tag_set``/``link_set`` for membership queries.
    """
    date: date
    flag: Literal["*", "!"]
    narration: str = ""
    payee: str | None = None
    tags: tuple[str, ...] = ()
    links: tuple[str, ...] = ()
    type: Literal["transaction"] = field(default="transaction", init=False)

    @property
    def tag_set(self) -> frozenset[str]:
        return frozenset(self.tags)

    @property
    def link_set(self) -> frozenset[str]:
        return frozenset(self.links)


@dataclass(frozen=True)
class Posting:
    account: str
    flag: Literal["!"] | None = None
    units: Amount | None = None
    cost: CostSpec | None = None
    price: PriceSpec | None = None
    type: Literal["posting"] = field(default="posting", init=False)


@dataclass(frozen=True)
class Metadata:
    """A ``key: value`` line attached to the preceding directive or posting."""
    key: str
    value: str | date | Decimal | None = None
    type: Literal["metadata"] = field(default="metadata", init=False)


Directive = Union[
    Open, Close, Commodity, Balance, Pad, Note, Document, Option,
    PushTag, PopTag, Include, Price, Event, Plugin, Custom,
    Transaction, Posting, Metadata,
]
