"""
Shared types for the directive decoders.

- ``ParserContext``: the only state carried from one line to the next.
  It is an immutable value threaded through ``decode_line`` rather than a
  module-level flag, so decoding is a pure function of
  ``(context, token_line)``.
- ``ParsedLine``: the per-line result. Exactly one of ``directive`` and
  ``error`` is set.
- ``TokenCursor``: positional reader used by every decoder. Asking for a
  required token that is not there raises ``MissingFieldError`` naming the
  field, which is how "too few tokens" is reported uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from ledger_stream.directives import Amount, Directive
from ledger_stream.exceptions import FieldParseError, LedgerParseError, MissingFieldError
from ledger_stream.scalars import parse_number, unquote


@dataclass(frozen=True)
class ParserContext:
    """Line-to-line parser state.

    Attributes:
        in_transaction: The nearest preceding header was a transaction, so
            bare account lines are postings.
        in_entry: The nearest preceding header was a dated directive, so
            ``key: value`` lines are metadata.
    """
    in_transaction: bool = False
    in_entry: bool = False


INITIAL_CONTEXT = ParserContext()


@dataclass(frozen=True)
class ParsedLine:
    """Decode result for one token line."""
    lineno: int
    tokens: tuple[str, ...]
    directive: Directive | None = None
    error: LedgerParseError | None = None
    source: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TokenCursor:
    """Reads a token line left to right on behalf of one directive."""

    def __init__(self, tokens: Sequence[str], directive: str, start: int = 0) -> None:
        self.tokens = tokens
        self.directive = directive
        self.pos = start

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self) -> str | None:
        return None if self.at_end() else self.tokens[self.pos]

    def take(self, field: str) -> str:
        """Return the next token, raising MissingFieldError if there is none."""
        if self.at_end():
            raise MissingFieldError(field, self.directive)
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def take_optional(self) -> str | None:
        token = self.peek()
        if token is not None:
            self.pos += 1
        return token

    def take_string(self, field: str) -> str:
        return unquote(self.take(field))

    def take_number(self, field: str) -> Decimal:
        return parse_number(self.take(field), field)

    def take_amount(self, field: str = "amount") -> Amount:
        number = self.take_number(field)
        currency = self.take("currency")
        return Amount(number=number, currency=currency)

    def take_rest(self, field: str) -> list[str]:
        """Return all remaining tokens, requiring at least one."""
        if self.at_end():
            raise MissingFieldError(field, self.directive)
        return self.rest()

    def rest(self) -> list[str]:
        remaining = list(self.tokens[self.pos:])
        self.pos = len(self.tokens)
        return remaining

    def expect_end(self) -> None:
        """Reject any tokens left over after the grammar is satisfied."""
        if not self.at_end():
            raise FieldParseError(self.directive, self.tokens[self.pos], "is unexpected")
