"""
Custom exception hierarchy for ledger-stream.

Two families live here:

- Errors about the *environment* of a parse (a bad config file, a missing
  or cyclic ``include``). These are raised and propagate to the caller.
- ``LedgerParseError`` and its subclasses, which describe why a single
  ledger line could not be decoded. The scalar parsers and decoders raise
  them; the dispatcher catches them and attaches them to the ``ParsedLine``
  for that line, so one malformed line never stops the stream.

Every ``LedgerParseError`` carries the line number, the offending token
line and (when known) the source file name so the message alone is enough
to find and fix the line.
"""

from __future__ import annotations

from typing import Sequence


class LedgerStreamError(Exception):
    """Base exception for all ledger-stream errors."""


class ConfigValidationError(LedgerStreamError):
    """Raised when a ledger-stream YAML config is empty or invalid."""


class IncludeError(LedgerStreamError):
    """Raised when an ``include`` directive cannot be resolved.

    This can happen if:
    - The referenced file (or glob) matches nothing on disk.
    - The include graph contains a cycle.
    - Includes nest deeper than ``includes.max_depth``.
    """


class LedgerParseError(LedgerStreamError):
    """A single ledger line failed to decode.

    ``lineno``, ``tokens`` and ``source`` start out unset and are filled in
    by the dispatcher via :meth:`locate` once the failing line is known.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.lineno: int | None = None
        self.tokens: tuple[str, ...] = ()
        self.source: str | None = None

    def locate(
        self,
        lineno: int,
        tokens: Sequence[str],
        source: str | None = None,
    ) -> LedgerParseError:
        """Attach the position of the failing line and return ``self``."""
        self.lineno = lineno
        self.tokens = tuple(tokens)
        self.source = source
        return self

    def __str__(self) -> str:
        if self.lineno is None:
            return self.message
        where = f"{self.source}:{self.lineno}" if self.source else f"line {self.lineno}"
        return f"{where}: {self.message}\n  {' '.join(self.tokens)}"


class FieldParseError(LedgerParseError):
    """A token could not be converted to the value its field requires."""

    def __init__(self, field: str, value: str, reason: str) -> None:
        super().__init__(f"The {field} value {value!r} {reason}")
        self.field = field
        self.value = value


class InvalidDateError(FieldParseError):
    """A date token has numeric parts but names no real calendar day."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(field, value, "is not a valid date")


class NotANumberError(FieldParseError):
    """A number token is neither a symbolic literal nor a finite decimal."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(field, value, "is not a number")


class MissingFieldError(LedgerParseError):
    """The directive grammar needs more tokens than the line supplies."""

    def __init__(self, field: str, directive: str) -> None:
        super().__init__(f"Missing {field} for {directive} directive")
        self.field = field
        self.directive = directive


class UnknownDirectiveError(LedgerParseError):
    """The leading keyword (or the keyword after a date) is not recognised."""

    def __init__(self, keyword: str) -> None:
        super().__init__(f"Unknown directive {keyword!r}")
        self.keyword = keyword


class MalformedCostOrPriceError(LedgerParseError):
    """A posting's ``{...}`` cost block or ``@``/``@@`` price is ill-formed."""
