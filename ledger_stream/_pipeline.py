"""
Internal streaming pipeline for ledger-stream.

Wires the tokenizer and the classifier together:

    chunks -> stream_token_lines() -> decode_line() -> ParsedLine

and applies the configured per-line error policy. Shared by the public
``parse()`` API and the file loader, which calls it once per (included)
file and threads the parser context between calls.

This module is **not** part of the public API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Generator, Iterable

from ledger_stream.config import LedgerConfig
from ledger_stream.decoders.base import INITIAL_CONTEXT, ParsedLine, ParserContext
from ledger_stream.directives import Directive, Include
from ledger_stream.dispatch import decode_line
from ledger_stream.exceptions import LedgerParseError
from ledger_stream.tokenizer import stream_token_lines

logger = logging.getLogger(__name__)

IncludeHandler = Callable[
    [Include, ParserContext], Generator[ParsedLine, None, ParserContext]
]


def iter_parsed(
    chunks: Iterable[str],
    config: LedgerConfig | None = None,
    *,
    context: ParserContext = INITIAL_CONTEXT,
    source: str | None = None,
    on_include: IncludeHandler | None = None,
) -> Generator[ParsedLine, None, ParserContext]:
    """Lazily decode every non-blank line in *chunks*.

    Error policy (``config.errors.policy``):

    - ``collect``: failed lines are yielded with ``error`` set and logged
      as warnings.
    - ``skip``: failed lines are logged and not yielded.
    - ``raise``: the first ``LedgerParseError`` is raised and the stream ends.

    When *on_include* is given, each decoded ``Include`` is followed by the
    lines that handler yields, and the context it returns replaces the
    current one.

    Returns:
        The parser context after the last line (the generator's return
        value, available via ``yield from``).
    """
    config = config or LedgerConfig()
    policy = config.errors.policy
    lines = stream_token_lines(
        chunks, quote_aware_comments=config.tokenizer.quote_aware_comments
    )
    decoded = failed = 0
    for token_line in lines:
        context, parsed = decode_line(context, token_line, source)
        if parsed.error is None:
            decoded += 1
            yield parsed
            if on_include is not None and isinstance(parsed.directive, Include):
                context = yield from on_include(parsed.directive, context)
            continue

        failed += 1
        if policy == "raise":
            raise parsed.error
        logger.warning("Unparseable line (%s): %s", policy, parsed.error)
        if policy == "collect":
            yield parsed

    logger.info(
        "Parsed %s: %d directives, %d failed lines",
        source or "<stream>", decoded, failed,
    )
    return context


@dataclass
class LedgerResult:
    """A fully materialised parse.

    Attributes:
        lines: Every yielded ParsedLine, in input order.
        directives: The successfully decoded directives, in input order.
        errors: The errors of failed lines, in input order.
    """
    lines: list[ParsedLine] = field(default_factory=list)
    directives: list[Directive] = field(default_factory=list)
    errors: list[LedgerParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def collect(parsed: Iterable[ParsedLine]) -> LedgerResult:
    """Drain a ParsedLine stream into a LedgerResult."""
    result = LedgerResult()
    for line in parsed:
        result.lines.append(line)
        if line.error is None:
            result.directives.append(line.directive)
        else:
            result.errors.append(line.error)
    return result
