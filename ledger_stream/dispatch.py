"""
Directive classifier for ledger-stream.

``decode_line`` looks at the first token of a ``TokenLine`` and hands the
line to the matching decoder:

1. First character is a digit -> a dated directive. The date is parsed
   first; a bad date fails the whole line. The second token then selects
   a decoder from ``DATED_DECODERS`` or the transaction flags.
2. A known control keyword (``option``, ``pushtag``, ...) -> its decoder.
3. A ``key:`` token after a dated directive -> a metadata line.
4. Inside an open transaction -> a posting.
5. Anything else -> ``UnknownDirectiveError``.

Decoding is a pure function of ``(context, token_line)``: it returns the
context for the next line together with a ``ParsedLine`` and never raises
for malformed input.
"""

from __future__ import annotations

import logging

from ledger_stream.decoders.base import INITIAL_CONTEXT, ParsedLine, ParserContext, TokenCursor
from ledger_stream.decoders.control import CONTROL_DECODERS
from ledger_stream.decoders.dated import DATED_DECODERS, TRANSACTION_FLAGS, decode_transaction
from ledger_stream.decoders.posting import decode_metadata, decode_posting, is_metadata_key
from ledger_stream.directives import Directive, Metadata, Posting, Transaction
from ledger_stream.exceptions import LedgerParseError, MissingFieldError, UnknownDirectiveError
from ledger_stream.scalars import parse_date
from ledger_stream.tokenizer import TokenLine

logger = logging.getLogger(__name__)


def _decode_dated(tokens: tuple[str, ...]) -> Directive:
    day = parse_date(tokens[0])
    if len(tokens) < 2:
        raise MissingFieldError("directive", "dated")
    keyword = tokens[1]
    if keyword in TRANSACTION_FLAGS:
        return decode_transaction(day, keyword, TokenCursor(tokens, "transaction", start=2))
    decoder = DATED_DECODERS.get(keyword)
    if decoder is None:
        raise UnknownDirectiveError(keyword)
    return decoder(day, TokenCursor(tokens, keyword, start=2))


def classify(context: ParserContext, tokens: tuple[str, ...]) -> Directive:
    """Decode *tokens* into a directive, raising LedgerParseError on failure."""
    head = tokens[0]
    if head[0].isdigit():
        return _decode_dated(tokens)
    decoder = CONTROL_DECODERS.get(head)
    if decoder is not None:
        return decoder(TokenCursor(tokens, head, start=1))
    if context.in_entry and is_metadata_key(head):
        return decode_metadata(tokens)
    if context.in_transaction:
        return decode_posting(tokens)
    raise UnknownDirectiveError(head)


def next_context(context: ParserContext, directive: Directive) -> ParserContext:
    """Return the context that follows a successfully decoded *directive*."""
    if isinstance(directive, Transaction):
        return ParserContext(in_transaction=True, in_entry=True)
    if isinstance(directive, (Posting, Metadata)):
        return context
    if getattr(directive, "date", None) is not None:
        return ParserContext(in_transaction=False, in_entry=True)
    return INITIAL_CONTEXT


def decode_line(
    context: ParserContext,
    line: TokenLine,
    source: str | None = None,
) -> tuple[ParserContext, ParsedLine]:
    """Decode one token line.

    Args:
        context: The context left by the previous line.
        line: The token line to decode.
        source: Optional file name recorded on the result and any error.

    Returns:
        ``(next_context, parsed_line)``. On failure ``parsed_line.error`` is
        set; the context survives a failed posting or metadata line and is
        reset after any other failure.
    """
    try:
        directive = classify(context, line.tokens)
    except LedgerParseError as exc:
        exc.locate(line.lineno, line.tokens, source)
        logger.debug("Line %d failed: %s", line.lineno, exc.message)
        nested = context.in_entry and not line.tokens[0][0].isdigit() and (
            line.tokens[0] not in CONTROL_DECODERS
        )
        return (
            context if nested else INITIAL_CONTEXT,
            ParsedLine(lineno=line.lineno, tokens=line.tokens, error=exc, source=source),
        )
    return (
        next_context(context, directive),
        ParsedLine(lineno=line.lineno, tokens=line.tokens, directive=directive, source=source),
    )
