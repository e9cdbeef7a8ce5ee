"""
ledger-stream: streaming parser for plain-text, beancount-style ledgers.

Public API surface:

- ``parse(chunks, config=None)`` -- **core entry point**. Takes an iterable
  of text chunks (each holding complete lines) and lazily yields one
  ``ParsedLine`` per non-blank line: either a decoded directive or the
  ``LedgerParseError`` explaining why the line failed.

- ``parse_text(text, config=None)`` -- convenience wrapper for a single
  in-memory string.

- ``open(path, config=None)`` -- parse a ledger file from disk, following
  ``include`` directives recursively.

- ``collect(parsed)`` -- drain any of the above into a ``LedgerResult``
  (directives and errors as lists).

Examples::

    import ledger_stream

    for line in ledger_stream.open("main.beancount"):
        if line.ok:
            print(line.directive)
        else:
            print(line.error)

    result = ledger_stream.collect(ledger_stream.parse_text(text))
    df = ledger_stream.frame.postings_to_frame(result.directives)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from ledger_stream import frame
from ledger_stream._pipeline import LedgerResult, collect, iter_parsed
from ledger_stream.config import LedgerConfig, load_config, save_config
from ledger_stream.decoders.base import ParsedLine, ParserContext
from ledger_stream.dispatch import decode_line
from ledger_stream.loader import iter_file
from ledger_stream.scalars import parse_date, parse_number
from ledger_stream.tokenizer import TokenLine, stream_token_lines

__all__ = [
    "open",
    "parse",
    "parse_text",
    "collect",
    "decode_line",
    "parse_date",
    "parse_number",
    "stream_token_lines",
    "frame",
    "LedgerConfig",
    "LedgerResult",
    "ParsedLine",
    "ParserContext",
    "TokenLine",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)


def parse(chunks: Iterable[str], config: LedgerConfig | None = None) -> Iterator[ParsedLine]:
    """Lazily parse ledger text supplied as complete-line chunks.

    The stream is forward-only: parsing the same input twice requires
    supplying the chunks again. ``include`` directives are returned as
    ``Include`` values and are not followed (use :func:`open` for that).
    """
    return iter_parsed(chunks, config)


def parse_text(text: str, config: LedgerConfig | None = None) -> Iterator[ParsedLine]:
    """Lazily parse a single in-memory ledger string."""
    return iter_parsed([text], config)


def open(path: str | Path, config: LedgerConfig | str | Path | None = None) -> Iterator[ParsedLine]:
    """Lazily parse a ledger file, resolving ``include`` directives.

    Args:
        path: The ledger file to parse.
        config: A ``LedgerConfig``, a path to a YAML config, or ``None`` for
            defaults.

    Raises:
        FileNotFoundError: If *path* (or a config path) does not exist.
    """
    if isinstance(config, (str, Path)):
        config = load_config(config)
    logger.info("open() -- path=%s", path)
    return iter_file(path, config)
