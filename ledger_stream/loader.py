"""
File loader for ledger-stream.

Supplies the core pipeline with chunks read from disk and resolves
``include`` directives by parsing each referenced file with a recursive
call of the same pipeline. The only state shared between a file and the
files it includes is the ``ParserContext``, which is threaded through so
that a transaction left open at the end of an included file stays open.

Include resolution:
- Paths are relative to the directory of the including file.
- Glob patterns (``*``, ``?``, ``[``) are expanded, matches in sorted order.
- A pattern matching nothing, a cycle, or nesting deeper than
  ``includes.max_depth`` raises ``IncludeError``.
- The ``Include`` directive itself is still yielded, before the lines of
  the included file(s).
"""

from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import Generator, Iterator

from ledger_stream._pipeline import iter_parsed
from ledger_stream.config import LedgerConfig
from ledger_stream.decoders.base import INITIAL_CONTEXT, ParsedLine, ParserContext
from ledger_stream.directives import Include
from ledger_stream.exceptions import IncludeError

logger = logging.getLogger(__name__)

_GLOB_CHARS = set("*?[")


def read_chunks(
    path: str | Path,
    lines_per_chunk: int = 1000,
    encoding: str = "utf-8-sig",
) -> Iterator[str]:
    """Yield the file's text in chunks of at most *lines_per_chunk* complete lines."""
    batch: list[str] = []
    with open(path, "r", encoding=encoding) as f:
        for line in f:
            batch.append(line)
            if len(batch) >= lines_per_chunk:
                yield "".join(batch)
                batch = []
    if batch:
        yield "".join(batch)


def _resolve_include(include: Include, including_file: Path) -> list[Path]:
    target = Path(include.path)
    if not target.is_absolute():
        target = including_file.parent / target
    if _GLOB_CHARS & set(include.path):
        matches = [Path(p) for p in sorted(glob.glob(str(target)))]
    else:
        matches = [target] if target.is_file() else []
    if not matches:
        raise IncludeError(f"Included file not found: {include.path} (from {including_file})")
    return matches


def _iter_file(
    path: Path,
    config: LedgerConfig,
    context: ParserContext,
    stack: tuple[Path, ...],
) -> Generator[ParsedLine, None, ParserContext]:
    path = path.resolve()
    if path in stack:
        chain = " -> ".join(str(p) for p in (*stack, path))
        raise IncludeError(f"Include cycle detected: {chain}")
    if len(stack) > config.includes.max_depth:
        raise IncludeError(
            f"Includes nested deeper than {config.includes.max_depth} levels at {path}"
        )
    stack = (*stack, path)
    logger.info("Parsing ledger file %s (depth %d)", path, len(stack) - 1)

    def follow(include: Include, ctx: ParserContext) -> Generator[ParsedLine, None, ParserContext]:
        for included in _resolve_include(include, path):
            ctx = yield from _iter_file(included, config, ctx, stack)
        return ctx

    chunks = read_chunks(
        path,
        lines_per_chunk=config.loader.lines_per_chunk,
        encoding=config.loader.encoding,
    )
    return (yield from iter_parsed(
        chunks,
        config,
        context=context,
        source=str(path),
        on_include=follow if config.includes.resolve else None,
    ))


def iter_file(path: str | Path, config: LedgerConfig | None = None) -> Iterator[ParsedLine]:
    """Lazily parse a ledger file, following includes per *config*.

    Raises:
        FileNotFoundError: If *path* does not exist.
        IncludeError: If an include cannot be resolved. Raised lazily, when
            iteration reaches the offending ``include`` line.
    """
    config = config or LedgerConfig()
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Ledger file not found: {path}")
    return _iter_file(path, config, INITIAL_CONTEXT, ())
