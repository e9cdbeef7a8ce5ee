"""
Streaming tokenizer for ledger text.

Turns an iterator of raw text chunks into a lazy sequence of ``TokenLine``
values:

1. Each chunk is split into physical lines (chunks must hold complete
   lines; a line split across two chunks is the caller's problem).
2. Each line is truncated at its first comment ``;``.
3. The remainder is split into tokens: maximal runs of non-whitespace,
   non-quote characters or fully quoted ``"..."`` runs, concatenated where
   adjacent, so ``"foo"bar`` is a single token.
4. Lines with no tokens (blank or comment-only) are skipped, but still
   count towards line numbering.

Quotes stay in the token text; decoders strip them when a field is a string.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r'(?:[^\s"]+|"[^"]*")+')

# \r\n, \r or \n only. Form feeds and U+2028 stay inside the line.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

COMMENT_CHAR = ";"


@dataclass(frozen=True)
class TokenLine:
    """Tokens from one non-blank, comment-stripped source line.

    Attributes:
        lineno: 1-based physical line number within its source.
        tokens: Non-empty tuple of tokens, quotes included.
    """
    lineno: int
    tokens: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> str:
        return self.tokens[index]


def strip_comment(line: str, quote_aware: bool = True) -> str:
    """Remove a trailing ``;`` comment from a line.

    With ``quote_aware=False`` the line is cut at the first ``;`` even when it
    sits inside a quoted string, matching older ledger tooling.

    A quote that is never closed does not hide a comment: the line is then
    cut at the first ``;`` after that opening quote.
    """
    if not quote_aware:
        index = line.find(COMMENT_CHAR)
        return line if index == -1 else line[:index]

    in_quote = False
    quoted_semicolon = None
    for index, char in enumerate(line):
        if char == '"':
            in_quote = not in_quote
            quoted_semicolon = None
        elif char == COMMENT_CHAR:
            if not in_quote:
                return line[:index]
            if quoted_semicolon is None:
                quoted_semicolon = index
    if in_quote and quoted_semicolon is not None:
        return line[:quoted_semicolon]
    return line


def tokenize_line(line: str) -> list[str]:
    """Split an already comment-stripped line into tokens."""
    return _TOKEN_PATTERN.findall(line)


def stream_token_lines(
    chunks: Iterable[str],
    *,
    quote_aware_comments: bool = True,
    first_lineno: int = 1,
) -> Iterator[TokenLine]:
    """Lazily yield a ``TokenLine`` for every non-blank line in *chunks*.

    Args:
        chunks: Text chunks, each containing only complete lines.
        quote_aware_comments: Passed to :func:`strip_comment`.
        first_lineno: Line number assigned to the first line of the first chunk.

    Yields:
        TokenLine values in input order.
    """
    lineno = first_lineno - 1
    for chunk in chunks:
        lines = _LINE_BREAK.split(chunk)
        if lines[-1] == "":
            lines.pop()
        for line in lines:
            lineno += 1
            tokens = tokenize_line(strip_comment(line, quote_aware_comments))
            if tokens:
                yield TokenLine(lineno=lineno, tokens=tuple(tokens))
    logger.debug("Tokenizer exhausted after %d lines", lineno - first_lineno + 1)
