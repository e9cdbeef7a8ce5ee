"""
Decoders for undated control directives: ``option``, ``pushtag``,
``poptag``, ``include`` and ``plugin``.

``CONTROL_DECODERS`` maps the leading keyword to its decoder. Each decoder
gets a ``TokenCursor`` positioned just after the keyword.
"""

from __future__ import annotations

from typing import Callable

from ledger_stream.decoders.base import TokenCursor
from ledger_stream.directives import Directive, Include, Option, Plugin, PopTag, PushTag
from ledger_stream.exceptions import FieldParseError
from ledger_stream.scalars import unquote


def _take_tag(cursor: TokenCursor) -> str:
    token = cursor.take("tag")
    if not token.startswith("#") or len(token) < 2:
        raise FieldParseError("tag", token, "must look like #tag")
    cursor.expect_end()
    return token[1:]


def decode_option(cursor: TokenCursor) -> Option:
    key = cursor.take_string("key")
    value = cursor.take_string("value")
    cursor.expect_end()
    return Option(key=key, value=value)


def decode_pushtag(cursor: TokenCursor) -> PushTag:
    return PushTag(tag=_take_tag(cursor))


def decode_poptag(cursor: TokenCursor) -> PopTag:
    return PopTag(tag=_take_tag(cursor))


def decode_include(cursor: TokenCursor) -> Include:
    path = cursor.take_string("path")
    cursor.expect_end()
    return Include(path=path)


def decode_plugin(cursor: TokenCursor) -> Plugin:
    name = cursor.take_string("name")
    config = cursor.take_optional()
    cursor.expect_end()
    return Plugin(name=name, config=None if config is None else unquote(config))


CONTROL_DECODERS: dict[str, Callable[[TokenCursor], Directive]] = {
    "option": decode_option,
    "pushtag": decode_pushtag,
    "poptag": decode_poptag,
    "include": decode_include,
    "plugin": decode_plugin,
}
