"""
Unit tests for dated and control directive decoding
(ledger_stream.decoders.dated, ledger_stream.decoders.control).

Lines go through ``decode_line`` so the tests see exactly what a stream
consumer sees.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from ledger_stream.decoders.base import INITIAL_CONTEXT
from ledger_stream.directives import (
    Amount,
    Balance,
    Close,
    Commodity,
    Custom,
    Document,
    Event,
    Include,
    Note,
    Open,
    Option,
    Pad,
    Plugin,
    PopTag,
    Price,
    PushTag,
    Transaction,
)
from ledger_stream.dispatch import decode_line
from ledger_stream.exceptions import (
    FieldParseError,
    InvalidDateError,
    MissingFieldError,
    NotANumberError,
    UnknownDirectiveError,
)
from tests.conftest import token_line


def _decode(text: str):
    _context, parsed = decode_line(INITIAL_CONTEXT, token_line(text))
    return parsed


def _directive(text: str):
    parsed = _decode(text)
    assert parsed.error is None, str(parsed.error)
    return parsed.directive


def _error(text: str):
    parsed = _decode(text)
    assert parsed.directive is None
    return parsed.error


# ---------------------------------------------------------------------------
# Account lifecycle and commodity
# ---------------------------------------------------------------------------

class TestOpenClose:

    def test_open_with_currency(self):
        assert _directive("2014-01-01 open Assets:Checking USD") == Open(
            date=date(2014, 1, 1), account="Assets:Checking", currency="USD",
        )

    def test_open_without_currency(self):
        d = _directive("2014-01-01 open Equity:Opening-Balances")
        assert d.currency is None
        assert d.booking is None

    def test_open_with_booking_method(self):
        d = _directive('2014-01-01 open Assets:ETrade:IVV IVV "FIFO"')
        assert (d.currency, d.booking) == ("IVV", "FIFO")

    def test_open_booking_must_be_quoted(self):
        err = _error("2014-01-01 open Assets:Cash USD FIFO")
        assert isinstance(err, FieldParseError)
        assert err.field == "booking"

    def test_open_missing_account(self):
        err = _error("2014-01-01 open")
        assert isinstance(err, MissingFieldError)
        assert err.field == "account"

    def test_close(self):
        assert _directive("2015-01-01 close Assets:Checking") == Close(
            date=date(2015, 1, 1), account="Assets:Checking",
        )

    def test_close_trailing_token_rejected(self):
        assert isinstance(_error("2015-01-01 close Assets:Checking USD"), FieldParseError)

    def test_commodity(self):
        assert _directive("2014-01-01 commodity IVV") == Commodity(
            date=date(2014, 1, 1), currency="IVV",
        )


# ---------------------------------------------------------------------------
# Balance, pad, price
# ---------------------------------------------------------------------------

class TestAmounts:

    def test_balance(self):
        d = _directive("2014-01-02 balance Assets:Checking 1,100.00 USD")
        assert d == Balance(
            date=date(2014, 1, 2),
            account="Assets:Checking",
            amount=Amount(Decimal("1100.00"), "USD"),
        )

    def test_balance_symbolic_number(self):
        assert _directive("2014-01-02 balance Assets:Checking ZERO USD").amount.number == 0

    def test_balance_missing_currency(self):
        err = _error("2014-01-02 balance Assets:Checking 100.00")
        assert isinstance(err, MissingFieldError)
        assert err.field == "currency"

    def test_balance_bad_number(self):
        err = _error("2014-01-02 balance Assets:Checking lots USD")
        assert isinstance(err, NotANumberError)
        assert err.field == "amount"

    def test_pad(self):
        assert _directive("2014-01-02 pad Assets:Checking Equity:Opening-Balances") == Pad(
            date=date(2014, 1, 2), account="Assets:Checking", target="Equity:Opening-Balances",
        )

    def test_pad_missing_target(self):
        err = _error("2014-01-02 pad Assets:Checking")
        assert isinstance(err, MissingFieldError)
        assert err.field == "target"

    def test_price(self):
        assert _directive("2014-07-09 price USD  1.08 CAD") == Price(
            date=date(2014, 7, 9), commodity="USD", amount=Amount(Decimal("1.08"), "CAD"),
        )


# ---------------------------------------------------------------------------
# Text-bearing directives
# ---------------------------------------------------------------------------

class TestTextDirectives:

    def test_note_quoted(self):
        assert _directive('2014-07-10 note Assets:Checking "Called about fees"') == Note(
            date=date(2014, 7, 10), account="Assets:Checking", comment="Called about fees",
        )

    def test_note_bare_words_rejoined(self):
        assert _directive("2014-07-10 note Assets:Checking called the bank").comment == "called the bank"

    def test_note_several_quoted_tokens(self):
        note = _directive('2014-07-10 note Assets:Checking "Called" "about fees"')
        assert note.comment == "Called about fees"

    def test_note_missing_comment(self):
        err = _error("2014-07-10 note Assets:Checking")
        assert isinstance(err, MissingFieldError)
        assert err.field == "comment"

    def test_document(self):
        assert _directive('2014-07-11 document Assets:Checking "/docs/jul.pdf"') == Document(
            date=date(2014, 7, 11), account="Assets:Checking", path="/docs/jul.pdf",
        )

    def test_event(self):
        assert _directive('2014-07-09 event "location" "Paris, France"') == Event(
            date=date(2014, 7, 9), name="location", value="Paris, France",
        )

    def test_event_missing_value(self):
        err = _error('2014-07-09 event "location"')
        assert isinstance(err, MissingFieldError)
        assert err.field == "value"

    def test_dated_plugin(self):
        d = _directive('2014-01-01 plugin "beancount.plugins.module_name" "config data"')
        assert d == Plugin(name="beancount.plugins.module_name", config="config data", date=date(2014, 1, 1))

    def test_custom_args_are_retyped(self):
        d = _directive('2014-07-09 custom "budget" "..." TRUE 45.30 USD 2014-08-01')
        assert d == Custom(
            date=date(2014, 7, 9),
            name="budget",
            args=("...", "TRUE", Decimal("45.30"), "USD", date(2014, 8, 1)),
        )

    def test_custom_without_args(self):
        assert _directive('2014-07-09 custom "marker"').args == ()


# ---------------------------------------------------------------------------
# Transaction headers
# ---------------------------------------------------------------------------

class TestTransaction:

    def test_payee_and_narration(self):
        d = _directive('2014-04-23 * "Cafe Mogador" "Lamb tagine"')
        assert d == Transaction(
            date=date(2014, 4, 23), flag="*", payee="Cafe Mogador", narration="Lamb tagine",
        )

    def test_single_string_is_narration(self):
        d = _directive('2014-01-01 * "Transfer from Savings account"')
        assert d.payee is None
        assert d.narration == "Transfer from Savings account"

    def test_no_strings(self):
        d = _directive("2014-01-01 !")
        assert (d.flag, d.payee, d.narration) == ("!", None, "")

    def test_txn_keyword_is_star(self):
        assert _directive('2014-01-01 txn "x"').flag == "*"

    def test_tags_and_links(self):
        d = _directive('2014-04-23 * "Flight to Berlin" #berlin-trip-2014 #germany ^inv-1 #germany')
        assert d.tags == ("berlin-trip-2014", "germany")
        assert d.links == ("inv-1",)
        assert d.tag_set == frozenset({"berlin-trip-2014", "germany"})
        assert d.link_set == frozenset({"inv-1"})

    def test_quoted_phrase_with_comma(self):
        d = _directive('2014-02-05 * "Invoice for January, 2014" ^invoice-pepe-studios-jan14')
        assert d.narration == "Invoice for January, 2014"
        assert d.links == ("invoice-pepe-studios-jan14",)

    def test_third_string_rejected(self):
        assert isinstance(_error('2014-01-01 * "a" "b" "c"'), FieldParseError)

    def test_string_after_tag_rejected(self):
        assert isinstance(_error('2014-01-01 * #tag "late"'), FieldParseError)

    def test_bare_word_rejected(self):
        err = _error('2014-01-01 * "a" oops')
        assert isinstance(err, FieldParseError)
        assert err.value == "oops"


# ---------------------------------------------------------------------------
# Date prefix and keyword errors
# ---------------------------------------------------------------------------

class TestDatePrefix:

    def test_invalid_date_fails_line(self):
        err = _error("2014-13-40 open Assets:Cash")
        assert isinstance(err, InvalidDateError)

    def test_non_numeric_date_part(self):
        err = _error("2014-xx-01 open Assets:Cash")
        assert isinstance(err, FieldParseError)
        assert err.field == "month"

    def test_unknown_dated_keyword(self):
        err = _error("2014-01-01 frobnicate Assets:Cash")
        assert isinstance(err, UnknownDirectiveError)
        assert err.keyword == "frobnicate"

    def test_date_only(self):
        err = _error("2014-01-01")
        assert isinstance(err, MissingFieldError)
        assert err.field == "directive"


# ---------------------------------------------------------------------------
# Control directives
# ---------------------------------------------------------------------------

class TestControl:

    def test_option(self):
        assert _directive('option "title" "Beancount Example Ledger"') == Option(
            key="title", value="Beancount Example Ledger",
        )

    def test_option_missing_value(self):
        err = _error('option "title"')
        assert isinstance(err, MissingFieldError)
        assert err.field == "value"

    def test_pushtag_poptag(self):
        assert _directive("pushtag #berlin-trip-2014") == PushTag(tag="berlin-trip-2014")
        assert _directive("poptag #berlin-trip-2014") == PopTag(tag="berlin-trip-2014")

    def test_pushtag_requires_hash(self):
        err = _error("pushtag berlin")
        assert isinstance(err, FieldParseError)
        assert err.field == "tag"

    def test_include(self):
        assert _directive('include "path/to/file.beancount"') == Include(path="path/to/file.beancount")
        assert _directive("include other.beancount").path == "other.beancount"

    def test_plugin_with_and_without_config(self):
        assert _directive('plugin "mod" "cfg"') == Plugin(name="mod", config="cfg")
        assert _directive('plugin "mod"').config is None

    def test_unknown_keyword_outside_transaction(self):
        err = _error("Assets:Cash 10 USD")
        assert isinstance(err, UnknownDirectiveError)
        assert err.keyword == "Assets:Cash"


@pytest.mark.parametrize(
    "text",
    [
        "2014-01-01 open Assets:Checking USD",
        "2014-01-02 balance Assets:Checking 100.00 USD",
        '2014-07-09 event "location" "Paris, France"',
        'option "title" "Example"',
    ],
)
def test_directives_are_immutable(text):
    d = _directive(text)
    with pytest.raises(AttributeError):
        d.type = "other"
