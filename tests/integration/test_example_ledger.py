"""
Integration test: parse a realistic multi-directive ledger end to end.
"""

from __future__ import annotations

from collections import Counter
from datetime import date
from decimal import Decimal

import pytest

import ledger_stream
from ledger_stream.directives import Amount, CostSpec, Custom, PriceSpec
from tests.conftest import EXAMPLE_LEDGER

pytestmark = pytest.mark.integration


@pytest.fixture
def result(tmp_path):
    path = tmp_path / "example.beancount"
    path.write_text(EXAMPLE_LEDGER, encoding="utf-8")
    return ledger_stream.collect(ledger_stream.open(path))


def test_no_errors(result):
    assert result.ok, [str(e) for e in result.errors]


def test_directive_counts(result):
    counts = Counter(d.type for d in result.directives)
    assert counts == {
        "option": 2,
        "plugin": 1,
        "open": 4,
        "commodity": 1,
        "metadata": 1,
        "pad": 1,
        "balance": 1,
        "pushtag": 1,
        "poptag": 1,
        "transaction": 3,
        "posting": 6,
        "price": 1,
        "event": 1,
        "note": 1,
        "document": 1,
        "custom": 1,
        "close": 1,
    }


def test_balance_thousands(result):
    balance = next(d for d in result.directives if d.type == "balance")
    assert balance.amount == Amount(Decimal("1250.00"), "USD")


def test_buy_lot(result):
    buy = [d for d in result.directives if d.type == "posting"][2]
    assert buy.cost == CostSpec(amount=Amount(Decimal("183.07"), "USD"), lot="ref-001")


def test_sell_price(result):
    sell = [d for d in result.directives if d.type == "posting"][4]
    assert sell.price == PriceSpec(amount=Amount(Decimal("197.90"), "USD"), is_total=False)
    assert sell.cost.lot == date(2014, 5, 1)


def test_custom(result):
    custom = next(d for d in result.directives if isinstance(d, Custom))
    assert custom.args == ("Expenses:Food", "monthly", Decimal("450.00"), "USD")


def test_transaction_tags(result):
    txn = next(d for d in result.directives if d.type == "transaction")
    assert txn.payee == "Cafe Mogador"
    assert txn.tags == ("food",)
    assert txn.links == ("receipt-42",)
