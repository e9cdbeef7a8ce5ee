"""
Shared test fixtures and sample ledgers for ledger-stream tests.

Sample ledger text lives here as module-level constants so unit and
integration tests exercise the same realistic input.
"""

from pathlib import Path

import pytest

from ledger_stream.tokenizer import TokenLine, tokenize_line

# ---------------------------------------------------------------------------
# Sample ledgers -- edit here if the examples need to change
# ---------------------------------------------------------------------------
OPEN_AND_BALANCE = (
    "2014-01-01 open Assets:Checking USD\n"
    "2014-01-02 balance Assets:Checking 100.00 USD\n"
)

EXAMPLE_LEDGER = """\
option "title" "Example Ledger"
option "operating_currency" "USD"
plugin "beancount.plugins.auto_accounts"

; Accounts
2014-01-01 open Assets:US:BofA:Checking USD
2014-01-01 open Assets:ETrade:IVV IVV "FIFO"
2014-01-01 open Expenses:Food:Restaurant
2014-01-01 open Equity:Opening-Balances
2014-01-01 commodity IVV
  name: "iShares S&P 500"

2014-01-02 pad Assets:US:BofA:Checking Equity:Opening-Balances
2014-02-01 balance Assets:US:BofA:Checking 1,250.00 USD

pushtag #berlin-trip-2014
2014-04-23 * "Cafe Mogador" "Lamb tagine with wine" #food ^receipt-42
  Expenses:Food:Restaurant   42.50 USD
  Assets:US:BofA:Checking   -42.50 USD ; paid by card
poptag #berlin-trip-2014

2014-05-01 * "Buy IVV"
  Assets:ETrade:IVV            10 IVV {183.07 USD, "ref-001"}
  ! Assets:US:BofA:Checking  -1,830.70 USD

2014-06-01 ! "Sell IVV"
  Assets:ETrade:IVV           -10 IVV {183.07 USD, 2014-05-01} @ 197.90 USD
  Assets:US:BofA:Checking  1,979.00 USD

2014-07-09 price IVV 197.90 USD
2014-07-09 event "location" "Paris, France"
2014-07-10 note Assets:US:BofA:Checking "Called about fees"
2014-07-11 document Assets:US:BofA:Checking "/statements/2014-07.pdf"
2014-07-12 custom "budget" "Expenses:Food" "monthly" 450.00 USD
2015-01-01 close Expenses:Food:Restaurant
"""


def token_line(text: str, lineno: int = 1) -> TokenLine:
    """Helper: build a TokenLine from a single source line."""
    return TokenLine(lineno=lineno, tokens=tuple(tokenize_line(text)))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def ledger_dir(tmp_path: Path) -> Path:
    """A temporary directory holding a main ledger and one include."""
    (tmp_path / "accounts.beancount").write_text(
        "2014-01-01 open Assets:Cash USD\n"
        "2014-01-01 open Expenses:Food USD\n",
        encoding="utf-8",
    )
    (tmp_path / "main.beancount").write_text(
        'option "title" "Main"\n'
        'include "accounts.beancount"\n'
        '2014-02-01 * "Lunch"\n'
        "  Expenses:Food  12.00 USD\n"
        "  Assets:Cash   -12.00 USD\n",
        encoding="utf-8",
    )
    return tmp_path


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (reads ledger files from disk)",
    )
