"""
Demo script: parse a ledger file via the public API and print a summary.

Usage:
    uv run python scripts/run_parse.py path/to/main.beancount
    uv run python scripts/run_parse.py path/to/main.beancount --config ledger-stream.yaml

Every include is followed. Failed lines are logged with their file and line
number; the script then prints directive counts per type and the postings
table.
"""

from __future__ import annotations

import logging
import sys
from collections import Counter

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_parse")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> int:
    import ledger_stream

    args = sys.argv[1:]
    if not args:
        log.error("usage: run_parse.py LEDGER [--config CONFIG]")
        return 2
    ledger_path = args[0]
    config_path = None
    if "--config" in args:
        rest = args[args.index("--config") + 1:]
        if not rest:
            log.error("--config needs a path")
            return 2
        config_path = rest[0]

    result = ledger_stream.collect(ledger_stream.open(ledger_path, config=config_path))

    counts = Counter(d.type for d in result.directives)
    log.info("=" * 70)
    for directive_type, count in sorted(counts.items()):
        log.info("  %-12s %s", directive_type, f"{count:,}")
    log.info("  %-12s %s", "errors", f"{len(result.errors):,}")
    log.info("=" * 70)

    postings = ledger_stream.frame.postings_to_frame(result.directives)
    if not postings.empty:
        print(postings.to_string(index=False))
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
