"""
Decoders sub-package for ledger-stream.

Turns one token line into one directive value. Split by directive family:

- base.py: ParserContext, ParsedLine and the TokenCursor used by all decoders.
- dated.py: directives that start with a date (open, balance, transactions, ...).
- control.py: undated control directives (option, pushtag, poptag, include, plugin).
- posting.py: lines nested under a directive (postings with cost/price, metadata).

The classifier in ``ledger_stream.dispatch`` picks the decoder for a line.
"""
