"""
Beancount Kernel

An in-memory document model for plain-text double-entry ledgers with:
- A closed set of immutable directive types
- Deferred validation (construction never fails)
- A canonical renderer back to ledger source text
- Typed errors and structured logging
"""

__version__ = "0.1.0"
