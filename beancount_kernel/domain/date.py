"""Opaque ledger date token."""

from __future__ import annotations

import datetime
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Date:
    """
    A ledger date held as an unchecked string token.

    Ordering is plain lexical comparison of the token, so callers must
    supply zero-padded ``YYYY-MM-DD`` tokens for it to be meaningful.
    No calendar validation is performed.
    """

    token: str

    @classmethod
    def from_date(cls, value: datetime.date) -> Date:
        """Convert a calendar date to its ``YYYY-MM-DD`` token."""
        return cls(value.isoformat())

    def __str__(self) -> str:
        return self.token

    def __repr__(self) -> str:
        return f"Date({self.token!r})"
