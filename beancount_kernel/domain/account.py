"""
Account -- root account type plus hierarchical name segments.

Responsibility:
    Models a ledger account such as ``Assets:US:BofA:Checking``: one of the
    five fixed root types followed by an ordered root-to-leaf sequence of
    name segments.

Architecture position:
    Kernel > Domain -- pure value objects, zero I/O.

Failure modes:
    - Construction never fails; segments are not validated.
    - ``Account.from_string`` raises InvalidAccountNameError when the root
      is not one of the five types or no segment follows it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from beancount_kernel.exceptions import InvalidAccountNameError

ACCOUNT_SEPARATOR = ":"


class AccountType(str, Enum):
    """
    The five root account types of a double-entry ledger.

    The value is the canonical display name used when rendering.
    """

    ASSETS = "Assets"
    LIABILITIES = "Liabilities"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSES = "Expenses"

    def default_name(self) -> str:
        """Canonical root name, e.g. ``Assets``."""
        return self.value


@dataclass(frozen=True, slots=True)
class Account:
    """
    A fully-qualified account.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - parts is always a tuple, root-to-leaf
        - str() gives the canonical ``Type:Segment:Segment`` form
    """

    ty: AccountType
    parts: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.parts, tuple):
            object.__setattr__(self, "parts", tuple(self.parts))

    @classmethod
    def of(cls, ty: AccountType, *parts: str) -> Account:
        """Build an account from its root type and segments."""
        return cls(ty=ty, parts=parts)

    @classmethod
    def from_string(cls, name: str) -> Account:
        """
        Split a colon-joined account name into an Account.

        Raises:
            InvalidAccountNameError: If the root is unknown or there are no
                segments after it.
        """
        root, *parts = name.split(ACCOUNT_SEPARATOR)
        try:
            ty = AccountType(root)
        except ValueError:
            raise InvalidAccountNameError(name, f"unknown root {root!r}") from None
        if not parts:
            raise InvalidAccountNameError(name, "no segments after root")
        return cls(ty=ty, parts=tuple(parts))

    @property
    def leaf(self) -> str | None:
        return self.parts[-1] if self.parts else None

    def __str__(self) -> str:
        return ACCOUNT_SEPARATOR.join((self.ty.default_name(), *self.parts))

    def __repr__(self) -> str:
        return f"Account({str(self)!r})"
