"""The ledger document: an ordered sequence of directives."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from beancount_kernel.domain.directives import Directive


@dataclass(frozen=True, slots=True)
class Ledger:
    """
    A complete or partial ledger document.

    Directive order is document order and is preserved through rendering.
    Duplicate directives are allowed.
    """

    directives: tuple[Directive, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.directives, tuple):
            object.__setattr__(self, "directives", tuple(self.directives))

    def __iter__(self) -> Iterator[Directive]:
        return iter(self.directives)

    def __len__(self) -> int:
        return len(self.directives)
