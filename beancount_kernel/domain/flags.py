"""Transaction and posting flags."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

OKAY_TOKENS = frozenset({"*", "txn"})
WARNING_TOKEN = "!"


class FlagKind(str, Enum):
    OKAY = "okay"
    WARNING = "warning"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Flag:
    """
    A flag on a transaction or a posting.

    ``Flag.OKAY`` renders as ``*`` and ``Flag.WARNING`` as ``!``. Any other
    token is carried verbatim by ``Flag.other``. Equality is by kind and
    raw token.

    Note: an ``other`` flag holding ``*`` would collide with ``OKAY``. This
    is not rejected at construction; ``from_token`` never produces one.
    """

    kind: FlagKind
    raw: str | None = None

    OKAY: ClassVar[Flag]
    WARNING: ClassVar[Flag]

    @classmethod
    def other(cls, token: str) -> Flag:
        return cls(kind=FlagKind.OTHER, raw=token)

    @classmethod
    def from_token(cls, token: str) -> Flag:
        """
        Map a surface token to a flag.

        ``*`` and ``txn`` map to OKAY, ``!`` to WARNING, and every other
        token to ``Flag.other(token)`` without normalisation.
        """
        if token in OKAY_TOKENS:
            return cls.OKAY
        if token == WARNING_TOKEN:
            return cls.WARNING
        return cls.other(token)

    @property
    def token(self) -> str:
        match self.kind:
            case FlagKind.OKAY:
                return "*"
            case FlagKind.WARNING:
                return WARNING_TOKEN
            case FlagKind.OTHER:
                return self.raw or ""

    def __str__(self) -> str:
        return self.token


Flag.OKAY = Flag(kind=FlagKind.OKAY)
Flag.WARNING = Flag(kind=FlagKind.WARNING)
