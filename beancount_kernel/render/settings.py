"""Render settings -- the only knobs the canonical renderer exposes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MetaOrder(str, Enum):
    """Iteration order for metadata lines."""

    INSERTION = "insertion"
    SORTED = "sorted"


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """
    Immutable renderer configuration.

    The defaults reproduce canonical output: metadata in insertion order,
    one empty line after each directive of a ledger, UTF-8 bytes.
    """

    metadata_order: MetaOrder = MetaOrder.INSERTION
    blank_line_between_directives: bool = True
    encoding: str = "utf-8"


DEFAULT_SETTINGS = RenderSettings()
