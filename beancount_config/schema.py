"""
Render configuration schema.

The human-authored YAML settings file is parsed into these frozen types by
the loader and translated into kernel ``RenderSettings`` by the bridges.
"""

from __future__ import annotations

from dataclasses import dataclass, field

METADATA_ORDERS = ("insertion", "sorted")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class RenderSectionDef:
    """The ``render:`` section."""

    metadata_order: str = "insertion"
    blank_line_between_directives: bool = True
    encoding: str = "utf-8"


@dataclass(frozen=True)
class LoggingSectionDef:
    """The ``logging:`` section."""

    level: str = "INFO"


@dataclass(frozen=True)
class RenderConfigDef:
    """A complete, validated settings file."""

    render: RenderSectionDef = field(default_factory=RenderSectionDef)
    logging: LoggingSectionDef = field(default_factory=LoggingSectionDef)
    checksum: str = ""
    source_path: str | None = None
