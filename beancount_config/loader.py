"""
Configuration Loader (``beancount_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses it into the frozen dataclasses of
``beancount_config.schema``. Callers should go through
``beancount_config.get_render_settings()`` rather than this module.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown sections or keys, wrong value types, unknown metadata order,
  encoding or log level  -> ``ValueError``.
"""

from __future__ import annotations

import codecs
import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from beancount_config.schema import (
    LOG_LEVELS,
    METADATA_ORDERS,
    LoggingSectionDef,
    RenderConfigDef,
    RenderSectionDef,
)

_RENDER_KEYS = frozenset({"metadata_order", "blank_line_between_directives", "encoding"})
_LOGGING_KEYS = frozenset({"level"})
_SECTIONS = frozenset({"render", "logging"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def _section(data: dict[str, Any], name: str, allowed: frozenset[str]) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' must be a mapping, got {type(section).__name__}")
    unknown = set(section) - allowed
    if unknown:
        raise ValueError(f"Unknown keys in '{name}': {', '.join(sorted(unknown))}")
    return section


def parse_render_section(data: dict[str, Any]) -> RenderSectionDef:
    """
    Parse the ``render:`` section.

    Raises:
        ValueError: on unknown keys or invalid values.
    """
    metadata_order = data.get("metadata_order", "insertion")
    if metadata_order not in METADATA_ORDERS:
        raise ValueError(
            f"metadata_order must be one of {', '.join(METADATA_ORDERS)}, "
            f"got {metadata_order!r}"
        )

    blank_line = data.get("blank_line_between_directives", True)
    if not isinstance(blank_line, bool):
        raise ValueError(
            f"blank_line_between_directives must be a boolean, got {blank_line!r}"
        )

    encoding = data.get("encoding", "utf-8")
    try:
        codecs.lookup(encoding)
    except (LookupError, TypeError):
        raise ValueError(f"Unknown encoding {encoding!r}") from None

    return RenderSectionDef(
        metadata_order=metadata_order,
        blank_line_between_directives=blank_line,
        encoding=encoding,
    )


def parse_logging_section(data: dict[str, Any]) -> LoggingSectionDef:
    level = str(data.get("level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return LoggingSectionDef(level=level)


def parse_render_config(data: dict[str, Any], source_path: Path | None = None) -> RenderConfigDef:
    """
    Parse a whole settings document.

    Postconditions:
        - Returns a frozen ``RenderConfigDef`` whose ``checksum`` is the
          SHA-256 of the canonical JSON form of ``data``.
    Raises:
        ValueError: on unknown sections, unknown keys or invalid values.
    """
    unknown = set(data) - _SECTIONS
    if unknown:
        raise ValueError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

    return RenderConfigDef(
        render=parse_render_section(_section(data, "render", _RENDER_KEYS)),
        logging=parse_logging_section(_section(data, "logging", _LOGGING_KEYS)),
        checksum=compute_checksum(data),
        source_path=str(source_path) if source_path is not None else None,
    )


def load_render_config(path: Path) -> RenderConfigDef:
    return parse_render_config(load_yaml_file(path), source_path=path)


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
