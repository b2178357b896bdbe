"""
beancount_config -- single public entrypoint for render configuration.

Responsibility:
    Provides the ONLY way to obtain renderer settings from a file, through
    ``get_render_settings()``. YAML loading and parsing are internal.

Architecture position:
    Configuration -- sits above ``beancount_kernel``. The kernel MUST NEVER
    import from ``beancount_config``; ``bridges`` translates parsed
    configuration into kernel ``RenderSettings``.

Failure modes:
    - ``FileNotFoundError`` -- the requested settings file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``ValueError`` -- unknown keys or invalid values.

Every successful load emits a ``render_config_loaded`` log entry with the
source path and checksum of the file that governed rendering.
"""

from __future__ import annotations

from pathlib import Path

from beancount_config.bridges import build_render_settings, resolve_log_level
from beancount_config.loader import load_render_config
from beancount_config.schema import RenderConfigDef
from beancount_kernel.logging_config import get_logger
from beancount_kernel.render.settings import RenderSettings

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RenderConfigDef",
    "get_log_level",
    "get_render_config",
    "get_render_settings",
]


def get_render_config(config_path: Path | None = None) -> RenderConfigDef:
    """
    Load and validate a settings file.

    Args:
        config_path: YAML file to load. Defaults to the packaged
            ``defaults.yaml``.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    config = load_render_config(path)
    _logger.info(
        "render_config_loaded",
        extra={
            "config_path": str(path),
            "checksum": config.checksum,
            "metadata_order": config.render.metadata_order,
        },
    )
    return config


def get_render_settings(config_path: Path | None = None) -> RenderSettings:
    """The kernel ``RenderSettings`` described by a settings file."""
    return build_render_settings(get_render_config(config_path))


def get_log_level(config_path: Path | None = None) -> int:
    return resolve_log_level(get_render_config(config_path))
