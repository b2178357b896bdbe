"""
Config -> Kernel Bridges.

Converts parsed configuration into kernel inputs. These live in
beancount_config (the producer) because the kernel must NEVER import
beancount_config.
"""

from __future__ import annotations

import logging

from beancount_config.schema import RenderConfigDef
from beancount_kernel.render.settings import MetaOrder, RenderSettings


def build_render_settings(config: RenderConfigDef) -> RenderSettings:
    section = config.render
    return RenderSettings(
        metadata_order=MetaOrder(section.metadata_order),
        blank_line_between_directives=section.blank_line_between_directives,
        encoding=section.encoding,
    )


def resolve_log_level(config: RenderConfigDef) -> int:
    """Numeric ``logging`` level for the configured level name."""
    return logging.getLevelName(config.logging.level)
