"""
Canonical renderer.

``formatting`` holds the pure per-kind text rules; ``renderer`` writes
their output to a byte sink and owns the failure semantics.
"""

from beancount_kernel.render.formatting import format_directive
from beancount_kernel.render.renderer import (
    BasicRenderer,
    ByteSink,
    render,
    render_to_bytes,
    render_to_string,
)
from beancount_kernel.render.settings import DEFAULT_SETTINGS, MetaOrder, RenderSettings

__all__ = [
    "BasicRenderer",
    "ByteSink",
    "DEFAULT_SETTINGS",
    "MetaOrder",
    "RenderSettings",
    "format_directive",
    "render",
    "render_to_bytes",
    "render_to_string",
]
