"""
BasicRenderer -- writes canonical ledger text to a byte sink.

Responsibility:
    Drives the pure ``formatting`` rules over a document-model value and
    writes the encoded result to any object with a ``write(bytes)``
    method. The sink is borrowed for the duration of one call only.

Architecture position:
    Kernel > Render -- imperative shell over ``formatting``. The only place
    in the kernel that performs output.

Render flow (``render_ledger``):
    for each directive, in document order:
      1. Format the whole directive to text in memory
      2. Encode with ``settings.encoding``
      3. Write the bytes (plus the separator line) to the sink

Failure modes:
    - RenderWriteError: the sink raised or stopped accepting bytes; a
      transport error is chained as ``__cause__`` and the traversal stops
      immediately. Short writes are retried until every byte is accepted.
    - UnsupportedDirectiveError: the ``Unsupported`` sentinel was reached.
      Nothing of that directive reaches the sink.

    There is no retry and no skip-and-continue. After either error the
    caller must discard whatever the sink has received.
"""

from __future__ import annotations

import io
import time
from collections.abc import Mapping
from typing import Any, Protocol

from beancount_kernel.domain.account import Account
from beancount_kernel.domain.amount import Amount, IncompleteAmount
from beancount_kernel.domain.directives import DIRECTIVE_TYPES, Booking, Directive
from beancount_kernel.domain.flags import Flag
from beancount_kernel.domain.ledger import Ledger
from beancount_kernel.domain.metadata import Link, MetaValue, Tag
from beancount_kernel.domain.position import Cost, CostSpec, Position
from beancount_kernel.domain.posting import Posting, PriceSpec
from beancount_kernel.exceptions import RenderError, RenderWriteError, UnsupportedDirectiveError
from beancount_kernel.logging_config import LogContext, get_logger
from beancount_kernel.render import formatting
from beancount_kernel.render.settings import DEFAULT_SETTINGS, RenderSettings

logger = get_logger("render")


class ByteSink(Protocol):
    """
    Anything accepting sequential byte writes (files, sockets, BytesIO).

    ``write`` returns the number of bytes it accepted. Raw streams may
    accept fewer than offered; a return of 0 or None means no progress.
    """

    def write(self, data: bytes | memoryview, /) -> int | None: ...


class _SinkWriter:
    """Encodes text, writes all of it and wraps transport failures."""

    def __init__(self, sink: ByteSink, encoding: str):
        self._sink = sink
        self._encoding = encoding
        self.bytes_written = 0

    def write(self, text: str) -> None:
        if not text:
            return
        view = memoryview(text.encode(self._encoding))
        while view:
            try:
                accepted = self._sink.write(view)
            except (OSError, ValueError) as exc:
                # ValueError: write to a closed file object.
                raise RenderWriteError(str(exc), self.bytes_written) from exc
            if not accepted:
                raise RenderWriteError("sink accepted no bytes", self.bytes_written)
            self.bytes_written += accepted
            view = view[accepted:]


class BasicRenderer:
    """
    Canonical renderer for every document-model entity.

    Stateless apart from its settings; one instance may serve any number
    of sequential or concurrent calls since each call owns its sink.
    """

    def __init__(self, settings: RenderSettings | None = None):
        self._settings = settings or DEFAULT_SETTINGS

    @property
    def settings(self) -> RenderSettings:
        return self._settings

    def format(self, entity: Any) -> str:
        """
        Canonical text of any single entity (not a whole ledger).

        Raises:
            UnsupportedDirectiveError: For the ``Unsupported`` sentinel.
            TypeError: If ``entity`` is not a document-model value.
        """
        settings = self._settings
        if isinstance(entity, DIRECTIVE_TYPES):
            return formatting.format_directive(entity, settings)
        match entity:
            case Posting():
                return formatting.format_posting(entity, settings)
            case Account():
                return formatting.format_account(entity)
            case Amount():
                return formatting.format_amount(entity)
            case IncompleteAmount():
                return formatting.format_incomplete_amount(entity)
            case CostSpec():
                return formatting.format_cost_spec(entity)
            case Cost():
                return formatting.format_cost(entity)
            case Position():
                return formatting.format_position(entity)
            case PriceSpec():
                return formatting.format_price_spec(entity)
            case MetaValue():
                return formatting.format_meta_value(entity)
            case Flag():
                return formatting.format_flag(entity)
            case Booking():
                return formatting.format_booking(entity)
            case Tag() | Link():
                return str(entity)
            case Mapping():
                return formatting.format_meta(entity, settings)
        raise TypeError(f"Cannot render value of type {type(entity).__name__}")

    def render(self, entity: Any, sink: ByteSink) -> None:
        """Write any entity, including a whole ``Ledger``, to ``sink``."""
        if isinstance(entity, Ledger):
            self.render_ledger(entity, sink)
            return
        _SinkWriter(sink, self._settings.encoding).write(self.format(entity))

    def render_directive(self, directive: Directive, sink: ByteSink) -> None:
        text = formatting.format_directive(directive, self._settings)
        _SinkWriter(sink, self._settings.encoding).write(text)

    def render_ledger(
        self,
        ledger: Ledger,
        sink: ByteSink,
        *,
        name: str | None = None,
        correlation_id: str | None = None,
    ) -> int:
        """
        Write every directive of ``ledger`` in document order.

        Args:
            ledger: The document to render.
            sink: Destination for the encoded text.
            name: Optional ledger name attached to log lines.
            correlation_id: Optional caller id attached to log lines.

        Returns:
            Number of bytes written.

        Raises:
            RenderWriteError: The sink failed.
            UnsupportedDirectiveError: An ``Unsupported`` directive was found.
        """
        separator = "\n" if self._settings.blank_line_between_directives else ""
        writer = _SinkWriter(sink, self._settings.encoding)

        with LogContext.bind(ledger_name=name, correlation_id=correlation_id):
            logger.debug(
                "ledger_render_started",
                extra={"directive_count": len(ledger)},
            )
            t0 = time.monotonic()
            try:
                for index, directive in enumerate(ledger.directives):
                    try:
                        text = formatting.format_directive(directive, self._settings)
                    except UnsupportedDirectiveError:
                        with LogContext.bind(directive_kind=type(directive).__name__):
                            logger.warning(
                                "directive_unsupported",
                                extra={"directive_index": index},
                            )
                        raise UnsupportedDirectiveError(index) from None
                    writer.write(text + separator)
            except RenderError:
                logger.error(
                    "ledger_render_failed",
                    extra={
                        "bytes_written": writer.bytes_written,
                        "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                    },
                    exc_info=True,
                )
                raise

            logger.info(
                "ledger_render_completed",
                extra={
                    "directive_count": len(ledger),
                    "bytes_written": writer.bytes_written,
                    "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                },
            )
        return writer.bytes_written


def render(sink: ByteSink, ledger: Ledger, settings: RenderSettings | None = None) -> int:
    """Render ``ledger`` to ``sink`` with a default ``BasicRenderer``."""
    return BasicRenderer(settings).render_ledger(ledger, sink)


def render_to_bytes(entity: Any, settings: RenderSettings | None = None) -> bytes:
    """Render any entity or ledger into a new bytes object."""
    buffer = io.BytesIO()
    BasicRenderer(settings).render(entity, buffer)
    return buffer.getvalue()


def render_to_string(entity: Any, settings: RenderSettings | None = None) -> str:
    encoding = (settings or DEFAULT_SETTINGS).encoding
    return render_to_bytes(entity, settings).decode(encoding)
