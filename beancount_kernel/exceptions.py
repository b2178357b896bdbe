"""
Typed Exception Hierarchy for the Beancount Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the kernel (parsers, formatters, editors) must be able to tell a
broken output sink apart from a document they handed us that cannot be
rendered. Matching on message text is fragile, so:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, log-safe)
  3. Exceptions carry structured DATA (not just a message string)

Example:
    try:
        renderer.render_ledger(ledger, sink)
    except UnsupportedDirectiveError as e:
        log.warning("skipping ledger", extra={"index": e.index})
    except RenderWriteError as e:
        log.error("sink failed", extra={"code": e.code})

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    BeancountKernelError (base)
    |
    +-- ModelError
    |   +-- IncompleteAmountError
    |   +-- UnknownBookingMethodError
    |   +-- InvalidAccountNameError
    |   +-- InvalidMetaValueError
    |   +-- CurrencyMismatchError
    |
    +-- RenderError
        +-- RenderWriteError
        +-- UnsupportedDirectiveError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category  | Code                    | When Raised
----------|-------------------------|------------------------------------------
Model     | INCOMPLETE_AMOUNT       | Amount completion with a missing part
          | UNKNOWN_BOOKING_METHOD  | Booking token outside the six known ones
          | INVALID_ACCOUNT_NAME    | Account string with unknown root/no parts
          | INVALID_META_VALUE      | Native value with no metadata variant
          | CURRENCY_MISMATCH       | Ordering amounts of different commodities
----------|-------------------------|------------------------------------------
Render    | RENDER_WRITE_FAILED     | The output sink rejected a write
          | UNSUPPORTED_DIRECTIVE   | The Unsupported sentinel reached the renderer

Only RenderError subclasses escape a render call. Both are fatal to that
call: there is no retry and no partial success, and whatever the sink
received before the failure must be discarded by the caller.
"""


class BeancountKernelError(Exception):
    """
    Base exception for all beancount kernel errors.

    All subclasses carry a `code` class attribute for machine-readable
    identification.
    """

    code: str = "BEANCOUNT_KERNEL_ERROR"


# Document model exceptions


class ModelError(BeancountKernelError):
    """Base exception for failed conversions inside the document model."""

    code: str = "MODEL_ERROR"


class IncompleteAmountError(ModelError):
    """An incomplete amount was asked to become a complete one."""

    code: str = "INCOMPLETE_AMOUNT"

    def __init__(self, num: object, currency: str | None):
        self.num = None if num is None else str(num)
        self.currency = currency
        missing = []
        if num is None:
            missing.append("number")
        if currency is None:
            missing.append("currency")
        self.missing = tuple(missing)
        super().__init__(f"Amount is incomplete, missing: {', '.join(missing)}")


class UnknownBookingMethodError(ModelError):
    """Booking token is not one of the recognised upper-case tokens."""

    code: str = "UNKNOWN_BOOKING_METHOD"

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unknown booking method: {token!r}")


class InvalidAccountNameError(ModelError):
    """Account string could not be split into a root type and segments."""

    code: str = "INVALID_ACCOUNT_NAME"

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid account name {name!r}: {reason}")


class InvalidMetaValueError(ModelError):
    """A native Python value has no corresponding metadata variant."""

    code: str = "INVALID_META_VALUE"

    def __init__(self, value_type: str):
        self.value_type = value_type
        super().__init__(f"No metadata variant for values of type {value_type}")


class CurrencyMismatchError(ModelError):
    """Amounts of different commodities were ordered against each other."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, left: str | None, right: str | None):
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot compare amounts with different currencies: {left} and {right}"
        )


# Render exceptions


class RenderError(BeancountKernelError):
    """Base exception for errors that abort a render call."""

    code: str = "RENDER_ERROR"


class RenderWriteError(RenderError):
    """
    The output sink failed while receiving rendered text.

    The transport error is chained as ``__cause__``.
    """

    code: str = "RENDER_WRITE_FAILED"

    def __init__(self, reason: str, bytes_written: int = 0):
        self.reason = reason
        self.bytes_written = bytes_written
        super().__init__(
            f"Output sink write failed after {bytes_written} bytes: {reason}"
        )


class UnsupportedDirectiveError(RenderError):
    """The ``Unsupported`` sentinel directive cannot be rendered."""

    code: str = "UNSUPPORTED_DIRECTIVE"

    def __init__(self, index: int | None = None):
        self.index = index
        if index is None:
            super().__init__("Could not render unsupported directive")
        else:
            super().__init__(
                f"Could not render unsupported directive at position {index}"
            )
