"""Structured error records.

A ``StructuredError`` is the normalized, immutable description of a failure
carried by an ``Err`` outcome. It is built either directly by calling code
(typically inside a classifier) or derived from an intercepted fault with
``from_fault``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import traceback
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from types import TracebackType


@dataclass(frozen=True, slots=True)
class StructuredError:
    """Immutable description of a failure.

    Equality and hashing consider ``source``, ``message`` and ``details``.
    The ``trace`` is diagnostic only and never takes part in comparisons.

    Example:
        err = StructuredError(source="db", message="missing record", details=42)
        assert str(err) == "missing record"
    """

    message: str
    source: str | None = None
    details: Any = None
    trace: TracebackType | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Enforce a non-empty textual message."""
        if not isinstance(self.message, str) or not self.message:
            raise ValueError("StructuredError.message must be a non-empty string")

    def __str__(self) -> str:
        return self.message

    def format_trace(self) -> str:
        """Return the captured traceback as text, or ``""`` when none was kept."""
        if self.trace is None:
            return ""
        return "".join(traceback.format_tb(self.trace))


def fault_message(fault: BaseException) -> str:
    """Render a fault for humans, falling back to its type name when blank.

    A fault whose ``__str__`` itself raises is rendered by type name too.
    """
    try:
        text = str(fault)
    except Exception:
        return type(fault).__name__
    return text if text else type(fault).__name__


def from_fault(
    fault: BaseException,
    trace: TracebackType | None,
    *,
    source: str | None = None,
    details: Any = None,
) -> StructuredError:
    """Normalize an intercepted fault into a ``StructuredError``.

    Args:
        fault: The raised exception.
        trace: Traceback captured at interception time (may be ``None``).
        source: Optional category tag, usually the caller's error group.
        details: Optional context; defaults to the fault itself.

    Returns:
        A ``StructuredError`` whose message is the fault's text.
    """
    return StructuredError(
        message=fault_message(fault),
        source=source,
        details=fault if details is None else details,
        trace=trace,
    )
