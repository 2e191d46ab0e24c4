"""Fault taxonomy and interception policy.

Only ``Exception`` instances are faults. ``BaseException`` subclasses outside
that hierarchy (``KeyboardInterrupt``, ``SystemExit``, ``GeneratorExit``,
``asyncio.CancelledError``) are interpreter control signals and are never
intercepted.

Faults fall into a closed set of kinds:
- ``EXPECTED``: conventional runtime failures; classifiers may map them
- ``DEFECT``: programming defects; always normalized to the unknown error
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
import logging
from types import TracebackType

from verdict.config import FrozenSettings, current_settings
from verdict.errors import UsageError
from verdict.structured import StructuredError, from_fault

log = logging.getLogger(__name__)

type Classifier = Callable[[Exception, TracebackType | None], StructuredError | None]
"""Maps a fault to a ``StructuredError``, or ``None`` when it does not apply."""


class FaultKind(str, Enum):
    """Closed set of fault categories recognized at the factory boundary."""

    EXPECTED = "expected"
    DEFECT = "defect"


def classify_fault(
    fault: Exception, settings: FrozenSettings | None = None
) -> FaultKind:
    """Return the kind of *fault* under the active settings."""
    cfg = settings or current_settings()
    if isinstance(fault, cfg.defect_types):
        return FaultKind.DEFECT
    return FaultKind.EXPECTED


def check_exclusive(classifier: Classifier | None, group: str | None) -> None:
    """Reject calls that supply both a classifier and an error group."""
    if classifier is not None and group is not None:
        raise UsageError(
            "classifier and group are mutually exclusive",
            hint="Tag the StructuredError inside the classifier instead.",
        )


def unknown_error(
    fault: BaseException,
    *,
    group: str | None,
    settings: FrozenSettings,
) -> StructuredError:
    """Build the generic error used for defects and misbehaving classifiers."""
    return StructuredError(
        message=settings.unknown_error_message,
        source=group,
        details=fault,
        trace=fault.__traceback__ if settings.capture_trace else None,
    )


def normalize(
    fault: Exception,
    *,
    classifier: Classifier | None = None,
    group: str | None = None,
    settings: FrozenSettings | None = None,
) -> StructuredError:
    """Turn an intercepted fault into a ``StructuredError``.

    Expected faults go through the classifier first and fall back to default
    normalization. Defects skip the classifier and become the unknown error.
    Never raises for a fault of any kind; a classifier that raises is itself
    captured as an unknown error.
    """
    settings = settings or current_settings()
    trace = fault.__traceback__ if settings.capture_trace else None

    if classify_fault(fault, settings) is FaultKind.DEFECT:
        log.debug("Captured defect %s: %s", type(fault).__name__, fault)
        return unknown_error(fault, group=group, settings=settings)

    if classifier is not None:
        try:
            classified = classifier(fault, trace)
        except Exception as exc:
            log.debug("Classifier raised %s while handling %r", exc, fault)
            return unknown_error(exc, group=group, settings=settings)
        if isinstance(classified, StructuredError):
            return classified
        if classified is not None:
            bad = UsageError(
                f"classifier returned {type(classified).__name__}, "
                "expected StructuredError or None"
            )
            log.debug("%s", bad)
            return unknown_error(bad, group=group, settings=settings)
        log.debug("Classifier declined %s; using default normalization", fault)

    return from_fault(fault, trace, source=group)
