"""Building blocks for layered fault classification.

Classifiers match explicitly on exception types rather than on ad-hoc
attribute probing, and can be stacked so that domain-specific rules run
before generic ones.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from verdict.errors import walk_exception_chain
from verdict.structured import StructuredError

if TYPE_CHECKING:
    from types import TracebackType

    from verdict.faults import Classifier

type ErrorFactory = Callable[[Exception], StructuredError]


def first_match(*classifiers: Classifier) -> Classifier:
    """Combine classifiers; the first non-``None`` answer wins."""

    def classify(
        fault: Exception, trace: TracebackType | None
    ) -> StructuredError | None:
        for classifier in classifiers:
            result = classifier(fault, trace)
            if result is not None:
                return result
        return None

    return classify


def by_type(
    rules: Mapping[type[Exception], StructuredError | ErrorFactory],
    *,
    follow_chain: bool = False,
) -> Classifier:
    """Build a classifier from an ordered ``exception type -> error`` mapping.

    Each rule value is either a ready ``StructuredError`` or a callable that
    builds one from the matched exception. Rules are tried in insertion
    order with ``isinstance``, so list specific types before their bases.

    Args:
        rules: Exception types mapped to errors or error factories.
        follow_chain: Also match against the fault's ``__cause__`` and
            ``__context__`` chain, e.g. a ``ConnectionError`` re-raised as a
            domain exception.

    Example:
        classify = by_type({
            ConnectionError: StructuredError(source="http", message="No connection"),
            KeyError: lambda e: StructuredError(source="db", message=f"missing {e}"),
        })
    """
    ordered = tuple(rules.items())

    def classify(
        fault: Exception, trace: TracebackType | None
    ) -> StructuredError | None:
        candidates = walk_exception_chain(fault) if follow_chain else (fault,)
        for candidate in candidates:
            for exc_type, rule in ordered:
                if isinstance(candidate, exc_type):
                    if isinstance(rule, StructuredError):
                        return rule
                    return rule(candidate)
        return None

    return classify
