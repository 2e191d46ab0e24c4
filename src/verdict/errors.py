"""Exception hierarchy for Verdict."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from verdict.structured import StructuredError


class VerdictError(Exception):
    """Base exception for all Verdict errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class OutcomeError(VerdictError):
    """An outcome was unwrapped although it holds a failure.

    Raised only when calling code deliberately re-enters exception-based
    control flow via ``Outcome.unwrap()``. The carried error is available as
    ``.error`` and ``str(exc)`` is its message.
    """

    def __init__(self, error: StructuredError) -> None:
        super().__init__(error.message)
        self.error = error


class UsageError(VerdictError, TypeError):
    """The library API was called in a way that violates its contract."""


class ConfigurationError(VerdictError):
    """Settings validation or resolution failed."""


def walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)
