"""Outcome: an explicit success-or-failure value.

``Outcome[T]`` is a closed union of two frozen variants:

- ``Ok(value)`` carries the success payload
- ``Err(error)`` carries a ``StructuredError``

Outcomes are values, never processes. Combinators return fresh instances and
never mutate the receiver. Failures propagate by value through ``map`` and
``map_async``; nothing is raised unless calling code opts in with ``unwrap()``.

Both variants support structural pattern matching:

    match outcome:
        case Ok(value):
            ...
        case Err(error):
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
import inspect
from typing import TYPE_CHECKING, Any, NoReturn

from verdict.config import current_settings
from verdict.errors import OutcomeError, UsageError
from verdict.faults import check_exclusive, normalize
from verdict.structured import StructuredError

if TYPE_CHECKING:
    from verdict.faults import Classifier

ABSENT_VALUE_SOURCE = "verdict"
ABSENT_VALUE_MESSAGE = "Outcome value is None"


class Outcome[T](ABC):
    """Abstract base of ``Ok`` and ``Err``; not meant to be subclassed further."""

    __slots__ = ()

    @property
    @abstractmethod
    def is_success(self) -> bool:
        """True for ``Ok``, False for ``Err``."""

    @property
    def is_failure(self) -> bool:
        """True for ``Err``, False for ``Ok``."""
        return not self.is_success

    @property
    @abstractmethod
    def error(self) -> StructuredError | None:
        """The carried ``StructuredError``, or ``None`` for a success."""

    @property
    @abstractmethod
    def value_or_none(self) -> T | None:
        """The success payload, or ``None`` for a failure."""

    @abstractmethod
    def value_or(self, default: T) -> T:
        """Return the success payload, or *default* for a failure."""

    @abstractmethod
    def unwrap(self) -> T:
        """Return the success payload or raise ``OutcomeError``."""

    @abstractmethod
    def fold[R](
        self,
        on_ok: Callable[[T], R],
        on_err: Callable[[StructuredError], R],
    ) -> R:
        """Evaluate exactly one of the two branches and return its result."""

    @abstractmethod
    def fold_present[R](
        self,
        on_ok: Callable[[T], R],
        on_err: Callable[[StructuredError], R],
        *,
        on_none: Callable[[], R] | None = None,
    ) -> R:
        """Like ``fold``, but route a ``None`` success payload away from *on_ok*.

        A successful ``None`` goes to *on_none* when given; otherwise *on_err*
        receives a fresh "Outcome value is None" error.
        """

    @abstractmethod
    def on_success(self, fn: Callable[[T], Any]) -> None:
        """Call *fn* with the payload of an ``Ok``; do nothing for ``Err``."""

    @abstractmethod
    def on_failure(self, fn: Callable[[StructuredError], Any]) -> None:
        """Call *fn* with the error of an ``Err``; do nothing for ``Ok``."""

    @abstractmethod
    def visit(
        self,
        on_ok: Callable[[T], Any],
        on_err: Callable[[StructuredError], Any],
    ) -> None:
        """Call exactly one of the two handlers, discarding its return value."""

    @abstractmethod
    def recover(self, fn: Callable[[StructuredError], T]) -> Ok[T]:
        """Turn a failure into a success; successes are returned unchanged."""

    @abstractmethod
    def map[R](
        self,
        fn: Callable[[T], R],
        *,
        classifier: Classifier | None = None,
        group: str | None = None,
    ) -> Outcome[R]:
        """Transform the payload under fault interception; failures short-circuit."""

    @abstractmethod
    async def map_async[R](
        self,
        fn: Callable[[T], Awaitable[R]],
        *,
        classifier: Classifier | None = None,
        group: str | None = None,
    ) -> Outcome[R]:
        """Async ``map``: awaits *fn* for ``Ok``; ``Err`` never calls *fn*."""


@dataclass(frozen=True, slots=True)
class Ok[T](Outcome[T]):
    """Successful outcome carrying ``value``."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    @property
    def value_or_none(self) -> T:
        return self.value

    def value_or(self, default: T) -> T:
        return self.value

    def unwrap(self) -> T:
        return self.value

    def fold[R](
        self,
        on_ok: Callable[[T], R],
        on_err: Callable[[StructuredError], R],
    ) -> R:
        return on_ok(self.value)

    def fold_present[R](
        self,
        on_ok: Callable[[T], R],
        on_err: Callable[[StructuredError], R],
        *,
        on_none: Callable[[], R] | None = None,
    ) -> R:
        if self.value is not None:
            return on_ok(self.value)
        if on_none is not None:
            return on_none()
        return on_err(
            StructuredError(message=ABSENT_VALUE_MESSAGE, source=ABSENT_VALUE_SOURCE)
        )

    def on_success(self, fn: Callable[[T], Any]) -> None:
        fn(self.value)

    def on_failure(self, fn: Callable[[StructuredError], Any]) -> None:
        pass

    def visit(
        self,
        on_ok: Callable[[T], Any],
        on_err: Callable[[StructuredError], Any],
    ) -> None:
        on_ok(self.value)

    def recover(self, fn: Callable[[StructuredError], T]) -> Ok[T]:
        return self

    def map[R](
        self,
        fn: Callable[[T], R],
        *,
        classifier: Classifier | None = None,
        group: str | None = None,
    ) -> Outcome[R]:
        check_exclusive(classifier, group)
        value = self.value
        return capture(lambda: fn(value), classifier=classifier, group=group)

    async def map_async[R](
        self,
        fn: Callable[[T], Awaitable[R]],
        *,
        classifier: Classifier | None = None,
        group: str | None = None,
    ) -> Outcome[R]:
        check_exclusive(classifier, group)
        value = self.value
        return await capture_async(
            lambda: fn(value), classifier=classifier, group=group
        )

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Err[T](Outcome[T]):
    """Failed outcome carrying a ``StructuredError``."""

    # field() so the abstract ``error`` property is not read as a default.
    error: StructuredError = field()

    def __post_init__(self) -> None:
        if not isinstance(self.error, StructuredError):
            raise UsageError(
                f"Err requires a StructuredError, got {type(self.error).__name__}",
                hint="Wrap exceptions with verdict.structured.from_fault().",
            )

    @property
    def is_success(self) -> bool:
        return False

    @property
    def value(self) -> NoReturn:
        """Raise ``OutcomeError``; a failure has no value."""
        raise OutcomeError(self.error)

    @property
    def value_or_none(self) -> None:
        return None

    def value_or(self, default: T) -> T:
        return default

    def unwrap(self) -> NoReturn:
        raise OutcomeError(self.error)

    def fold[R](
        self,
        on_ok: Callable[[T], R],
        on_err: Callable[[StructuredError], R],
    ) -> R:
        return on_err(self.error)

    def fold_present[R](
        self,
        on_ok: Callable[[T], R],
        on_err: Callable[[StructuredError], R],
        *,
        on_none: Callable[[], R] | None = None,
    ) -> R:
        return on_err(self.error)

    def on_success(self, fn: Callable[[T], Any]) -> None:
        pass

    def on_failure(self, fn: Callable[[StructuredError], Any]) -> None:
        fn(self.error)

    def visit(
        self,
        on_ok: Callable[[T], Any],
        on_err: Callable[[StructuredError], Any],
    ) -> None:
        on_err(self.error)

    def recover(self, fn: Callable[[StructuredError], T]) -> Ok[T]:
        return Ok(fn(self.error))

    def map[R](
        self,
        fn: Callable[[T], R],
        *,
        classifier: Classifier | None = None,
        group: str | None = None,
    ) -> Err[R]:
        check_exclusive(classifier, group)
        return Err(self.error)

    async def map_async[R](
        self,
        fn: Callable[[T], Awaitable[R]],
        *,
        classifier: Classifier | None = None,
        group: str | None = None,
    ) -> Err[R]:
        check_exclusive(classifier, group)
        return Err(self.error)

    def __str__(self) -> str:
        return self.error.message


# --- Interception ---


def capture[T](
    fn: Callable[[], T],
    *,
    classifier: Classifier | None = None,
    group: str | None = None,
) -> Outcome[T]:
    """Run *fn* and wrap its return value or normalized fault.

    Settings are resolved before *fn* runs, so a configuration error surfaces
    whether or not the computation fails.
    """
    settings = current_settings()
    try:
        return Ok(fn())
    except Exception as exc:
        return Err(
            normalize(exc, classifier=classifier, group=group, settings=settings)
        )


async def capture_async[T](
    fn: Callable[[], Awaitable[T]] | Awaitable[T],
    *,
    classifier: Classifier | None = None,
    group: str | None = None,
) -> Outcome[T]:
    """Await *fn* (or the awaitable itself) and wrap the settled result.

    Faults raised while calling *fn*, before the first suspension, are
    intercepted the same way as faults raised while awaiting.
    """
    settings = current_settings()
    try:
        awaitable = fn if inspect.isawaitable(fn) else fn()
        return Ok(await awaitable)
    except Exception as exc:
        return Err(
            normalize(exc, classifier=classifier, group=group, settings=settings)
        )
