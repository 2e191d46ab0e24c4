"""Entry points that build outcomes.

``from_computation`` and ``from_async_computation`` are total: whatever the
wrapped computation raises (short of interpreter control signals such as
``KeyboardInterrupt`` or task cancellation) comes back as an ``Err``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
import functools
import inspect
from typing import TYPE_CHECKING, Any

from verdict.faults import check_exclusive
from verdict.outcome import Err, Ok, Outcome, capture, capture_async

if TYPE_CHECKING:
    from verdict.faults import Classifier
    from verdict.structured import StructuredError


def success[T](value: T) -> Ok[T]:
    """Wrap *value* in a successful outcome."""
    return Ok(value)


def failure[T](error: StructuredError) -> Err[T]:
    """Wrap *error* in a failed outcome."""
    return Err(error)


def from_computation[T](
    fn: Callable[[], T],
    *,
    classifier: Classifier | None = None,
    group: str | None = None,
) -> Outcome[T]:
    """Run a zero-argument computation and capture its outcome.

    Args:
        fn: The computation to run.
        classifier: Optional mapping from an expected fault to a
            ``StructuredError``; returning ``None`` falls back to default
            normalization.
        group: Optional error-group tag stored as ``source`` on default
            normalized errors. Mutually exclusive with *classifier*.

    Returns:
        ``Ok`` with the return value, or ``Err`` with the normalized fault.

    Raises:
        UsageError: If both *classifier* and *group* are supplied.

    Example:
        outcome = from_computation(lambda: int("42"), group="parse")
        assert outcome == success(42)
    """
    check_exclusive(classifier, group)
    return capture(fn, classifier=classifier, group=group)


async def from_async_computation[T](
    fn: Callable[[], Awaitable[T]] | Awaitable[T],
    *,
    classifier: Classifier | None = None,
    group: str | None = None,
) -> Outcome[T]:
    """Await a deferred computation and capture its outcome once it settles.

    *fn* is usually a zero-argument coroutine function; an awaitable is
    accepted as well. Arguments and guarantees mirror ``from_computation``.

    Example:
        outcome = await from_async_computation(lambda: client.fetch(url))
    """
    check_exclusive(classifier, group)
    return await capture_async(fn, classifier=classifier, group=group)


def guarded(
    *,
    classifier: Classifier | None = None,
    group: str | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorate a function so that its calls return outcomes.

    Plain functions return an ``Outcome`` directly; ``async def`` functions
    return a coroutine resolving to an ``Outcome``.

    Example:
        @guarded(group="http")
        async def fetch(url: str) -> bytes:
            ...

        outcome = await fetch("https://example.org")
    """
    check_exclusive(classifier, group)

    def decorate(func: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Outcome[Any]:
                return await capture_async(
                    lambda: func(*args, **kwargs),
                    classifier=classifier,
                    group=group,
                )

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Outcome[Any]:
            return capture(
                lambda: func(*args, **kwargs), classifier=classifier, group=group
            )

        return wrapper

    return decorate
