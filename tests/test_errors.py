from __future__ import annotations

import pytest

from verdict.errors import (
    ConfigurationError,
    OutcomeError,
    UsageError,
    VerdictError,
    walk_exception_chain,
)
from verdict.structured import StructuredError

pytestmark = pytest.mark.unit


def test_outcome_error_carries_structured_error() -> None:
    err = StructuredError(source="db", message="missing record")
    exc = OutcomeError(err)

    assert str(exc) == "missing record"
    assert exc.error is err
    assert exc.hint is None


def test_usage_error_is_a_type_error() -> None:
    """Contract violations are catchable both as VerdictError and TypeError."""
    exc = UsageError("bad call", hint="do this")

    assert isinstance(exc, VerdictError)
    assert isinstance(exc, TypeError)
    assert exc.hint == "do this"


def test_subclass_hierarchy() -> None:
    for cls in (OutcomeError, UsageError, ConfigurationError):
        assert issubclass(cls, VerdictError)
    assert issubclass(VerdictError, Exception)


def test_walk_exception_chain_follows_cause_and_context() -> None:
    root = ConnectionError("refused")
    try:
        try:
            raise root
        except ConnectionError as e:
            raise RuntimeError("fetch failed") from e
    except RuntimeError as outer:
        chain = list(walk_exception_chain(outer))

    assert isinstance(chain[0], RuntimeError)
    assert root in chain
    assert len(chain) == 2


def test_walk_exception_chain_survives_cycles() -> None:
    a = ValueError("a")
    b = ValueError("b")
    a.__context__ = b
    b.__context__ = a

    assert list(walk_exception_chain(a)) == [a, b]
