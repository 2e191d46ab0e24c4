from __future__ import annotations

import pytest

from verdict.structured import StructuredError, fault_message, from_fault

pytestmark = pytest.mark.unit


def _raised(exc: Exception) -> Exception:
    try:
        raise exc
    except Exception as caught:
        return caught


def test_structured_error_is_immutable() -> None:
    err = StructuredError(message="m", source="s")

    with pytest.raises(AttributeError):
        err.message = "other"  # type: ignore[misc]


@pytest.mark.parametrize("message", ["", None, 42])
def test_structured_error_requires_non_empty_message(message: object) -> None:
    with pytest.raises(ValueError, match="non-empty"):
        StructuredError(message=message)  # type: ignore[arg-type]


def test_equality_ignores_trace() -> None:
    first = _raised(KeyError("a"))
    second = _raised(KeyError("b"))
    assert first.__traceback__ is not None

    a = StructuredError(message="m", source="s", details=1, trace=first.__traceback__)
    b = StructuredError(message="m", source="s", details=1, trace=second.__traceback__)
    c = StructuredError(message="m", source="s", details=1)

    assert a == b == c
    assert hash(a) == hash(c)


def test_equality_considers_source_message_details() -> None:
    base = StructuredError(message="m", source="s", details=1)

    assert base != StructuredError(message="m", source="other", details=1)
    assert base != StructuredError(message="other", source="s", details=1)
    assert base != StructuredError(message="m", source="s", details=2)


def test_str_is_message() -> None:
    assert str(StructuredError(message="missing record", source="db")) == "missing record"


def test_from_fault_defaults() -> None:
    fault = _raised(ValueError("bad input"))

    err = from_fault(fault, fault.__traceback__)

    assert err.message == "bad input"
    assert err.details is fault
    assert err.source is None
    assert err.trace is fault.__traceback__


def test_from_fault_overrides() -> None:
    fault = ValueError("bad input")

    err = from_fault(fault, None, source="parse", details={"line": 3})

    assert err.source == "parse"
    assert err.details == {"line": 3}
    assert err.trace is None


def test_fault_message_falls_back_to_type_name() -> None:
    assert fault_message(ValueError()) == "ValueError"
    assert fault_message(ValueError("x")) == "x"


def test_format_trace() -> None:
    fault = _raised(RuntimeError("boom"))

    with_trace = from_fault(fault, fault.__traceback__)
    without = from_fault(fault, None)

    assert "_raised" in with_trace.format_trace()
    assert without.format_trace() == ""


def test_fault_message_survives_failing_str() -> None:
    class Unprintable(Exception):
        def __str__(self) -> str:
            raise RuntimeError("cannot render")

    fault = Unprintable()

    assert fault_message(fault) == "Unprintable"
    assert from_fault(fault, None).message == "Unprintable"
