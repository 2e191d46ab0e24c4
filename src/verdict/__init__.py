"""Verdict: explicit success-or-failure outcomes instead of unchecked raises.

Public API:
    - success() / failure(): Build outcomes directly
    - from_computation() / from_async_computation(): Run code, capture faults
    - guarded(): Decorator form of the factories
    - Outcome, Ok, Err: The outcome type and its variants
    - StructuredError: Normalized failure description
    - settings_scope(): Scoped normalization settings
"""

from __future__ import annotations

import logging

from verdict.classifiers import by_type, first_match
from verdict.config import (
    FrozenSettings,
    Settings,
    current_settings,
    resolve_settings,
    settings_scope,
)
from verdict.errors import (
    ConfigurationError,
    OutcomeError,
    UsageError,
    VerdictError,
)
from verdict.factories import (
    failure,
    from_async_computation,
    from_computation,
    guarded,
    success,
)
from verdict.faults import Classifier, FaultKind, classify_fault
from verdict.outcome import Err, Ok, Outcome
from verdict.structured import StructuredError, from_fault

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("verdict-outcome")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("verdict").addHandler(logging.NullHandler())

__all__ = [
    "Classifier",
    "ConfigurationError",
    "Err",
    "FaultKind",
    "FrozenSettings",
    "Ok",
    "Outcome",
    "OutcomeError",
    "Settings",
    "StructuredError",
    "UsageError",
    "VerdictError",
    "by_type",
    "classify_fault",
    "current_settings",
    "failure",
    "first_match",
    "from_async_computation",
    "from_computation",
    "from_fault",
    "guarded",
    "resolve_settings",
    "settings_scope",
    "success",
]
