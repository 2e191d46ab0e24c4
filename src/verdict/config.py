"""Settings schema, resolution and ambient scope.

Follows a small two-layer design:
- ``Settings`` is the pydantic schema wall (types, defaults, validation)
- ``FrozenSettings`` is the immutable runtime payload read by the factories

Resolution precedence is defaults < environment (``VERDICT_*``) < overrides.
A ``.env`` file is loaded once, before the environment is read.
"""

from __future__ import annotations

import builtins
from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from functools import cache
import importlib
import logging
import os
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from verdict.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

log = logging.getLogger(__name__)

DEFAULT_DEFECT_TYPES: tuple[str, ...] = (
    "AssertionError",
    "AttributeError",
    "NameError",
    "NotImplementedError",
    "RecursionError",
    "TypeError",
)

_ENV_PREFIX = "VERDICT_"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


# --- Schema (pydantic wall) ---


class Settings(BaseModel):
    """Validated settings for fault normalization."""

    unknown_error_message: str = Field(default="Unknown error", min_length=1)
    capture_trace: bool = Field(default=True)
    defect_types: tuple[str | type[Exception], ...] = Field(
        default=DEFAULT_DEFECT_TYPES
    )

    model_config = {"extra": "forbid"}

    @field_validator("unknown_error_message", mode="before")
    @classmethod
    def strip_message(cls, v: Any) -> Any:
        """Trim surrounding whitespace so blank messages are rejected."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("capture_trace", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> Any:
        """Accept the usual environment spellings of booleans."""
        if isinstance(v, str):
            s = v.strip().lower()
            if s in _TRUTHY:
                return True
            if s in _FALSY:
                return False
        return v

    @field_validator("defect_types", mode="before")
    @classmethod
    def split_names(cls, v: Any) -> Any:
        """Accept a comma-separated string, a class, or a sequence of either."""
        if isinstance(v, str):
            return tuple(name.strip() for name in v.split(",") if name.strip())
        if isinstance(v, type):
            return (v,)
        return v

    @field_validator("defect_types")
    @classmethod
    def check_resolvable(
        cls, v: tuple[str | type[Exception], ...]
    ) -> tuple[str | type[Exception], ...]:
        """Fail early on names that do not resolve to exception classes."""
        for name in v:
            _resolve_exception_type(name)
        return v


# --- Immutable runtime payload ---


@dataclass(frozen=True)
class FrozenSettings:
    """Immutable settings consumed by the outcome factories."""

    unknown_error_message: str
    capture_trace: bool
    defect_types: tuple[type[Exception], ...]

    def __str__(self) -> str:
        names = ", ".join(t.__name__ for t in self.defect_types)
        return (
            f"FrozenSettings(unknown_error_message={self.unknown_error_message!r}, "
            f"capture_trace={self.capture_trace}, defect_types=({names}))"
        )

    __repr__ = __str__


def _resolve_exception_type(name: str | type[Exception]) -> type[Exception]:
    """Map a builtin name or dotted ``module.Name`` path to an exception class.

    Classes are passed through after the subclass check.
    """
    if isinstance(name, type):
        if not issubclass(name, Exception):
            raise ValueError(f"{name.__name__} is not an Exception subclass")
        return name
    if "." in name:
        module_name, _, attr = name.rpartition(".")
        try:
            obj = getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"cannot import exception type {name!r}") from e
    else:
        obj = getattr(builtins, name, None)
    if not (isinstance(obj, type) and issubclass(obj, Exception)):
        raise ValueError(f"{name!r} is not an Exception subclass")
    return obj


# --- Loading ---

_DOTENV_LOADED: bool = False


def _try_load_dotenv() -> None:
    """Load a ``.env`` file once per process."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    load_dotenv()
    _DOTENV_LOADED = True


def load_env() -> dict[str, Any]:
    """Collect ``VERDICT_*`` variables that map onto known settings fields."""
    out: dict[str, Any] = {}
    for field_name in Settings.model_fields:
        value = os.environ.get(_ENV_PREFIX + field_name.upper())
        if value is not None:
            out[field_name] = value
    return out


def resolve_settings(overrides: Mapping[str, Any] | None = None) -> FrozenSettings:
    """Resolve settings from defaults, environment and overrides.

    Args:
        overrides: Programmatic values with the highest precedence.

    Returns:
        A validated ``FrozenSettings``.

    Raises:
        ConfigurationError: If the merged values fail validation.
    """
    _try_load_dotenv()
    merged = {**load_env(), **(overrides or {})}

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        msg = err.get("msg") or "invalid value"
        if msg.startswith("Value error, "):
            msg = msg[13:]
        loc = ".".join(str(part) for part in err.get("loc", ()))
        raise ConfigurationError(
            f"Settings validation failed for {loc or 'settings'}: {msg}",
            hint="Check VERDICT_* environment variables and overrides.",
        ) from e

    frozen = FrozenSettings(
        unknown_error_message=settings.unknown_error_message,
        capture_trace=settings.capture_trace,
        defect_types=tuple(_resolve_exception_type(n) for n in settings.defect_types),
    )
    log.debug("Resolved %s", frozen)
    return frozen


@cache
def _default_settings() -> FrozenSettings:
    return resolve_settings()


def reset_settings_cache() -> None:
    """Forget the cached process default so the environment is re-read."""
    _default_settings.cache_clear()


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[FrozenSettings | None] = contextvars.ContextVar(
    "verdict_settings", default=None
)


def current_settings() -> FrozenSettings:
    """Return the scoped settings, or the cached process default."""
    scoped = _AMBIENT.get()
    return scoped if scoped is not None else _default_settings()


@contextmanager
def settings_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenSettings | None = None,
    **overrides: object,
) -> Generator[FrozenSettings]:
    """Temporarily install settings for the current context.

    Scopes are held in a context variable, so they are isolated per thread
    and per asyncio task.

    Example:
        with settings_scope(unknown_error_message="Something went wrong"):
            outcome = from_computation(risky)
    """
    if isinstance(cfg_or_overrides, FrozenSettings):
        cfg = cfg_or_overrides
    else:
        cfg = resolve_settings({**(cfg_or_overrides or {}), **overrides})

    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)
