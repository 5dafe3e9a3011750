"""
Unified Result types and error hierarchy for toolhub.

This module provides:
1. Result[T, E] type for explicit success/failure signaling
2. Domain-specific exception hierarchy

Usage:
    from toolhub.core.result import Ok, Err, Result, ProviderLoadError

    def run_setup() -> Result[list[object], ProviderLoadError]:
        if broken:
            return Err(ProviderLoadError("memory provider unavailable"))
        return Ok(raw_tools)

    result = run_setup()
    if result.is_err():
        log(result.error)
    else:
        tools = result.unwrap()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raise the contained error."""
        raise self.error


# Type alias for Result
Result = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Domain-specific error hierarchy
# ---------------------------------------------------------------------------


class ToolhubError(Exception):
    """Base exception for all toolhub errors.

    All custom exceptions should inherit from this class to enable
    consistent error handling across the codebase.
    """

    def __init__(self, message: str, *, context: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class ToolNotFoundError(ToolhubError):
    """Raised when a tool or skill name is not known.

    Never crosses the orchestrator boundary; it is surfaced as a failed
    ToolResult instead.
    """


class UnconfiguredError(ToolhubError):
    """Raised when a tool is missing a credential or dependency.

    The message should tell the caller how to configure the missing piece.
    """


class ProviderLoadError(ToolhubError):
    """Raised when a provider module cannot be imported or set up.

    Examples:
    - Provider module import fails
    - Provider setup hook raises
    - Provider yields no usable tools
    """


class ConfigurationError(ToolhubError):
    """Raised for configuration issues.

    Examples:
    - Config file parse errors
    - Invalid config values
    """


__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Error hierarchy
    "ToolhubError",
    "ToolNotFoundError",
    "UnconfiguredError",
    "ProviderLoadError",
    "ConfigurationError",
]
