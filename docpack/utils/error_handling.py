"""Standardized error handling utilities.

This module provides the exception hierarchy used across docpack together
with the explicit ``Result`` type and the ``ErrorHandler`` that runs
operations which are allowed to fail without aborting a selection.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
E = TypeVar('E', bound=Exception)

_MISSING = object()


class DocPackError(Exception):
    """Base exception for docpack errors."""
    pass


class ConfigurationError(DocPackError):
    """Raised for unknown strategies, invalid weights or unsupported algorithms."""
    pass


class EmptySelectionError(DocPackError):
    """Raised when every constituent algorithm of an ensemble failed."""

    def __init__(self, message: str, failures: Optional[list] = None):
        super().__init__(message)
        self.failures = failures or []


class SelectionValidationError(DocPackError):
    """Raised when a runtime oracle rejects a selection result."""

    def __init__(self, message: str, reports: Optional[list] = None):
        super().__init__(message)
        self.reports = reports or []


class ErrorSeverity(Enum):
    """Error severity levels for consistent error classification."""
    LOW = "low"           # Non-critical errors with fallbacks
    MEDIUM = "medium"     # Errors that degrade a result
    HIGH = "high"         # Errors that fail the current call
    CRITICAL = "critical" # Never suppressed


@dataclass
class ErrorContext:
    """Context information for error reporting and debugging."""
    operation: str
    component: str
    additional_info: Optional[Dict[str, Any]] = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM


class Result(Generic[T, E]):
    """Result type for operations that may fail.

    Holds exactly one of a success value or an error, so callers can branch
    on the outcome explicitly instead of catching exceptions.
    """

    def __init__(self, value: Any = _MISSING, error: Optional[E] = None):
        if value is not _MISSING and error is not None:
            raise ValueError("Result cannot have both value and error")
        if value is _MISSING and error is None:
            raise ValueError("Result must have either value or error")

        self._value = None if value is _MISSING else value
        self._error = error

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self._error!r})"

    @property
    def is_success(self) -> bool:
        """True if the result represents success."""
        return self._error is None

    @property
    def is_failure(self) -> bool:
        """True if the result represents failure."""
        return self._error is not None

    @property
    def value(self) -> T:
        """Get the success value. Raises if this is a failure."""
        if self._error is not None:
            raise RuntimeError(f"Attempted to get value from failed result: {self._error}")
        return self._value

    @property
    def error(self) -> E:
        """Get the error. Raises if this is a success."""
        if self._error is None:
            raise RuntimeError("Attempted to get error from successful result")
        return self._error

    def unwrap_or(self, default: T) -> T:
        """Get the value or return default if this is a failure."""
        return self._value if self.is_success else default

    def map(self, func: Callable[[T], Any]) -> 'Result':
        """Apply function to the value if this is a success."""
        if self.is_success:
            try:
                return Result(value=func(self._value))
            except Exception as e:
                return Result(error=e)
        return Result(error=self._error)

    @classmethod
    def success(cls, value: T) -> 'Result[T, E]':
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def failure(cls, error: E) -> 'Result[T, E]':
        """Create a failed result."""
        return cls(error=error)


class ErrorHandler:
    """Runs fallible operations and keeps per-type error counts."""

    def __init__(self, component_name: str = "docpack"):
        self.component_name = component_name
        self._error_counts: Dict[str, int] = {}

    def safe_execute(
        self,
        operation: Callable[[], T],
        context: Optional[ErrorContext] = None,
    ) -> Result[T, Exception]:
        """Safely execute operation returning Result type.

        Critical errors (interpreter-level, or a context marked CRITICAL)
        are re-raised instead of being wrapped.

        Args:
            operation: Function to execute
            context: Error context for logging

        Returns:
            Result object with success value or error
        """
        try:
            return Result.success(operation())
        except Exception as e:
            self._increment_error_count(type(e).__name__)
            self._log_error(e, context)
            if self._is_critical_error(e, context):
                raise
            return Result.failure(e)

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of errors encountered."""
        return {
            'total_errors': sum(self._error_counts.values()),
            'error_counts': self._error_counts.copy(),
        }

    def _log_error(self, error: Exception, context: Optional[ErrorContext] = None):
        """Log error with context information."""
        if context:
            message = f"Error in {context.component}.{context.operation}: {error}"
            if context.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM):
                logger.warning(message)
            else:
                logger.error(message)
        else:
            logger.error(f"Error in {self.component_name}: {error}")

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Stack trace: {traceback.format_exc()}")

    def _increment_error_count(self, error_type: str):
        self._error_counts[error_type] = self._error_counts.get(error_type, 0) + 1

    def _is_critical_error(self, error: Exception, context: Optional[ErrorContext]) -> bool:
        if isinstance(error, (MemoryError, SystemError)):
            return True
        return context is not None and context.severity == ErrorSeverity.CRITICAL


def safe_division(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator
