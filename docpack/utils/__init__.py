"""Shared utilities for docpack."""

from __future__ import annotations

from .error_handling import (
    ConfigurationError,
    DocPackError,
    EmptySelectionError,
    ErrorContext,
    ErrorHandler,
    ErrorSeverity,
    Result,
    SelectionValidationError,
    safe_division,
)

__all__ = [
    "ConfigurationError",
    "DocPackError",
    "EmptySelectionError",
    "ErrorContext",
    "ErrorHandler",
    "ErrorSeverity",
    "Result",
    "SelectionValidationError",
    "safe_division",
]
