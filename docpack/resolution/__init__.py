"""Dependency and conflict collaborators."""

from __future__ import annotations

from .base import (
    Conflict,
    ConflictAnalysis,
    ConflictDetector,
    DependencyResolver,
    NullConflictDetector,
    PassthroughDependencyResolver,
    ResolutionResult,
    ResolutionStatistics,
)

__all__ = [
    "Conflict",
    "ConflictAnalysis",
    "ConflictDetector",
    "DependencyResolver",
    "NullConflictDetector",
    "PassthroughDependencyResolver",
    "ResolutionResult",
    "ResolutionStatistics",
]
