"""
docpack - Adaptive document selection for LLM context files.

Selects a budget-constrained subset of documentation using knapsack,
greedy, TOPSIS or a hybrid ensemble with local-search refinement.
"""

from __future__ import annotations

__version__ = "1.0.0"

# Core library exports
from .documents import Complexity, Document, DocumentCategory, DocumentTags
from .scoring import DocumentScorer, PriorityScorer, ScoringContext, ScoringResult
from .resolution import (
    ConflictAnalysis,
    ConflictDetector,
    DependencyResolver,
    NullConflictDetector,
    PassthroughDependencyResolver,
    ResolutionResult,
)
from .selector import (
    AdaptiveSelector,
    SelectionAlgorithm,
    SelectionConstraints,
    SelectionCriteria,
    SelectionOptions,
    SelectionResult,
    SelectionStrategy,
    StrategyConstraints,
    StrategyRegistry,
)
from .config import SelectorSettings, load_settings, load_strategies_file
from .utils.error_handling import (
    ConfigurationError,
    DocPackError,
    EmptySelectionError,
    Result,
    SelectionValidationError,
)

# High-level API for easier usage
from .library import DocPackConfig, DocumentPacker, select_documents

__all__ = [
    # High-level API (recommended for most users)
    "DocumentPacker",
    "DocPackConfig",
    "select_documents",

    # Selection engine
    "AdaptiveSelector",
    "SelectionAlgorithm",
    "SelectionConstraints",
    "SelectionCriteria",
    "SelectionOptions",
    "SelectionResult",
    "SelectionStrategy",
    "StrategyConstraints",
    "StrategyRegistry",

    # Documents and collaborators
    "Complexity",
    "Document",
    "DocumentCategory",
    "DocumentTags",
    "DocumentScorer",
    "PriorityScorer",
    "ScoringContext",
    "ScoringResult",
    "ConflictAnalysis",
    "ConflictDetector",
    "DependencyResolver",
    "NullConflictDetector",
    "PassthroughDependencyResolver",
    "ResolutionResult",

    # Configuration and errors
    "SelectorSettings",
    "load_settings",
    "load_strategies_file",
    "ConfigurationError",
    "DocPackError",
    "EmptySelectionError",
    "Result",
    "SelectionValidationError",
]
