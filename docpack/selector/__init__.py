"""Adaptive multi-algorithm document selection."""

from __future__ import annotations

from .base import (
    AlgorithmFailure,
    AlgorithmOutcome,
    SelectionAlgorithm,
    SelectionCandidate,
    SelectionConstraints,
    SelectionCriteria,
    SelectionOptions,
    SelectionResult,
    SelectionStrategy,
    StrategyConstraints,
)
from .diversity import balance_bonus, diversity_bonus
from .greedy import greedy_select
from .hybrid import hybrid_select
from .knapsack import knapsack_select
from .selector import AdaptiveSelector
from .strategies import BUILTIN_STRATEGIES, StrategyRegistry
from .topsis import multi_criteria_select

__all__ = [
    "AdaptiveSelector",
    "AlgorithmFailure",
    "AlgorithmOutcome",
    "BUILTIN_STRATEGIES",
    "SelectionAlgorithm",
    "SelectionCandidate",
    "SelectionConstraints",
    "SelectionCriteria",
    "SelectionOptions",
    "SelectionResult",
    "SelectionStrategy",
    "StrategyConstraints",
    "StrategyRegistry",
    "balance_bonus",
    "diversity_bonus",
    "greedy_select",
    "hybrid_select",
    "knapsack_select",
    "multi_criteria_select",
]
