"""Document scoring interface and the default scorer."""

from __future__ import annotations

from .base import DocumentScorer, ScoringContext, ScoringResult
from .priority import DEFAULT_CATEGORY_PRIORITIES, PriorityScorer, ScorerWeights

__all__ = [
    "DEFAULT_CATEGORY_PRIORITIES",
    "DocumentScorer",
    "PriorityScorer",
    "ScorerWeights",
    "ScoringContext",
    "ScoringResult",
]
