"""Result metrics: budget utilization, quality, diversity, balance, coverage."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Sequence

from ..documents.base import Document
from ..utils.error_handling import safe_division
from .base import CoverageAnalysis, OptimizationMetrics
from .candidates import estimate_document_characters
from .diversity import balance_bonus, diversity_bonus


def _sorted_counts(counter: Counter) -> Dict[str, int]:
    return {key: counter[key] for key in sorted(counter)}


def analyze_coverage(documents: Sequence[Document]) -> CoverageAnalysis:
    categories: Counter = Counter()
    tags: Counter = Counter()
    audiences: Counter = Counter()
    complexities: Counter = Counter()

    for doc in documents:
        categories[doc.category.value] += 1
        complexities[doc.tags.complexity.value] += 1
        tags.update(doc.tags.primary)
        audiences.update(doc.tags.audience)

    return CoverageAnalysis(
        category_coverage=_sorted_counts(categories),
        tag_coverage=_sorted_counts(tags),
        audience_coverage=_sorted_counts(audiences),
        complexity_distribution=_sorted_counts(complexities),
    )


def analyze_optimization(documents: Sequence[Document], max_characters: int) -> OptimizationMetrics:
    total_characters = sum(estimate_document_characters(doc) for doc in documents)
    space_utilization = (
        safe_division(total_characters, max_characters) if max_characters > 0 else 0.0
    )
    quality = safe_division(sum(doc.priority_score / 100 for doc in documents), len(documents))

    return OptimizationMetrics(
        space_utilization=space_utilization,
        quality_score=quality,
        diversity_score=diversity_bonus(documents),
        balance_score=balance_bonus(documents),
    )
