"""
Default rule-based document scorer.

Implements the weighted scoring formula:
total = w_cat*category + w_tag*tag + w_dep*dependency + w_pri*priority

Uses only document metadata and the selection context; no content analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..documents.base import Document, DocumentCategory
from .base import DocumentScorer, ScoringContext, ScoringResult


# Baseline importance of each category on a 0-100 scale
DEFAULT_CATEGORY_PRIORITIES: Dict[DocumentCategory, int] = {
    DocumentCategory.GUIDE: 90,
    DocumentCategory.CONCEPT: 85,
    DocumentCategory.API: 80,
    DocumentCategory.EXAMPLE: 75,
    DocumentCategory.REFERENCE: 70,
    DocumentCategory.LLMS: 60,
}


@dataclass
class ScorerWeights:
    """Weights for the scoring components, normalized to sum to 1.0."""
    category: float = 0.25
    tag: float = 0.25
    dependency: float = 0.25
    priority: float = 0.25

    def __post_init__(self):
        total = self.category + self.tag + self.dependency + self.priority
        if total > 0:
            self.category /= total
            self.tag /= total
            self.dependency /= total
            self.priority /= total


class PriorityScorer(DocumentScorer):
    """
    Metadata-driven scorer.

    Components:
    - Category importance from a priority table
    - Tag affinity against the context's target tags
    - Prerequisite satisfaction against already-selected documents
    - The document's own priority score
    """

    def __init__(
        self,
        weights: Optional[ScorerWeights] = None,
        category_priorities: Optional[Dict[DocumentCategory, int]] = None,
    ):
        self.weights = weights or ScorerWeights()
        self.category_priorities = dict(category_priorities or DEFAULT_CATEGORY_PRIORITIES)

    def score_document(self, document: Document, context: Any) -> ScoringResult:
        ctx = context if isinstance(context, ScoringContext) else ScoringContext()
        reasons: List[str] = []

        category_score = self._calculate_category_score(document, reasons)
        tag_score = self._calculate_tag_score(document, ctx, reasons)
        dependency_score = self._calculate_dependency_score(document, ctx, reasons)
        priority_score = document.priority_score / 100.0
        reasons.append(f"Priority score: {document.priority_score}/100")

        total = (
            self.weights.category * category_score +
            self.weights.tag * tag_score +
            self.weights.dependency * dependency_score +
            self.weights.priority * priority_score
        )

        excluded = False
        exclusion_reason = None
        if ctx.target_category is not None and document.category != ctx.target_category:
            excluded = True
            exclusion_reason = f"Category mismatch: expected {ctx.target_category.value}"

        return ScoringResult(
            document=document,
            total=total,
            category=category_score,
            tag=tag_score,
            dependency=dependency_score,
            priority=priority_score,
            reasons=reasons,
            excluded=excluded,
            exclusion_reason=exclusion_reason,
        )

    def _calculate_category_score(self, document: Document, reasons: List[str]) -> float:
        priority = self.category_priorities.get(document.category)
        if priority is None:
            reasons.append(f"Unknown category: {document.category.value}")
            return 0.0

        score = min(priority / 100.0, 1.0)
        reasons.append(f"Category score: {round(score * 100)}/100")
        return score

    def _calculate_tag_score(
        self, document: Document, context: ScoringContext, reasons: List[str]
    ) -> float:
        if not context.target_tags:
            return 0.5  # Neutral when no tags are requested

        matched = sorted(document.tags.primary & context.target_tags)
        affinity = len(matched) / len(context.target_tags)

        weighted = 0.0
        weight_total = 0.0
        for tag, weight in context.tag_weights.items():
            if tag in document.tags.primary:
                weighted += weight
            weight_total += weight
        context_score = weighted / weight_total if weight_total > 0 else 0.0

        reasons.append(f"Tag affinity: {round(affinity * 100)}%")
        reasons.append(f"Matched tags: {', '.join(matched) or 'none'}")
        return min(affinity * 0.7 + context_score * 0.3, 1.0)

    def _calculate_dependency_score(
        self, document: Document, context: ScoringContext, reasons: List[str]
    ) -> float:
        score = 0.5
        if document.prerequisites:
            satisfied = sum(1 for p in document.prerequisites if p in context.selected_ids)
            score += 0.3 * satisfied / len(document.prerequisites)
            reasons.append(
                f"Prerequisites: {satisfied}/{len(document.prerequisites)} satisfied"
            )
        return max(min(score, 1.0), 0.0)
