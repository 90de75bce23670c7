"""Candidate construction: per-document cost estimation and scoring."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List

from ..documents.base import Complexity, Document, DocumentCategory
from ..scoring.base import DocumentScorer
from .base import SelectionCandidate

logger = logging.getLogger(__name__)


BASE_CHARACTER_ESTIMATES: Dict[DocumentCategory, int] = {
    DocumentCategory.GUIDE: 1500,
    DocumentCategory.API: 800,
    DocumentCategory.CONCEPT: 1200,
    DocumentCategory.EXAMPLE: 1000,
    DocumentCategory.REFERENCE: 600,
    DocumentCategory.LLMS: 400,
}

COMPLEXITY_MULTIPLIERS: Dict[Complexity, float] = {
    Complexity.BASIC: 0.8,
    Complexity.INTERMEDIATE: 1.0,
    Complexity.ADVANCED: 1.3,
    Complexity.EXPERT: 1.6,
}

CHARACTERS_PER_WORD = 5


def estimate_document_characters(document: Document) -> int:
    """
    Estimate the character cost of a document.

    Category base estimate scaled by complexity; a known word count
    overrides both. Rounds half up and never returns less than 1.
    """
    estimate = BASE_CHARACTER_ESTIMATES.get(document.category, 1000)
    estimate *= COMPLEXITY_MULTIPLIERS.get(document.tags.complexity, 1.0)

    if document.word_count:
        estimate = document.word_count * CHARACTERS_PER_WORD

    return max(1, int(math.floor(estimate + 0.5)))


def build_candidates(
    documents: List[Document],
    scorer: DocumentScorer,
    context: Any = None,
) -> List[SelectionCandidate]:
    """Build one candidate per document, preserving input order."""
    candidates = []
    for document in documents:
        scoring = scorer.score_document(document, context)
        candidates.append(SelectionCandidate(
            document=document,
            score=scoring.total,
            estimated_characters=estimate_document_characters(document),
            priority=document.priority_score,
            category_affinity=scoring.category,
            tag_affinity=scoring.tag,
            dependency_bonus=scoring.dependency,
            diversity_bonus=0.0,
            selected=False,
            reasons=tuple(scoring.reasons),
        ))

    logger.debug(f"Built {len(candidates)} selection candidates")
    return candidates
