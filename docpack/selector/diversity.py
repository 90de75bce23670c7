"""Collection-level diversity and balance bonuses."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

import numpy as np

from ..documents.base import Complexity, Document, DocumentCategory

MAX_CATEGORIES = len(DocumentCategory)
COMPLEXITY_LEVELS = len(Complexity)


def diversity_bonus(documents: Sequence[Document]) -> float:
    """
    Average of category, tag and complexity diversity, in [0, 1].

    Selections with fewer than two documents have no diversity.
    """
    n = len(documents)
    if n <= 1:
        return 0.0

    categories = {doc.category for doc in documents}
    category_diversity = len(categories) / min(n, MAX_CATEGORIES)

    tags = set()
    for doc in documents:
        tags.update(doc.tags.primary)
    tag_diversity = min(len(tags) / (n * 2), 1.0)

    complexities = {doc.tags.complexity for doc in documents}
    complexity_diversity = len(complexities) / COMPLEXITY_LEVELS

    return (category_diversity + tag_diversity + complexity_diversity) / 3


def balance_bonus(documents: Sequence[Document]) -> float:
    """
    Evenness of the category spread, in [0, 1].

    ``max(0, 1 - variance/mean)`` over per-category counts; 0 when at most
    one category is present.
    """
    counts = Counter(doc.category for doc in documents)
    if len(counts) <= 1:
        return 0.0

    values = np.fromiter(counts.values(), dtype=float)
    mean = values.mean()
    variance = values.var()
    return float(max(0.0, 1.0 - variance / mean))


def document_similarity(candidate: Document, reference: Document) -> float:
    """
    Similarity used by the greedy diversity penalty, in [0, 1].

    0.3 for a shared category, up to 0.4 for primary-tag Jaccard overlap and
    up to 0.3 for audience overlap.
    """
    similarity = 0.0

    if candidate.category == reference.category:
        similarity += 0.3

    tag_union = candidate.tags.primary | reference.tags.primary
    if tag_union:
        tag_overlap = candidate.tags.primary & reference.tags.primary
        similarity += len(tag_overlap) / len(tag_union) * 0.4

    audience_size = max(len(candidate.tags.audience), len(reference.tags.audience))
    if audience_size:
        audience_overlap = candidate.tags.audience & reference.tags.audience
        similarity += len(audience_overlap) / audience_size * 0.3

    return similarity
