"""Scoring interface used by the candidate builder."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

from ..documents.base import Document, DocumentCategory


@dataclass
class ScoringResult:
    """Per-document score breakdown produced by a scorer."""

    document: Document
    total: float
    category: float = 0.0
    tag: float = 0.0
    dependency: float = 0.0
    priority: float = 0.0
    reasons: List[str] = field(default_factory=list)
    excluded: bool = False
    exclusion_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document_id": self.document.id,
            "scores": {
                "total": self.total,
                "category": self.category,
                "tag": self.tag,
                "dependency": self.dependency,
                "priority": self.priority,
            },
            "reasons": list(self.reasons),
            "excluded": self.excluded,
        }


@dataclass(frozen=True)
class ScoringContext:
    """Selection context understood by the built-in scorer."""

    target_tags: FrozenSet[str] = frozenset()
    target_category: Optional[DocumentCategory] = None
    tag_weights: Dict[str, float] = field(default_factory=dict)
    selected_ids: FrozenSet[str] = frozenset()


class DocumentScorer(ABC):
    """
    Maps a document and an opaque context to a score breakdown.

    Implementations must be pure functions of their inputs for the duration
    of one selection call so that selections are reproducible.
    """

    @abstractmethod
    def score_document(self, document: Document, context: Any) -> ScoringResult:
        """Score a single document."""
        pass
