"""Shared fixtures for docpack tests."""

from __future__ import annotations

from typing import Dict, Iterable, Optional

import pytest

from docpack.documents.base import Complexity, Document, DocumentCategory, DocumentTags
from docpack.scoring.base import DocumentScorer, ScoringResult
from docpack.selector.base import SelectionCandidate


def build_document(
    doc_id: str,
    category: str = "guide",
    priority: int = 50,
    primary: Iterable[str] = (),
    audience: Iterable[str] = (),
    complexity: str = "intermediate",
    word_count: Optional[int] = None,
    prerequisites: Iterable[str] = (),
) -> Document:
    return Document(
        id=doc_id,
        category=DocumentCategory(category),
        tags=DocumentTags(
            primary=frozenset(primary),
            audience=frozenset(audience),
            complexity=Complexity(complexity),
        ),
        priority_score=priority,
        word_count=word_count,
        prerequisites=tuple(prerequisites),
    )


def build_candidate(
    doc_id: str,
    score: float,
    characters: int,
    category: str = "guide",
    priority: int = 50,
    primary: Iterable[str] = (),
    audience: Iterable[str] = (),
    complexity: str = "intermediate",
    dependency_bonus: float = 0.0,
) -> SelectionCandidate:
    document = build_document(doc_id, category, priority, primary, audience, complexity)
    return SelectionCandidate(
        document=document,
        score=score,
        estimated_characters=characters,
        priority=priority,
        dependency_bonus=dependency_bonus,
    )


class StubScorer(DocumentScorer):
    """Deterministic scorer returning fixed totals per document id."""

    def __init__(self, totals: Optional[Dict[str, float]] = None, default: float = 0.5):
        self.totals = totals or {}
        self.default = default
        self.calls = []

    def score_document(self, document: Document, context) -> ScoringResult:
        self.calls.append((document.id, context))
        total = self.totals.get(document.id, self.default)
        return ScoringResult(
            document=document,
            total=total,
            category=0.5,
            tag=0.5,
            dependency=0.5,
            priority=document.priority_score / 100,
            reasons=[f"Stub score: {total}"],
        )


@pytest.fixture
def make_document():
    """Factory for documents with sensible defaults."""
    return build_document


@pytest.fixture
def make_candidate():
    """Factory for candidates with explicit score and cost."""
    return build_candidate


@pytest.fixture
def stub_scorer():
    """The stub scorer class; call it with a {doc_id: total} mapping."""
    return StubScorer


@pytest.fixture
def scenario_documents():
    """Five documents, one per category, with descending priority."""
    return [
        build_document("guide-start", "guide", 90),
        build_document("api-core", "api", 85),
        build_document("concept-model", "concept", 70),
        build_document("example-basic", "example", 60),
        build_document("reference-config", "reference", 50),
    ]
