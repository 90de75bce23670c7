"""
Tests for the document model, the default scorer and the default
dependency/conflict collaborators.
"""

import pytest

from docpack.documents.base import Complexity, Document, DocumentCategory, DocumentTags
from docpack.resolution.base import (
    Conflict,
    ConflictAnalysis,
    NullConflictDetector,
    PassthroughDependencyResolver,
)
from docpack.scoring.base import ScoringContext
from docpack.scoring.priority import PriorityScorer, ScorerWeights


class TestDocument:
    """Document construction and metadata parsing."""

    def test_priority_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            Document(id="bad", category=DocumentCategory.GUIDE, priority_score=101)

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError):
            Document(id="", category=DocumentCategory.GUIDE)

    def test_string_category_and_tags_are_coerced(self):
        doc = Document(
            id="a",
            category="api",
            tags=DocumentTags(primary=["x", "y"], audience="dev", complexity="expert"),
        )

        assert doc.category is DocumentCategory.API
        assert doc.tags.primary == frozenset({"x", "y"})
        assert doc.tags.audience == frozenset({"dev"})
        assert doc.complexity is Complexity.EXPERT

    def test_from_dict_nested_layout(self):
        doc = Document.from_dict({
            "document": {"id": "guide-1", "category": "guide", "wordCount": 300, "title": "Start"},
            "tags": {"primary": ["setup"], "audience": ["beginner"], "complexity": "basic"},
            "priority": {"score": 80},
            "dependencies": {"prerequisites": [{"documentId": "concept-1"}, "concept-2"]},
        })

        assert doc.id == "guide-1"
        assert doc.category is DocumentCategory.GUIDE
        assert doc.word_count == 300
        assert doc.title == "Start"
        assert doc.priority_score == 80
        assert doc.complexity is Complexity.BASIC
        assert doc.prerequisites == ("concept-1", "concept-2")

    def test_from_dict_flat_layout(self):
        doc = Document.from_dict({
            "id": "api-1",
            "category": "api",
            "primary_tags": ["http"],
            "audience": ["dev"],
            "priority_score": 70,
        })

        assert doc.tags.primary == frozenset({"http"})
        assert doc.tags.complexity is Complexity.INTERMEDIATE
        assert doc.word_count is None

    def test_documents_are_immutable(self, make_document):
        doc = make_document("a")
        with pytest.raises(AttributeError):
            doc.priority_score = 10


class TestPriorityScorer:
    """Default scorer components and exclusion."""

    def setup_method(self):
        self.scorer = PriorityScorer()

    def test_neutral_context(self, make_document):
        doc = make_document("g", "guide", priority=80)
        result = self.scorer.score_document(doc, None)

        assert result.category == pytest.approx(0.9)
        assert result.tag == pytest.approx(0.5)
        assert result.dependency == pytest.approx(0.5)
        assert result.priority == pytest.approx(0.8)
        assert result.total == pytest.approx(0.25 * (0.9 + 0.5 + 0.5 + 0.8))
        assert not result.excluded
        assert "Priority score: 80/100" in result.reasons

    def test_tag_affinity_with_weights(self, make_document):
        doc = make_document("g", primary=["python", "cli"])
        context = ScoringContext(
            target_tags=frozenset({"python", "web"}),
            tag_weights={"python": 3.0, "web": 1.0},
        )
        result = self.scorer.score_document(doc, context)

        # affinity 1/2, context score 3/4
        assert result.tag == pytest.approx(0.5 * 0.7 + 0.75 * 0.3)
        assert "Matched tags: python" in result.reasons

    def test_prerequisite_satisfaction(self, make_document):
        doc = make_document("g", prerequisites=["a", "b"])
        context = ScoringContext(selected_ids=frozenset({"a"}))

        result = self.scorer.score_document(doc, context)

        assert result.dependency == pytest.approx(0.5 + 0.3 * 0.5)

    def test_category_mismatch_is_flagged(self, make_document):
        doc = make_document("a", "api")
        context = ScoringContext(target_category=DocumentCategory.GUIDE)

        result = self.scorer.score_document(doc, context)

        assert result.excluded
        assert "guide" in result.exclusion_reason

    def test_weights_are_normalized(self):
        weights = ScorerWeights(category=2, tag=1, dependency=1, priority=0)

        assert weights.category == pytest.approx(0.5)
        assert weights.tag + weights.dependency == pytest.approx(0.5)
        assert weights.priority == 0

    def test_scoring_is_deterministic(self, make_document):
        doc = make_document("g", primary=["x"])
        context = ScoringContext(target_tags=frozenset({"x"}))

        first = self.scorer.score_document(doc, context)
        second = self.scorer.score_document(doc, context)

        assert first.to_dict() == second.to_dict()


class TestDefaultCollaborators:
    """Passthrough resolver and null conflict detector."""

    def test_passthrough_keeps_order(self, make_document):
        docs = [make_document("b"), make_document("a")]
        result = PassthroughDependencyResolver().resolve_dependencies(docs)

        assert [d.id for d in result.ordered_documents] == ["b", "a"]
        assert result.included_dependencies == []
        assert result.cycles == []
        assert result.statistics.total_processed == 2

    def test_null_detector(self, make_document):
        docs = [make_document("a")]
        detector = NullConflictDetector()

        analysis = detector.detect_conflicts(docs)

        assert analysis.total == 0
        assert detector.apply_conflict_resolutions(docs, analysis.conflicts) == docs

    def test_conflict_analysis_summary(self, make_document):
        a, b, c = make_document("a"), make_document("b"), make_document("c")
        analysis = ConflictAnalysis(conflicts=[
            Conflict("c1", a, b, "content_overlap", "minor", auto_resolvable=True),
            Conflict("c2", b, c, "content_overlap", "major"),
        ])

        summary = analysis.summary()

        assert summary["total"] == 2
        assert summary["auto_resolvable"] == 1
        assert summary["requires_manual_review"] == 1
        assert summary["by_severity"] == {"minor": 1, "major": 1}
        assert summary["by_type"] == {"content_overlap": 2}
