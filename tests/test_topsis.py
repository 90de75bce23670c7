"""Tests for TOPSIS multi-criteria selection."""

import numpy as np
import pytest

from docpack.selector.base import SelectionCriteria
from docpack.selector.topsis import (
    _normalize,
    decision_matrix,
    multi_criteria_select,
    normalize_candidates,
    topsis_scores,
)


class TestNormalization:

    def test_min_max(self):
        result = _normalize(np.array([2.0, 4.0, 6.0]))
        assert result.tolist() == [0.0, 0.5, 1.0]

    def test_constant_column_maps_to_half(self):
        result = _normalize(np.array([3.0, 3.0]))
        assert result.tolist() == [0.5, 0.5]

    def test_normalize_candidates_returns_copies(self, make_candidate):
        candidates = [make_candidate("a", 0.2, 100, priority=20), make_candidate("b", 0.6, 100, priority=60)]

        normalized = normalize_candidates(candidates)

        assert [c.score for c in normalized] == [0.0, 1.0]
        assert [c.priority for c in normalized] == [0.0, 1.0]
        assert [c.score for c in candidates] == [0.2, 0.6]

    def test_decision_matrix_columns(self, make_candidate):
        candidate = make_candidate("a", 0.7, 100, priority=40, dependency_bonus=0.3)

        matrix = decision_matrix([candidate])

        assert matrix.shape == (1, 4)
        assert matrix[0].tolist() == [40.0, 0.0, 0.3, 0.7]


class TestTopsisScores:

    def test_ideal_and_negative_ideal(self):
        matrix = np.array([[1.0, 1.0], [0.0, 0.0], [0.5, 0.5]])

        scores = topsis_scores(matrix, np.array([1.0, 1.0]))

        assert scores[0] == 1.0
        assert scores[1] == 0.0
        assert scores[2] == pytest.approx(0.5)

    def test_identical_rows_score_half(self):
        matrix = np.array([[0.3, 0.3], [0.3, 0.3]])

        scores = topsis_scores(matrix, np.array([1.0, 1.0]))

        assert scores.tolist() == [0.5, 0.5]

    def test_zero_weights_score_half(self):
        matrix = np.array([[1.0, 0.0], [0.0, 1.0]])

        scores = topsis_scores(matrix, np.zeros(2))

        assert scores.tolist() == [0.5, 0.5]

    def test_weights_decide_trade_offs(self):
        matrix = np.array([[1.0, 0.0], [0.0, 1.0]])

        scores = topsis_scores(matrix, np.array([0.9, 0.1]))

        assert scores[0] > scores[1]


class TestMultiCriteriaSelect:

    def test_ranks_by_closeness_and_respects_budget(self, make_candidate):
        candidates = [
            make_candidate("weak", 0.1, 100, priority=10),
            make_candidate("strong", 0.9, 100, priority=90),
            make_candidate("middle", 0.5, 100, priority=50),
        ]

        outcome = multi_criteria_select(candidates, 200, SelectionCriteria())

        assert outcome.document_ids == ["strong", "middle"]
        assert outcome.algorithm == "multi-criteria"
        assert "TOPSIS score: 1.000" in outcome.scoring[0].reasons
        assert "TOPSIS score: 0.500" in outcome.scoring[1].reasons

    def test_scoring_totals_keep_scorer_values(self, make_candidate):
        candidates = [make_candidate("a", 0.4, 100, priority=40), make_candidate("b", 0.8, 100, priority=80)]

        outcome = multi_criteria_select(candidates, 1000, SelectionCriteria())

        assert {r.document.id: r.total for r in outcome.scoring} == {"a": 0.4, "b": 0.8}

    def test_fills_around_oversized_candidates(self, make_candidate):
        candidates = [
            make_candidate("best-but-big", 1.0, 900, priority=100),
            make_candidate("small", 0.2, 100, priority=20),
        ]

        outcome = multi_criteria_select(candidates, 500, SelectionCriteria())

        assert outcome.document_ids == ["small"]

    def test_empty_and_zero_budget(self, make_candidate):
        assert multi_criteria_select([], 100, SelectionCriteria()).selected == []
        assert multi_criteria_select(
            [make_candidate("a", 1.0, 10)], 0, SelectionCriteria()
        ).selected == []
