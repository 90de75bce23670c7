"""Tests for the knapsack DP selection."""

import logging

import pytest

from docpack.selector.knapsack import (
    knapsack_select,
    scaled_value,
    scaled_weight,
    solve_knapsack,
)


class TestSolveKnapsack:
    """Exact DP on already-scaled integers."""

    def test_classic_instance(self):
        assert solve_knapsack([1, 2, 3], [6, 10, 12], 5) == [1, 2]

    def test_everything_fits(self):
        assert solve_knapsack([1, 1, 1], [1, 2, 3], 10) == [0, 1, 2]

    def test_zero_weight_items_are_recovered(self):
        assert solve_knapsack([0, 5], [3, 4], 5) == [0, 1]

    def test_item_heavier_than_capacity_is_skipped(self):
        assert solve_knapsack([6, 2], [100, 1], 5) == [1]

    def test_zero_value_items_are_not_taken(self):
        assert solve_knapsack([1, 1], [0, 5], 5) == [1]

    def test_empty_input(self):
        assert solve_knapsack([], [], 10) == []


class TestScaling:

    def test_weight_scale_floors(self):
        assert scaled_weight(9) == 0
        assert scaled_weight(10) == 1
        assert scaled_weight(1999) == 199

    def test_value_scale_rounds_half_up(self):
        assert scaled_value(0.1234) == 123
        assert scaled_value(0.0005) == 1
        assert scaled_value(0.0) == 0


class TestKnapsackSelect:

    def test_prefers_higher_total_over_single_best(self, make_candidate):
        candidates = [
            make_candidate("big", 0.9, 1000),
            make_candidate("small-1", 0.6, 500),
            make_candidate("small-2", 0.6, 500),
        ]

        outcome = knapsack_select(candidates, 1000)

        assert outcome.document_ids == ["small-1", "small-2"]
        assert outcome.algorithm == "knapsack"
        assert outcome.converged
        assert outcome.iterations == 1

    def test_selection_keeps_input_order(self, make_candidate):
        candidates = [
            make_candidate("c", 0.3, 100),
            make_candidate("a", 0.9, 100),
            make_candidate("b", 0.5, 100),
        ]

        outcome = knapsack_select(candidates, 1000)

        assert outcome.document_ids == ["c", "a", "b"]

    def test_single_oversized_document(self, make_candidate):
        outcome = knapsack_select([make_candidate("huge", 1.0, 1500)], 1000)

        assert outcome.selected == []
        assert outcome.scoring == []

    @pytest.mark.parametrize("budget", [0, -100])
    def test_non_positive_budget(self, make_candidate, budget):
        outcome = knapsack_select([make_candidate("a", 1.0, 10)], budget)
        assert outcome.selected == []

    def test_sub_scale_documents_are_free(self, make_candidate):
        candidates = [
            make_candidate("tiny", 0.1, 5),
            make_candidate("main", 0.9, 20),
        ]

        outcome = knapsack_select(candidates, 25)

        assert outcome.document_ids == ["tiny", "main"]
        assert outcome.total_characters == 25

    def test_budget_repair_drops_lowest_efficiency(self, make_candidate, caplog):
        # Each costs 5 scaled units so both fit capacity 10, but 110 > 100
        candidates = [
            make_candidate("keep", 1.0, 55),
            make_candidate("drop", 0.5, 55),
        ]

        with caplog.at_level(logging.WARNING, logger="docpack.selector.knapsack"):
            outcome = knapsack_select(candidates, 100)

        assert outcome.document_ids == ["keep"]
        assert "dropping lowest-efficiency" in caplog.text

    def test_repair_tie_drops_later_document(self, make_candidate):
        candidates = [
            make_candidate("first", 0.5, 55),
            make_candidate("second", 0.5, 55),
        ]

        outcome = knapsack_select(candidates, 100)

        assert outcome.document_ids == ["first"]

    def test_repair_refills_freed_budget(self, make_candidate, caplog):
        # Scaled weights are all 1, so a, b and c fill capacity 3 but cost 57
        candidates = [
            make_candidate("a", 1.0, 19),
            make_candidate("b", 1.0, 19),
            make_candidate("c", 1.0, 19),
            make_candidate("d", 0.5, 10),
        ]

        with caplog.at_level(logging.DEBUG, logger="docpack.selector.knapsack"):
            outcome = knapsack_select(candidates, 30)

        assert outcome.document_ids == ["a", "d"]
        assert outcome.total_characters == 29
        assert outcome.total_score == pytest.approx(1.5)
        assert "Refilled d" in caplog.text

    def test_large_table_warning(self, make_candidate, caplog):
        candidates = [make_candidate("a", 0.5, 100)]

        with caplog.at_level(logging.WARNING, logger="docpack.selector.knapsack"):
            knapsack_select(candidates, 1000, cell_warning=10)

        assert "Knapsack table has" in caplog.text

    def test_scoring_matches_selection(self, make_candidate):
        candidates = [make_candidate("a", 0.4, 100), make_candidate("b", 0.7, 100)]

        outcome = knapsack_select(candidates, 200)

        assert [r.document.id for r in outcome.scoring] == ["a", "b"]
        assert [r.total for r in outcome.scoring] == [0.4, 0.7]
        assert outcome.total_score == pytest.approx(1.1)
