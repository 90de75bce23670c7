"""
0/1 knapsack selection by dynamic programming.

Costs are scaled down by WEIGHT_SCALE to bound the table size and scores are
scaled up by VALUE_SCALE into fixed-point integers. The DP is exact for the
scaled problem; candidates cheaper than WEIGHT_SCALE characters carry zero
scaled weight.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

import numpy as np

from .base import AlgorithmOutcome, SelectionCandidate

logger = logging.getLogger(__name__)

WEIGHT_SCALE = 10
VALUE_SCALE = 1000

DEFAULT_CELL_WARNING = 50_000_000


def scaled_weight(characters: int) -> int:
    return characters // WEIGHT_SCALE


def scaled_value(score: float) -> int:
    return int(math.floor(score * VALUE_SCALE + 0.5))


def solve_knapsack(weights: Sequence[int], values: Sequence[int], capacity: int) -> List[int]:
    """
    Solve a 0/1 knapsack exactly.

    Row i of the table holds the best value using the first i items for each
    capacity 0..W; an inclusion flag per cell drives the backtrack.

    Returns:
        Indices of the chosen items in ascending order
    """
    n = len(weights)
    if n == 0 or capacity < 0:
        return []

    prev = np.zeros(capacity + 1, dtype=np.int64)
    keep = np.zeros((n + 1, capacity + 1), dtype=bool)

    for i in range(1, n + 1):
        weight = weights[i - 1]
        value = values[i - 1]
        current = prev.copy()

        if weight <= capacity:
            include = prev[:capacity + 1 - weight] + value
            exclude = prev[weight:]
            better = include > exclude
            current[weight:] = np.where(better, include, exclude)
            keep[i, weight:] = better

        prev = current

    chosen = []
    remaining = capacity
    for i in range(n, 0, -1):
        if keep[i, remaining]:
            chosen.append(i - 1)
            remaining -= weights[i - 1]

    chosen.reverse()
    return chosen


def _repair_budget(
    candidates: Sequence[SelectionCandidate], chosen: List[int], max_characters: int
) -> List[int]:
    """
    Restore the true character budget after scaling undercounts it.

    Drops the lowest-efficiency members until the cost fits, then refills the
    freed characters from the unselected candidates in descending efficiency
    order. Returns indices in ascending order.
    """
    total = sum(candidates[idx].estimated_characters for idx in chosen)
    if total <= max_characters:
        return chosen

    logger.warning(
        f"Scaled knapsack solution uses {total} characters for a budget of "
        f"{max_characters}; dropping lowest-efficiency documents"
    )
    kept = list(chosen)
    while kept and total > max_characters:
        # Last occurrence of the minimum so earlier documents win ties
        worst = min(
            reversed(range(len(kept))), key=lambda pos: candidates[kept[pos]].efficiency
        )
        total -= candidates[kept[worst]].estimated_characters
        logger.debug(f"Dropped {candidates[kept[worst]].document_id} to restore budget")
        del kept[worst]

    members = set(kept)
    spare = sorted(
        (idx for idx in range(len(candidates)) if idx not in members),
        key=lambda idx: candidates[idx].efficiency,
        reverse=True,
    )
    for idx in spare:
        cost = candidates[idx].estimated_characters
        if total + cost <= max_characters:
            kept.append(idx)
            total += cost
            logger.debug(f"Refilled {candidates[idx].document_id} into freed budget")

    return sorted(kept)


def knapsack_select(
    candidates: Sequence[SelectionCandidate],
    max_characters: int,
    cell_warning: int = DEFAULT_CELL_WARNING,
) -> AlgorithmOutcome:
    """Select the subset maximizing scaled score within the scaled budget."""
    if not candidates or max_characters <= 0:
        return AlgorithmOutcome(algorithm="knapsack", selected=[], scoring=[])

    capacity = max_characters // WEIGHT_SCALE
    cells = (len(candidates) + 1) * (capacity + 1)
    if cells > cell_warning:
        logger.warning(
            f"Knapsack table has {cells} cells ({len(candidates)} candidates, "
            f"capacity {capacity}); consider a smaller character budget"
        )

    weights = [scaled_weight(c.estimated_characters) for c in candidates]
    values = [scaled_value(c.score) for c in candidates]

    chosen = solve_knapsack(weights, values, capacity)
    chosen = _repair_budget(candidates, chosen, max_characters)
    selected = [candidates[idx] for idx in chosen]

    logger.debug(
        f"Knapsack selected {len(selected)}/{len(candidates)} candidates "
        f"(capacity {capacity})"
    )

    return AlgorithmOutcome(
        algorithm="knapsack",
        selected=selected,
        scoring=[c.to_scoring_result() for c in selected],
        iterations=1,
        converged=True,
    )
