"""
Multi-criteria selection with TOPSIS.

Candidates are ranked by relative closeness to the ideal solution over the
weighted columns (priority, diversity bonus, dependency bonus, score), then
admitted greedily against the budget.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence

import numpy as np

from .base import AlgorithmOutcome, SelectionCandidate, SelectionCriteria

logger = logging.getLogger(__name__)


def _normalize(values: np.ndarray) -> np.ndarray:
    """Min-max normalize; a constant column maps to 0.5."""
    low = values.min()
    high = values.max()
    if high == low:
        return np.full_like(values, 0.5, dtype=float)
    return (values - low) / (high - low)


def normalize_candidates(candidates: Sequence[SelectionCandidate]) -> List[SelectionCandidate]:
    """Return copies with score, priority and affinities min-max normalized."""
    if not candidates:
        return []

    scores = _normalize(np.array([c.score for c in candidates], dtype=float))
    priorities = _normalize(np.array([c.priority for c in candidates], dtype=float))
    categories = _normalize(np.array([c.category_affinity for c in candidates], dtype=float))
    tags = _normalize(np.array([c.tag_affinity for c in candidates], dtype=float))

    return [
        replace(
            candidate,
            score=float(scores[i]),
            priority=float(priorities[i]),
            category_affinity=float(categories[i]),
            tag_affinity=float(tags[i]),
        )
        for i, candidate in enumerate(candidates)
    ]


def decision_matrix(candidates: Sequence[SelectionCandidate]) -> np.ndarray:
    return np.array(
        [[c.priority, c.diversity_bonus, c.dependency_bonus, c.score] for c in candidates],
        dtype=float,
    ).reshape(len(candidates), 4)


def criteria_weights(criteria: SelectionCriteria) -> np.ndarray:
    return np.array([
        criteria.priority_weight,
        criteria.diversity_weight,
        criteria.dependency_weight,
        criteria.quality_weight,
    ], dtype=float)


def topsis_scores(matrix: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """
    Relative closeness of each row to the ideal solution, in [0, 1].

    The ideal and negative-ideal vectors are the column maxima and minima.
    Distances are weighted Euclidean: ``sqrt(sum_j w_j * (x_j - ref_j)**2)``.
    Rows equidistant at zero from both references score 0.5.
    """
    if matrix.shape[0] == 0:
        return np.zeros(0)

    ideal = matrix.max(axis=0)
    negative_ideal = matrix.min(axis=0)

    d_plus = np.sqrt(((matrix - ideal) ** 2 * weights).sum(axis=1))
    d_minus = np.sqrt(((matrix - negative_ideal) ** 2 * weights).sum(axis=1))

    denominator = d_plus + d_minus
    scores = np.full(matrix.shape[0], 0.5)
    nonzero = denominator > 0
    scores[nonzero] = d_minus[nonzero] / denominator[nonzero]
    return np.clip(scores, 0.0, 1.0)


def multi_criteria_select(
    candidates: Sequence[SelectionCandidate],
    max_characters: int,
    criteria: SelectionCriteria,
) -> AlgorithmOutcome:
    """Rank by TOPSIS score (stable on ties) and admit while within budget."""
    if not candidates or max_characters <= 0:
        return AlgorithmOutcome(algorithm="multi-criteria", selected=[], scoring=[])

    normalized = normalize_candidates(candidates)
    scores = topsis_scores(decision_matrix(normalized), criteria_weights(criteria))

    ranking = sorted(range(len(candidates)), key=lambda i: scores[i], reverse=True)

    selected: List[SelectionCandidate] = []
    scoring = []
    used_characters = 0

    for idx in ranking:
        candidate = candidates[idx]
        if used_characters + candidate.estimated_characters > max_characters:
            continue
        selected.append(candidate)
        scoring.append(candidate.to_scoring_result(
            extra_reasons=(f"TOPSIS score: {scores[idx]:.3f}",)
        ))
        used_characters += candidate.estimated_characters

    logger.debug(
        f"TOPSIS admitted {len(selected)}/{len(candidates)} candidates "
        f"using {used_characters}/{max_characters} characters"
    )

    return AlgorithmOutcome(
        algorithm="multi-criteria",
        selected=selected,
        scoring=scoring,
        iterations=1,
        converged=True,
    )
