"""Best-improving swap local search over a selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .base import SelectionCandidate, SelectionStrategy
from .diversity import balance_bonus, diversity_bonus

logger = logging.getLogger(__name__)


def aggregate_score(selection: Sequence[SelectionCandidate], strategy: SelectionStrategy) -> float:
    """Sum of base scores plus weighted diversity and balance bonuses."""
    documents = [c.document for c in selection]
    return (
        sum(c.score for c in selection) +
        diversity_bonus(documents) * strategy.criteria.diversity_weight +
        balance_bonus(documents) * strategy.balance_requirement
    )


@dataclass
class OptimizationStep:
    """Outcome of one local search pass."""
    selection: List[SelectionCandidate]
    score: float
    previous_score: float
    improvement: float
    swap: Optional[Tuple[str, str]] = None  # (removed id, added id)


@dataclass
class LocalSearchResult:
    selection: List[SelectionCandidate]
    score: float
    iterations: int
    converged: bool
    swaps: List[Tuple[str, str]]


class LocalOptimizer:
    """
    Hill climbing by single swaps.

    A pass evaluates every (selected position, unselected candidate) pair
    whose swap keeps the selection within the character budget, and applies
    the single best strictly-improving one. Ties keep the first swap found,
    scanning positions in selection order and unselected candidates by
    ascending document id. Each pass costs O(selected x unselected).
    """

    def __init__(self, strategy: SelectionStrategy, max_characters: int):
        self.strategy = strategy
        self.max_characters = max_characters

    def step(
        self,
        selection: Sequence[SelectionCandidate],
        pool: Sequence[SelectionCandidate],
    ) -> OptimizationStep:
        current = list(selection)
        current_score = aggregate_score(current, self.strategy)

        selected_ids = {c.document_id for c in current}
        unselected = sorted(
            (c for c in pool if c.document_id not in selected_ids),
            key=lambda c: c.document_id,
        )
        used_characters = sum(c.estimated_characters for c in current)

        best_selection = current
        best_score = current_score
        best_swap = None

        for i, outgoing in enumerate(current):
            freed = used_characters - outgoing.estimated_characters
            for incoming in unselected:
                if freed + incoming.estimated_characters > self.max_characters:
                    continue

                trial = current[:i] + [incoming] + current[i + 1:]
                score = aggregate_score(trial, self.strategy)
                if score > best_score:
                    best_score = score
                    best_selection = trial
                    best_swap = (outgoing.document_id, incoming.document_id)

        improvement = (best_score - current_score) / max(current_score, 1)
        return OptimizationStep(
            selection=best_selection,
            score=best_score,
            previous_score=current_score,
            improvement=improvement,
            swap=best_swap,
        )

    def run(
        self,
        selection: Sequence[SelectionCandidate],
        pool: Sequence[SelectionCandidate],
        max_iterations: int,
        convergence_threshold: float,
    ) -> LocalSearchResult:
        """
        Iterate passes until one improves by no more than the threshold
        (converged; that pass is not applied) or the iteration cap is hit.
        """
        current = list(selection)
        score = aggregate_score(current, self.strategy)
        iterations = 0
        converged = False
        swaps = []

        while iterations < max_iterations and not converged:
            step = self.step(current, pool)
            iterations += 1

            if step.improvement > convergence_threshold:
                current = step.selection
                score = step.score
                if step.swap is not None:
                    swaps.append(step.swap)
                    logger.debug(
                        f"Local search pass {iterations}: swapped {step.swap[0]} -> "
                        f"{step.swap[1]} (+{step.improvement:.4f})"
                    )
            else:
                converged = True

        return LocalSearchResult(
            selection=current,
            score=score,
            iterations=iterations,
            converged=converged,
            swaps=swaps,
        )
