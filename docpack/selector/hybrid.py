"""
Hybrid ensemble selection.

Runs knapsack, greedy and TOPSIS on the same candidates, keeps the selection
with the highest total base score and refines it with local search.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple

from ..utils.error_handling import (
    EmptySelectionError,
    ErrorContext,
    ErrorHandler,
    ErrorSeverity,
)
from .base import AlgorithmFailure, AlgorithmOutcome, SelectionCandidate, SelectionStrategy
from .greedy import greedy_select
from .knapsack import DEFAULT_CELL_WARNING, knapsack_select
from .local_search import LocalOptimizer
from .topsis import multi_criteria_select

logger = logging.getLogger(__name__)

Constituent = Tuple[
    str, Callable[[Sequence[SelectionCandidate], int, SelectionStrategy], AlgorithmOutcome]
]


def default_constituents(cell_warning: int = DEFAULT_CELL_WARNING) -> List[Constituent]:
    """Constituent algorithms in evaluation order."""
    return [
        ("knapsack", lambda c, budget, s: knapsack_select(c, budget, cell_warning=cell_warning)),
        ("greedy", lambda c, budget, s: greedy_select(c, budget)),
        ("multi-criteria", lambda c, budget, s: multi_criteria_select(c, budget, s.criteria)),
    ]


def hybrid_select(
    candidates: Sequence[SelectionCandidate],
    max_characters: int,
    strategy: SelectionStrategy,
    max_iterations: int = 100,
    convergence_threshold: float = 0.01,
    constituents: Optional[List[Constituent]] = None,
) -> AlgorithmOutcome:
    """
    Ensemble selection with local search refinement.

    A constituent that raises is logged and skipped; its failure is reported
    on the outcome. If every constituent fails, EmptySelectionError is raised.
    """
    constituents = constituents if constituents is not None else default_constituents()
    handler = ErrorHandler("hybrid")

    best: Optional[AlgorithmOutcome] = None
    failures: List[AlgorithmFailure] = []
    iterations = 0

    for name, run in constituents:
        context = ErrorContext(
            operation=name,
            component="hybrid",
            severity=ErrorSeverity.MEDIUM,
            additional_info={"candidates": len(candidates)},
        )
        result = handler.safe_execute(
            lambda run=run: run(candidates, max_characters, strategy), context
        )
        if result.is_failure:
            error = result.error
            failures.append(AlgorithmFailure(
                algorithm=name,
                error_type=type(error).__name__,
                message=str(error),
            ))
            continue

        outcome = result.value
        iterations += outcome.iterations
        logger.debug(
            f"Hybrid constituent {name}: {len(outcome.selected)} documents, "
            f"total score {outcome.total_score:.4f}"
        )
        if best is None or outcome.total_score > best.total_score:
            best = outcome

    if best is None:
        raise EmptySelectionError(
            f"All {len(constituents)} constituent algorithms failed: "
            + "; ".join(f"{f.algorithm}: {f.message}" for f in failures),
            failures=failures,
        )

    if failures:
        logger.warning(
            f"Hybrid selection degraded: {len(failures)} of {len(constituents)} "
            f"constituents failed ({', '.join(f.algorithm for f in failures)})"
        )

    optimizer = LocalOptimizer(strategy, max_characters)
    search = optimizer.run(best.selected, candidates, max_iterations, convergence_threshold)
    iterations += search.iterations

    # Totals are base scores so the reported sum matches the comparison above
    if search.swaps:
        scoring = [c.to_scoring_result() for c in search.selection]
    else:
        scoring = [
            replace(result, total=candidate.score)
            for candidate, result in zip(best.selected, best.scoring)
        ]

    logger.debug(
        f"Hybrid kept {best.algorithm}; local search ran {search.iterations} passes "
        f"with {len(search.swaps)} swaps (converged={search.converged})"
    )

    return AlgorithmOutcome(
        algorithm="hybrid",
        selected=search.selection,
        scoring=scoring,
        iterations=iterations,
        converged=search.converged,
        failures=failures,
    )
