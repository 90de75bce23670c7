"""Greedy efficiency-ratio selection with a diversity penalty."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Sequence

from .base import AlgorithmOutcome, SelectionCandidate
from .diversity import document_similarity

logger = logging.getLogger(__name__)

PENALTY_RATE = 0.1


def apply_diversity_penalty(
    working: Dict[int, SelectionCandidate],
    admitted: SelectionCandidate,
    admitted_count: int,
) -> Dict[int, SelectionCandidate]:
    """
    Return new snapshots of the not-yet-admitted candidates.

    Each score drops by ``similarity * PENALTY_RATE * admitted_count`` and is
    floored at 0. The input mapping and its candidates are left untouched.
    """
    penalized = {}
    for position, candidate in working.items():
        similarity = document_similarity(candidate.document, admitted.document)
        penalty = similarity * PENALTY_RATE * admitted_count
        if penalty > 0:
            candidate = replace(candidate, score=max(0.0, candidate.score - penalty))
        penalized[position] = candidate
    return penalized


def greedy_select(
    candidates: Sequence[SelectionCandidate],
    max_characters: int,
) -> AlgorithmOutcome:
    """
    Admit candidates in descending score/cost order while they fit.

    The order is fixed by the initial efficiencies (stable on ties). After
    every admission the remaining candidates' working scores are penalized
    by their similarity to the admitted one; the recorded score of each
    admitted candidate is its working score at admission time.
    """
    if not candidates or max_characters <= 0:
        return AlgorithmOutcome(algorithm="greedy", selected=[], scoring=[])

    ordered = sorted(candidates, key=lambda c: c.efficiency, reverse=True)
    working = dict(enumerate(ordered))

    selected: List[SelectionCandidate] = []
    scoring = []
    used_characters = 0

    for position, candidate in enumerate(ordered):
        if used_characters + candidate.estimated_characters > max_characters:
            continue

        current = working.pop(position)
        selected.append(candidate)
        scoring.append(current.to_scoring_result())
        used_characters += candidate.estimated_characters

        working = apply_diversity_penalty(working, current, len(selected))

    logger.debug(
        f"Greedy admitted {len(selected)}/{len(candidates)} candidates "
        f"using {used_characters}/{max_characters} characters"
    )

    return AlgorithmOutcome(
        algorithm="greedy",
        selected=selected,
        scoring=scoring,
        iterations=1,
        converged=True,
    )
