"""Named selection strategy presets and the per-selector registry."""

from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from ..utils.error_handling import ConfigurationError
from .base import SelectionAlgorithm, SelectionCriteria, SelectionStrategy, StrategyConstraints

logger = logging.getLogger(__name__)


def _preset(
    name: str,
    description: str,
    algorithm: SelectionAlgorithm,
    weights: tuple,
    **constraints,
) -> SelectionStrategy:
    priority, diversity, dependency, quality, space = weights
    return SelectionStrategy(
        name=name,
        description=description,
        algorithm=algorithm,
        criteria=SelectionCriteria(
            priority_weight=priority,
            diversity_weight=diversity,
            dependency_weight=dependency,
            quality_weight=quality,
            space_utilization=space,
        ),
        constraints=StrategyConstraints(**constraints),
    )


BUILTIN_STRATEGIES: Mapping[str, SelectionStrategy] = MappingProxyType({
    preset.name: preset for preset in [
        _preset(
            "balanced", "Balanced approach considering all factors equally",
            SelectionAlgorithm.HYBRID, (0.3, 0.2, 0.2, 0.2, 0.1),
            min_quality_score=0.6, balance_requirement=0.5,
        ),
        _preset(
            "quality-focused", "Prioritizes high-quality documents",
            SelectionAlgorithm.MULTI_CRITERIA, (0.5, 0.1, 0.2, 0.15, 0.05),
            min_quality_score=0.8,
        ),
        _preset(
            "diverse", "Maximizes diversity across categories and tags",
            SelectionAlgorithm.GREEDY, (0.2, 0.4, 0.2, 0.15, 0.05),
            balance_requirement=0.8, required_categories=("guide", "concept", "example"),
        ),
        _preset(
            "efficiency", "Maximizes information density",
            SelectionAlgorithm.KNAPSACK, (0.25, 0.15, 0.15, 0.25, 0.2),
            min_quality_score=0.5,
        ),
        _preset(
            "greedy", "Fast greedy algorithm prioritizing efficiency",
            SelectionAlgorithm.GREEDY, (0.4, 0.3, 0.2, 0.1, 0.0),
            min_quality_score=0.4,
        ),
        _preset(
            "hybrid", "Combines multiple algorithms for optimal results",
            SelectionAlgorithm.HYBRID, (0.3, 0.25, 0.25, 0.15, 0.05),
            min_quality_score=0.5, balance_requirement=0.6,
        ),
        _preset(
            "adaptive", "Weighs every criterion equally with multi-criteria ranking",
            SelectionAlgorithm.MULTI_CRITERIA, (0.25, 0.25, 0.25, 0.25, 0.0),
            min_quality_score=0.6, balance_requirement=0.7,
        ),
    ]
})


class StrategyRegistry:
    """
    Name -> strategy lookup owned by one selector.

    Starts from the immutable built-in presets; registrations and updates
    only affect this instance.
    """

    def __init__(self, strategies: Optional[Mapping[str, SelectionStrategy]] = None):
        self._strategies: Dict[str, SelectionStrategy] = dict(
            BUILTIN_STRATEGIES if strategies is None else strategies
        )

    def __contains__(self, name: str) -> bool:
        return name in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    def names(self) -> List[str]:
        return list(self._strategies)

    def get(self, name: str) -> SelectionStrategy:
        try:
            return self._strategies[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown selection strategy '{name}'; valid strategies: "
                f"{', '.join(sorted(self._strategies))}"
            ) from None

    def resolve(
        self, name: str, overrides: Optional[Mapping[str, float]] = None
    ) -> SelectionStrategy:
        """Look up a strategy and apply per-call weight overrides to a copy."""
        strategy = self.get(name)
        if overrides:
            strategy = strategy.with_weights(**overrides)
        return strategy

    def register(self, strategy: SelectionStrategy, replace_existing: bool = False):
        if not isinstance(strategy, SelectionStrategy):
            raise ConfigurationError(
                f"Expected a SelectionStrategy, got {type(strategy).__name__}"
            )
        if strategy.name in self._strategies and not replace_existing:
            raise ConfigurationError(
                f"Strategy '{strategy.name}' is already registered; "
                f"pass replace_existing=True to overwrite it"
            )
        self._strategies[strategy.name] = strategy
        logger.debug(f"Registered selection strategy '{strategy.name}'")

    def update(self, name: str, /, **changes) -> SelectionStrategy:
        """
        Replace fields of a registered strategy.

        Accepts strategy fields (algorithm, criteria, constraints, description)
        and individual criteria weight names.
        """
        strategy = self.get(name)
        weight_names = set(strategy.criteria.as_dict())
        weights = {k: changes.pop(k) for k in list(changes) if k in weight_names}

        if "name" in changes:
            raise ConfigurationError("Use register() to add a strategy under a new name")
        try:
            updated = replace(strategy, **changes)
        except TypeError as e:
            raise ConfigurationError(f"Invalid update for strategy '{name}': {e}") from e

        updated = updated.with_weights(**weights)
        self._strategies[name] = updated
        return updated
