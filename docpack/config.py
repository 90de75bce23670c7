"""
docpack settings.

Selector defaults are read from environment variables with safe fallbacks,
and custom strategy presets can be loaded from a JSON file.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from .selector.base import (
    SelectionAlgorithm,
    SelectionCriteria,
    SelectionStrategy,
    StrategyConstraints,
)
from .selector.knapsack import DEFAULT_CELL_WARNING
from .utils.error_handling import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class SelectorSettings:
    """Defaults for the adaptive selector."""

    default_strategy: str = "hybrid"
    max_iterations: int = 100
    convergence_threshold: float = 0.01

    # Post-selection optimization when the algorithm did not converge
    optimize_max_iterations: int = 50
    optimize_convergence_threshold: float = 0.001

    # Knapsack table size above which a warning is logged
    knapsack_cell_warning: int = DEFAULT_CELL_WARNING

    # Run budget/uniqueness oracles on every result
    validate_results: bool = True


def _get_bool_env(name: str, default: bool = False) -> bool:
    """Get boolean environment variable with safe default."""
    value = os.environ.get(name, '').lower()
    if value in ('1', 'true', 'yes', 'on', 'enable', 'enabled'):
        return True
    elif value in ('0', 'false', 'no', 'off', 'disable', 'disabled'):
        return False
    else:
        return default


def _get_int_env(name: str, default: int = 0) -> int:
    """Get integer environment variable with safe default."""
    try:
        return int(os.environ.get(name, str(default)))
    except (ValueError, TypeError):
        logger.warning(f"Ignoring non-integer value for {name}")
        return default


def _get_float_env(name: str, default: float = 0.0) -> float:
    """Get float environment variable with safe default."""
    try:
        return float(os.environ.get(name, str(default)))
    except (ValueError, TypeError):
        logger.warning(f"Ignoring non-numeric value for {name}")
        return default


def load_settings() -> SelectorSettings:
    """
    Load selector settings from environment variables.

    Environment Variables:
        DOCPACK_DEFAULT_STRATEGY: Strategy used when none is given (default: hybrid)
        DOCPACK_MAX_ITERATIONS: Local search pass cap (default: 100)
        DOCPACK_CONVERGENCE_THRESHOLD: Minimum relative improvement (default: 0.01)
        DOCPACK_OPTIMIZE_MAX_ITERATIONS: Post-optimization pass cap (default: 50)
        DOCPACK_OPTIMIZE_THRESHOLD: Post-optimization threshold (default: 0.001)
        DOCPACK_KNAPSACK_CELL_WARNING: DP table size warning level
        DOCPACK_VALIDATE_RESULTS: Run result oracles (default: True)
    """
    defaults = SelectorSettings()
    return SelectorSettings(
        default_strategy=os.environ.get('DOCPACK_DEFAULT_STRATEGY') or defaults.default_strategy,
        max_iterations=_get_int_env('DOCPACK_MAX_ITERATIONS', defaults.max_iterations),
        convergence_threshold=_get_float_env(
            'DOCPACK_CONVERGENCE_THRESHOLD', defaults.convergence_threshold
        ),
        optimize_max_iterations=_get_int_env(
            'DOCPACK_OPTIMIZE_MAX_ITERATIONS', defaults.optimize_max_iterations
        ),
        optimize_convergence_threshold=_get_float_env(
            'DOCPACK_OPTIMIZE_THRESHOLD', defaults.optimize_convergence_threshold
        ),
        knapsack_cell_warning=_get_int_env(
            'DOCPACK_KNAPSACK_CELL_WARNING', defaults.knapsack_cell_warning
        ),
        validate_results=_get_bool_env('DOCPACK_VALIDATE_RESULTS', defaults.validate_results),
    )


_CRITERIA_KEYS = {
    "priorityWeight": "priority_weight",
    "diversityWeight": "diversity_weight",
    "dependencyWeight": "dependency_weight",
    "qualityWeight": "quality_weight",
    "spaceUtilization": "space_utilization",
}

_CONSTRAINT_KEYS = {
    "maxDocuments": "max_documents",
    "minQualityScore": "min_quality_score",
    "requiredCategories": "required_categories",
    "balanceRequirement": "balance_requirement",
}


def _snake_keys(data: Dict[str, Any], mapping: Dict[str, str]) -> Dict[str, Any]:
    return {mapping.get(key, key): value for key, value in data.items()}


def strategy_from_dict(name: str, data: Dict[str, Any]) -> SelectionStrategy:
    """Build a strategy from a JSON-style mapping (camelCase or snake_case keys)."""
    try:
        return SelectionStrategy(
            name=name,
            description=data.get("description", ""),
            algorithm=SelectionAlgorithm(data["algorithm"]),
            criteria=SelectionCriteria(**_snake_keys(data.get("criteria", {}), _CRITERIA_KEYS)),
            constraints=StrategyConstraints(
                **_snake_keys(data.get("constraints", {}), _CONSTRAINT_KEYS)
            ),
        )
    except ConfigurationError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid strategy definition '{name}': {e}") from e


def load_strategies_file(config_path: Union[str, Path]) -> List[SelectionStrategy]:
    """
    Load strategy presets from a JSON file.

    Expected layout::

        {"strategies": {"docs-lite": {"algorithm": "greedy",
                                      "criteria": {"priorityWeight": 0.5, ...},
                                      "constraints": {"balanceRequirement": 0.4}}}}
    """
    config_path = Path(config_path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigurationError(f"Could not load strategy file {config_path}: {e}") from e

    entries = data.get("strategies") if isinstance(data, dict) else None
    if not isinstance(entries, dict):
        raise ConfigurationError(f"{config_path} must contain a 'strategies' object")

    strategies = [strategy_from_dict(name, entry) for name, entry in entries.items()]
    logger.info(f"Loaded {len(strategies)} strategy presets from {config_path}")
    return strategies
