"""Oracle system for runtime validation of selection results."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..selector.base import SelectionResult


class OracleResult(Enum):
    """Oracle validation result."""
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    ERROR = "error"


@dataclass
class OracleReport:
    """Report from oracle validation."""
    oracle_name: str
    result: OracleResult
    message: str
    details: Optional[Dict[str, Any]] = None
    execution_time: float = 0.0


class Oracle(ABC):
    """Base oracle class for selection validation."""

    category = "selection"

    @abstractmethod
    def name(self) -> str:
        """Return oracle name."""
        pass

    @abstractmethod
    def validate(
        self, result: 'SelectionResult', context: Optional[Dict[str, Any]] = None
    ) -> OracleReport:
        """Validate a selection result and return report."""
        pass

    def should_run(self, context: Optional[Dict[str, Any]] = None) -> bool:
        """Check if oracle should run in current context."""
        return True


class OracleRegistry:
    """Registry for managing oracles."""

    def __init__(self, oracles: Optional[List[Oracle]] = None):
        self._oracles: List[Oracle] = list(oracles or [])

    def register(self, oracle: Oracle):
        """Register an oracle."""
        self._oracles.append(oracle)

    def get_oracles(self, category: Optional[str] = None) -> List[Oracle]:
        """Get oracles, optionally filtered by category."""
        if category is None:
            return self._oracles.copy()
        return [o for o in self._oracles if o.category == category]

    def validate(
        self,
        result: 'SelectionResult',
        context: Optional[Dict[str, Any]] = None,
        categories: Optional[List[str]] = None,
    ) -> List[OracleReport]:
        """Run all applicable oracles on a result."""
        reports = []
        context = context or {}

        for oracle in self._oracles:
            if categories and oracle.category not in categories:
                continue
            if not oracle.should_run(context):
                continue

            start = time.perf_counter()
            try:
                report = oracle.validate(result, context)
            except Exception as e:
                report = OracleReport(
                    oracle_name=oracle.name(),
                    result=OracleResult.ERROR,
                    message=f"Oracle execution failed: {e}",
                    details={"exception": type(e).__name__},
                )
            report.execution_time = time.perf_counter() - start
            reports.append(report)

        return reports

    @staticmethod
    def check_all_passed(reports: List[OracleReport]) -> bool:
        """Check if all oracle reports passed."""
        return all(r.result == OracleResult.PASS for r in reports if r.result != OracleResult.SKIP)


def default_registry() -> OracleRegistry:
    """Registry holding the built-in selection oracles."""
    from .budget import BudgetOracle
    from .selection import UniquenessOracle

    return OracleRegistry([BudgetOracle(), UniquenessOracle()])


def validate_selection(
    result: 'SelectionResult',
    context: Optional[Dict[str, Any]] = None,
    registry: Optional[OracleRegistry] = None,
) -> Tuple[bool, List[OracleReport]]:
    """Validate a selection result with the given (or built-in) oracles."""
    registry = registry or default_registry()
    reports = registry.validate(result, context)
    return registry.check_all_passed(reports), reports


__all__ = [
    "Oracle",
    "OracleRegistry",
    "OracleReport",
    "OracleResult",
    "default_registry",
    "validate_selection",
]
