"""Base classes and data structures for document selection."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..documents.base import Document
from ..resolution.base import ConflictAnalysis, ResolutionResult
from ..scoring.base import ScoringResult
from ..utils.error_handling import ConfigurationError, safe_division


class SelectionAlgorithm(Enum):
    """Selection algorithm variants."""

    KNAPSACK = "knapsack"              # Exact 0/1 DP on scaled costs
    GREEDY = "greedy"                  # Efficiency ratio + diversity penalty
    MULTI_CRITERIA = "multi-criteria"  # TOPSIS ranking
    HYBRID = "hybrid"                  # Ensemble + local search


@dataclass(frozen=True)
class SelectionCriteria:
    """Criteria weights. Non-negative; they need not sum to 1."""

    priority_weight: float = 0.25
    diversity_weight: float = 0.25
    dependency_weight: float = 0.25
    quality_weight: float = 0.25
    space_utilization: float = 0.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or value < 0:
                raise ConfigurationError(
                    f"Criteria weight '{f.name}' must be a non-negative number, got {value!r}"
                )

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class StrategyConstraints:
    """Constraint thresholds carried by a strategy."""

    max_documents: Optional[int] = None
    min_quality_score: Optional[float] = None
    required_categories: Tuple[str, ...] = ()
    balance_requirement: Optional[float] = None  # 0-1, how balanced categories should be

    def __post_init__(self):
        object.__setattr__(self, "required_categories", tuple(self.required_categories))
        if self.balance_requirement is not None and not 0.0 <= self.balance_requirement <= 1.0:
            raise ConfigurationError(
                f"balance_requirement must be within [0, 1], got {self.balance_requirement}"
            )
        if self.max_documents is not None and self.max_documents < 0:
            raise ConfigurationError("max_documents cannot be negative")


@dataclass(frozen=True)
class SelectionStrategy:
    """A named configuration of algorithm, weights and constraints."""

    name: str
    algorithm: SelectionAlgorithm
    criteria: SelectionCriteria = field(default_factory=SelectionCriteria)
    constraints: StrategyConstraints = field(default_factory=StrategyConstraints)
    description: str = ""

    def __post_init__(self):
        if not self.name:
            raise ConfigurationError("Strategy name must be a non-empty string")
        if not isinstance(self.algorithm, SelectionAlgorithm):
            try:
                object.__setattr__(self, "algorithm", SelectionAlgorithm(self.algorithm))
            except ValueError:
                valid = ", ".join(a.value for a in SelectionAlgorithm)
                raise ConfigurationError(
                    f"Unsupported algorithm '{self.algorithm}' for strategy '{self.name}' "
                    f"(valid: {valid})"
                )

    @property
    def balance_requirement(self) -> float:
        return self.constraints.balance_requirement or 0.0

    def with_weights(self, **overrides: float) -> 'SelectionStrategy':
        """Return a copy with individual criteria weights replaced."""
        if not overrides:
            return self
        valid = set(self.criteria.as_dict())
        unknown = sorted(set(overrides) - valid)
        if unknown:
            raise ConfigurationError(
                f"Unknown criteria weight(s) {unknown}; valid weights: {sorted(valid)}"
            )
        return replace(self, criteria=replace(self.criteria, **overrides))


@dataclass
class SelectionConstraints:
    """Hard budget plus the context forwarded to the scorer."""

    max_characters: int
    context: Any = None


@dataclass
class SelectionOptions:
    """Per-call options for the selection entry point."""

    strategy: str = "hybrid"
    max_iterations: int = 100
    convergence_threshold: float = 0.01
    enable_optimization: bool = True
    enable_conflict_resolution: bool = True
    enable_dependency_resolution: bool = True
    custom_weights: Optional[Dict[str, float]] = None
    debug: bool = False


@dataclass(frozen=True)
class SelectionCandidate:
    """A document augmented with cost and score for one selection call."""

    document: Document
    score: float
    estimated_characters: int
    priority: float
    category_affinity: float = 0.0
    tag_affinity: float = 0.0
    dependency_bonus: float = 0.0
    diversity_bonus: float = 0.0
    selected: bool = False
    reasons: Tuple[str, ...] = ()

    @property
    def document_id(self) -> str:
        return self.document.id

    @property
    def efficiency(self) -> float:
        return self.score / max(self.estimated_characters, 1)

    def to_scoring_result(
        self, total: Optional[float] = None, extra_reasons: Tuple[str, ...] = ()
    ) -> ScoringResult:
        return ScoringResult(
            document=self.document,
            total=self.score if total is None else total,
            category=self.category_affinity,
            tag=self.tag_affinity,
            dependency=self.dependency_bonus,
            priority=self.priority / 100,
            reasons=list(self.reasons) + list(extra_reasons),
            excluded=False,
        )


@dataclass
class AlgorithmOutcome:
    """Selection produced by a single algorithm run."""

    algorithm: str
    selected: List[SelectionCandidate]
    scoring: List[ScoringResult]
    iterations: int = 1
    converged: bool = True
    failures: List[AlgorithmFailure] = field(default_factory=list)

    @property
    def total_score(self) -> float:
        """Sum of the selected candidates' base scores."""
        return sum(c.score for c in self.selected)

    @property
    def total_characters(self) -> int:
        return sum(c.estimated_characters for c in self.selected)

    @property
    def document_ids(self) -> List[str]:
        return [c.document_id for c in self.selected]


@dataclass
class AlgorithmFailure:
    """A constituent algorithm that failed inside an ensemble run."""

    algorithm: str
    error_type: str
    message: str


@dataclass
class ScoringSummary:
    total_score: float = 0.0
    average_score: float = 0.0
    distribution: List[ScoringResult] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: List[ScoringResult]) -> 'ScoringSummary':
        total = sum(r.total for r in results)
        return cls(
            total_score=total,
            average_score=safe_division(total, len(results)),
            distribution=list(results),
        )


@dataclass
class OptimizationMetrics:
    space_utilization: float = 0.0
    quality_score: float = 0.0
    diversity_score: float = 0.0
    balance_score: float = 0.0


@dataclass
class CoverageAnalysis:
    category_coverage: Dict[str, int] = field(default_factory=dict)
    tag_coverage: Dict[str, int] = field(default_factory=dict)
    audience_coverage: Dict[str, int] = field(default_factory=dict)
    complexity_distribution: Dict[str, int] = field(default_factory=dict)


@dataclass
class DependencySummary:
    resolved: ResolutionResult = field(default_factory=ResolutionResult)
    included_dependencies: int = 0
    cycles_detected: int = 0


@dataclass
class ConflictSummary:
    analysis: ConflictAnalysis = field(default_factory=ConflictAnalysis)
    resolved: int = 0
    remaining: int = 0


@dataclass
class RunMetadata:
    selection_time_ms: float = 0.0
    algorithms_used: List[str] = field(default_factory=list)
    iterations_performed: int = 0
    convergence_achieved: bool = False
    partial_failures: List[AlgorithmFailure] = field(default_factory=list)


@dataclass
class SelectionResult:
    """Complete result from a selection call."""

    selected_documents: List[Document]
    strategy: SelectionStrategy
    scoring: ScoringSummary = field(default_factory=ScoringSummary)
    optimization: OptimizationMetrics = field(default_factory=OptimizationMetrics)
    analysis: CoverageAnalysis = field(default_factory=CoverageAnalysis)
    dependencies: DependencySummary = field(default_factory=DependencySummary)
    conflicts: ConflictSummary = field(default_factory=ConflictSummary)
    metadata: RunMetadata = field(default_factory=RunMetadata)

    # Budget tracking
    total_characters: int = 0
    max_characters: int = 0

    @property
    def selected_ids(self) -> List[str]:
        return [doc.id for doc in self.selected_documents]

    @property
    def is_degraded(self) -> bool:
        """True when an ensemble lost constituents but still produced a result."""
        return bool(self.metadata.partial_failures)

    def get_selection_statistics(self) -> Dict[str, Any]:
        """Get selection statistics."""
        return {
            "selected_documents": len(self.selected_documents),
            "total_characters": self.total_characters,
            "max_characters": self.max_characters,
            "total_score": self.scoring.total_score,
            "average_score": self.scoring.average_score,
            "space_utilization": self.optimization.space_utilization,
            "quality_score": self.optimization.quality_score,
            "diversity_score": self.optimization.diversity_score,
            "balance_score": self.optimization.balance_score,
            "iterations": self.metadata.iterations_performed,
            "converged": self.metadata.convergence_achieved,
            "degraded": self.is_degraded,
        }

    def to_dict(self, include_timing: bool = True) -> Dict[str, Any]:
        """Plain-data view of the result."""
        metadata = {
            "algorithms_used": list(self.metadata.algorithms_used),
            "iterations_performed": self.metadata.iterations_performed,
            "convergence_achieved": self.metadata.convergence_achieved,
            "partial_failures": [
                {"algorithm": f.algorithm, "error_type": f.error_type, "message": f.message}
                for f in self.metadata.partial_failures
            ],
        }
        if include_timing:
            metadata["selection_time_ms"] = self.metadata.selection_time_ms

        return {
            "selected_documents": self.selected_ids,
            "strategy": {
                "name": self.strategy.name,
                "algorithm": self.strategy.algorithm.value,
                "criteria": self.strategy.criteria.as_dict(),
            },
            "scoring": {
                "total_score": self.scoring.total_score,
                "average_score": self.scoring.average_score,
                "distribution": [r.to_dict() for r in self.scoring.distribution],
            },
            "optimization": {
                "space_utilization": self.optimization.space_utilization,
                "quality_score": self.optimization.quality_score,
                "diversity_score": self.optimization.diversity_score,
                "balance_score": self.optimization.balance_score,
            },
            "analysis": {
                "category_coverage": dict(self.analysis.category_coverage),
                "tag_coverage": dict(self.analysis.tag_coverage),
                "audience_coverage": dict(self.analysis.audience_coverage),
                "complexity_distribution": dict(self.analysis.complexity_distribution),
            },
            "dependencies": {
                "included_dependencies": self.dependencies.included_dependencies,
                "cycles_detected": self.dependencies.cycles_detected,
                "warnings": list(self.dependencies.resolved.warnings),
            },
            "conflicts": {
                "summary": self.conflicts.analysis.summary(),
                "resolved": self.conflicts.resolved,
                "remaining": self.conflicts.remaining,
            },
            "metadata": metadata,
            "total_characters": self.total_characters,
            "max_characters": self.max_characters,
        }
