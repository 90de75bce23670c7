"""Adaptive document selector: the selection entry point."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from ..config import SelectorSettings, load_settings
from ..documents.base import Document
from ..oracles import OracleRegistry, default_registry
from ..resolution.base import (
    ConflictAnalysis,
    ConflictDetector,
    DependencyResolver,
    NullConflictDetector,
    PassthroughDependencyResolver,
    ResolutionResult,
)
from ..scoring.base import DocumentScorer
from ..scoring.priority import PriorityScorer
from ..utils.error_handling import (
    ConfigurationError,
    DocPackError,
    Result,
    SelectionValidationError,
)
from .analysis import analyze_coverage, analyze_optimization
from .base import (
    AlgorithmOutcome,
    ConflictSummary,
    DependencySummary,
    RunMetadata,
    ScoringSummary,
    SelectionAlgorithm,
    SelectionCandidate,
    SelectionConstraints,
    SelectionOptions,
    SelectionResult,
    SelectionStrategy,
)
from .candidates import build_candidates
from .greedy import greedy_select
from .hybrid import default_constituents, hybrid_select
from .knapsack import knapsack_select
from .local_search import LocalOptimizer
from .strategies import StrategyRegistry
from .topsis import multi_criteria_select

logger = logging.getLogger(__name__)


class AdaptiveSelector:
    """
    Multi-algorithm document selector.

    Builds fresh candidates on every call and runs the strategy's algorithm
    (knapsack, greedy, TOPSIS or the hybrid ensemble) against the character
    budget. The selector keeps no state between calls apart from its
    strategy registry, so independent calls are safe as long as the
    collaborators are.
    """

    def __init__(
        self,
        scorer: Optional[DocumentScorer] = None,
        dependency_resolver: Optional[DependencyResolver] = None,
        conflict_detector: Optional[ConflictDetector] = None,
        settings: Optional[SelectorSettings] = None,
        registry: Optional[StrategyRegistry] = None,
        oracles: Optional[OracleRegistry] = None,
    ):
        """
        Initialize the selector.

        Args:
            scorer: Document scorer (defaults to PriorityScorer)
            dependency_resolver: Dependency collaborator (defaults to passthrough)
            conflict_detector: Conflict collaborator (defaults to no conflicts)
            settings: Selector settings (defaults to environment settings)
            registry: Strategy registry (defaults to the built-in presets)
            oracles: Result oracles (defaults to budget + uniqueness)
        """
        self.scorer = scorer or PriorityScorer()
        self.dependency_resolver = dependency_resolver or PassthroughDependencyResolver()
        self.conflict_detector = conflict_detector or NullConflictDetector()
        self.settings = settings or load_settings()
        self.registry = registry or StrategyRegistry()
        self.oracles = oracles or default_registry()

    # Strategy management

    def get_available_strategies(self) -> List[SelectionStrategy]:
        return [self.registry.get(name) for name in self.registry.names()]

    def add_strategy(self, strategy: SelectionStrategy, replace_existing: bool = False):
        self.registry.register(strategy, replace_existing=replace_existing)

    def update_strategy(self, name: str, /, **changes) -> SelectionStrategy:
        return self.registry.update(name, **changes)

    # Selection

    def default_options(self) -> SelectionOptions:
        return SelectionOptions(
            strategy=self.settings.default_strategy,
            max_iterations=self.settings.max_iterations,
            convergence_threshold=self.settings.convergence_threshold,
        )

    def select(
        self,
        documents: Sequence[Document],
        constraints: SelectionConstraints,
        options: Optional[SelectionOptions] = None,
    ) -> SelectionResult:
        """
        Select documents according to the constraints and options.

        Args:
            documents: Candidate documents
            constraints: Character budget and scorer context
            options: Strategy name and run options

        Returns:
            Complete selection result with metrics and metadata

        Raises:
            ConfigurationError: Unknown strategy, bad weight override or algorithm
            EmptySelectionError: Every constituent of a hybrid run failed
            SelectionValidationError: A result oracle rejected the selection
        """
        start_time = time.perf_counter()
        options = options or self.default_options()
        strategy = self.registry.resolve(options.strategy, options.custom_weights)
        log = logger.info if options.debug else logger.debug

        if constraints.max_characters <= 0 or not documents:
            log(
                f"Degenerate selection request ({len(documents)} documents, "
                f"budget {constraints.max_characters}); returning empty result"
            )
            return self._empty_result(strategy, constraints, start_time)

        algorithms_used: List[str] = []
        current = list(documents)

        if options.enable_conflict_resolution:
            analysis = self.conflict_detector.detect_conflicts(current)
            resolved = self.conflict_detector.apply_conflict_resolutions(current, analysis.conflicts)
            log(f"Conflict resolution: {len(current)} -> {len(resolved)} documents")
            current = list(resolved)
            algorithms_used.append("conflict-resolution")

        dependency_result: Optional[ResolutionResult] = None
        if options.enable_dependency_resolution:
            dependency_result = self.dependency_resolver.resolve_dependencies(current)
            current = list(dependency_result.ordered_documents)
            log(
                f"Dependency resolution: added {len(dependency_result.included_dependencies)} "
                f"dependencies, {len(dependency_result.cycles)} cycles detected"
            )
            algorithms_used.append("dependency-resolution")

        current = self._deduplicate(current)
        candidates = build_candidates(current, self.scorer, constraints.context)

        log(
            f"Running {strategy.algorithm.value} for strategy '{strategy.name}' over "
            f"{len(candidates)} candidates with budget {constraints.max_characters}"
        )
        outcome = self._run_selection(strategy, candidates, constraints, options)
        algorithms_used.append(strategy.algorithm.value)

        selected = outcome.selected
        scoring = outcome.scoring
        iterations = outcome.iterations
        converged = outcome.converged

        if options.enable_optimization and not converged:
            optimizer = LocalOptimizer(strategy, constraints.max_characters)
            search = optimizer.run(
                selected,
                candidates,
                self.settings.optimize_max_iterations,
                self.settings.optimize_convergence_threshold,
            )
            if search.swaps:
                selected = search.selection
                scoring = [c.to_scoring_result() for c in selected]
            iterations += search.iterations
            converged = search.converged
            algorithms_used.append("optimization")
            log(f"Post-selection optimization: {search.iterations} passes, {len(search.swaps)} swaps")

        selected_documents = [c.document for c in selected]
        final_conflicts = (
            self.conflict_detector.detect_conflicts(selected_documents)
            if options.enable_conflict_resolution else ConflictAnalysis()
        )

        result = SelectionResult(
            selected_documents=selected_documents,
            strategy=strategy,
            scoring=ScoringSummary.from_results(scoring),
            optimization=analyze_optimization(selected_documents, constraints.max_characters),
            analysis=analyze_coverage(selected_documents),
            dependencies=self._dependency_summary(dependency_result),
            conflicts=ConflictSummary(
                analysis=final_conflicts,
                resolved=final_conflicts.auto_resolvable,
                remaining=final_conflicts.requires_manual_review,
            ),
            metadata=RunMetadata(
                selection_time_ms=(time.perf_counter() - start_time) * 1000,
                algorithms_used=algorithms_used,
                iterations_performed=iterations,
                convergence_achieved=converged,
                partial_failures=list(outcome.failures),
            ),
            total_characters=sum(c.estimated_characters for c in selected),
            max_characters=constraints.max_characters,
        )

        log(
            f"Selected {len(selected_documents)}/{len(candidates)} documents, "
            f"{result.total_characters}/{constraints.max_characters} characters "
            f"({result.optimization.space_utilization:.1%})"
        )
        return self._postprocess_result(result)

    def try_select(
        self,
        documents: Sequence[Document],
        constraints: SelectionConstraints,
        options: Optional[SelectionOptions] = None,
    ) -> Result[SelectionResult, DocPackError]:
        """Like select(), but returns docpack errors as a failed Result."""
        try:
            return Result.success(self.select(documents, constraints, options))
        except DocPackError as e:
            logger.debug(f"Selection failed: {e}")
            return Result.failure(e)

    def _run_selection(
        self,
        strategy: SelectionStrategy,
        candidates: List[SelectionCandidate],
        constraints: SelectionConstraints,
        options: SelectionOptions,
    ) -> AlgorithmOutcome:
        """Run the algorithm named by the strategy."""
        budget = constraints.max_characters
        cell_warning = self.settings.knapsack_cell_warning

        handlers: Dict[SelectionAlgorithm, Callable[[], AlgorithmOutcome]] = {
            SelectionAlgorithm.KNAPSACK: lambda: knapsack_select(
                candidates, budget, cell_warning=cell_warning
            ),
            SelectionAlgorithm.GREEDY: lambda: greedy_select(candidates, budget),
            SelectionAlgorithm.MULTI_CRITERIA: lambda: multi_criteria_select(
                candidates, budget, strategy.criteria
            ),
            SelectionAlgorithm.HYBRID: lambda: hybrid_select(
                candidates,
                budget,
                strategy,
                max_iterations=options.max_iterations,
                convergence_threshold=options.convergence_threshold,
                constituents=default_constituents(cell_warning),
            ),
        }

        handler = handlers.get(strategy.algorithm)
        if handler is None:
            raise ConfigurationError(f"Unsupported algorithm: {strategy.algorithm}")
        return handler()

    def _deduplicate(self, documents: List[Document]) -> List[Document]:
        seen = set()
        unique = []
        for doc in documents:
            if doc.id in seen:
                logger.warning(f"Dropping duplicate document id '{doc.id}'")
                continue
            seen.add(doc.id)
            unique.append(doc)
        return unique

    def _dependency_summary(self, resolution: Optional[ResolutionResult]) -> DependencySummary:
        if resolution is None:
            return DependencySummary()
        return DependencySummary(
            resolved=resolution,
            included_dependencies=len(resolution.included_dependencies),
            cycles_detected=len(resolution.cycles),
        )

    def _empty_result(
        self,
        strategy: SelectionStrategy,
        constraints: SelectionConstraints,
        start_time: float,
    ) -> SelectionResult:
        return SelectionResult(
            selected_documents=[],
            strategy=strategy,
            metadata=RunMetadata(
                selection_time_ms=(time.perf_counter() - start_time) * 1000,
                algorithms_used=[],
                iterations_performed=0,
                convergence_achieved=True,
            ),
            total_characters=0,
            max_characters=constraints.max_characters,
        )

    def _postprocess_result(self, result: SelectionResult) -> SelectionResult:
        """Validate the result with the runtime oracles."""
        if not self.settings.validate_results:
            return result

        reports = self.oracles.validate(result)
        if not self.oracles.check_all_passed(reports):
            failed = [r.message for r in reports if r.result.value in ("fail", "error")]
            raise SelectionValidationError(
                f"Selection validation failed: {'; '.join(failed)}", reports=reports
            )
        return result
