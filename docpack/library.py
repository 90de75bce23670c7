"""
docpack main library interface.

Provides a small API over the adaptive selector for applications that just
want "these documents, this many characters, this strategy".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .config import SelectorSettings, load_strategies_file
from .documents.base import Document
from .resolution.base import ConflictDetector, DependencyResolver
from .scoring.base import DocumentScorer
from .selector.base import SelectionConstraints, SelectionOptions, SelectionResult
from .selector.selector import AdaptiveSelector
from .utils.error_handling import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class DocPackConfig:
    """
    Configuration for a packing run.

    The presets mirror the usual llms.txt output sizes: a short summary,
    a standard document and a full reference dump.
    """

    strategy: str = "hybrid"
    max_characters: int = 5000

    # Selection run options
    max_iterations: int = 100
    convergence_threshold: float = 0.01
    enable_optimization: bool = True
    enable_conflict_resolution: bool = True
    enable_dependency_resolution: bool = True
    debug: bool = False

    @classmethod
    def for_summary(cls) -> 'DocPackConfig':
        """Small budget where every character must count."""
        return cls(strategy="quality-focused", max_characters=1000)

    @classmethod
    def for_standard(cls) -> 'DocPackConfig':
        """Balanced selection for a standard sized output."""
        return cls(strategy="balanced", max_characters=5000)

    @classmethod
    def for_reference(cls) -> 'DocPackConfig':
        """Large budget favouring coverage across categories."""
        return cls(strategy="diverse", max_characters=20000, max_iterations=50)

    def to_options(self, custom_weights: Optional[Dict[str, float]] = None) -> SelectionOptions:
        return SelectionOptions(
            strategy=self.strategy,
            max_iterations=self.max_iterations,
            convergence_threshold=self.convergence_threshold,
            enable_optimization=self.enable_optimization,
            enable_conflict_resolution=self.enable_conflict_resolution,
            enable_dependency_resolution=self.enable_dependency_resolution,
            custom_weights=custom_weights,
            debug=self.debug,
        )


class DocumentPacker:
    """
    Main interface for document selection.

    Wraps an AdaptiveSelector and accepts either Document objects or the
    plain metadata mappings produced by document discovery.
    """

    def __init__(
        self,
        scorer: Optional[DocumentScorer] = None,
        dependency_resolver: Optional[DependencyResolver] = None,
        conflict_detector: Optional[ConflictDetector] = None,
        settings: Optional[SelectorSettings] = None,
        strategies_file: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize the packer.

        Args:
            scorer: Document scorer (defaults to PriorityScorer)
            dependency_resolver: Dependency collaborator
            conflict_detector: Conflict collaborator
            settings: Selector settings (defaults to environment settings)
            strategies_file: Optional JSON file with extra strategy presets
        """
        self.selector = AdaptiveSelector(
            scorer=scorer,
            dependency_resolver=dependency_resolver,
            conflict_detector=conflict_detector,
            settings=settings,
        )
        if strategies_file is not None:
            for strategy in load_strategies_file(strategies_file):
                self.selector.add_strategy(strategy, replace_existing=True)

    def select(
        self,
        documents: Iterable[Union[Document, Mapping[str, Any]]],
        config: Optional[DocPackConfig] = None,
        context: Any = None,
        custom_weights: Optional[Dict[str, float]] = None,
    ) -> SelectionResult:
        """
        Select documents for the configured budget and strategy.

        Args:
            documents: Documents or metadata mappings (see Document.from_dict)
            config: Packing configuration (uses default if None)
            context: Opaque scoring context forwarded to the scorer
            custom_weights: Per-call criteria weight overrides

        Returns:
            SelectionResult for the run
        """
        config = config or DocPackConfig()
        docs = self._coerce_documents(documents)
        constraints = SelectionConstraints(max_characters=config.max_characters, context=context)
        return self.selector.select(docs, constraints, config.to_options(custom_weights))

    def select_ids(
        self,
        documents: Iterable[Union[Document, Mapping[str, Any]]],
        config: Optional[DocPackConfig] = None,
        context: Any = None,
    ) -> List[str]:
        """Ids of the selected documents, in selection order."""
        return self.select(documents, config, context).selected_ids

    def available_strategies(self) -> List[str]:
        return [s.name for s in self.selector.get_available_strategies()]

    def _coerce_documents(
        self, documents: Iterable[Union[Document, Mapping[str, Any]]]
    ) -> List[Document]:
        docs = []
        for item in documents:
            if isinstance(item, Document):
                docs.append(item)
            elif isinstance(item, Mapping):
                docs.append(Document.from_dict(item))
            else:
                raise ConfigurationError(
                    f"Expected Document or mapping, got {type(item).__name__}"
                )
        return docs


def select_documents(
    documents: Sequence[Union[Document, Mapping[str, Any]]],
    max_characters: int,
    strategy: str = "hybrid",
    context: Any = None,
    custom_weights: Optional[Dict[str, float]] = None,
    **kwargs,
) -> SelectionResult:
    """
    One-shot selection with default collaborators.

    Example:
        >>> result = select_documents(docs, max_characters=2000, strategy="efficiency")
        >>> result.selected_ids
    """
    config = DocPackConfig(strategy=strategy, max_characters=max_characters, **kwargs)
    return DocumentPacker().select(documents, config, context, custom_weights)
