"""Interfaces for the dependency and conflict collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..documents.base import Document


@dataclass
class ResolutionStatistics:
    total_processed: int = 0
    dependencies_resolved: int = 0
    conflicts_excluded: int = 0
    average_depth: float = 0.0


@dataclass
class ResolutionResult:
    """Outcome of dependency resolution over a document list."""

    ordered_documents: List[Document] = field(default_factory=list)
    included_dependencies: List[Document] = field(default_factory=list)
    cycles: List[List[str]] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    statistics: ResolutionStatistics = field(default_factory=ResolutionStatistics)


@dataclass
class Conflict:
    """A detected conflict between two documents."""

    id: str
    document_a: Document
    document_b: Document
    conflict_type: str
    severity: str  # minor, moderate, major, critical
    description: str = ""
    auto_resolvable: bool = False


@dataclass
class ConflictAnalysis:
    """Conflicts found in a document list, with summary counts."""

    conflicts: List[Conflict] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.conflicts)

    @property
    def auto_resolvable(self) -> int:
        return sum(1 for c in self.conflicts if c.auto_resolvable)

    @property
    def requires_manual_review(self) -> int:
        return self.total - self.auto_resolvable

    def by_severity(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for conflict in self.conflicts:
            counts[conflict.severity] = counts.get(conflict.severity, 0) + 1
        return counts

    def by_type(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for conflict in self.conflicts:
            counts[conflict.conflict_type] = counts.get(conflict.conflict_type, 0) + 1
        return counts

    def summary(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "by_severity": self.by_severity(),
            "by_type": self.by_type(),
            "auto_resolvable": self.auto_resolvable,
            "requires_manual_review": self.requires_manual_review,
        }


class DependencyResolver(ABC):
    """Augments and orders documents according to their dependencies.

    Detected cycles are reported in the result and are never fatal.
    """

    @abstractmethod
    def resolve_dependencies(self, documents: List[Document]) -> ResolutionResult:
        pass


class ConflictDetector(ABC):
    """Finds and resolves conflicts between documents."""

    @abstractmethod
    def detect_conflicts(self, documents: List[Document]) -> ConflictAnalysis:
        pass

    @abstractmethod
    def apply_conflict_resolutions(
        self, documents: List[Document], conflicts: List[Conflict]
    ) -> List[Document]:
        pass


class PassthroughDependencyResolver(DependencyResolver):
    """Keeps the input order and adds nothing."""

    def resolve_dependencies(self, documents: List[Document]) -> ResolutionResult:
        return ResolutionResult(
            ordered_documents=list(documents),
            statistics=ResolutionStatistics(total_processed=len(documents)),
        )


class NullConflictDetector(ConflictDetector):
    """Reports no conflicts; resolution returns the documents unchanged."""

    def detect_conflicts(self, documents: List[Document]) -> ConflictAnalysis:
        return ConflictAnalysis()

    def apply_conflict_resolutions(
        self, documents: List[Document], conflicts: List[Conflict]
    ) -> List[Document]:
        return list(documents)
