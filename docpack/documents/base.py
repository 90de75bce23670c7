"""Core data structures for documentation items."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple


class DocumentCategory(Enum):
    """Categories a documentation item can belong to."""

    GUIDE = "guide"
    API = "api"
    CONCEPT = "concept"
    EXAMPLE = "example"
    REFERENCE = "reference"
    LLMS = "llms"


class Complexity(Enum):
    """Reader complexity level of a document."""

    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


def _frozen(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        return frozenset([values])
    return frozenset(values)


@dataclass(frozen=True)
class DocumentTags:
    """Tag metadata used for affinity, diversity and coverage."""

    primary: FrozenSet[str] = field(default_factory=frozenset)
    audience: FrozenSet[str] = field(default_factory=frozenset)
    complexity: Complexity = Complexity.INTERMEDIATE

    def __post_init__(self):
        # Accept any iterable of strings but store immutable sets
        object.__setattr__(self, "primary", _frozen(self.primary))
        object.__setattr__(self, "audience", _frozen(self.audience))
        if not isinstance(self.complexity, Complexity):
            object.__setattr__(self, "complexity", Complexity(self.complexity))


@dataclass(frozen=True)
class Document:
    """
    A documentation item offered to the selector.

    Documents are immutable inputs; everything the selector derives from
    them lives on per-call candidates.
    """

    # Identity
    id: str
    category: DocumentCategory

    # Selection features
    tags: DocumentTags = field(default_factory=DocumentTags)
    priority_score: int = 50  # 0-100
    word_count: Optional[int] = None

    # Descriptive metadata
    title: Optional[str] = None
    prerequisites: Tuple[str, ...] = ()  # Ids of documents this one builds on

    def __post_init__(self):
        if not self.id:
            raise ValueError("Document id must be a non-empty string")
        if not isinstance(self.category, DocumentCategory):
            object.__setattr__(self, "category", DocumentCategory(self.category))
        if not 0 <= self.priority_score <= 100:
            raise ValueError(
                f"Priority score for {self.id} must be within 0-100, got {self.priority_score}"
            )
        if self.word_count is not None and self.word_count < 0:
            raise ValueError(f"Word count for {self.id} cannot be negative")
        object.__setattr__(self, "prerequisites", tuple(self.prerequisites))

    @property
    def complexity(self) -> Complexity:
        return self.tags.complexity

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Document':
        """
        Build a document from metadata.

        Accepts the nested metadata layout::

            {"document": {"id", "category", "wordCount", "title"},
             "tags": {"primary", "audience", "complexity"},
             "priority": {"score"},
             "dependencies": {"prerequisites": [{"documentId": ...}]}}

        as well as a flat layout using the dataclass field names.
        """
        if "document" in data:
            doc_info = data["document"]
            tags = data.get("tags", {}) or {}
            priority = data.get("priority", {}) or {}
            prereqs = (data.get("dependencies", {}) or {}).get("prerequisites", []) or []
            return cls(
                id=doc_info["id"],
                category=DocumentCategory(doc_info["category"]),
                tags=DocumentTags(
                    primary=tags.get("primary", ()),
                    audience=tags.get("audience", ()),
                    complexity=Complexity(tags.get("complexity", "intermediate")),
                ),
                priority_score=int(priority.get("score", 50)),
                word_count=doc_info.get("wordCount"),
                title=doc_info.get("title"),
                prerequisites=tuple(
                    p["documentId"] if isinstance(p, dict) else p for p in prereqs
                ),
            )

        return cls(
            id=data["id"],
            category=DocumentCategory(data["category"]),
            tags=DocumentTags(
                primary=data.get("primary_tags", ()),
                audience=data.get("audience", ()),
                complexity=Complexity(data.get("complexity", "intermediate")),
            ),
            priority_score=int(data.get("priority_score", 50)),
            word_count=data.get("word_count"),
            title=data.get("title"),
            prerequisites=tuple(data.get("prerequisites", ())),
        )
