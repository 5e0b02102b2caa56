"""
Core data models for kcextract.

These models describe what flows through the extraction pipeline and what
comes out of it:

- ProgrammingLanguage: the closed set of languages the grammars cover
- Fragment / End: messages a producer sends to the stream coordinator
- CategoryChain: the taxonomy path assigned to one token
- KnowledgeComponent: one distinct concept with its first time stamp
- KnowledgeComponentRegistry: ordered, first-seen-wins component set
- Video / AnalysisResult: caller-facing metadata and the exported result

Design Philosophy:
- Serializable: results convert to/from JSON for export and debugging
- Identity by token kind: components dedupe on their lexical token only
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Union
import json


class ProgrammingLanguage(Enum):
    """Languages a video can be resolved to.

    C, C++ and Java share one grammar; Python has its own.
    """
    C = "C"
    CPP = "Cpp"
    JAVA = "Java"
    PYTHON = "Python"

    @property
    def export_name(self) -> str:
        """Lower-case name used in exported results (e.g. 'cpp')."""
        return self.value.lower()

    @classmethod
    def from_name(cls, name: str) -> ProgrammingLanguage:
        """Look a language up by value or export name, case-insensitively."""
        lowered = name.strip().lower()
        for lang in cls:
            if lang.value.lower() == lowered:
                return lang
        raise ValueError(f"Unknown programming language: {name!r}")


# ============================================================================
# Stream Messages
# ============================================================================

@dataclass(frozen=True)
class Fragment:
    """A piece of OCR'd text believed to contain source code."""
    text: str


@dataclass(frozen=True)
class End:
    """Terminates the fragment stream. Carries no payload."""


END = End()

Message = Union[Fragment, End]


# ============================================================================
# Taxonomy
# ============================================================================

@dataclass(frozen=True)
class CategoryChain:
    """Outermost-to-innermost taxonomy path of a token.

    Chains are built from the leaf outward:

        CategoryChain.leaf("Int").wrap("Integer Number").wrap("Arithmetic Data Type")

    A chain never branches, so it is stored as a flat tuple of names and
    only expanded into the nested ``{name, child}`` shape on export.
    """
    names: tuple[str, ...]

    def __post_init__(self):
        if not self.names:
            raise ValueError("CategoryChain needs at least one category")

    @classmethod
    def leaf(cls, name: str) -> CategoryChain:
        return cls((name,))

    def wrap(self, name: str) -> CategoryChain:
        """Return a new chain with ``name`` as the outermost category."""
        return CategoryChain((name,) + self.names)

    @property
    def root(self) -> str:
        return self.names[0]

    @property
    def leaf_name(self) -> str:
        return self.names[-1]

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __str__(self) -> str:
        return " -> ".join(self.names)

    def to_dict(self) -> dict:
        node: Optional[dict] = None
        for name in reversed(self.names):
            node = {"name": name, "child": node}
        return node

    @classmethod
    def from_dict(cls, d: dict) -> CategoryChain:
        names = []
        node: Optional[dict] = d
        while node is not None:
            names.append(node["name"])
            node = node.get("child")
        return cls(tuple(names))


# ============================================================================
# Knowledge Components
# ============================================================================

@dataclass(eq=False)
class KnowledgeComponent:
    """A time-stamped, classified token.

    Equality and hashing use ``token_kind`` only, so two components for the
    same lexical token are the same concept no matter when they were seen.
    """
    token_kind: str
    display_value: str
    timestamp_url: str
    category_chain: CategoryChain

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KnowledgeComponent):
            return NotImplemented
        return self.token_kind == other.token_kind

    def __hash__(self) -> int:
        return hash(self.token_kind)

    def to_dict(self) -> dict:
        return {
            "token": self.token_kind,
            "value": self.display_value,
            "timeStamp": self.timestamp_url,
            "classification": self.category_chain.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> KnowledgeComponent:
        return cls(
            token_kind=d["token"],
            display_value=d.get("value", ""),
            timestamp_url=d.get("timeStamp", ""),
            category_chain=CategoryChain.from_dict(d["classification"]),
        )


class KnowledgeComponentRegistry:
    """Insertion-ordered set of components, deduplicated by token kind.

    The first component registered for a token kind is kept for good:
    later inserts of the same kind are ignored, which preserves the
    earliest time stamp a concept was shown at.
    """

    def __init__(self, components: Iterable[KnowledgeComponent] = ()):
        self._components: dict[str, KnowledgeComponent] = {}
        for component in components:
            self.add(component)

    def add(self, component: KnowledgeComponent) -> bool:
        """Insert a component. Returns False if its kind was already present."""
        if component.token_kind in self._components:
            return False
        self._components[component.token_kind] = component
        return True

    def get(self, token_kind: str) -> Optional[KnowledgeComponent]:
        return self._components.get(token_kind)

    def snapshot(self) -> KnowledgeComponentRegistry:
        """Independent copy; later inserts into self do not show up in it."""
        return KnowledgeComponentRegistry(self._components.values())

    @property
    def token_kinds(self) -> list[str]:
        return list(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[KnowledgeComponent]:
        return iter(list(self._components.values()))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, KnowledgeComponent):
            return item.token_kind in self._components
        return item in self._components

    def __repr__(self) -> str:
        return f"KnowledgeComponentRegistry({self.token_kinds!r})"

    def to_list(self) -> list[dict]:
        return [c.to_dict() for c in self._components.values()]


# ============================================================================
# Video Metadata and Results
# ============================================================================

@dataclass
class Video:
    """Metadata handed in by the caller.

    The title is only a language hint; the URL is only used to build
    time stamp links.
    """
    url: str
    title: str = ""

    @property
    def hint(self) -> str:
        """Text used for heuristic language classification."""
        return self.title or self.url

    def to_dict(self) -> dict:
        return {"title": self.title, "url": self.url}

    @classmethod
    def from_dict(cls, d: dict) -> Video:
        return cls(url=d["url"], title=d.get("title", ""))


@dataclass
class AnalysisResult:
    """Everything one analysis run produces."""
    video: Video
    language: Optional[ProgrammingLanguage] = None
    knowledge_components: KnowledgeComponentRegistry = field(
        default_factory=KnowledgeComponentRegistry
    )

    def to_dict(self) -> dict:
        return {
            "video": self.video.to_dict(),
            "language": self.language.export_name if self.language else None,
            "knowledgeComponents": self.knowledge_components.to_list(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> AnalysisResult:
        language = d.get("language")
        return cls(
            video=Video.from_dict(d["video"]),
            language=ProgrammingLanguage.from_name(language) if language else None,
            knowledge_components=KnowledgeComponentRegistry(
                KnowledgeComponent.from_dict(c) for c in d.get("knowledgeComponents", [])
            ),
        )

    def to_json(self, indent: int = 2) -> str:
        """Serialize result to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> AnalysisResult:
        """Deserialize result from JSON string."""
        return cls.from_dict(json.loads(json_str))

    def summary(self) -> str:
        """Return a human-readable summary of the result."""
        roots: dict[str, int] = {}
        for component in self.knowledge_components:
            roots[component.category_chain.root] = roots.get(component.category_chain.root, 0) + 1
        lines = [
            f"Video '{self.video.title or self.video.url}'",
            f"  Language: {self.language.value if self.language else 'unresolved'}",
            f"  Knowledge components: {len(self.knowledge_components)}",
        ]
        for root, count in roots.items():
            lines.append(f"    {root}: {count}")
        return "\n".join(lines)
