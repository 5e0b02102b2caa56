"""
Base language parser interface.

A language parser couples one grammar lexer, its taxonomy classifier and a
knowledge component registry:

    fragment --tokenize--> tokens --classify--> components --> registry

Design Philosophy:
- Parsers never raise on malformed input; unknown tokens are dropped
- The registry keeps the first time stamp seen for each token kind
- Subclasses only name their grammar; the parse loop is shared
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
import logging

from kcextract.lexer.base import Token, TokenWindow, iter_windows
from kcextract.models import (
    KnowledgeComponent,
    KnowledgeComponentRegistry,
    ProgrammingLanguage,
)
from kcextract.taxonomy.base import Classification

logger = logging.getLogger("kcx-parser")


def timestamp_url(source: str, time_offset: int) -> str:
    """Link to ``source`` at ``time_offset`` seconds."""
    return f"{source}&t={time_offset}"


class BaseParser(ABC):
    """Abstract base class for grammar-specific parsers.

    Subclasses implement:
    - tokenize(): the grammar lexer
    - classify(): the grammar taxonomy classifier
    """

    def __init__(self, source: str, language: ProgrammingLanguage):
        self.source = source
        self.language = language
        self.registry = KnowledgeComponentRegistry()

    @property
    @abstractmethod
    def name(self) -> str:
        """Grammar name (e.g., 'cj', 'py')."""
        pass

    @abstractmethod
    def tokenize(self, text: str) -> list[Token]:
        pass

    @abstractmethod
    def classify(self, window: TokenWindow) -> Optional[Classification]:
        pass

    def parse(self, fragment: str, time_offset: int) -> int:
        """Extract knowledge components from ``fragment``.

        Returns the number of components that were new to the registry.
        """
        tokens = self.tokenize(fragment)
        stamp = timestamp_url(self.source, time_offset)
        added = 0
        for window in iter_windows(tokens):
            result = self.classify(window)
            if result is None:
                continue
            component = KnowledgeComponent(
                token_kind=result.token.literal,
                display_value=result.token.display_value,
                timestamp_url=stamp,
                category_chain=result.chain,
            )
            if self.registry.add(component):
                added += 1
        logger.debug(
            "%s parser: %d tokens at t=%s, %d new components",
            self.name, len(tokens), time_offset, added,
        )
        return added

    def snapshot(self) -> KnowledgeComponentRegistry:
        """Independent copy of the components collected so far."""
        return self.registry.snapshot()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.language.value}, {len(self.registry)} components)"
