"""
Language parsers and the dispatcher that selects one.

This module provides:
- BaseParser: shared parse loop over a grammar lexer and classifier
- CJParser / PyParser: the two concrete grammars
- create_parser(): factory from a ProgrammingLanguage
- ProtoParser: starts unbound and binds to one parser once the language
  of the video is known
"""

from __future__ import annotations

from typing import Optional, Union
import logging

from kcextract.models import KnowledgeComponentRegistry, ProgrammingLanguage
from kcextract.parser.base import BaseParser, timestamp_url
from kcextract.parser.cjparser import CJParser
from kcextract.parser.pyparser import PyParser

logger = logging.getLogger("kcx-parser")

LanguageParser = Union[CJParser, PyParser]

PARSER_FOR_LANGUAGE: dict[ProgrammingLanguage, type] = {
    ProgrammingLanguage.C: CJParser,
    ProgrammingLanguage.CPP: CJParser,
    ProgrammingLanguage.JAVA: CJParser,
    ProgrammingLanguage.PYTHON: PyParser,
}


def create_parser(source: str, language: ProgrammingLanguage) -> LanguageParser:
    """Factory function to create the parser for a language.

    Args:
        source: Video URL used as the time stamp prefix
        language: Resolved programming language

    Returns:
        CJParser for C, Cpp and Java; PyParser for Python
    """
    return PARSER_FOR_LANGUAGE[language](source, language)


class ProtoParser:
    """Dispatcher that is unbound until a language is known.

    Binding happens at most once. Fragments parsed while unbound are
    dropped, and asking an unbound dispatcher for a snapshot is an error:
    check ``is_bound`` first.
    """

    def __init__(self):
        self._parser: Optional[LanguageParser] = None

    @property
    def is_bound(self) -> bool:
        return self._parser is not None

    @property
    def language(self) -> Optional[ProgrammingLanguage]:
        return self._parser.language if self._parser else None

    def bind(self, source: str, language: ProgrammingLanguage) -> None:
        if self._parser is not None:
            raise RuntimeError(f"ProtoParser already bound to {self._parser.language.value}")
        self._parser = create_parser(source, language)
        logger.info("Bound %s parser for %s", self._parser.name, language.value)

    def parse(self, fragment: str, time_offset: int) -> None:
        if self._parser is None:
            logger.debug("Unbound, dropping fragment at t=%s", time_offset)
            return
        self._parser.parse(fragment, time_offset)

    def snapshot(self) -> KnowledgeComponentRegistry:
        if self._parser is None:
            raise RuntimeError("ProtoParser is unbound; no registry to snapshot")
        return self._parser.snapshot()


__all__ = [
    "BaseParser",
    "CJParser",
    "PyParser",
    "LanguageParser",
    "ProtoParser",
    "create_parser",
    "timestamp_url",
]
