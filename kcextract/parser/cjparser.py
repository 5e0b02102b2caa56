"""Parser for the shared C, C++ and Java grammar."""

from __future__ import annotations

from typing import Optional

from kcextract.lexer import cjlexer
from kcextract.lexer.base import Token, TokenWindow
from kcextract.parser.base import BaseParser
from kcextract.taxonomy import cj
from kcextract.taxonomy.base import Classification


class CJParser(BaseParser):
    """Parses C, C++ and Java fragments."""

    @property
    def name(self) -> str:
        return "cj"

    def tokenize(self, text: str) -> list[Token]:
        return cjlexer.tokenize(text)

    def classify(self, window: TokenWindow) -> Optional[Classification]:
        return cj.classify(window)
