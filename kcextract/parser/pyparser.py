"""Parser for Python fragments."""

from __future__ import annotations

from typing import Optional

from kcextract.lexer import pylexer
from kcextract.lexer.base import Token, TokenWindow
from kcextract.parser.base import BaseParser
from kcextract.taxonomy import py
from kcextract.taxonomy.base import Classification


class PyParser(BaseParser):

    @property
    def name(self) -> str:
        return "py"

    def tokenize(self, text: str) -> list[Token]:
        return pylexer.tokenize(text)

    def classify(self, window: TokenWindow) -> Optional[Classification]:
        return py.classify(window)
