"""
Grammar lexers.

This module provides:
- Token / TokenWindow: the shared token type and its neighbour accessor
- cjlexer: the combined C, C++ and Java grammar
- pylexer: the Python grammar
"""

from kcextract.lexer.base import (
    NO_TOKEN,
    RegexLexer,
    Token,
    TokenWindow,
    iter_windows,
)
from kcextract.lexer.cjlexer import CJKind
from kcextract.lexer.pylexer import PyKind

__all__ = [
    "NO_TOKEN",
    "RegexLexer",
    "Token",
    "TokenWindow",
    "iter_windows",
    "CJKind",
    "PyKind",
]
