"""
Shared lexing machinery for the grammar lexers.

Each grammar describes itself as an ordered list of LexRule entries and
hands them to RegexLexer, which scans the input with a longest-match
strategy:

- At every position all rules are tried; the longest match wins
- On equal length the earlier rule wins, so keywords listed before the
  identifier pattern beat it ("for" is a keyword, "format" is not)
- Rules without a kind consume input silently (whitespace, comments)
- A character no rule matches becomes one "unrecognized" token

Lexing therefore never fails: any input reduces to a token list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence
import json
import re


@dataclass(frozen=True)
class Token:
    """One lexical unit of a grammar.

    ``kind`` is a member of the grammar's own kind enum, whose values are
    the display names ("If", "PrefixIncrement"). ``text`` is only set for
    kinds that carry their source text (identifiers, numbers, strings,
    preprocessor directives).
    """
    kind: Enum
    text: Optional[str] = None

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def literal(self) -> str:
        """Debug form of the token, e.g. ``If`` or ``Preprocessor("#include")``."""
        if self.text is None:
            return self.name
        return f"{self.name}({json.dumps(self.text, ensure_ascii=False)})"

    @property
    def display_value(self) -> str:
        """Captured text for text-bearing tokens, lower-cased name otherwise."""
        if self.text is not None:
            return self.text
        return self.name.lower()

    def __str__(self) -> str:
        return self.literal


class Boundary(Enum):
    NO_TOKEN = "NoToken"


# Returned by TokenWindow for positions outside the token list
NO_TOKEN = Token(Boundary.NO_TOKEN)


class TokenWindow:
    """Fixed-position view over a materialized token list.

    Neighbour lookups never raise and never wrap around: anything outside
    the list is NO_TOKEN.
    """

    def __init__(self, tokens: Sequence[Token], index: int):
        self.tokens = tokens
        self.index = index

    @property
    def current(self) -> Token:
        return self.peek(0)

    def peek(self, offset: int) -> Token:
        position = self.index + offset
        if 0 <= position < len(self.tokens):
            return self.tokens[position]
        return NO_TOKEN

    def previous(self, distance: int = 1) -> Token:
        return self.peek(-distance)

    def next(self, distance: int = 1) -> Token:
        return self.peek(distance)


def iter_windows(tokens: Sequence[Token]) -> Iterator[TokenWindow]:
    """Yield a window centred on each token in order."""
    for index in range(len(tokens)):
        yield TokenWindow(tokens, index)


# ============================================================================
# Rules
# ============================================================================

@dataclass(frozen=True)
class LexRule:
    """A pattern and the token kind it produces (None = discard)."""
    pattern: re.Pattern
    kind: Optional[Enum]
    keep_text: bool = False


def literal(text: str, kind: Enum) -> LexRule:
    """Rule for a fixed keyword or operator."""
    return LexRule(re.compile(re.escape(text)), kind)


def pattern(regex: str, kind: Enum, keep_text: bool = False, flags: int = 0) -> LexRule:
    """Rule for a regex-governed token category."""
    return LexRule(re.compile(regex, flags), kind, keep_text)


def discard(regex: str, flags: int = 0) -> LexRule:
    """Rule whose matches are dropped from the token stream."""
    return LexRule(re.compile(regex, flags), None)


class RegexLexer:
    """Longest-match lexer over an ordered rule list."""

    def __init__(self, rules: Sequence[LexRule], unrecognized: Enum):
        self.rules = tuple(rules)
        self.unrecognized = unrecognized

    def tokenize(self, text: str) -> list[Token]:
        tokens: list[Token] = []
        pos = 0
        while pos < len(text):
            best_rule: Optional[LexRule] = None
            best_end = pos
            for rule in self.rules:
                match = rule.pattern.match(text, pos)
                # strictly longer only: ties go to the earlier rule
                if match and match.end() > best_end:
                    best_rule, best_end = rule, match.end()

            if best_rule is None:
                tokens.append(Token(self.unrecognized, text[pos]))
                pos += 1
                continue

            if best_rule.kind is not None:
                captured = text[pos:best_end] if best_rule.keep_text else None
                tokens.append(Token(best_rule.kind, captured))
            pos = best_end
        return tokens
