"""
Building blocks shared by the per-grammar taxonomy classifiers.

A classifier is a table mapping every token kind of its grammar to a rule.
A rule looks at a TokenWindow and either returns a Classification (the
token to record, possibly a disambiguated kind, plus its category chain)
or None to skip the token.

Category paths are written outermost-first, e.g. ``(STATEMENT, "Jump")``,
and turned into chains by starting at the leaf and wrapping outward.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Mapping, NamedTuple, Optional

from kcextract.lexer.base import Token, TokenWindow
from kcextract.models import CategoryChain


# Roots
STATEMENT = "Statement"
DECLARATION = "Declaration"
EXPRESSION = "Expression"
PREPROCESSOR = "Preprocessor"
COMPILATION_UNIT = "Compilation Unit"

# Common intermediate categories
DATA_TYPE = "Data Type"
ARITHMETIC_DATA_TYPE = "Arithmetic Data Type"
DECLARATOR = "Declarator"
PRIMARY_EXPRESSION = "Primary Expression"


class Classification(NamedTuple):
    token: Token
    chain: CategoryChain


Rule = Callable[[TokenWindow], Optional[Classification]]


def build_chain(leaf: str, path: tuple[str, ...]) -> CategoryChain:
    """Wrap ``leaf`` in ``path`` (outermost-first) from the inside out."""
    chain = CategoryChain.leaf(leaf)
    for name in reversed(path):
        chain = chain.wrap(name)
    return chain


def classify_token(token: Token, path: tuple[str, ...]) -> Classification:
    return Classification(token, build_chain(token.literal, path))


def category(*path: str) -> Rule:
    """Rule recording the current token under ``path``."""
    def rule(window: TokenWindow) -> Classification:
        return classify_token(window.current, path)
    return rule


def skip(window: TokenWindow) -> None:
    return None


def check_coverage(rules: Mapping[Enum, Rule], kinds: type[Enum]) -> None:
    """Raise RuntimeError if a grammar kind has no rule. Run at import."""
    missing = [kind.name for kind in kinds if kind not in rules]
    if missing:
        raise RuntimeError(f"No taxonomy rule for {kinds.__name__}: {', '.join(missing)}")


def run_rules(rules: Mapping[Enum, Rule], window: TokenWindow) -> Optional[Classification]:
    return rules[window.current.kind](window)
