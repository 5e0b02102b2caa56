"""
Taxonomy classifier for the Python grammar.

Python tokens need no neighbour lookups: every kind maps to a fixed path.
Keywords that form their own expression or declaration (``yield``,
``async``, ...) are named generically after the keyword.
"""

from __future__ import annotations

from typing import Optional

from kcextract.lexer.base import TokenWindow
from kcextract.lexer.pylexer import PyKind
from kcextract.taxonomy.base import (
    ARITHMETIC_DATA_TYPE,
    COMPILATION_UNIT,
    DATA_TYPE,
    DECLARATION,
    DECLARATOR,
    EXPRESSION,
    STATEMENT,
    Classification,
    Rule,
    category,
    check_coverage,
    run_rules,
    skip,
)


ITERATION = (STATEMENT, "Iteration")
CONDITION = (STATEMENT, "Condition")
JUMP = (STATEMENT, "Jump")
TRY_BLOCK = (STATEMENT, "Try Block")
THROW_STATEMENT = (STATEMENT, "Throw Statement")

ARITHMETIC_TYPE = (DECLARATION, DATA_TYPE, ARITHMETIC_DATA_TYPE)
DATA_TYPE_PATH = (DECLARATION, DATA_TYPE)
DECLARATOR_PATH = (DECLARATION, DECLARATOR)

ARITHMETIC = (EXPRESSION, "Arithmetic")
ASSIGNMENT = (EXPRESSION, "Assignment")
BITWISE = (EXPRESSION, "Bitwise")
LOGICAL = (EXPRESSION, "Logical")
COMPARISON = (EXPRESSION, "Comparison")
IDENTITY = (EXPRESSION, "Identity Operator")
MEMBERSHIP = (EXPRESSION, "Membership Operator")


def named_expression(kind: PyKind) -> Rule:
    """``yield`` -> Expression -> Yield Expression -> Yield."""
    return category(EXPRESSION, f"{kind.value} Expression")


def named_declaration(kind: PyKind) -> Rule:
    return category(DECLARATION, f"{kind.value} Declaration")


def data_type(name: str) -> Rule:
    return category(*DATA_TYPE_PATH, name)


def arithmetic_type(name: str) -> Rule:
    return category(*ARITHMETIC_TYPE, name)


RULES: dict[PyKind, Rule] = {
    PyKind.FOR: category(*ITERATION),
    PyKind.WHILE: category(*ITERATION),
    PyKind.BREAK: category(*JUMP),
    PyKind.CONTINUE: category(*JUMP),
    PyKind.RETURN: category(*JUMP),
    PyKind.PASS: category(*JUMP),
    PyKind.MATCH: category(*CONDITION),
    PyKind.CASE: category(*CONDITION),
    PyKind.IF: category(*CONDITION),
    PyKind.ELIF: category(*CONDITION),
    PyKind.ELSE: category(*CONDITION),
    PyKind.TRY: category(*TRY_BLOCK),
    PyKind.EXCEPT: category(*TRY_BLOCK),
    PyKind.FINALLY: category(*TRY_BLOCK),
    PyKind.RAISE: category(*THROW_STATEMENT),
    PyKind.IMPORT: category(COMPILATION_UNIT),
    PyKind.FROM: category(COMPILATION_UNIT),
    # data types
    PyKind.INT: arithmetic_type("Integer Number"),
    PyKind.FLOAT: arithmetic_type("Floating Point Number"),
    PyKind.COMPLEX: arithmetic_type("Complex Number"),
    PyKind.BOOL: arithmetic_type("Boolean"),
    PyKind.TRUE: arithmetic_type("Boolean"),
    PyKind.FALSE: arithmetic_type("Boolean"),
    PyKind.LIST: data_type("List"),
    PyKind.TUPLE: data_type("Tuple"),
    PyKind.DICT: data_type("Dict"),
    PyKind.SET: data_type("Set"),
    PyKind.BYTES: data_type("Bytes"),
    PyKind.CLASS: data_type("ClassType"),
    PyKind.STRING: data_type("StringType"),
    PyKind.NONE: data_type("NoneType"),
    # declarators
    PyKind.FUNCTION_DEFINITION: category(*DECLARATOR_PATH),
    PyKind.DECORATOR: category(*DECLARATOR_PATH),
    PyKind.FINAL: category(*DECLARATOR_PATH),
    PyKind.OVERLOAD: category(*DECLARATOR_PATH),
    PyKind.GLOBAL: named_declaration(PyKind.GLOBAL),
    PyKind.ASYNC: named_declaration(PyKind.ASYNC),
    # arithmetic
    PyKind.ADDITION: category(*ARITHMETIC),
    PyKind.SUBTRACTION: category(*ARITHMETIC),
    PyKind.MULTIPLICATION: category(*ARITHMETIC),
    PyKind.DIVISION: category(*ARITHMETIC),
    PyKind.FLOOR_DIVISION: category(*ARITHMETIC),
    PyKind.MODULO: category(*ARITHMETIC),
    PyKind.EXPONENTIATION: category(*ARITHMETIC),
    # assignment
    PyKind.ADD_ASSIGNMENT: category(*ASSIGNMENT),
    PyKind.SUB_ASSIGNMENT: category(*ASSIGNMENT),
    PyKind.MULT_ASSIGNMENT: category(*ASSIGNMENT),
    PyKind.DIV_ASSIGNMENT: category(*ASSIGNMENT),
    PyKind.FLOOR_DIV_ASSIGNMENT: category(*ASSIGNMENT),
    PyKind.MOD_ASSIGNMENT: category(*ASSIGNMENT),
    PyKind.EXP_ASSIGNMENT: category(*ASSIGNMENT),
    PyKind.ASSIGNMENT: category(*ASSIGNMENT),
    PyKind.ASSIGNMENT_EXPRESSION: category(*ASSIGNMENT),
    # bitwise
    PyKind.BITWISE_AND: category(*BITWISE),
    PyKind.BITWISE_AND_ASSIGNMENT: category(*BITWISE),
    PyKind.BITWISE_OR: category(*BITWISE),
    PyKind.BITWISE_OR_ASSIGNMENT: category(*BITWISE),
    PyKind.BITWISE_XOR: category(*BITWISE),
    PyKind.BITWISE_XOR_ASSIGNMENT: category(*BITWISE),
    PyKind.BITWISE_NOT: category(*BITWISE),
    PyKind.BITWISE_LEFT_SHIFT: category(*BITWISE),
    PyKind.BITWISE_LEFT_SHIFT_ASSIGNMENT: category(*BITWISE),
    PyKind.BITWISE_RIGHT_SHIFT: category(*BITWISE),
    PyKind.BITWISE_RIGHT_SHIFT_ASSIGNMENT: category(*BITWISE),
    PyKind.FUNCTION: category(EXPRESSION),
    # logical
    PyKind.LOGICAL_AND: category(*LOGICAL),
    PyKind.LOGICAL_OR: category(*LOGICAL),
    PyKind.LOGICAL_NOT: category(*LOGICAL),
    # comparison
    PyKind.GREATER: category(*COMPARISON),
    PyKind.GREATER_OR_EQUALS: category(*COMPARISON),
    PyKind.LESS: category(*COMPARISON),
    PyKind.LESS_OR_EQUALS: category(*COMPARISON),
    PyKind.EQUAL: category(*COMPARISON),
    PyKind.NOT_EQUALS: category(*COMPARISON),
    PyKind.MEMBER_ACCESS: category(EXPRESSION, "Member Access"),
    PyKind.IS: category(*IDENTITY),
    PyKind.IS_NOT: category(*IDENTITY),
    PyKind.IN: category(*MEMBERSHIP),
    PyKind.NOT_IN: category(*MEMBERSHIP),
    PyKind.YIELD: named_expression(PyKind.YIELD),
    PyKind.AWAIT: named_expression(PyKind.AWAIT),
    PyKind.LAMBDA: named_expression(PyKind.LAMBDA),
    # never classified on their own
    PyKind.IDENTIFIER: skip,
    PyKind.ARROW: skip,
    PyKind.COLON: skip,
    PyKind.COMMA: skip,
    PyKind.SEMICOLON: skip,
    PyKind.OPEN_PAREN: skip,
    PyKind.CLOSE_PAREN: skip,
    PyKind.OPEN_BRACKET: skip,
    PyKind.CLOSE_BRACKET: skip,
    PyKind.OPEN_BRACE: skip,
    PyKind.CLOSE_BRACE: skip,
    PyKind.UNRECOGNIZED: skip,
}

check_coverage(RULES, PyKind)


def classify(window: TokenWindow) -> Optional[Classification]:
    """Classify the token under ``window``; None means skip it."""
    return run_rules(RULES, window)
