"""
Taxonomy classifier for the C, C++ and Java grammar.

Most kinds map straight to a category path. A handful are lexically
ambiguous and are resolved from their immediate neighbours:

    *        after an identifier/number -> Multiplication, else Pointer
    &        after an identifier/number -> BitwiseAnd, else Reference
    << / >>  after cout/cin-style streams -> skipped, else LeftShift/RightShift
    ++ / --  before an identifier/number -> Prefix*, else Postfix*
    < / >    between an identifier and a number -> Comparison, else skipped
    (        after a callee -> Function declarator or FunctionCall

Identifier-to-identifier comparisons such as ``a < b`` are skipped.
"""

from __future__ import annotations

from typing import Optional

from kcextract.lexer.base import Token, TokenWindow
from kcextract.lexer.cjlexer import CJKind
from kcextract.taxonomy.base import (
    ARITHMETIC_DATA_TYPE,
    COMPILATION_UNIT,
    DATA_TYPE,
    DECLARATION,
    DECLARATOR,
    EXPRESSION,
    PREPROCESSOR,
    PRIMARY_EXPRESSION,
    STATEMENT,
    Classification,
    Rule,
    category,
    check_coverage,
    classify_token,
    run_rules,
    skip,
)


OUTPUT_STREAMS = frozenset({"cout", "cerr", "clog", "wcout", "wcerr", "wclog"})
INPUT_STREAMS = frozenset({"cin", "wcin"})

# Kinds that can start a declaration; a callee right after one is a
# function being declared rather than called
TYPE_KEYWORDS = frozenset({
    CJKind.UNSIGNED, CJKind.SIGNED, CJKind.CHAR, CJKind.INT, CJKind.SHORT,
    CJKind.SHORT_INT, CJKind.LONG, CJKind.LONG_INT, CJKind.LONG_LONG,
    CJKind.LONG_LONG_INT, CJKind.FLOAT, CJKind.DOUBLE, CJKind.LONG_DOUBLE,
    CJKind.BOOL, CJKind.STRING, CJKind.VOID, CJKind.AUTO, CJKind.VAR,
})

OPERANDS = (CJKind.IDENTIFIER, CJKind.NUMBER)

# Category paths, outermost first
ITERATION = (STATEMENT, "Iteration")
CONDITION = (STATEMENT, "Condition")
LABEL = (STATEMENT, "Label")
JUMP = (STATEMENT, "Jump")
TRY_BLOCK = (STATEMENT, "Try Block")
THROW_STATEMENT = (STATEMENT, "Throw Statement")

SIGN = (DECLARATION, DATA_TYPE, ARITHMETIC_DATA_TYPE, "Sign")
CHARACTER = (DECLARATION, DATA_TYPE, ARITHMETIC_DATA_TYPE, "Character")
INTEGER_NUMBER = (DECLARATION, DATA_TYPE, ARITHMETIC_DATA_TYPE, "Integer Number")
FLOATING_POINT_NUMBER = (DECLARATION, DATA_TYPE, ARITHMETIC_DATA_TYPE, "Floating Point Number")
BOOLEAN = (DECLARATION, DATA_TYPE, "Boolean")
STRING_TYPE = (DECLARATION, DATA_TYPE, "String")
ELABORATED_TYPE_SPECIFIER = (DECLARATION, DATA_TYPE, "Elaborated Type Specifier")
VOID = (DECLARATION, DATA_TYPE, "Void")
ABSTRACT_DATA_TYPE = (DECLARATION, DATA_TYPE, "Abstract Data Type")
VAR_DATA_TYPE = (DECLARATION, DATA_TYPE, "Var Data Type")
STORAGE_CLASS = (DECLARATION, "Storage Class")
TYPE_QUALIFIER = (DECLARATION, "Type Qualifier")
ACCESS_SPECIFIER = (DECLARATION, "Access Specifier")
USING = (DECLARATION, "Using")
NAMESPACE = (DECLARATION, "Namespace")
MODIFIER = (DECLARATION, "Modifier")
CLASS_EXTENSION = (DECLARATION, "Class Extension")
DECLARATOR_PATH = (DECLARATION, DECLARATOR)

ARITHMETIC = (EXPRESSION, "Arithmetic")
ASSIGNMENT = (EXPRESSION, "Assignment")
BITWISE = (EXPRESSION, "Bitwise")
LOGICAL = (EXPRESSION, "Logical")
COMPARISON = (EXPRESSION, "Comparison")
MEMBER_ACCESS = (EXPRESSION, "Member Access")
INCREMENT = (EXPRESSION, "Increment")
DECREMENT = (EXPRESSION, "Decrement")
MEMORY_ALLOCATION = (EXPRESSION, "Memory Allocation")
SIZE_OF = (EXPRESSION, "Size Of")
PREDEFINED_CONSTANT = (EXPRESSION, "Predefined Constant")
SCOPE_RESOLUTION = (EXPRESSION, "Nested Specifier", "Scope Resolution")
PRIMARY_ABSTRACT_DATA_TYPE = (EXPRESSION, PRIMARY_EXPRESSION, "Abstract Data Type")
BARE_EXPRESSION = (EXPRESSION,)


# ============================================================================
# Disambiguation Rules
# ============================================================================

def _asterisk(window: TokenWindow) -> Classification:
    if window.previous().kind in OPERANDS:
        return classify_token(Token(CJKind.MULTIPLICATION), ARITHMETIC)
    return classify_token(Token(CJKind.POINTER), DECLARATOR_PATH)


def _ampersand(window: TokenWindow) -> Classification:
    if window.previous().kind in OPERANDS:
        return classify_token(Token(CJKind.BITWISE_AND), BITWISE)
    return classify_token(Token(CJKind.REFERENCE), MEMBER_ACCESS)


def _is_stream(token: Token, names: frozenset) -> bool:
    return token.kind is CJKind.IDENTIFIER and token.text in names


def _left_operator(window: TokenWindow) -> Optional[Classification]:
    if _is_stream(window.previous(), OUTPUT_STREAMS):
        return None
    return classify_token(Token(CJKind.LEFT_SHIFT), BITWISE)


def _right_operator(window: TokenWindow) -> Optional[Classification]:
    if _is_stream(window.previous(), INPUT_STREAMS):
        return None
    return classify_token(Token(CJKind.RIGHT_SHIFT), BITWISE)


def _increment(window: TokenWindow) -> Classification:
    if window.next().kind in OPERANDS:
        return classify_token(Token(CJKind.PREFIX_INCREMENT), INCREMENT)
    return classify_token(Token(CJKind.POSTFIX_INCREMENT), INCREMENT)


def _decrement(window: TokenWindow) -> Classification:
    if window.next().kind in OPERANDS:
        return classify_token(Token(CJKind.PREFIX_DECREMENT), DECREMENT)
    return classify_token(Token(CJKind.POSTFIX_DECREMENT), DECREMENT)


def _angle(window: TokenWindow) -> Optional[Classification]:
    if window.next().kind is CJKind.NUMBER and window.previous().kind is CJKind.IDENTIFIER:
        return classify_token(window.current, COMPARISON)
    return None


def _open_paren(window: TokenWindow) -> Optional[Classification]:
    callee = window.previous()
    if callee.kind in TYPE_KEYWORDS:
        return classify_token(Token(CJKind.FUNCTION), DECLARATOR_PATH)
    if callee.kind is not CJKind.IDENTIFIER:
        # grouping, or a keyword such as if/while/sizeof
        return None
    if window.previous(2).kind in TYPE_KEYWORDS:
        return classify_token(Token(CJKind.FUNCTION), DECLARATOR_PATH)
    return classify_token(Token(CJKind.FUNCTION_CALL), BARE_EXPRESSION)


def _open_bracket(window: TokenWindow) -> Classification:
    return classify_token(Token(CJKind.ARRAY), DECLARATOR_PATH)


# ============================================================================
# Rule Table
# ============================================================================

RULES: dict[CJKind, Rule] = {
    CJKind.PREPROCESSOR: category(PREPROCESSOR),
    CJKind.FOR: category(*ITERATION),
    CJKind.WHILE: category(*ITERATION),
    CJKind.DO_WHILE: category(*ITERATION),
    CJKind.SWITCH: category(*CONDITION),
    CJKind.IF: category(*CONDITION),
    CJKind.ELSE_IF: category(*CONDITION),
    CJKind.ELSE: category(*CONDITION),
    CJKind.CASE: category(*LABEL),
    CJKind.DEFAULT: category(*LABEL),
    CJKind.BREAK: category(*JUMP),
    CJKind.CONTINUE: category(*JUMP),
    CJKind.GOTO: category(*JUMP),
    CJKind.RETURN: category(*JUMP),
    CJKind.UNSIGNED: category(*SIGN),
    CJKind.SIGNED: category(*SIGN),
    CJKind.CHAR: category(*CHARACTER),
    CJKind.INT: category(*INTEGER_NUMBER),
    CJKind.SHORT: category(*INTEGER_NUMBER),
    CJKind.SHORT_INT: category(*INTEGER_NUMBER),
    CJKind.LONG: category(*INTEGER_NUMBER),
    CJKind.LONG_INT: category(*INTEGER_NUMBER),
    CJKind.LONG_LONG: category(*INTEGER_NUMBER),
    CJKind.LONG_LONG_INT: category(*INTEGER_NUMBER),
    CJKind.FLOAT: category(*FLOATING_POINT_NUMBER),
    CJKind.DOUBLE: category(*FLOATING_POINT_NUMBER),
    CJKind.LONG_DOUBLE: category(*FLOATING_POINT_NUMBER),
    CJKind.BOOL: category(*BOOLEAN),
    CJKind.STRING: category(*STRING_TYPE),
    CJKind.ENUM: category(*ELABORATED_TYPE_SPECIFIER),
    CJKind.STRUCT: category(*ELABORATED_TYPE_SPECIFIER),
    CJKind.UNION: category(*ELABORATED_TYPE_SPECIFIER),
    CJKind.CLASS: category(*ELABORATED_TYPE_SPECIFIER),
    CJKind.TEMPLATE: category(*ELABORATED_TYPE_SPECIFIER),
    CJKind.VOID: category(*VOID),
    CJKind.INTERFACE: category(*ABSTRACT_DATA_TYPE),
    CJKind.VAR: category(*VAR_DATA_TYPE),
    CJKind.AUTO: category(*STORAGE_CLASS),
    CJKind.EXTERN: category(*STORAGE_CLASS),
    CJKind.REGISTER: category(*STORAGE_CLASS),
    CJKind.STATIC: category(*STORAGE_CLASS),
    CJKind.THREAD_LOCAL: category(*STORAGE_CLASS),
    CJKind.TYPEDEF: category(*STORAGE_CLASS),
    CJKind.DECLTYPE: category(*STORAGE_CLASS),
    CJKind.ATOMIC: category(*TYPE_QUALIFIER),
    CJKind.CONST: category(*TYPE_QUALIFIER),
    CJKind.RESTRICT: category(*TYPE_QUALIFIER),
    CJKind.VOLATILE: category(*TYPE_QUALIFIER),
    CJKind.MUTABLE: category(*TYPE_QUALIFIER),
    CJKind.PUBLIC: category(*ACCESS_SPECIFIER),
    CJKind.PROTECTED: category(*ACCESS_SPECIFIER),
    CJKind.PRIVATE: category(*ACCESS_SPECIFIER),
    CJKind.USING: category(*USING),
    CJKind.NAMESPACE: category(*NAMESPACE),
    # declarators
    CJKind.OPEN_BRACKET: _open_bracket,
    CJKind.OPEN_PAREN: _open_paren,
    CJKind.ARRAY: category(*DECLARATOR_PATH),
    CJKind.FUNCTION: category(*DECLARATOR_PATH),
    CJKind.POINTER: category(*DECLARATOR_PATH),
    CJKind.FUNCTION_CALL: category(*BARE_EXPRESSION),
    # arithmetic
    CJKind.ASTERISK: _asterisk,
    CJKind.PLUS: category(*ARITHMETIC),
    CJKind.MINUS: category(*ARITHMETIC),
    CJKind.MULTIPLICATION: category(*ARITHMETIC),
    CJKind.DIVIDE: category(*ARITHMETIC),
    CJKind.MODULO: category(*ARITHMETIC),
    # assignment
    CJKind.ADD_ASSIGNMENT: category(*ASSIGNMENT),
    CJKind.SUB_ASSIGNMENT: category(*ASSIGNMENT),
    CJKind.MULT_ASSIGNMENT: category(*ASSIGNMENT),
    CJKind.DIV_ASSIGNMENT: category(*ASSIGNMENT),
    CJKind.MOD_ASSIGNMENT: category(*ASSIGNMENT),
    CJKind.ASSIGNMENT: category(*ASSIGNMENT),
    # bitwise
    CJKind.AMPERSAND: _ampersand,
    CJKind.BITWISE_AND: category(*BITWISE),
    CJKind.REFERENCE: category(*MEMBER_ACCESS),
    CJKind.BITWISE_OR: category(*BITWISE),
    CJKind.BITWISE_XOR: category(*BITWISE),
    CJKind.BITWISE_NOT: category(*BITWISE),
    CJKind.LEFT_OPERATOR: _left_operator,
    CJKind.LEFT_SHIFT: category(*BITWISE),
    CJKind.LEFT_SHIFT_ASSIGNMENT: category(*BITWISE),
    CJKind.RIGHT_OPERATOR: _right_operator,
    CJKind.RIGHT_SHIFT: category(*BITWISE),
    CJKind.RIGHT_SHIFT_ASSIGNMENT: category(*BITWISE),
    CJKind.BITWISE_AND_ASSIGNMENT: category(*BITWISE),
    CJKind.BITWISE_OR_ASSIGNMENT: category(*BITWISE),
    CJKind.BITWISE_XOR_ASSIGNMENT: category(*BITWISE),
    CJKind.UNSIGNED_RIGHT_SHIFT_OPERATOR: category(*BITWISE),
    # logical
    CJKind.AND: category(*LOGICAL),
    CJKind.OR: category(*LOGICAL),
    CJKind.NOT: category(*LOGICAL),
    # misc expressions
    CJKind.SIZE_OF: category(*SIZE_OF),
    CJKind.TYPE_CAST: category(*BARE_EXPRESSION),
    CJKind.CONDITIONAL_OPERATOR: category(*BARE_EXPRESSION),
    # comparison
    CJKind.GREATER: _angle,
    CJKind.LESS: _angle,
    CJKind.GREATER_OR_EQUALS: category(*COMPARISON),
    CJKind.LESS_OR_EQUALS: category(*COMPARISON),
    CJKind.EQUALS: category(*COMPARISON),
    CJKind.NOT_EQUALS: category(*COMPARISON),
    CJKind.THREE_WAY_COMPARISON: category(*COMPARISON),
    # member access is not classified yet
    CJKind.DOT_OPERATOR: skip,
    CJKind.ARROW_OPERATOR: skip,
    # increment / decrement
    CJKind.INCREMENT: _increment,
    CJKind.PREFIX_INCREMENT: category(*INCREMENT),
    CJKind.POSTFIX_INCREMENT: category(*INCREMENT),
    CJKind.DECREMENT: _decrement,
    CJKind.PREFIX_DECREMENT: category(*DECREMENT),
    CJKind.POSTFIX_DECREMENT: category(*DECREMENT),
    CJKind.NEW: category(*MEMORY_ALLOCATION),
    CJKind.DELETE: category(*MEMORY_ALLOCATION),
    CJKind.SCOPE_RESOLUTION: category(*SCOPE_RESOLUTION),
    CJKind.TRUE: category(*PREDEFINED_CONSTANT),
    CJKind.FALSE: category(*PREDEFINED_CONSTANT),
    CJKind.NULL: category(*PREDEFINED_CONSTANT),
    # java
    CJKind.IMPORT: category(COMPILATION_UNIT),
    CJKind.PACKAGE: category(COMPILATION_UNIT),
    CJKind.ANNOTATION: category(*MODIFIER),
    CJKind.ABSTRACT: category(*MODIFIER),
    CJKind.FINAL: category(*MODIFIER),
    CJKind.NATIVE: category(*MODIFIER),
    CJKind.SYNCHRONIZED: category(*MODIFIER),
    CJKind.TRANSIENT: category(*MODIFIER),
    CJKind.STRICT_FP: category(*MODIFIER),
    CJKind.ASSERT: category(*MODIFIER),
    CJKind.TRY: category(*TRY_BLOCK),
    CJKind.CATCH: category(*TRY_BLOCK),
    CJKind.FINALLY: category(*TRY_BLOCK),
    CJKind.THROW: category(*THROW_STATEMENT),
    CJKind.THROWS: category(*THROW_STATEMENT),
    CJKind.SUPER: category(*PRIMARY_ABSTRACT_DATA_TYPE),
    CJKind.THIS: category(*PRIMARY_ABSTRACT_DATA_TYPE),
    CJKind.EXTENDS: category(*CLASS_EXTENSION),
    CJKind.IMPLEMENTS: category(*CLASS_EXTENSION),
    # never classified on their own
    CJKind.IDENTIFIER: skip,
    CJKind.NUMBER: skip,
    CJKind.STRING_LITERAL: skip,
    CJKind.SEMICOLON: skip,
    CJKind.COMMA: skip,
    CJKind.COLON: skip,
    CJKind.OPEN_BRACE: skip,
    CJKind.CLOSE_BRACE: skip,
    CJKind.CLOSE_PAREN: skip,
    CJKind.CLOSE_BRACKET: skip,
    CJKind.LINE_BREAK: skip,
    CJKind.UNRECOGNIZED: skip,
}

check_coverage(RULES, CJKind)


def classify(window: TokenWindow) -> Optional[Classification]:
    """Classify the token under ``window``; None means skip it."""
    return run_rules(RULES, window)
