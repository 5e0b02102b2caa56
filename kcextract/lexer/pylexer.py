"""
Lexical grammar for Python.

Unlike the C family grammar, numeric and container literals are folded
into their data type kinds: ``3.14`` and ``float`` are both Float, ``[1, 2]``
and ``list`` are both List. A call such as ``print(x)`` is lexed as a whole
into one Function token.

Comments, whitespace and line breaks are all discarded.
"""

from __future__ import annotations

from enum import Enum
import re

from kcextract.lexer.base import RegexLexer, Token, discard, literal, pattern


class PyKind(Enum):
    # statement: iteration
    FOR = "For"
    WHILE = "While"
    # statement: jump
    BREAK = "Break"
    CONTINUE = "Continue"
    RETURN = "Return"
    PASS = "Pass"
    # statement: selection
    MATCH = "Match"
    CASE = "Case"
    IF = "If"
    ELIF = "Elif"
    ELSE = "Else"
    # statement: exceptions
    TRY = "Try"
    EXCEPT = "Except"
    FINALLY = "Finally"
    RAISE = "Raise"
    # compilation unit
    IMPORT = "Import"
    FROM = "From"
    # data types
    FLOAT = "Float"
    INT = "Int"
    COMPLEX = "Complex"
    TRUE = "True"
    FALSE = "False"
    BOOL = "Bool"
    LIST = "List"
    TUPLE = "Tuple"
    DICT = "Dict"
    SET = "Set"
    BYTES = "Bytes"
    CLASS = "Class"
    STRING = "String"
    NONE = "None"
    # declarators
    FUNCTION_DEFINITION = "FunctionDefinition"
    DECORATOR = "Decorator"
    FINAL = "Final"
    OVERLOAD = "Overload"
    # declaration
    GLOBAL = "Global"
    ASYNC = "Async"
    # arithmetic
    ADDITION = "Addition"
    SUBTRACTION = "Subtraction"
    MULTIPLICATION = "Multiplication"
    DIVISION = "Division"
    FLOOR_DIVISION = "FloorDivision"
    MODULO = "Modulo"
    EXPONENTIATION = "Exponentiation"
    # assignment
    ADD_ASSIGNMENT = "AddAssignment"
    SUB_ASSIGNMENT = "SubAssignment"
    MULT_ASSIGNMENT = "MultAssignment"
    DIV_ASSIGNMENT = "DivAssignment"
    FLOOR_DIV_ASSIGNMENT = "FloorDivAssignment"
    MOD_ASSIGNMENT = "ModAssignment"
    EXP_ASSIGNMENT = "ExpAssignment"
    ASSIGNMENT = "Assignment"
    ASSIGNMENT_EXPRESSION = "AssignmentExpression"
    # bitwise
    BITWISE_AND = "BitwiseAnd"
    BITWISE_AND_ASSIGNMENT = "BitwiseAndAssignment"
    BITWISE_OR = "BitwiseOr"
    BITWISE_OR_ASSIGNMENT = "BitwiseOrAssignment"
    BITWISE_XOR = "BitwiseXor"
    BITWISE_XOR_ASSIGNMENT = "BitwiseXorAssignment"
    BITWISE_NOT = "BitwiseNot"
    BITWISE_LEFT_SHIFT = "BitwiseLeftShift"
    BITWISE_LEFT_SHIFT_ASSIGNMENT = "BitwiseLeftShiftAssignment"
    BITWISE_RIGHT_SHIFT = "BitwiseRightShift"
    BITWISE_RIGHT_SHIFT_ASSIGNMENT = "BitwiseRightShiftAssignment"
    # function call
    FUNCTION = "Function"
    # logical
    LOGICAL_AND = "LogicalAnd"
    LOGICAL_OR = "LogicalOr"
    LOGICAL_NOT = "LogicalNot"
    # comparison
    GREATER = "Greater"
    GREATER_OR_EQUALS = "GreaterOrEquals"
    LESS = "Less"
    LESS_OR_EQUALS = "LessOrEquals"
    EQUAL = "Equal"
    NOT_EQUALS = "NotEquals"
    # member access
    MEMBER_ACCESS = "MemberAccess"
    # identity / membership
    IS = "Is"
    IS_NOT = "IsNot"
    IN = "In"
    NOT_IN = "NotIn"
    # expressions named after their keyword
    YIELD = "Yield"
    AWAIT = "Await"
    LAMBDA = "Lambda"
    # text-carrying
    IDENTIFIER = "Identifier"
    # punctuation
    ARROW = "Arrow"
    COLON = "Colon"
    COMMA = "Comma"
    SEMICOLON = "Semicolon"
    OPEN_PAREN = "OpenParen"
    CLOSE_PAREN = "CloseParen"
    OPEN_BRACKET = "OpenBracket"
    CLOSE_BRACKET = "CloseBracket"
    OPEN_BRACE = "OpenBrace"
    CLOSE_BRACE = "CloseBrace"
    UNRECOGNIZED = "Unrecognized"


# ============================================================================
# Rule Definitions
# ============================================================================

_LITERALS = {
    "for": PyKind.FOR,
    "while": PyKind.WHILE,
    "break": PyKind.BREAK,
    "continue": PyKind.CONTINUE,
    "return": PyKind.RETURN,
    "pass": PyKind.PASS,
    "match": PyKind.MATCH,
    "case": PyKind.CASE,
    "if": PyKind.IF,
    "elif": PyKind.ELIF,
    "else": PyKind.ELSE,
    "try": PyKind.TRY,
    "except": PyKind.EXCEPT,
    "finally": PyKind.FINALLY,
    "raise": PyKind.RAISE,
    "import": PyKind.IMPORT,
    "from": PyKind.FROM,
    "float": PyKind.FLOAT,
    "int": PyKind.INT,
    "complex": PyKind.COMPLEX,
    "True": PyKind.TRUE,
    "False": PyKind.FALSE,
    "bool": PyKind.BOOL,
    "list": PyKind.LIST,
    "tuple": PyKind.TUPLE,
    "dict": PyKind.DICT,
    "set": PyKind.SET,
    "bytes": PyKind.BYTES,
    "class": PyKind.CLASS,
    "str": PyKind.STRING,
    "None": PyKind.NONE,
    "def": PyKind.FUNCTION_DEFINITION,
    "@": PyKind.DECORATOR,
    "global": PyKind.GLOBAL,
    "async": PyKind.ASYNC,
    "+": PyKind.ADDITION,
    "+=": PyKind.ADD_ASSIGNMENT,
    "-": PyKind.SUBTRACTION,
    "-=": PyKind.SUB_ASSIGNMENT,
    "*": PyKind.MULTIPLICATION,
    "*=": PyKind.MULT_ASSIGNMENT,
    "/": PyKind.DIVISION,
    "/=": PyKind.DIV_ASSIGNMENT,
    "//": PyKind.FLOOR_DIVISION,
    "//=": PyKind.FLOOR_DIV_ASSIGNMENT,
    "%": PyKind.MODULO,
    "%=": PyKind.MOD_ASSIGNMENT,
    "**": PyKind.EXPONENTIATION,
    "**=": PyKind.EXP_ASSIGNMENT,
    "=": PyKind.ASSIGNMENT,
    ":=": PyKind.ASSIGNMENT_EXPRESSION,
    "&": PyKind.BITWISE_AND,
    "&=": PyKind.BITWISE_AND_ASSIGNMENT,
    "|": PyKind.BITWISE_OR,
    "|=": PyKind.BITWISE_OR_ASSIGNMENT,
    "^": PyKind.BITWISE_XOR,
    "^=": PyKind.BITWISE_XOR_ASSIGNMENT,
    "~": PyKind.BITWISE_NOT,
    "<<": PyKind.BITWISE_LEFT_SHIFT,
    "<<=": PyKind.BITWISE_LEFT_SHIFT_ASSIGNMENT,
    ">>": PyKind.BITWISE_RIGHT_SHIFT,
    ">>=": PyKind.BITWISE_RIGHT_SHIFT_ASSIGNMENT,
    "and": PyKind.LOGICAL_AND,
    "or": PyKind.LOGICAL_OR,
    "not": PyKind.LOGICAL_NOT,
    ">": PyKind.GREATER,
    ">=": PyKind.GREATER_OR_EQUALS,
    "<": PyKind.LESS,
    "<=": PyKind.LESS_OR_EQUALS,
    "==": PyKind.EQUAL,
    "!=": PyKind.NOT_EQUALS,
    ".": PyKind.MEMBER_ACCESS,
    "is": PyKind.IS,
    "in": PyKind.IN,
    "yield": PyKind.YIELD,
    "await": PyKind.AWAIT,
    "lambda": PyKind.LAMBDA,
    "->": PyKind.ARROW,
    ":": PyKind.COLON,
    ",": PyKind.COMMA,
    ";": PyKind.SEMICOLON,
    "(": PyKind.OPEN_PAREN,
    ")": PyKind.CLOSE_PAREN,
    "[": PyKind.OPEN_BRACKET,
    "]": PyKind.CLOSE_BRACKET,
    "{": PyKind.OPEN_BRACE,
    "}": PyKind.CLOSE_BRACE,
}

_KEYWORD_PATTERNS = [
    (r"is[ \t]+not\b", PyKind.IS_NOT),
    (r"not[ \t]+in\b", PyKind.NOT_IN),
    (r"@final\b", PyKind.FINAL),
    (r"@overload\b", PyKind.OVERLOAD),
]

# Literal forms folded into their data type kinds
_LITERAL_PATTERNS = [
    (r"[0-9]*\.[0-9]+(?:[eE][+-]?[0-9]+)?", PyKind.FLOAT),
    (r"0[xXoObB][0-9a-fA-F_]+|[0-9][0-9_]*", PyKind.INT),
    (r"(?:[0-9]*\.)?[0-9]+[jJ]", PyKind.COMPLEX),
    (r"\[[A-Za-z0-9_,. ]*\]", PyKind.LIST),
    # a comma is required so "(x)" stays a grouping parenthesis
    (r"\((?:[A-Za-z0-9_. ]*,[A-Za-z0-9_,. ]*)?\)", PyKind.TUPLE),
    (r"\{[A-Za-z0-9_,:. ]*\}", PyKind.DICT),
    (r'"(?:[^"\\]|\\.)*"' r"|'(?:[^'\\]|\\.)*'", PyKind.STRING),
]

FUNCTION_CALL_PATTERN = r"[A-Za-z0-9_]+\([A-Za-z0-9_, ]*\)"

IDENTIFIER_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"

COMMENT_PATTERN = r"#[^\r\n]*"


def _build_rules():
    rules = [literal(text, kind) for text, kind in _LITERALS.items()]
    rules.extend(pattern(regex, kind) for regex, kind in _KEYWORD_PATTERNS)
    rules.extend(pattern(regex, kind, flags=re.DOTALL if kind is PyKind.STRING else 0) for regex, kind in _LITERAL_PATTERNS)
    rules.extend([
        pattern(FUNCTION_CALL_PATTERN, PyKind.FUNCTION),
        pattern(IDENTIFIER_PATTERN, PyKind.IDENTIFIER, keep_text=True),
        discard(COMMENT_PATTERN),
        discard(r"[ \t\r\n\f\v]+"),
    ])
    return rules


PY_LEXER = RegexLexer(_build_rules(), unrecognized=PyKind.UNRECOGNIZED)


def tokenize(text: str) -> list[Token]:
    """Tokenize Python source text."""
    return PY_LEXER.tokenize(text)
