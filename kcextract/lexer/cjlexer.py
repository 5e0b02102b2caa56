"""
Lexical grammar shared by C, C++ and Java.

The three languages are close enough lexically that one grammar covers
them; Java-only keywords simply never show up in C sources and vice versa.

Some kinds are never produced by the lexer itself. They are the
disambiguated forms the taxonomy classifier resolves an ambiguous token to:

- Asterisk -> Multiplication | Pointer
- Ampersand -> BitwiseAnd | Reference
- LeftOperator -> LeftShift, RightOperator -> RightShift
- Increment / Decrement -> Prefix* | Postfix*
- OpenParen -> Function | FunctionCall, OpenBracket -> Array

Line breaks are kept as tokens; comments and other whitespace are dropped.
"""

from __future__ import annotations

from enum import Enum

from kcextract.lexer.base import RegexLexer, Token, discard, literal, pattern


class CJKind(Enum):
    # preprocessor
    PREPROCESSOR = "Preprocessor"
    # statement: iteration
    FOR = "For"
    WHILE = "While"
    DO_WHILE = "DoWhile"
    # statement: selection
    SWITCH = "Switch"
    CASE = "Case"
    DEFAULT = "Default"
    IF = "If"
    ELSE_IF = "ElseIf"
    ELSE = "Else"
    # statement: jump
    BREAK = "Break"
    CONTINUE = "Continue"
    GOTO = "Goto"
    RETURN = "Return"
    # declaration: arithmetic types
    UNSIGNED = "Unsigned"
    SIGNED = "Signed"
    CHAR = "Char"
    INT = "Int"
    SHORT = "Short"
    SHORT_INT = "ShortInt"
    LONG = "Long"
    LONG_INT = "LongInt"
    LONG_LONG = "LongLong"
    LONG_LONG_INT = "LongLongInt"
    FLOAT = "Float"
    DOUBLE = "Double"
    LONG_DOUBLE = "LongDouble"
    BOOL = "Bool"
    STRING = "String"
    # declaration: elaborated type specifiers
    ENUM = "Enum"
    STRUCT = "Struct"
    UNION = "Union"
    CLASS = "Class"
    TEMPLATE = "Template"
    VOID = "Void"
    # declaration: storage class
    AUTO = "Auto"
    EXTERN = "Extern"
    REGISTER = "Register"
    STATIC = "Static"
    THREAD_LOCAL = "ThreadLocal"
    TYPEDEF = "Typedef"
    DECLTYPE = "Decltype"
    # declaration: type qualifiers
    ATOMIC = "Atomic"
    CONST = "Const"
    RESTRICT = "Restrict"
    VOLATILE = "Volatile"
    MUTABLE = "Mutable"
    # declaration: access specifiers
    PUBLIC = "Public"
    PROTECTED = "Protected"
    PRIVATE = "Private"
    # expression: arithmetic
    PLUS = "Plus"
    MINUS = "Minus"
    ASTERISK = "Asterisk"
    MULTIPLICATION = "Multiplication"
    POINTER = "Pointer"
    DIVIDE = "Divide"
    MODULO = "Modulo"
    # expression: assignment
    ADD_ASSIGNMENT = "AddAssignment"
    SUB_ASSIGNMENT = "SubAssignment"
    MULT_ASSIGNMENT = "MultAssignment"
    DIV_ASSIGNMENT = "DivAssignment"
    MOD_ASSIGNMENT = "ModAssignment"
    ASSIGNMENT = "Assignment"
    # expression: bitwise
    AMPERSAND = "Ampersand"
    BITWISE_AND = "BitwiseAnd"
    REFERENCE = "Reference"
    BITWISE_OR = "BitwiseOr"
    BITWISE_XOR = "BitwiseXor"
    BITWISE_NOT = "BitwiseNot"
    LEFT_OPERATOR = "LeftOperator"
    LEFT_SHIFT = "LeftShift"
    LEFT_SHIFT_ASSIGNMENT = "LeftShiftAssignment"
    RIGHT_OPERATOR = "RightOperator"
    RIGHT_SHIFT = "RightShift"
    RIGHT_SHIFT_ASSIGNMENT = "RightShiftAssignment"
    BITWISE_AND_ASSIGNMENT = "BitwiseAndAssignment"
    BITWISE_OR_ASSIGNMENT = "BitwiseOrAssignment"
    BITWISE_XOR_ASSIGNMENT = "BitwiseXorAssignment"
    UNSIGNED_RIGHT_SHIFT_OPERATOR = "UnsignedRightShiftOperator"
    # expression: logical
    AND = "And"
    OR = "Or"
    NOT = "Not"
    # expression: misc
    SIZE_OF = "SizeOf"
    TYPE_CAST = "TypeCast"
    CONDITIONAL_OPERATOR = "ConditionalOperator"
    # expression: comparison
    GREATER = "Greater"
    GREATER_OR_EQUALS = "GreaterOrEquals"
    LESS = "Less"
    LESS_OR_EQUALS = "LessOrEquals"
    EQUALS = "Equals"
    NOT_EQUALS = "NotEquals"
    THREE_WAY_COMPARISON = "ThreeWayComparison"
    # expression: member access
    DOT_OPERATOR = "DotOperator"
    ARROW_OPERATOR = "ArrowOperator"
    # expression: increment / decrement
    INCREMENT = "Increment"
    PREFIX_INCREMENT = "PrefixIncrement"
    POSTFIX_INCREMENT = "PostfixIncrement"
    DECREMENT = "Decrement"
    PREFIX_DECREMENT = "PrefixDecrement"
    POSTFIX_DECREMENT = "PostfixDecrement"
    # expression: memory allocation
    NEW = "New"
    DELETE = "Delete"
    # expression: scope resolution
    SCOPE_RESOLUTION = "ScopeResolution"
    # expression: predefined constants
    TRUE = "True"
    FALSE = "False"
    NULL = "Null"
    # namespaces
    USING = "Using"
    NAMESPACE = "Namespace"
    # java
    IMPORT = "Import"
    PACKAGE = "Package"
    ANNOTATION = "Annotation"
    INTERFACE = "Interface"
    ABSTRACT = "Abstract"
    FINAL = "Final"
    NATIVE = "Native"
    SYNCHRONIZED = "Synchronized"
    TRANSIENT = "Transient"
    STRICT_FP = "StrictFp"
    ASSERT = "Assert"
    TRY = "Try"
    CATCH = "Catch"
    FINALLY = "Finally"
    THROWS = "Throws"
    THROW = "Throw"
    SUPER = "Super"
    THIS = "This"
    EXTENDS = "Extends"
    IMPLEMENTS = "Implements"
    VAR = "Var"
    # declarators
    FUNCTION = "Function"
    FUNCTION_CALL = "FunctionCall"
    ARRAY = "Array"
    # text-carrying
    IDENTIFIER = "Identifier"
    NUMBER = "Number"
    STRING_LITERAL = "StringLiteral"
    # punctuation
    SEMICOLON = "Semicolon"
    COMMA = "Comma"
    COLON = "Colon"
    OPEN_BRACE = "OpenBrace"
    CLOSE_BRACE = "CloseBrace"
    OPEN_PAREN = "OpenParen"
    CLOSE_PAREN = "CloseParen"
    OPEN_BRACKET = "OpenBracket"
    CLOSE_BRACKET = "CloseBracket"
    LINE_BREAK = "LineBreak"
    UNRECOGNIZED = "Unrecognized"


# ============================================================================
# Rule Definitions
# ============================================================================

# Keywords and operators matched verbatim
_LITERALS = {
    "for": CJKind.FOR,
    "while": CJKind.WHILE,
    "do": CJKind.DO_WHILE,
    "switch": CJKind.SWITCH,
    "case": CJKind.CASE,
    "default": CJKind.DEFAULT,
    "if": CJKind.IF,
    "else": CJKind.ELSE,
    "break": CJKind.BREAK,
    "continue": CJKind.CONTINUE,
    "goto": CJKind.GOTO,
    "return": CJKind.RETURN,
    "unsigned": CJKind.UNSIGNED,
    "signed": CJKind.SIGNED,
    "int": CJKind.INT,
    "short": CJKind.SHORT,
    "long": CJKind.LONG,
    "float": CJKind.FLOAT,
    "double": CJKind.DOUBLE,
    "enum": CJKind.ENUM,
    "struct": CJKind.STRUCT,
    "union": CJKind.UNION,
    "class": CJKind.CLASS,
    "template": CJKind.TEMPLATE,
    "void": CJKind.VOID,
    "auto": CJKind.AUTO,
    "extern": CJKind.EXTERN,
    "register": CJKind.REGISTER,
    "static": CJKind.STATIC,
    "typedef": CJKind.TYPEDEF,
    "decltype": CJKind.DECLTYPE,
    "const": CJKind.CONST,
    "restrict": CJKind.RESTRICT,
    "volatile": CJKind.VOLATILE,
    "mutable": CJKind.MUTABLE,
    "public": CJKind.PUBLIC,
    "protected": CJKind.PROTECTED,
    "private": CJKind.PRIVATE,
    "+": CJKind.PLUS,
    "-": CJKind.MINUS,
    "*": CJKind.ASTERISK,
    "/": CJKind.DIVIDE,
    "%": CJKind.MODULO,
    "+=": CJKind.ADD_ASSIGNMENT,
    "-=": CJKind.SUB_ASSIGNMENT,
    "*=": CJKind.MULT_ASSIGNMENT,
    "/=": CJKind.DIV_ASSIGNMENT,
    "%=": CJKind.MOD_ASSIGNMENT,
    "=": CJKind.ASSIGNMENT,
    "&": CJKind.AMPERSAND,
    "|": CJKind.BITWISE_OR,
    "^": CJKind.BITWISE_XOR,
    "~": CJKind.BITWISE_NOT,
    "<<": CJKind.LEFT_OPERATOR,
    "<<=": CJKind.LEFT_SHIFT_ASSIGNMENT,
    ">>": CJKind.RIGHT_OPERATOR,
    ">>=": CJKind.RIGHT_SHIFT_ASSIGNMENT,
    ">>>": CJKind.UNSIGNED_RIGHT_SHIFT_OPERATOR,
    "&=": CJKind.BITWISE_AND_ASSIGNMENT,
    "|=": CJKind.BITWISE_OR_ASSIGNMENT,
    "^=": CJKind.BITWISE_XOR_ASSIGNMENT,
    "&&": CJKind.AND,
    "||": CJKind.OR,
    "!": CJKind.NOT,
    "sizeof": CJKind.SIZE_OF,
    "?": CJKind.CONDITIONAL_OPERATOR,
    ">": CJKind.GREATER,
    ">=": CJKind.GREATER_OR_EQUALS,
    "<": CJKind.LESS,
    "<=": CJKind.LESS_OR_EQUALS,
    "==": CJKind.EQUALS,
    "!=": CJKind.NOT_EQUALS,
    "<=>": CJKind.THREE_WAY_COMPARISON,
    ".": CJKind.DOT_OPERATOR,
    "->": CJKind.ARROW_OPERATOR,
    "++": CJKind.INCREMENT,
    "--": CJKind.DECREMENT,
    "new": CJKind.NEW,
    "delete": CJKind.DELETE,
    "::": CJKind.SCOPE_RESOLUTION,
    "true": CJKind.TRUE,
    "false": CJKind.FALSE,
    "using": CJKind.USING,
    "namespace": CJKind.NAMESPACE,
    "import": CJKind.IMPORT,
    "package": CJKind.PACKAGE,
    "@": CJKind.ANNOTATION,
    "interface": CJKind.INTERFACE,
    "abstract": CJKind.ABSTRACT,
    "final": CJKind.FINAL,
    "native": CJKind.NATIVE,
    "synchronized": CJKind.SYNCHRONIZED,
    "transient": CJKind.TRANSIENT,
    "strictfp": CJKind.STRICT_FP,
    "assert": CJKind.ASSERT,
    "try": CJKind.TRY,
    "catch": CJKind.CATCH,
    "finally": CJKind.FINALLY,
    "throws": CJKind.THROWS,
    "throw": CJKind.THROW,
    "super": CJKind.SUPER,
    "this": CJKind.THIS,
    "extends": CJKind.EXTENDS,
    "implements": CJKind.IMPLEMENTS,
    "var": CJKind.VAR,
    ";": CJKind.SEMICOLON,
    ",": CJKind.COMMA,
    ":": CJKind.COLON,
    "{": CJKind.OPEN_BRACE,
    "}": CJKind.CLOSE_BRACE,
    "(": CJKind.OPEN_PAREN,
    ")": CJKind.CLOSE_PAREN,
    "[": CJKind.OPEN_BRACKET,
    "]": CJKind.CLOSE_BRACKET,
}

# Keyword families and multi-word keywords; \b keeps "long intx" from
# being read as "long int" + "x"
_KEYWORD_PATTERNS = [
    (r"else[ \t]+if\b", CJKind.ELSE_IF),
    (r"short[ \t]+int\b", CJKind.SHORT_INT),
    (r"long[ \t]+int\b", CJKind.LONG_INT),
    (r"long[ \t]+long\b", CJKind.LONG_LONG),
    (r"long[ \t]+long[ \t]+int\b", CJKind.LONG_LONG_INT),
    (r"long[ \t]+double\b", CJKind.LONG_DOUBLE),
    (r"(?:char8_t|char16_t|char32_t|wchar_t|char)\b", CJKind.CHAR),
    (r"(?:boolean|bool)\b", CJKind.BOOL),
    (r"(?:String|string)\b", CJKind.STRING),
    (r"(?:_Thread_local|thread_local)\b", CJKind.THREAD_LOCAL),
    (r"(?:_Atomic|atomic_int)\b", CJKind.ATOMIC),
    (r"(?:const_cast|static_cast|dynamic_cast|reinterpret_cast)\b", CJKind.TYPE_CAST),
    (r"(?:nullptr|NULL|null|Null)\b", CJKind.NULL),
]

# Preprocessor directives keep their text ("#include", "#define", ...)
PREPROCESSOR_PATTERN = r"#(?:define|undef|ifdef|ifndef|if|endif|else|elif|line|error|include|pragma)\b"

IDENTIFIER_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"

# Decimal, fractional, exponent and hex literals with C suffixes
NUMBER_PATTERN = (
    r"0[xX][0-9a-fA-F]+[uUlL]*"
    r"|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[uUlLfFdD]*"
)

STRING_PATTERN = r'"(?:[^"\\\n]|\\.)*"' r"|'(?:[^'\\\n]|\\.)*'"

LINE_COMMENT_PATTERN = r"//[^\r\n]*"
BLOCK_COMMENT_PATTERN = r"/\*[\s\S]*?\*/"


def _build_rules():
    rules = [literal(text, kind) for text, kind in _LITERALS.items()]
    rules.extend(pattern(regex, kind) for regex, kind in _KEYWORD_PATTERNS)
    rules.extend([
        pattern(PREPROCESSOR_PATTERN, CJKind.PREPROCESSOR, keep_text=True),
        pattern(IDENTIFIER_PATTERN, CJKind.IDENTIFIER, keep_text=True),
        pattern(NUMBER_PATTERN, CJKind.NUMBER, keep_text=True),
        pattern(STRING_PATTERN, CJKind.STRING_LITERAL, keep_text=True),
        discard(LINE_COMMENT_PATTERN),
        discard(BLOCK_COMMENT_PATTERN),
        discard(r"[ \t\f\v]+"),
        pattern(r"[\r\n]+", CJKind.LINE_BREAK),
    ])
    return rules


CJ_LEXER = RegexLexer(_build_rules(), unrecognized=CJKind.UNRECOGNIZED)


def tokenize(text: str) -> list[Token]:
    """Tokenize C, C++ or Java source text."""
    return CJ_LEXER.tokenize(text)
