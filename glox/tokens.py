"""Token vocabulary shared by the scanner and the parser.

A token records its kind, the exact source text it was cut from, an
optional decoded literal and the position it occupies. Positions are
line numbers (starting at 1) plus start/end byte offsets within that
line, and are only used for diagnostics.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Optional


class TokenType(enum.Enum):
    # Single-character tokens
    LEFT_PAREN = 'leftparen'
    RIGHT_PAREN = 'rightparen'
    LEFT_BRACE = 'leftbrace'
    RIGHT_BRACE = 'rightbrace'
    COMMA = 'comma'
    DOT = 'dot'
    MINUS = 'minus'
    PLUS = 'plus'
    SEMICOLON = 'semicolon'
    SLASH = 'slash'
    STAR = 'star'

    # One or two character tokens
    BANG = 'bang'
    BANG_EQUAL = 'bangequal'
    EQUAL = 'equal'
    EQUAL_EQUAL = 'equalequal'
    GREATER = 'greater'
    GREATER_EQUAL = 'greaterequal'
    LESS = 'less'
    LESS_EQUAL = 'lessequal'

    # Literals
    IDENTIFIER = 'identifier'
    STRING = 'string'
    NUMBER = 'number'
    COMMENT = 'comment'

    # Keywords
    AND = 'and'
    CLASS = 'class'
    ELSE = 'else'
    FALSE = 'false'
    FUN = 'fun'
    FOR = 'for'
    IF = 'if'
    NIL = 'nil'
    OR = 'or'
    PRINT = 'print'
    RETURN = 'return'
    SUPER = 'super'
    THIS = 'this'
    TRUE = 'true'
    VAR = 'var'
    WHILE = 'while'

    EOF = 'eof'

    def __str__(self) -> str:
        return self.value


KEYWORDS = MappingProxyType({
    'and': TokenType.AND,
    'class': TokenType.CLASS,
    'else': TokenType.ELSE,
    'false': TokenType.FALSE,
    'fun': TokenType.FUN,
    'for': TokenType.FOR,
    'if': TokenType.IF,
    'nil': TokenType.NIL,
    'or': TokenType.OR,
    'print': TokenType.PRINT,
    'return': TokenType.RETURN,
    'super': TokenType.SUPER,
    'this': TokenType.THIS,
    'true': TokenType.TRUE,
    'var': TokenType.VAR,
    'while': TokenType.WHILE,
})


@dataclass(frozen=True)
class Position:
    line: int
    start: int
    end: int


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Optional[Any]
    pos: Position

    @property
    def line(self) -> int:
        return self.pos.line

    @property
    def column(self) -> int:
        return self.pos.start

    def __str__(self) -> str:
        return (f"Line {self.pos.line} [{self.pos.start}:{self.pos.end}] "
                f"Type {self.type} '{self.lexeme}' {self.literal}")
