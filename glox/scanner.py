"""Lexical scanner for glox.

The scanner makes a single left-to-right pass over the raw source bytes
and cuts them into tokens. Text input is encoded as UTF-8 first, so
token positions are always byte offsets within the line. Only string
literals and comments may contain non-ASCII text; anywhere else a
non-ASCII character (or a byte that is not valid UTF-8) is reported as
an unexpected character.

The scanner never aborts: problems such as an unexpected character or an
unterminated string are recorded as `LexError`s and scanning carries
on, so every problem in the input is reported at once. The caller
decides what to do with the collected errors; the pipeline in
`glox.interpreter` refuses to parse when there are any.

Comments are emitted as `COMMENT` tokens rather than discarded here.
"""

from __future__ import annotations

from typing import List, Tuple, Union

from .errors import LexError
from .tokens import KEYWORDS, Position, Token, TokenType


SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
}

# first char -> (token without '=', token with '=')
ONE_OR_TWO_CHAR_TOKENS = {
    '!': (TokenType.BANG, TokenType.BANG_EQUAL),
    '=': (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    '<': (TokenType.LESS, TokenType.LESS_EQUAL),
    '>': (TokenType.GREATER, TokenType.GREATER_EQUAL),
}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_alpha(c: str) -> bool:
    return 'a' <= c <= 'z' or 'A' <= c <= 'Z' or c == '_'


def is_alphanumeric(c: str) -> bool:
    return is_alpha(c) or is_digit(c)


def utf8_sequence_length(lead: int) -> int:
    """Length of the UTF-8 sequence announced by a lead byte, 1 if it is not a lead byte."""
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 1


class Scanner:
    def __init__(self, source: Union[str, bytes]):
        if isinstance(source, str):
            source = source.encode('utf-8')
        self.source = bytes(source)
        self.tokens: List[Token] = []
        self.errors: List[LexError] = []
        self.start = 0
        self.current = 0
        self.line = 1
        # offset of the first byte of the current line
        self.line_start = 0
        # position of the token being scanned
        self.start_line = 1
        self.start_column = 0

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    # Bytes are handed out as one-character strings; anything >= 0x80
    # never matches a token rule.
    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return chr(self.source[self.current])

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return chr(self.source[self.current + 1])

    def advance(self) -> str:
        c = chr(self.source[self.current])
        self.current += 1
        return c

    def text(self, start: int, end: int, errors: str = 'strict') -> str:
        return self.source[start:end].decode('utf-8', errors)

    def newline(self):
        self.line += 1
        self.line_start = self.current

    def scan_tokens(self) -> Tuple[List[Token], List[LexError]]:
        while not self.is_at_end():
            self.start = self.current
            self.start_line = self.line
            self.start_column = self.current - self.line_start
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, '', None, Position(self.line + 1, 0, 0)))
        return self.tokens, self.errors

    def scan_token(self):
        c = self.advance()
        if c == '\n':
            self.newline()
            return
        if c in ' \r\t':
            return
        if c == '/':
            if self.peek() == '/':
                self.comment()
            else:
                self.add_token(TokenType.SLASH)
            return
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
            return
        if c in ONE_OR_TWO_CHAR_TOKENS:
            single, double = ONE_OR_TWO_CHAR_TOKENS[c]
            if self.peek() == '=':
                self.advance()
                self.add_token(double)
            else:
                self.add_token(single)
            return
        if c == '"':
            self.string()
            return
        if is_digit(c):
            self.number()
            return
        if is_alpha(c):
            self.identifier()
            return
        self.unexpected_character()

    def unexpected_character(self):
        lead = self.source[self.start]
        if lead < 0x80:
            self.error(f"unexpected character: {chr(lead)}")
            return
        end = self.start + utf8_sequence_length(lead)
        try:
            char = self.text(self.start, end)
        except UnicodeDecodeError:
            # not a valid sequence: report the single byte and resume after it
            self.error(f"unexpected character: \\x{lead:02x}")
            return
        self.current = end
        self.error(f"unexpected character: {char}")

    def comment(self):
        while not self.is_at_end() and self.peek() != '\n':
            self.advance()
        text = self.text(self.start + 2, self.current, 'replace').rstrip('\r')
        if text.startswith(' '):
            text = text[1:]
        self.add_token(TokenType.COMMENT, text)

    def string(self):
        while not self.is_at_end() and self.peek() != '"':
            if self.advance() == '\n':
                self.newline()
        if self.is_at_end():
            self.error('unterminated string')
            return
        self.advance()  # closing quote
        try:
            value = self.text(self.start + 1, self.current - 1)
        except UnicodeDecodeError:
            self.error('invalid UTF-8 in string')
            return
        self.add_token(TokenType.STRING, value)

    def number(self):
        while is_digit(self.peek()):
            self.advance()
        if self.peek() == '.' and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        # numeric conversion happens in the parser
        self.add_token(TokenType.NUMBER, self.text(self.start, self.current))

    def identifier(self):
        while is_alphanumeric(self.peek()):
            self.advance()
        text = self.text(self.start, self.current)
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def add_token(self, token_type: TokenType, literal=None):
        lexeme = self.text(self.start, self.current, 'replace')
        length = self.current - self.start
        pos = Position(self.start_line, self.start_column, self.start_column + length)
        self.tokens.append(Token(token_type, lexeme, literal, pos))

    def error(self, message: str):
        self.errors.append(LexError(message, self.start_line, self.start_column))


def scan(source: Union[str, bytes]) -> Tuple[List[Token], List[LexError]]:
    """Scan source text into tokens, returning them with any lexical errors."""
    return Scanner(source).scan_tokens()
