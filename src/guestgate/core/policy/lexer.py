"""Lexer for policy expressions."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from .exceptions import PolicySyntaxError

KEYWORDS = {
    "true": ("BOOLEAN", True),
    "false": ("BOOLEAN", False),
    "null": ("NULL", None),
    "and": ("AND", "and"),
    "or": ("OR", "or"),
    "not": ("NOT", "not"),
    "in": ("IN", "in"),
}


class TokenType(Enum):
    """Types of tokens in policy expressions."""

    INTEGER = auto()
    FLOAT = auto()
    STRING = auto()
    BOOLEAN = auto()
    NULL = auto()
    IDENTIFIER = auto()

    # Comparison
    EQ = auto()
    NEQ = auto()
    LT = auto()
    GT = auto()
    LTE = auto()
    GTE = auto()

    # Logical
    AND = auto()
    OR = auto()
    NOT = auto()
    IN = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    COMMA = auto()

    EOF = auto()


SINGLE_CHAR_TOKENS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
}


@dataclass
class Token:
    """A single token in a policy expression."""

    type: TokenType
    value: str | int | float | bool | None
    position: int


class Lexer:
    """Tokenizes policy expressions."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.current_char = self.text[0] if self.text else None

    def error(self, message: str) -> None:
        raise PolicySyntaxError(message, self.pos)

    def advance(self) -> None:
        self.pos += 1
        self.current_char = self.text[self.pos] if self.pos < len(self.text) else None

    def peek(self) -> str | None:
        peek_pos = self.pos + 1
        return self.text[peek_pos] if peek_pos < len(self.text) else None

    def _number(self) -> Token:
        start_pos = self.pos
        result = ""
        while self.current_char is not None and self.current_char.isdigit():
            result += self.current_char
            self.advance()

        if self.current_char == ".":
            result += "."
            self.advance()
            while self.current_char is not None and self.current_char.isdigit():
                result += self.current_char
                self.advance()
            return Token(TokenType.FLOAT, float(result), start_pos)

        return Token(TokenType.INTEGER, int(result), start_pos)

    def _string(self) -> Token:
        start_pos = self.pos
        quote_char = self.current_char
        self.advance()

        result = ""
        while self.current_char is not None and self.current_char != quote_char:
            result += self.current_char
            self.advance()

        if self.current_char is None:
            self.error("Unterminated string literal")

        self.advance()
        return Token(TokenType.STRING, result, start_pos)

    def _identifier(self) -> Token:
        """Parse an identifier, keyword or dotted path."""
        start_pos = self.pos
        result = ""
        while self.current_char is not None and (
            self.current_char.isalnum() or self.current_char in "_."
        ):
            result += self.current_char
            self.advance()

        if result in KEYWORDS:
            type_name, value = KEYWORDS[result]
            return Token(TokenType[type_name], value, start_pos)
        return Token(TokenType.IDENTIFIER, result, start_pos)

    def _operator(self) -> Token:
        start_pos = self.pos
        char = self.current_char
        follows_eq = self.peek() == "="

        if char in "=!" and not follows_eq:
            self.error(f"Unexpected character '{char}'. Did you mean '{char}='?")

        two_char = {"=": TokenType.EQ, "!": TokenType.NEQ, "<": TokenType.LTE, ">": TokenType.GTE}
        one_char = {"<": TokenType.LT, ">": TokenType.GT}

        if follows_eq:
            self.advance()
            self.advance()
            return Token(two_char[char], f"{char}=", start_pos)
        self.advance()
        return Token(one_char[char], char, start_pos)

    def get_next_token(self) -> Token:
        """Get the next token from input."""
        while self.current_char is not None:
            if self.current_char.isspace():
                self.advance()
                continue

            if self.current_char.isdigit():
                return self._number()

            if self.current_char in ("'", '"'):
                return self._string()

            if self.current_char.isalpha() or self.current_char == "_":
                return self._identifier()

            if self.current_char in "=!<>":
                return self._operator()

            if self.current_char in SINGLE_CHAR_TOKENS:
                token = Token(SINGLE_CHAR_TOKENS[self.current_char], self.current_char, self.pos)
                self.advance()
                return token

            self.error(f"Invalid character '{self.current_char}'")

        return Token(TokenType.EOF, None, self.pos)

    def tokenize(self) -> Iterator[Token]:
        """Yield all tokens up to and including EOF."""
        while True:
            token = self.get_next_token()
            yield token
            if token.type == TokenType.EOF:
                break
