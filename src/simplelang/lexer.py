"""
SimpleLang Lexer (Tokenizer)
============================

This module converts SimpleLang source text into tokens on demand.
Tokens are produced one at a time by next_token(); the parser drives the
lexer and may hand a single token back with push_back() when it needs to
look one token ahead.

Token Categories
----------------
| Kind       | Examples          | Stored text           |
|------------|-------------------|-----------------------|
| Keywords   | int, if           | the keyword           |
| Identifier | a, total, x2      | the spelling          |
| Number     | 0, 42, 0007       | the digit string      |
| Operators  | = == + -          | canonical symbol      |
| Delimiters | ( ) { } ;         | canonical symbol      |
| EOF        |                   | empty string          |
| Unknown    | any other char    | the raw character     |

Numbers are kept as text: there is no sign, no decimal point and no
overflow check, so "99999999999" is a perfectly good NUMBER token. Unknown
characters are not lexer errors; they come out as UNKNOWN tokens and the
parser rejects them wherever they appear.

Example Usage
-------------
>>> from simplelang.lexer import Lexer
>>> lexer = Lexer("int a;", "test.sl")
>>> for token in lexer.tokenize():
...     print(token)
Token(INT, 'int', 1:1)
Token(IDENTIFIER, 'a', 1:5)
Token(SEMICOLON, ';', 1:6)
Token(EOF, 1:7)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from simplelang.errors import SourceLocation, LookaheadError

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token kinds of the SimpleLang language."""

    INT = auto()            # int
    IDENTIFIER = auto()     # variable names
    NUMBER = auto()         # unsigned decimal literals
    ASSIGN = auto()         # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    IF = auto()             # if
    EQUAL = auto()          # ==
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    SEMICOLON = auto()      # ;
    EOF = auto()            # end of input
    UNKNOWN = auto()        # anything else


KEYWORDS: dict[str, TokenType] = {
    "int": TokenType.INT,
    "if": TokenType.IF,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ";": TokenType.SEMICOLON,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from SimpleLang source.

    Attributes:
        type: The TokenType classification
        text: Source spelling (identifiers, numbers, unknown characters)
              or canonical symbol (keywords, operators, delimiters)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    text: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.text:
            return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_operand(self) -> bool:
        """Return True if this token can be an expression operand."""
        return self.type in (TokenType.NUMBER, TokenType.IDENTIFIER)

    def is_additive_operator(self) -> bool:
        """Return True for '+' and '-'."""
        return self.type in (TokenType.PLUS, TokenType.MINUS)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    On-demand tokenizer with one token of pushback.

    Usage:
        lexer = Lexer(source_text, filename)
        token = lexer.next_token()
        if token.type != TokenType.PLUS:
            lexer.push_back(token)

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits
    WHITESPACE = " \t\n\r\v\f"

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1

        # One-slot token pushback buffer
        self._pending: Optional[Token] = None

        self._lines: Optional[list[str]] = None

    # =========================================================================
    # Public Interface
    # =========================================================================

    def next_token(self) -> Token:
        """
        Return the next token, consuming it.

        A token stored with push_back() is returned first, before any
        further input is read.
        """
        if self._pending is not None:
            token = self._pending
            self._pending = None
            return token

        token = self._scan_token()
        logger.debug(f"Token: {token.type.name} ('{token.text}') at {token.line}:{token.column}")
        return token

    def push_back(self, token: Token) -> None:
        """
        Store a token to be returned by the next call to next_token().

        Raises:
            LookaheadError: If a token is already pending
        """
        if self._pending is not None:
            raise LookaheadError(self._pending.text, token.text)
        self._pending = token

    def peek_token(self) -> Token:
        """Return the next token without consuming it."""
        token = self.next_token()
        self.push_back(token)
        return token

    @property
    def has_pending(self) -> bool:
        """True if a pushed-back token is waiting to be read."""
        return self._pending is not None

    def tokenize(self) -> Iterator[Token]:
        """
        Generate all remaining tokens, ending with the EOF token.

        Used for token dumps; the compiler itself pulls tokens one at a
        time with next_token().
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def source_line(self, line: int) -> Optional[str]:
        """Return the text of a 1-indexed source line for diagnostics."""
        if self._lines is None:
            self._lines = self.source.splitlines()
        if 0 < line <= len(self._lines):
            return self._lines[line - 1]
        return None

    # =========================================================================
    # Character Access
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        """Current character, or empty string at end of input."""
        if self._at_end():
            return ""
        return self.source[self._pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        char = self.source[self._pos]
        self._pos += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return char

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _make_token(self, token_type: TokenType, text: str, line: int, column: int) -> Token:
        return Token(token_type, text, line, column, self.filename)

    def _scan_token(self) -> Token:
        while self._peek() and self._peek() in self.WHITESPACE:
            self._advance()

        line, column = self._line, self._column

        if self._at_end():
            return self._make_token(TokenType.EOF, "", line, column)

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(line, column)

        if char in string.digits:
            return self._scan_number(line, column)

        self._advance()

        # '=' needs one character of lookahead; a non-matching character
        # is left in the input
        if char == "=":
            if self._peek() == "=":
                self._advance()
                return self._make_token(TokenType.EQUAL, "==", line, column)
            return self._make_token(TokenType.ASSIGN, "=", line, column)

        if char in SINGLE_CHAR_TOKENS:
            return self._make_token(SINGLE_CHAR_TOKENS[char], char, line, column)

        return self._make_token(TokenType.UNKNOWN, char, line, column)

    def _scan_identifier(self, line: int, column: int) -> Token:
        """Scan an identifier, reclassifying keywords."""
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        return self._make_token(KEYWORDS.get(name, TokenType.IDENTIFIER), name, line, column)

    def _scan_number(self, line: int, column: int) -> Token:
        """Scan an unsigned decimal digit string."""
        chars = []
        while self._peek() and self._peek() in string.digits:
            chars.append(self._advance())

        return self._make_token(TokenType.NUMBER, "".join(chars), line, column)


def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Tokenize a whole source string, EOF token included."""
    return list(Lexer(source, filename).tokenize())
