# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the SimpleLang tokenizer.
#
# Test coverage includes:
#   - Keywords, identifiers and number literals
#   - '=' versus '==' lookahead
#   - Single-character delimiters and unknown characters
#   - One-token pushback and its single-slot invariant
#   - Line/column tracking for diagnostics
# =============================================================================

import pytest
from simplelang.lexer import Lexer, Token, TokenType, tokenize
from simplelang.errors import LookaheadError


def kinds(source: str) -> list:
    """Token types of a source string, EOF excluded."""
    return [t.type for t in tokenize(source) if t.type != TokenType.EOF]


def texts(source: str) -> list:
    """Token texts of a source string, EOF excluded."""
    return [t.text for t in tokenize(source) if t.type != TokenType.EOF]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source should produce only EOF."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].text == ""

    def test_whitespace_only(self):
        """Whitespace of every kind is skipped."""
        tokens = tokenize("  \t\n\r\v\f  \n")
        assert [t.type for t in tokens] == [TokenType.EOF]

    def test_keywords(self):
        """'int' and 'if' are reclassified as keywords."""
        assert kinds("int if") == [TokenType.INT, TokenType.IF]
        assert texts("int if") == ["int", "if"]

    def test_keyword_prefix_is_identifier(self):
        """Identifiers that merely start with a keyword stay identifiers."""
        assert kinds("integer iff in i") == [TokenType.IDENTIFIER] * 4

    def test_keywords_are_case_sensitive(self):
        assert kinds("INT If") == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_identifier_with_digits(self):
        """Identifiers continue with letters and digits."""
        tokens = tokenize("x2y3")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].text == "x2y3"

    def test_number_keeps_spelling(self):
        """Numbers are stored as their digit string."""
        tokens = tokenize("007")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].text == "007"

    def test_huge_number_accepted(self):
        """No overflow checking on number literals."""
        digits = "123456789012345678901234567890"
        assert texts(digits) == [digits]

    def test_number_then_identifier(self):
        """A digit run stops at the first letter."""
        assert kinds("12ab") == [TokenType.NUMBER, TokenType.IDENTIFIER]
        assert texts("12ab") == ["12", "ab"]


# =============================================================================
# Operator and Delimiter Tests
# =============================================================================

class TestOperators:
    """Test operator and delimiter tokens."""

    def test_assign(self):
        tokens = tokenize("=")
        assert tokens[0].type == TokenType.ASSIGN
        assert tokens[0].text == "="

    def test_equal(self):
        tokens = tokenize("==")
        assert tokens[0].type == TokenType.EQUAL
        assert tokens[0].text == "=="

    def test_assign_lookahead_not_consumed(self):
        """The character after a lone '=' is left in the input."""
        assert kinds("=5") == [TokenType.ASSIGN, TokenType.NUMBER]
        assert kinds("=;") == [TokenType.ASSIGN, TokenType.SEMICOLON]

    def test_triple_equals(self):
        """'===' is '==' followed by '='."""
        assert kinds("===") == [TokenType.EQUAL, TokenType.ASSIGN]

    def test_assign_at_end_of_input(self):
        assert [t.type for t in tokenize("=")] == [TokenType.ASSIGN, TokenType.EOF]

    @pytest.mark.parametrize("char,expected", [
        ("+", TokenType.PLUS),
        ("-", TokenType.MINUS),
        ("(", TokenType.LPAREN),
        (")", TokenType.RPAREN),
        ("{", TokenType.LBRACE),
        ("}", TokenType.RBRACE),
        (";", TokenType.SEMICOLON),
    ])
    def test_single_character_tokens(self, char, expected):
        tokens = tokenize(char)
        assert tokens[0].type == expected
        assert tokens[0].text == char

    @pytest.mark.parametrize("char", ["*", "/", "@", "_", "!", "<", "#", "é"])
    def test_unknown_character(self, char):
        """Anything else becomes an UNKNOWN token holding the character."""
        tokens = tokenize(char)
        assert tokens[0].type == TokenType.UNKNOWN
        assert tokens[0].text == char

    def test_negative_number_is_minus_then_number(self):
        """There are no negative literals."""
        assert kinds("-5") == [TokenType.MINUS, TokenType.NUMBER]

    def test_full_statement(self):
        source = "if (c == 30) { c = c+1; }"
        assert kinds(source) == [
            TokenType.IF, TokenType.LPAREN, TokenType.IDENTIFIER, TokenType.EQUAL,
            TokenType.NUMBER, TokenType.RPAREN, TokenType.LBRACE,
            TokenType.IDENTIFIER, TokenType.ASSIGN, TokenType.IDENTIFIER,
            TokenType.PLUS, TokenType.NUMBER, TokenType.SEMICOLON, TokenType.RBRACE,
        ]


# =============================================================================
# Pushback Tests
# =============================================================================

class TestPushback:
    """Test the one-token pushback buffer."""

    def test_pushed_back_token_returned_first(self):
        lexer = Lexer("a b")
        first = lexer.next_token()
        lexer.push_back(first)
        assert lexer.next_token() is first
        assert lexer.next_token().text == "b"

    def test_push_back_arbitrary_token(self):
        """The pushed token need not come from the stream."""
        lexer = Lexer("x")
        lexer.push_back(Token(TokenType.SEMICOLON, ";"))
        assert lexer.next_token().type == TokenType.SEMICOLON
        assert lexer.next_token().text == "x"

    def test_second_push_back_raises(self):
        lexer = Lexer("a b")
        a = lexer.next_token()
        b = lexer.next_token()
        lexer.push_back(b)
        with pytest.raises(LookaheadError):
            lexer.push_back(a)

    def test_peek_does_not_consume(self):
        lexer = Lexer("a ;")
        assert lexer.peek_token().text == "a"
        assert lexer.has_pending
        assert lexer.next_token().text == "a"
        assert not lexer.has_pending
        assert lexer.next_token().type == TokenType.SEMICOLON

    def test_eof_is_sticky(self):
        """Reading past the end keeps returning EOF."""
        lexer = Lexer("")
        assert lexer.next_token().type == TokenType.EOF
        assert lexer.next_token().type == TokenType.EOF


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Test line and column tracking."""

    def test_columns(self):
        tokens = tokenize("int a;")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (1, 5), (1, 6), (1, 7)]

    def test_lines(self):
        tokens = tokenize("a\n  b\n\nc")
        assert [(t.line, t.column) for t in tokens[:3]] == [(1, 1), (2, 3), (4, 1)]

    def test_location_uses_filename(self):
        token = tokenize("x", "prog.sl")[0]
        assert str(token.location) == "prog.sl:1:1"

    def test_source_line(self):
        lexer = Lexer("int a;\na = 1;")
        assert lexer.source_line(2) == "a = 1;"
        assert lexer.source_line(3) is None

    def test_repr(self):
        assert repr(tokenize("int")[0]) == "Token(INT, 'int', 1:1)"
        assert repr(tokenize("")[0]) == "Token(EOF, 1:1)"
