"""
SimpleLang Recursive Descent Parser
===================================

This module parses SimpleLang statements from a Lexer. It pulls tokens
one at a time with next_token() and never looks more than one token
ahead, handing a token back with push_back() when it belongs to the
caller (for instance the ';' that follows an expression).

Grammar (EBNF)
--------------
program     ::= statement*
statement   ::= 'int' IDENT ';'
              | IDENT '=' expr ';'
              | 'if' '(' IDENT '==' operand ')' '{' statement* '}'
              | ';'
expr        ::= operand (('+' | '-') operand)?
operand     ::= NUMBER | IDENT

Only one operator per expression is representable; there is no
precedence, no parentheses in expressions, and no else branch.

Example Usage
-------------
>>> from simplelang.lexer import Lexer
>>> from simplelang.parser import Parser
>>> parser = Parser(Lexer("a = b + 1;"))
>>> stmt = parser.parse_statement()
>>> stmt.target, stmt.value.operator
('a', <BinaryOperator.ADD: '+'>)
"""

import logging
from typing import Optional

from simplelang.lexer import Lexer, Token, TokenType
from simplelang.ast import (
    Program,
    Statement,
    Declaration,
    Assignment,
    IfStatement,
    EmptyStatement,
    Expression,
    Identifier,
    NumberLiteral,
    BinaryExpression,
    BinaryOperator,
    Operand,
)
from simplelang.errors import (
    CapacityError,
    SourceLocation,
    UnexpectedTokenError,
    UnterminatedBlockError,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100


class Parser:
    """
    Recursive descent parser for SimpleLang.

    The parser does not recover from errors: the first unexpected token
    raises and aborts the parse.

    Attributes:
        lexer: Token source
        max_depth: Deepest allowed nesting of if-blocks
    """

    def __init__(self, lexer: Lexer, max_depth: int = DEFAULT_MAX_DEPTH):
        self.lexer = lexer
        self.max_depth = max_depth
        self._depth = 0

    @property
    def filename(self) -> str:
        return self.lexer.filename

    def parse(self) -> Program:
        """
        Parse every statement up to end of input.

        Raises:
            SLSyntaxError: On the first syntax error
        """
        statements = []
        while not self.at_end():
            stmt = self.parse_statement()
            if stmt is None:
                self.reject_stray_rbrace()
            statements.append(stmt)

        return Program(
            location=SourceLocation(self.filename, 1, 1),
            statements=statements,
        )

    def at_end(self) -> bool:
        """True when the next token is end of input."""
        return self.lexer.peek_token().type == TokenType.EOF

    # =========================================================================
    # Token Helpers
    # =========================================================================

    def _expect(self, token_type: TokenType, message: str, hint: Optional[str] = None) -> Token:
        """
        Consume a token of the given type.

        Raises:
            UnexpectedTokenError: If the next token has a different type
        """
        token = self.lexer.next_token()
        if token.type != token_type:
            raise self._error(token, message, hint)
        return token

    def _error(self, token: Token, expected: str, hint: Optional[str] = None) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            token.text,
            expected,
            location=token.location,
            source_line=self.lexer.source_line(token.line),
            hint=hint,
        )

    def reject_stray_rbrace(self) -> None:
        """Raise for a '}' that closes no if-block."""
        token = self.lexer.next_token()
        raise self._error(token, "expected a statement", hint="'}' has no matching 'if' block")

    # =========================================================================
    # Statements
    # =========================================================================

    def parse_statement(self) -> Optional[Statement]:
        """
        Parse exactly one statement, consuming its terminator.

        Returns:
            The statement node, or None at end of input or when the next
            token is '}' (which is pushed back for the enclosing block)

        Raises:
            UnexpectedTokenError: If the statement is malformed
            UnterminatedBlockError: If input ends inside an if-block
            CapacityError: If if-blocks nest deeper than max_depth
        """
        token = self.lexer.next_token()

        if token.type == TokenType.EOF:
            self.lexer.push_back(token)
            return None

        if token.type == TokenType.RBRACE:
            self.lexer.push_back(token)
            return None

        if token.type == TokenType.INT:
            return self._parse_declaration(token)

        if token.type == TokenType.IDENTIFIER:
            return self._parse_assignment(token)

        if token.type == TokenType.IF:
            return self._parse_if(token)

        if token.type == TokenType.SEMICOLON:
            return EmptyStatement(location=token.location)

        hint = None
        if token.type == TokenType.UNKNOWN:
            hint = f"'{token.text}' is not valid in SimpleLang"
        raise self._error(token, "expected a statement", hint)

    def _parse_declaration(self, keyword: Token) -> Declaration:
        """int IDENT ;"""
        name = self._expect(TokenType.IDENTIFIER, "expected identifier after 'int'")
        self._expect(TokenType.SEMICOLON, "expected ';' after variable declaration")
        logger.debug(f"Parsed declaration of '{name.text}'")
        return Declaration(location=keyword.location, name=name.text)

    def _parse_assignment(self, target: Token) -> Assignment:
        """IDENT = expr ;"""
        self._expect(
            TokenType.ASSIGN,
            "expected '=' after identifier",
            hint="assignments look like 'name = value;'",
        )
        value = self.parse_expression()
        self._expect(TokenType.SEMICOLON, "expected ';' after assignment")
        logger.debug(f"Parsed assignment to '{target.text}'")
        return Assignment(location=target.location, target=target.text, value=value)

    def _parse_if(self, keyword: Token) -> IfStatement:
        """if ( IDENT == operand ) { statement* }"""
        self._expect(TokenType.LPAREN, "expected '(' after 'if'")

        lhs = self._expect(
            TokenType.IDENTIFIER,
            "expected identifier in if condition",
            hint="the left side of '==' must be a variable",
        )
        self._expect(
            TokenType.EQUAL,
            "expected '==' in if condition",
            hint="only equality comparisons are supported",
        )

        rhs_token = self.lexer.next_token()
        if not rhs_token.is_operand():
            raise self._error(rhs_token, "expected identifier or number in if condition")

        self._expect(TokenType.RPAREN, "expected ')' after if condition")
        self._expect(TokenType.LBRACE, "expected '{' after if condition")

        if self._depth >= self.max_depth:
            raise CapacityError(
                "nested if blocks",
                self.max_depth,
                location=keyword.location,
                source_line=self.lexer.source_line(keyword.line),
            )

        body = []
        self._depth += 1
        try:
            while True:
                token = self.lexer.next_token()
                if token.type == TokenType.RBRACE:
                    break
                if token.type == TokenType.EOF:
                    raise UnterminatedBlockError(
                        keyword.location,
                        self.lexer.source_line(keyword.line),
                    )
                self.lexer.push_back(token)
                body.append(self.parse_statement())
        finally:
            self._depth -= 1

        logger.debug(f"Parsed if block with {len(body)} statement(s)")
        return IfStatement(
            location=keyword.location,
            left=Identifier(location=lhs.location, name=lhs.text),
            right=self._make_operand(rhs_token),
            body=body,
        )

    # =========================================================================
    # Expressions
    # =========================================================================

    def parse_expression(self) -> Expression:
        """
        Parse the right-hand side of an assignment.

        A token following the left operand that is not '+' or '-' is
        pushed back unconsumed; it belongs to the caller.

        Raises:
            UnexpectedTokenError: If an operand is missing or invalid
        """
        left_token = self.lexer.next_token()
        if not left_token.is_operand():
            raise self._error(left_token, "expected identifier or number in expression")
        left = self._make_operand(left_token)

        op = self.lexer.next_token()
        if not op.is_additive_operator():
            self.lexer.push_back(op)
            return left

        right_token = self.lexer.next_token()
        if not right_token.is_operand():
            raise self._error(right_token, "expected number or identifier after operator")

        operator = BinaryOperator.ADD if op.type == TokenType.PLUS else BinaryOperator.SUBTRACT
        return BinaryExpression(
            location=left.location,
            operator=operator,
            left=left,
            right=self._make_operand(right_token),
        )

    def _make_operand(self, token: Token) -> Operand:
        if token.type == TokenType.NUMBER:
            return NumberLiteral(location=token.location, text=token.text)
        return Identifier(location=token.location, name=token.text)


def parse_source(source: str, filename: str = "<input>") -> Program:
    """Parse a complete source string into a Program node."""
    return Parser(Lexer(source, filename)).parse()
