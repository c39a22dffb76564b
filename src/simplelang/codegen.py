"""
Code Generator for SimpleLang
=============================

This module turns parsed SimpleLang statements into assembly for the
8-bit accumulator machine. Statements are generated one at a time, in
source order, as soon as the parser hands them over.

Code Generation Strategy
------------------------
Every expression is evaluated in the accumulator and stored to its
target:

    x = 5;          LDI 5           x = a;      LDA a
                    STA x                       STA x

    x = a + 5;      LDA a           x = 5 - b;  LDI 5
                    ADDI 5                      SUB b
                    STA x                       STA x

An if statement compares by subtraction and branches on the zero flag:

    if (a == 3) {   LDA a
        ...         SUBI 3
    }               JZ L0       ; equal: enter the block
                    JMP L1      ; not equal: skip it
                    L0:
                    ...
                    L1:

Address Allocation Order
------------------------
Variables are resolved through the symbol table in exactly the order the
instructions referencing them are emitted. The assignment target is
resolved last, after both operands, so 'x = y;' with neither name seen
before puts y at the lower address.
"""

import logging
from typing import Optional

from simplelang.ast import (
    ASTVisitor,
    Statement,
    Declaration,
    Assignment,
    IfStatement,
    EmptyStatement,
    Program,
    Expression,
    Identifier,
    NumberLiteral,
    BinaryExpression,
    BinaryOperator,
)
from simplelang.emitter import CodeEmitter, Mnemonic
from simplelang.errors import SourceLocation, UndeclaredVariableError
from simplelang.symbols import SymbolTable

logger = logging.getLogger(__name__)


class CodeGenerator(ASTVisitor):
    """
    Emits assembly for SimpleLang statements.

    Attributes:
        symbols: Symbol table used to resolve variable addresses
        emitter: Output buffer and label counter
        require_declarations: Reject names never declared with 'int'
    """

    def __init__(
        self,
        symbols: SymbolTable,
        emitter: CodeEmitter,
        require_declarations: bool = False,
        source_lines: Optional[list[str]] = None,
    ):
        self.symbols = symbols
        self.emitter = emitter
        self.require_declarations = require_declarations
        self._source_lines = source_lines or []

    def generate(self, program: Program) -> list[str]:
        """Generate a whole program and return the rendered lines."""
        for stmt in program.statements:
            self.generate_statement(stmt)
        return self.emitter.render()

    def generate_statement(self, stmt: Statement) -> None:
        """
        Emit the code for one statement.

        Raises:
            UndeclaredVariableError: In strict mode, before any line of
                the statement is emitted
            CapacityError: If the symbol table or output buffer is full
        """
        if self.require_declarations:
            self._check_declarations(stmt, set())
        logger.debug(f"Generating {stmt.__class__.__name__} from line {stmt.location.line}")
        self.visit(stmt)

    # =========================================================================
    # Statements
    # =========================================================================

    def visit_Declaration(self, node: Declaration) -> None:
        # Reserves an address; no code
        self.symbols.declare(node.name)

    def visit_EmptyStatement(self, node: EmptyStatement) -> None:
        pass

    def visit_Assignment(self, node: Assignment) -> None:
        self.generate_expression(node.value)
        self.emitter.emit_instruction(Mnemonic.STA, self.symbols.address_of(node.target))

    def visit_IfStatement(self, node: IfStatement) -> None:
        true_label = self.emitter.new_label()
        end_label = self.emitter.new_label()

        self.emitter.emit_instruction(Mnemonic.LDA, self._address_of(node.left))
        self._emit_operation(BinaryOperator.SUBTRACT, node.right)
        self.emitter.emit_instruction(Mnemonic.JZ, true_label)
        self.emitter.emit_instruction(Mnemonic.JMP, end_label)
        self.emitter.emit_label(true_label)

        for stmt in node.body:
            self.generate_statement(stmt)

        self.emitter.emit_label(end_label)

    # =========================================================================
    # Expressions
    # =========================================================================

    def generate_expression(self, expr: Expression) -> None:
        """Leave the value of an expression in the accumulator."""
        if isinstance(expr, BinaryExpression):
            self._emit_load(expr.left)
            self._emit_operation(expr.operator, expr.right)
        else:
            self._emit_load(expr)

    def _emit_load(self, operand: Expression) -> None:
        if isinstance(operand, NumberLiteral):
            self.emitter.emit_instruction(Mnemonic.LDI, operand.text)
        else:
            self.emitter.emit_instruction(Mnemonic.LDA, self._address_of(operand))

    def _emit_operation(self, operator: BinaryOperator, operand: Expression) -> None:
        """Emit ADD/SUB against memory or ADDI/SUBI against a literal."""
        if isinstance(operand, NumberLiteral):
            mnemonic = Mnemonic.ADDI if operator == BinaryOperator.ADD else Mnemonic.SUBI
            self.emitter.emit_instruction(mnemonic, operand.text)
        else:
            mnemonic = Mnemonic.ADD if operator == BinaryOperator.ADD else Mnemonic.SUB
            self.emitter.emit_instruction(mnemonic, self._address_of(operand))

    # =========================================================================
    # Address Resolution
    # =========================================================================

    def _address_of(self, ident: Identifier) -> int:
        return self.symbols.address_of(ident.name)

    # =========================================================================
    # Strict Mode
    # =========================================================================

    def _check_declarations(self, node: Statement, pending: set[str]) -> None:
        """
        Verify every referenced name was declared with 'int'.

        Declarations inside an if-block count for the statements after
        them in the same block; pending collects those.
        """
        if isinstance(node, Declaration):
            pending.add(node.name)
        elif isinstance(node, Assignment):
            value = node.value
            operands = [value.left, value.right] if isinstance(value, BinaryExpression) else [value]
            for operand in operands:
                if isinstance(operand, Identifier):
                    self._require_declared(operand.name, operand.location, pending)
            self._require_declared(node.target, node.location, pending)
        elif isinstance(node, IfStatement):
            self._require_declared(node.left.name, node.left.location, pending)
            if isinstance(node.right, Identifier):
                self._require_declared(node.right.name, node.right.location, pending)
            for stmt in node.body:
                self._check_declarations(stmt, pending)

    def _require_declared(self, name: str, location: SourceLocation, pending: set[str]) -> None:
        if self.symbols.is_declared(name) or name in pending:
            return
        raise UndeclaredVariableError(
            name,
            location=location,
            source_line=self._source_line(location.line),
        )

    def _source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self._source_lines):
            return self._source_lines[line - 1]
        return None
