"""
SimpleLang Abstract Syntax Tree (AST) Definitions
=================================================

The parser turns each SimpleLang statement into one of the nodes below,
and the code generator turns the node into assembly. The tree is tiny
because the language is: an expression is at most one binary operation
and the only compound statement is the if-block.

Node Hierarchy
--------------
ASTNode (base)
├── Program - every top-level statement (used for --ast dumps)
├── Statements
│   ├── Declaration - int name;
│   ├── Assignment - name = expression;
│   ├── IfStatement - if (name == operand) { statements }
│   └── EmptyStatement - ;
└── Expressions
    ├── Identifier - variable reference
    ├── NumberLiteral - unsigned decimal constant (kept as text)
    └── BinaryExpression - operand (+|-) operand
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from simplelang.errors import SourceLocation


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node starts
    """
    location: SourceLocation

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"


@dataclass
class Expression(ASTNode):
    """Base class for expression nodes."""
    pass


@dataclass
class Statement(ASTNode):
    """Base class for statement nodes."""
    pass


# =============================================================================
# Expressions
# =============================================================================

class BinaryOperator(Enum):
    """The two operators an expression may contain."""
    ADD = "+"
    SUBTRACT = "-"


@dataclass
class Identifier(Expression):
    """
    Variable reference.

    Attributes:
        name: The variable name
    """
    name: str = ""


@dataclass
class NumberLiteral(Expression):
    """
    Unsigned integer constant.

    The digit string is emitted verbatim, so leading zeros and values
    wider than the machine word survive unchanged.

    Attributes:
        text: The literal's digit string
    """
    text: str = "0"


Operand = Union[Identifier, NumberLiteral]


@dataclass
class BinaryExpression(Expression):
    """
    One addition or subtraction.

    Attributes:
        operator: ADD or SUBTRACT
        left: Left operand
        right: Right operand
    """
    operator: BinaryOperator = BinaryOperator.ADD
    left: Operand = None
    right: Operand = None


# =============================================================================
# Statements
# =============================================================================

@dataclass
class Declaration(Statement):
    """int name;"""
    name: str = ""


@dataclass
class Assignment(Statement):
    """
    name = value;

    Attributes:
        target: Name of the variable being assigned
        value: A bare operand or a BinaryExpression
    """
    target: str = ""
    value: Expression = None


@dataclass
class IfStatement(Statement):
    """
    if (left == right) { body }

    Attributes:
        left: Variable on the left of '=='
        right: Variable or number on the right of '=='
        body: Statements inside the braces, in source order
    """
    left: Identifier = None
    right: Operand = None
    body: list[Statement] = field(default_factory=list)


@dataclass
class EmptyStatement(Statement):
    """A lone ';'."""
    pass


@dataclass
class Program(ASTNode):
    """Root node holding every top-level statement."""
    statements: list[Statement] = field(default_factory=list)


# =============================================================================
# Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches visit(node) to visit_<ClassName>(node). Subclasses override
    the methods for the node types they care about.
    """

    def visit(self, node: ASTNode) -> Any:
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes."""
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)
            elif isinstance(field_value, list):
                for item in field_value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(program))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def visit_Program(self, node: Program):
        self._emit("Program")
        self.indent_level += 1
        for stmt in node.statements:
            self.visit(stmt)
        self.indent_level -= 1

    def visit_Declaration(self, node: Declaration):
        self._emit(f"Declare: int {node.name}")

    def visit_Assignment(self, node: Assignment):
        self._emit(f"Assign: {node.target} = {self._expr_str(node.value)}")

    def visit_IfStatement(self, node: IfStatement):
        self._emit(f"If ({self._expr_str(node.left)} == {self._expr_str(node.right)})")
        self.indent_level += 1
        for stmt in node.body:
            self.visit(stmt)
        self.indent_level -= 1

    def visit_EmptyStatement(self, node: EmptyStatement):
        self._emit("Empty")

    def _expr_str(self, expr: Expression) -> str:
        if isinstance(expr, NumberLiteral):
            return expr.text
        if isinstance(expr, Identifier):
            return expr.name
        if isinstance(expr, BinaryExpression):
            return f"({self._expr_str(expr.left)} {expr.operator.value} {self._expr_str(expr.right)})"
        return f"<{type(expr).__name__}>"
