# =============================================================================
# test_codegen.py - Code Generation Tests
# =============================================================================
# Tests for the assembly emitted per statement:
#   - Load/arithmetic/store sequences for every operand combination
#   - Address allocation order (operands before the assignment target)
#   - Branch and label layout of if statements, including nesting
#   - Strict declaration checking
# =============================================================================

import pytest
from simplelang.codegen import CodeGenerator
from simplelang.emitter import CodeEmitter
from simplelang.errors import UndeclaredVariableError
from simplelang.parser import parse_source
from simplelang.symbols import SymbolTable


def generate(source: str, require_declarations: bool = False) -> list:
    """Parse and generate a whole source string."""
    generator = CodeGenerator(
        SymbolTable(),
        CodeEmitter(),
        require_declarations=require_declarations,
        source_lines=source.splitlines(),
    )
    return generator.generate(parse_source(source))


# =============================================================================
# Assignment Tests
# =============================================================================

class TestAssignment:
    """Tests for assignment code sequences."""

    def test_number(self):
        assert generate("int a; a = 10;") == ["LDI 10", "STA 16"]

    def test_identifier(self):
        assert generate("int a; int b; b = a;") == ["LDA 16", "STA 17"]

    @pytest.mark.parametrize("source,expected", [
        ("int x; int y; x = y + 5;", ["LDA 17", "ADDI 5", "STA 16"]),
        ("int x; int y; x = y - 5;", ["LDA 17", "SUBI 5", "STA 16"]),
        ("int x; int y; x = 5 + y;", ["LDI 5", "ADD 17", "STA 16"]),
        ("int x; int y; x = 5 - y;", ["LDI 5", "SUB 17", "STA 16"]),
        ("int x; int y; x = 2 + 3;", ["LDI 2", "ADDI 3", "STA 16"]),
        ("int x; int y; x = y - y;", ["LDA 17", "SUB 17", "STA 16"]),
        ("int x; int y; x = x + y;", ["LDA 16", "ADD 17", "STA 16"]),
    ])
    def test_binary(self, source, expected):
        assert generate(source) == expected

    def test_binary_is_three_lines_ending_in_store(self):
        lines = generate("int x; x = 1 + 2;")
        assert len(lines) == 3
        assert lines[-1] == "STA 16"

    def test_literal_spelling_preserved(self):
        assert generate("a = 007 + 99999;") == ["LDI 007", "ADDI 99999", "STA 16"]

    def test_declaration_emits_nothing(self):
        assert generate("int a; int b;") == []

    def test_empty_statements_emit_nothing(self):
        assert generate(";;;") == []


# =============================================================================
# Address Allocation Order
# =============================================================================

class TestAllocationOrder:
    """Undeclared names are allocated in the order code references them."""

    def test_target_allocated_after_operand(self):
        # y is loaded before x is stored
        assert generate("x = y;") == ["LDA 16", "STA 17"]

    def test_operands_left_to_right_then_target(self):
        assert generate("t = a + b;") == ["LDA 16", "ADD 17", "STA 18"]

    def test_declaration_order_wins(self):
        assert generate("int b; int a; a = b;") == ["LDA 16", "STA 17"]

    def test_if_allocates_lhs_then_rhs(self):
        lines = generate("if (p == q) { }")
        assert lines[:2] == ["LDA 16", "SUB 17"]


# =============================================================================
# If Statement Tests
# =============================================================================

class TestIfStatement:
    """Tests for branch layout and label numbering."""

    def test_compare_with_number(self):
        assert generate("int c; if (c == 30) { c = c + 1; }") == [
            "LDA 16", "SUBI 30", "JZ L0", "JMP L1", "L0:",
            "LDA 16", "ADDI 1", "STA 16",
            "L1:",
        ]

    def test_compare_with_variable(self):
        assert generate("int a; int b; if (a == b) { }") == [
            "LDA 16", "SUB 17", "JZ L0", "JMP L1", "L0:", "L1:",
        ]

    def test_sequential_ifs_use_disjoint_labels(self):
        lines = generate("if (a == 1) { } if (a == 2) { }")
        labels = [line for line in lines if line.endswith(":")]
        assert labels == ["L0:", "L1:", "L2:", "L3:"]

    def test_nested_if_labels(self):
        """Outer labels are allocated before the inner block is compiled."""
        lines = generate("if (a == 1) { if (a == 2) { b = 3; } }")
        assert lines == [
            "LDA 16", "SUBI 1", "JZ L0", "JMP L1", "L0:",
            "LDA 16", "SUBI 2", "JZ L2", "JMP L3", "L2:",
            "LDI 3", "STA 17",
            "L3:",
            "L1:",
        ]

    def test_if_after_nested_if(self):
        lines = generate("if (a == 1) { if (a == 2) { } } if (a == 3) { }")
        assert "JZ L4" in lines
        assert "JMP L5" in lines

    def test_declaration_inside_block(self):
        assert generate("if (a == 1) { int z; z = 2; }")[5:] == ["LDI 2", "STA 17", "L1:"]


# =============================================================================
# Strict Mode
# =============================================================================

class TestStrictDeclarations:
    """require_declarations rejects names that were never declared."""

    def test_declared_names_pass(self):
        assert generate("int a; a = 1;", require_declarations=True) == ["LDI 1", "STA 16"]

    def test_undeclared_target(self):
        with pytest.raises(UndeclaredVariableError) as exc_info:
            generate("a = 1;", require_declarations=True)
        assert exc_info.value.name == "a"

    def test_undeclared_operand(self):
        with pytest.raises(UndeclaredVariableError) as exc_info:
            generate("int a; a = a + b;", require_declarations=True)
        assert exc_info.value.name == "b"
        assert exc_info.value.location.column == 16

    def test_undeclared_in_condition(self):
        with pytest.raises(UndeclaredVariableError):
            generate("int a; if (a == b) { }", require_declarations=True)

    def test_declaration_inside_block_counts(self):
        lines = generate("int a; if (a == 1) { int z; z = a; }", require_declarations=True)
        assert lines[-3:] == ["LDA 16", "STA 17", "L1:"]

    def test_nothing_emitted_for_rejected_statement(self):
        generator = CodeGenerator(SymbolTable(), CodeEmitter(), require_declarations=True)
        program = parse_source("int a; a = 1; a = a + b;")
        generator.generate_statement(program.statements[0])
        generator.generate_statement(program.statements[1])
        with pytest.raises(UndeclaredVariableError):
            generator.generate_statement(program.statements[2])
        assert generator.emitter.render() == ["LDI 1", "STA 16"]
        assert "b" not in generator.symbols

    def test_permissive_by_default(self):
        assert generate("a = b;") == ["LDA 16", "STA 17"]
