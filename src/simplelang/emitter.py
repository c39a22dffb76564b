"""
Assembly Code Emitter
=====================

An append-only buffer of assembly text lines plus the label counter used
for branch targets. Lines are stored fully formatted and are never
rewritten, reordered or removed once emitted.

Output Format
-------------
One instruction or label definition per line, no indentation, no
comments:

    LDA 18
    SUBI 30
    JZ L0
    JMP L1
    L0:

Instruction Set
---------------
| Mnemonic | Operand  | Meaning                              |
|----------|----------|--------------------------------------|
| LDI      | literal  | A = literal                          |
| LDA      | address  | A = mem[address]                     |
| STA      | address  | mem[address] = A                     |
| ADD      | address  | A = A + mem[address]                 |
| ADDI     | literal  | A = A + literal                      |
| SUB      | address  | A = A - mem[address]                 |
| SUBI     | literal  | A = A - literal                      |
| JZ       | label    | jump if the last result was zero     |
| JMP      | label    | jump unconditionally                 |
"""

import logging
from typing import Optional, Union

from simplelang.errors import CapacityError

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINES = 1000


class Mnemonic:
    """Mnemonics of the 8-bit accumulator machine."""
    LDI = "LDI"
    LDA = "LDA"
    STA = "STA"
    ADD = "ADD"
    ADDI = "ADDI"
    SUB = "SUB"
    SUBI = "SUBI"
    JZ = "JZ"
    JMP = "JMP"


class CodeEmitter:
    """
    Ordered, append-only assembly buffer with a label counter.

    Attributes:
        max_lines: Maximum number of output lines, or None for no limit
        label_count: Number of labels allocated so far
    """

    def __init__(self, max_lines: Optional[int] = DEFAULT_MAX_LINES):
        self.max_lines = max_lines
        self.label_count = 0
        self._lines: list[str] = []

    def emit(self, line: str) -> None:
        """
        Append one fully formatted line.

        Raises:
            CapacityError: If the buffer already holds max_lines lines
        """
        if self.max_lines is not None and len(self._lines) >= self.max_lines:
            raise CapacityError("output lines", self.max_lines)
        self._lines.append(line)

    def emit_instruction(self, mnemonic: str, operand: Union[int, str]) -> None:
        """Emit '<mnemonic> <operand>'."""
        self.emit(f"{mnemonic} {operand}")

    def emit_label(self, label: str) -> None:
        """Emit a label definition '<label>:'."""
        self.emit(f"{label}:")

    def new_label(self) -> str:
        """Allocate the next label name: L0, L1, L2, ..."""
        label = f"L{self.label_count}"
        self.label_count += 1
        logger.debug(f"Allocated label {label}")
        return label

    def render(self) -> list[str]:
        """Return a copy of the emitted lines in emission order."""
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)
