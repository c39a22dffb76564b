"""
SimpleLang - Compiler for an 8-bit Accumulator Machine
======================================================

This package compiles SimpleLang, a tiny imperative language, into
textual assembly for a hypothetical 8-bit accumulator CPU.

Language
--------
    int a; int b; int c;
    a = 10;
    b = 20;
    c = a + b;
    if (c == 30) { c = c + 1; }

- Integer variable declarations: ``int name;``
- Assignment with at most one ``+`` or ``-``: ``x = a + 5;``
- Equality-gated blocks: ``if (x == y) { ... }`` (no else)

Main Components
---------------
- **lexer**: source text to tokens, one token of pushback
- **parser**: recursive descent, one statement at a time
- **symbols**: variable addresses in first-use order starting at 16
- **emitter**: append-only assembly buffer and label counter
- **codegen**: statements to LDI/LDA/STA/ADD/ADDI/SUB/SUBI/JZ/JMP
- **compiler**: the driver tying them together
- **cli**: the ``slc`` command-line tool

Quick Start
-----------
    >>> from simplelang import compile_source
    >>> compile_source("int a; a = 10;").lines
    ['LDI 10', 'STA 16']

Or from the shell:
    $ slc input.sl -o output.asm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from simplelang.compiler import (
    Compiler,
    CompilerOptions,
    CompilerResult,
    CompilerState,
    compile_source,
    compile_file,
    read_source,
    write_assembly,
)
from simplelang.errors import (
    SourceLocation,
    SimpleLangError,
    SLSyntaxError,
    UnexpectedTokenError,
    UnterminatedBlockError,
    UndeclaredVariableError,
    SourceDecodeError,
    CapacityError,
    LookaheadError,
)
from simplelang.lexer import Lexer, Token, TokenType
from simplelang.parser import Parser
from simplelang.symbols import SymbolTable
from simplelang.emitter import CodeEmitter, Mnemonic
from simplelang.codegen import CodeGenerator

__all__ = [
    "__version__",
    # Compiler
    "Compiler",
    "CompilerOptions",
    "CompilerResult",
    "CompilerState",
    "compile_source",
    "compile_file",
    "read_source",
    "write_assembly",
    # Errors
    "SourceLocation",
    "SimpleLangError",
    "SLSyntaxError",
    "UnexpectedTokenError",
    "UnterminatedBlockError",
    "UndeclaredVariableError",
    "SourceDecodeError",
    "CapacityError",
    "LookaheadError",
    # Components
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "SymbolTable",
    "CodeEmitter",
    "Mnemonic",
    "CodeGenerator",
]
