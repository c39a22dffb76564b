"""
SimpleLang Compiler Main Module
===============================

This module drives a compilation from source text to assembly lines:

    Source → Lexer → Parser → (one statement) → Code Generator → Emitter

There is no whole-program tree. The driver peeks at the next token,
stops at end of input, and otherwise parses exactly one statement and
generates its code straight away. Compilation is fail-fast: the first
error aborts it. Lines emitted for earlier statements stay in the
emitter untouched and nothing is emitted for the failing statement.

Usage
-----
Command line:
    $ slc input.sl -o output.asm

Programmatic:
    >>> from simplelang import compile_source
    >>> compile_source("int a; a = 10;").lines
    ['LDI 10', 'STA 16']

Compiler State
--------------
The symbol table, the label counter and the output buffer belong to a
CompilerState value created per compilation, so independent compilations
never share addresses or labels.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from simplelang.codegen import CodeGenerator
from simplelang.emitter import CodeEmitter, DEFAULT_MAX_LINES
from simplelang.lexer import Lexer, TokenType
from simplelang.errors import SourceDecodeError, SourceLocation
from simplelang.parser import Parser, DEFAULT_MAX_DEPTH
from simplelang.symbols import SymbolTable, DEFAULT_BASE_ADDRESS, DEFAULT_MAX_SYMBOLS

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        base_address: Memory address of the first variable (default: 16)
        max_symbols: Maximum number of distinct variables (default: 100).
                     None removes the limit.
        max_lines: Maximum number of assembly lines (default: 1000).
                   None removes the limit.
        require_declarations: If True, every variable must be declared with
                              'int' before it is referenced. The default
                              (False) allocates undeclared names on first use.
        max_depth: Deepest allowed nesting of if-blocks (default: 100)
    """
    base_address: int = DEFAULT_BASE_ADDRESS
    max_symbols: Optional[int] = DEFAULT_MAX_SYMBOLS
    max_lines: Optional[int] = DEFAULT_MAX_LINES
    require_declarations: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    @classmethod
    def from_env(cls) -> "CompilerOptions":
        """
        Create CompilerOptions from environment variables.

        Environment variables (all optional):
            SIMPLELANG_BASE_ADDRESS: First variable address (integer)
            SIMPLELANG_MAX_SYMBOLS: Variable limit (integer, 0 = unlimited)
            SIMPLELANG_MAX_LINES: Output line limit (integer, 0 = unlimited)
            SIMPLELANG_STRICT: "1", "true" or "yes" to require declarations

        Malformed integers are ignored with a warning.
        """
        options = cls()

        base = _env_int("SIMPLELANG_BASE_ADDRESS")
        if base is not None:
            options.base_address = base

        max_symbols = _env_int("SIMPLELANG_MAX_SYMBOLS")
        if max_symbols is not None:
            options.max_symbols = max_symbols or None

        max_lines = _env_int("SIMPLELANG_MAX_LINES")
        if max_lines is not None:
            options.max_lines = max_lines or None

        if strict := os.environ.get("SIMPLELANG_STRICT"):
            options.require_declarations = strict.lower() in ("1", "true", "yes")

        return options


def _env_int(name: str) -> Optional[int]:
    value = os.environ.get(name)
    if value is None:
        return None
    try:
        return int(value, 0)
    except ValueError:
        logger.warning(f"Ignoring {name}={value!r}: not an integer")
        return None


@dataclass
class CompilerState:
    """
    Mutable state of one compilation.

    Attributes:
        symbols: Variable name → address table
        emitter: Output buffer and label counter
    """
    symbols: SymbolTable
    emitter: CodeEmitter

    @classmethod
    def from_options(cls, options: CompilerOptions) -> "CompilerState":
        return cls(
            symbols=SymbolTable(options.base_address, options.max_symbols),
            emitter=CodeEmitter(options.max_lines),
        )


# =============================================================================
# Compiler
# =============================================================================

@dataclass
class CompilerResult:
    """
    Result of a successful compilation.

    Attributes:
        filename: Source filename
        lines: Assembly lines in emission order
        symbols: (name, address) pairs in allocation order
        label_count: Number of labels allocated
        statement_count: Number of top-level statements compiled
    """
    filename: str = ""
    lines: list[str] = field(default_factory=list)
    symbols: list[tuple[str, int]] = field(default_factory=list)
    label_count: int = 0
    statement_count: int = 0

    @property
    def assembly(self) -> str:
        """The output file text: every line newline-terminated."""
        return "".join(f"{line}\n" for line in self.lines)


class Compiler:
    """
    SimpleLang compiler.

    Example:
        compiler = Compiler()
        result = compiler.compile_file("input.sl")
        write_assembly(result.lines, "output.asm")

    Attributes:
        options: Compiler configuration options
        state: State of the most recent compilation (kept after an error
               so callers can inspect what was emitted before it)
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()
        self.state: Optional[CompilerState] = None

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile SimpleLang source code to assembly lines.

        Raises:
            SimpleLangError: On the first syntax, declaration or capacity error
        """
        self.state = CompilerState.from_options(self.options)
        lexer = Lexer(source, filename)
        parser = Parser(lexer, self.options.max_depth)
        generator = CodeGenerator(
            self.state.symbols,
            self.state.emitter,
            require_declarations=self.options.require_declarations,
            source_lines=source.splitlines(),
        )

        statement_count = 0
        while True:
            token = lexer.next_token()
            if token.type == TokenType.EOF:
                break
            lexer.push_back(token)

            stmt = parser.parse_statement()
            if stmt is None:
                parser.reject_stray_rbrace()
            generator.generate_statement(stmt)
            statement_count += 1

        logger.info(
            f"Compiled {filename}: {statement_count} statements, "
            f"{len(self.state.emitter)} lines, {len(self.state.symbols)} variables"
        )
        return CompilerResult(
            filename=filename,
            lines=self.state.emitter.render(),
            symbols=list(self.state.symbols.items()),
            label_count=self.state.emitter.label_count,
            statement_count=statement_count,
        )

    def compile_file(self, filepath: Union[str, Path]) -> CompilerResult:
        """
        Compile a SimpleLang source file.

        Raises:
            FileNotFoundError: If the source file does not exist
            SourceDecodeError: If the file is not valid UTF-8
            SimpleLangError: If compilation fails
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = read_source(path)
        return self.compile_source(source, str(filepath))


def read_source(path: Union[str, Path]) -> str:
    """
    Read a source file as UTF-8 text.

    Raises:
        SourceDecodeError: At the line and column of the first byte that
            is not valid UTF-8
    """
    data = Path(path).read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        line_start = data.rfind(b"\n", 0, e.start) + 1
        location = SourceLocation(
            str(path),
            data.count(b"\n", 0, e.start) + 1,
            len(data[line_start:e.start].decode("utf-8", errors="replace")) + 1,
        )
        raise SourceDecodeError(data[e.start], location) from e


def write_assembly(lines: list[str], output_path: Union[str, Path]) -> None:
    """Write assembly lines to a file, one newline-terminated line each."""
    with open(output_path, "w", encoding="utf-8") as out:
        for line in lines:
            out.write(f"{line}\n")


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_source(
    source: str,
    filename: str = "<input>",
    options: Optional[CompilerOptions] = None,
) -> CompilerResult:
    """
    Compile SimpleLang source code.

    Example:
        >>> result = compile_source("x = 1 + y;")
        >>> result.lines
        ['LDI 1', 'ADD 16', 'STA 17']
    """
    return Compiler(options).compile_source(source, filename)


def compile_file(
    filepath: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    options: Optional[CompilerOptions] = None,
) -> CompilerResult:
    """
    Compile a SimpleLang file, optionally writing the assembly.

    The output file is only written once compilation has succeeded.
    """
    result = Compiler(options).compile_file(filepath)
    if output_path:
        write_assembly(result.lines, output_path)
    return result
