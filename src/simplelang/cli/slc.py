"""
slc - SimpleLang Compiler Command-Line Interface
================================================

Compiles a SimpleLang source file into assembly for the 8-bit
accumulator machine.

Usage Examples
--------------
Compile input.sl to output.asm:
    $ slc

Explicit input and output:
    $ slc program.sl -o program.asm

Dump the token stream or the syntax tree:
    $ slc --tokens program.sl
    $ slc --ast program.sl

Require every variable to be declared:
    $ slc --strict program.sl
"""

import logging
from pathlib import Path
from typing import Optional

import click

from simplelang import __version__
from simplelang.ast import ASTPrinter
from simplelang.cli.errors import handle_cli_exception
from simplelang.compiler import Compiler, CompilerOptions, read_source, write_assembly
from simplelang.lexer import Lexer
from simplelang.parser import parse_source

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    default="input.sl",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    default="output.asm",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output assembly file",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the syntax tree and exit (for debugging)",
)
@click.option(
    "--symbols",
    is_flag=True,
    help="Print variable addresses after compiling",
)
@click.option(
    "--base-address",
    type=click.IntRange(min=0),
    default=None,
    help="Address of the first variable (default: 16)",
)
@click.option(
    "--max-symbols",
    type=click.IntRange(min=0),
    default=None,
    help="Variable limit, 0 for unlimited (default: 100)",
)
@click.option(
    "--max-lines",
    type=click.IntRange(min=0),
    default=None,
    help="Output line limit, 0 for unlimited (default: 1000)",
)
@click.option(
    "--strict/--permissive",
    default=None,
    help="Require 'int' declarations before use (default: permissive)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output with token and statement tracing",
)
@click.version_option(version=__version__, prog_name="slc")
def main(
    input_file: Path,
    output: Path,
    tokens: bool,
    ast: bool,
    symbols: bool,
    base_address: Optional[int],
    max_symbols: Optional[int],
    max_lines: Optional[int],
    strict: Optional[bool],
    verbose: bool,
) -> None:
    """
    Compile SimpleLang source code to 8-bit accumulator assembly.

    INPUT_FILE is the SimpleLang source file (default: input.sl).

    The output file is written only when compilation succeeds; on any
    error it is neither created nor modified.

    \b
    Examples:
        slc                          # input.sl -> output.asm
        slc prog.sl -o prog.asm      # Explicit paths
        slc --tokens prog.sl         # Token dump
        slc --strict prog.sl         # Require declarations
    """
    setup_logging(verbose)

    # Environment first, then command-line overrides
    options = CompilerOptions.from_env()
    if base_address is not None:
        options.base_address = base_address
    if max_symbols is not None:
        options.max_symbols = max_symbols or None
    if max_lines is not None:
        options.max_lines = max_lines or None
    if strict is not None:
        options.require_declarations = strict
    logger.debug(f"Options: {options}")

    try:
        source = read_source(input_file)

        if tokens:
            for token in Lexer(source, str(input_file)).tokenize():
                click.echo(f"Token: {token.type.name} ('{token.text}')")
            return

        if ast:
            click.echo(ASTPrinter().print(parse_source(source, str(input_file))))
            return

        if verbose:
            click.echo(f"Compiling {input_file}...")

        result = Compiler(options).compile_source(source, str(input_file))
        write_assembly(result.lines, output)

        if verbose:
            click.echo(
                f"Wrote {len(result.lines)} lines to {output} "
                f"({result.statement_count} statements, {result.label_count} labels)"
            )

        if symbols:
            for name, address in result.symbols:
                click.echo(f"{name:<16}{address}")

        click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
