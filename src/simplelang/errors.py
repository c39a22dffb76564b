"""
SimpleLang Error Hierarchy
==========================

This module defines the exception hierarchy for the SimpleLang compiler.
All exceptions inherit from SimpleLangError, allowing callers to catch
every compiler error with a single except clause if desired.

Exception Hierarchy
-------------------
SimpleLangError (base)
├── SLSyntaxError - an expected token was not found
│   ├── UnexpectedTokenError - wrong token where a specific one was required
│   └── UnterminatedBlockError - end of input inside an if-block
├── UndeclaredVariableError - name used without 'int' (strict mode only)
├── SourceDecodeError - source file is not valid UTF-8
├── CapacityError - variable, output line or nesting limit exceeded
└── LookaheadError - second token pushed back before the first was read

Resource errors (missing input file, unwritable output file) are reported
with the builtin FileNotFoundError / PermissionError / OSError and are
mapped to exit codes by the command-line tool.

Error Message Format
--------------------
Errors that carry a location follow this format:

    input.sl:2:5: error: expected '=' after identifier
        a 10;
          ^
    hint: assignments look like 'name = value;'
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception
# =============================================================================

class SimpleLangError(Exception):
    """
    Base exception for all SimpleLang compiler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            input.sl:3:9: error: expected '==' in if condition
                if (c = 30) { c = c+1; }
                      ^
            hint: only equality comparisons are supported
        """
        parts = []

        # Location prefix
        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Syntax Errors
# =============================================================================

class SLSyntaxError(SimpleLangError):
    """
    Syntax error in SimpleLang source.

    Raised by the parser whenever the token it reads does not match the
    grammar: a wrong keyword, missing punctuation, an unrecognized
    character, or a bad operand in an expression or condition.
    """
    pass


class UnexpectedTokenError(SLSyntaxError):
    """
    Unexpected token during parsing.

    Attributes:
        found: Source text of the offending token ("" at end of input)
        expected: Description of what the grammar required
    """

    def __init__(
        self,
        found: str,
        expected: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        shown = f"'{found}'" if found else "end of input"
        super().__init__(
            f"{expected}, found {shown}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnterminatedBlockError(SLSyntaxError):
    """
    End of input reached inside an if-block.

    The location points at the opening 'if' so the user can find the
    block that is missing its closing brace.
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unexpected end of input while parsing if block",
            location=location,
            hint="add a closing '}' to terminate the block",
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors
# =============================================================================

class UndeclaredVariableError(SimpleLangError):
    """
    Reference to a variable that was never declared with 'int'.

    Only raised when the compiler runs with require_declarations enabled;
    by default undeclared names are allocated on first use.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"undeclared variable '{name}'",
            location=location,
            hint=f"declare it first with 'int {name};'",
            source_line=source_line,
        )


class SourceDecodeError(SimpleLangError):
    """
    Source file bytes that do not decode as UTF-8.

    The location points at the first offending byte.

    Attributes:
        byte: Value of the first undecodable byte
    """

    def __init__(self, byte: int, location: Optional[SourceLocation] = None):
        self.byte = byte
        super().__init__(
            f"source is not valid UTF-8 (byte 0x{byte:02x})",
            location=location,
            hint="save the file as UTF-8 text",
        )


# =============================================================================
# Resource Limits
# =============================================================================

class CapacityError(SimpleLangError):
    """
    A configured compiler limit was exceeded.

    Attributes:
        resource: What ran out ("variables", "output lines" or
                  "nested if blocks")
        limit: The configured maximum
    """

    def __init__(
        self,
        resource: str,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.resource = resource
        self.limit = limit
        super().__init__(
            f"too many {resource} (limit is {limit})",
            location=location,
            hint="raise the limit in CompilerOptions or split the program",
            source_line=source_line,
        )


# =============================================================================
# Internal Errors
# =============================================================================

class LookaheadError(SimpleLangError):
    """
    A token was pushed back while another one was still pending.

    The grammar never needs more than one token of lookahead, so this
    always indicates a bug in the parser rather than in the source.
    """

    def __init__(self, pending: str, pushed: str):
        super().__init__(
            f"cannot push back '{pushed}': '{pending}' is already pending"
        )
