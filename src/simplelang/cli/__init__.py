"""
SimpleLang Command-Line Interface
=================================

- **slc**: SimpleLang compiler

Implemented as a Click application with help text and exit codes shared
through cli.errors.
"""

__all__ = ["slc"]
