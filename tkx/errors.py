"""
User-facing errors of the extractor.

The CLI prints a TkxUserError as a one-line message with exit code 2.
Anything else is a bug and keeps its traceback.
"""

from __future__ import annotations

from typing import Optional


class TkxUserError(Exception):
    """
    Base class for all user-facing errors in the translation key extractor.

    These errors indicate problems that the user can fix:
    malformed templates, configuration issues, missing paths, etc.
    """
    pass


class ConfigError(TkxUserError):
    """Invalid or unreadable tkx.yaml."""
    pass


class TemplateParseError(TkxUserError):
    """
    Malformed markup or binding expression in a template.

    Attributes:
        path: File the template came from (may be empty)
        line: 1-based line of the offending construct
        column: 1-based column of the offending construct
    """

    def __init__(self, message: str, path: str = "", line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.path = path
        self.line = line
        self.column = column
        where = path or "<template>"
        if line is not None:
            where = f"{where}:{line}:{column or 1}"
        super().__init__(f"{where}: {message}")


__all__ = ["TkxUserError", "ConfigError", "TemplateParseError"]
