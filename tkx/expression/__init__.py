"""
Template binding expressions: AST, lexer and recursive descent parser.
"""

from __future__ import annotations

from .ast import AST, ASTWithSource, Interpolation, LiteralPrimitive
from .lexer import ExpressionLexer, ExpressionParseError, Token
from .parser import ExpressionParser, split_interpolation

__all__ = [
    "AST",
    "ASTWithSource",
    "Interpolation",
    "LiteralPrimitive",
    "ExpressionLexer",
    "ExpressionParseError",
    "ExpressionParser",
    "Token",
    "split_interpolation",
]
