"""
Binding expression AST.

Mirrors the node kinds of Angular template expressions. Only a handful of
kinds can carry a compile-time literal (see ``tkx.parsers.tag``); the rest
exist so the parser can represent any valid binding faithfully.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class AST:
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True)
class EmptyExpr(AST):
    pass


@dataclass(frozen=True)
class ImplicitReceiver(AST):
    """Component context an unqualified name is read from."""
    pass


@dataclass(frozen=True)
class ThisReceiver(ImplicitReceiver):
    pass


@dataclass(frozen=True)
class LiteralPrimitive(AST):
    """
    Compile-time scalar: string, number, boolean, null or undefined.

    ``undefined`` is represented by ``value=None`` and ``kind="undefined"``
    to keep it apart from ``null``.
    """
    value: Union[str, int, float, bool, None]
    kind: str = "literal"


@dataclass(frozen=True)
class LiteralArray(AST):
    expressions: Tuple[AST, ...] = ()


@dataclass(frozen=True)
class LiteralMapKey:
    key: str
    quoted: bool = False


@dataclass(frozen=True)
class LiteralMap(AST):
    keys: Tuple[LiteralMapKey, ...] = ()
    values: Tuple[AST, ...] = ()


@dataclass(frozen=True)
class Interpolation(AST):
    """``a {{ x }} b``: ``strings`` always has one more item than ``expressions``."""
    strings: Tuple[str, ...] = ()
    expressions: Tuple[AST, ...] = ()


@dataclass(frozen=True)
class BindingPipe(AST):
    exp: AST
    name: str
    args: Tuple[AST, ...] = ()


@dataclass(frozen=True)
class Conditional(AST):
    condition: AST
    true_exp: AST
    false_exp: AST


@dataclass(frozen=True)
class Binary(AST):
    operation: str
    left: AST
    right: AST


@dataclass(frozen=True)
class Unary(AST):
    operator: str
    expr: AST


@dataclass(frozen=True)
class PrefixNot(AST):
    expression: AST


@dataclass(frozen=True)
class TypeofExpression(AST):
    expression: AST


@dataclass(frozen=True)
class NonNullAssert(AST):
    expression: AST


@dataclass(frozen=True)
class PropertyRead(AST):
    receiver: AST
    name: str


@dataclass(frozen=True)
class SafePropertyRead(PropertyRead):
    pass


@dataclass(frozen=True)
class KeyedRead(AST):
    receiver: AST
    key: AST


@dataclass(frozen=True)
class SafeKeyedRead(KeyedRead):
    pass


@dataclass(frozen=True)
class Call(AST):
    receiver: AST
    args: Tuple[AST, ...] = ()


@dataclass(frozen=True)
class SafeCall(Call):
    pass


@dataclass(frozen=True)
class TemplateLiteral(AST):
    """Backtick string; ``elements`` are the raw text chunks between ``${}``."""
    elements: Tuple[str, ...] = ()
    expressions: Tuple[AST, ...] = ()


@dataclass(frozen=True)
class ASTWithSource(AST):
    """Root of every parsed binding: the expression plus its original text."""
    ast: AST
    source: str = ""


__all__ = [
    "AST",
    "EmptyExpr",
    "ImplicitReceiver",
    "ThisReceiver",
    "LiteralPrimitive",
    "LiteralArray",
    "LiteralMapKey",
    "LiteralMap",
    "Interpolation",
    "BindingPipe",
    "Conditional",
    "Binary",
    "Unary",
    "PrefixNot",
    "TypeofExpression",
    "NonNullAssert",
    "PropertyRead",
    "SafePropertyRead",
    "KeyedRead",
    "SafeKeyedRead",
    "Call",
    "SafeCall",
    "TemplateLiteral",
    "ASTWithSource",
]
