"""
Template markup → node tree.
"""

from __future__ import annotations

from .nodes import (
    BoundAttribute,
    BoundEvent,
    BoundText,
    Element,
    ElementLike,
    Node,
    Reference,
    Template,
    Text,
    TextAttribute,
    Variable,
)
from .parser import parse_template

__all__ = [
    "parse_template",
    "BoundAttribute",
    "BoundEvent",
    "BoundText",
    "Element",
    "ElementLike",
    "Node",
    "Reference",
    "Template",
    "Text",
    "TextAttribute",
    "Variable",
]
