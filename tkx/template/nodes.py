"""
Template node model.

Parsed templates are immutable trees of these dataclasses. ``Element`` and
``Template`` can hold children; every other node is a leaf.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..expression.ast import ASTWithSource


@dataclass(frozen=True)
class TextAttribute:
    """Plain attribute: ``key="value"``."""
    name: str
    value: str


@dataclass(frozen=True)
class BoundAttribute:
    """Property binding: ``[key]="expr"``, ``bind-key="expr"`` or ``key="a {{ b }}"``."""
    name: str
    value: ASTWithSource


@dataclass(frozen=True)
class BoundEvent:
    """Event binding: ``(click)="handler"``. The handler is kept unparsed."""
    name: str
    handler: str


@dataclass(frozen=True)
class Reference:
    """Template reference variable: ``#ref`` / ``ref-name``."""
    name: str
    value: str


@dataclass(frozen=True)
class Variable:
    """``let-name="value"`` on ``<ng-template>``."""
    name: str
    value: str


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class BoundText:
    """Text holding ``{{ }}`` interpolations."""
    value: ASTWithSource


@dataclass(frozen=True)
class Element:
    name: str
    attributes: Tuple[TextAttribute, ...] = ()
    inputs: Tuple[BoundAttribute, ...] = ()
    outputs: Tuple[BoundEvent, ...] = ()
    references: Tuple[Reference, ...] = ()
    children: Tuple[Node, ...] = ()
    line: Optional[int] = None


@dataclass(frozen=True)
class Template:
    """
    ``<ng-template>`` or the implicit wrapper of a structural directive (``*ngIf``).

    For a structural directive ``tag_name`` is the wrapped element's name,
    ``template_attrs`` holds the raw ``*`` attribute and ``children`` the
    element itself.
    """
    tag_name: str
    attributes: Tuple[TextAttribute, ...] = ()
    inputs: Tuple[BoundAttribute, ...] = ()
    outputs: Tuple[BoundEvent, ...] = ()
    template_attrs: Tuple[TextAttribute, ...] = ()
    references: Tuple[Reference, ...] = ()
    variables: Tuple[Variable, ...] = ()
    children: Tuple[Node, ...] = ()
    line: Optional[int] = None


Node = Union[Element, Template, Text, BoundText]
ElementLike = Union[Element, Template]


__all__ = [
    "TextAttribute",
    "BoundAttribute",
    "BoundEvent",
    "Reference",
    "Variable",
    "Text",
    "BoundText",
    "Element",
    "Template",
    "Node",
    "ElementLike",
]
