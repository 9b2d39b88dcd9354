"""
Tag parser: keys from ``<translate>`` elements in templates.

A marked element contributes keys from exactly one source, checked in order:
1. plain ``key="..."`` attribute with a non-empty value;
2. bound ``[key]="..."`` attribute, reduced to its literal primitives;
3. the trimmed text of its direct child text nodes.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from ..collection import TranslationCollection
from ..component import extract_inline_template, is_component_file
from ..expression.ast import (
    AST,
    ASTWithSource,
    Binary,
    BindingPipe,
    Conditional,
    Interpolation,
    LiteralArray,
    LiteralMap,
    LiteralPrimitive,
)
from ..template import parse_template
from ..template.nodes import BoundAttribute, Element, ElementLike, Node, Template, Text, TextAttribute
from .base import ParserInterface

logger = logging.getLogger(__name__)

TRANSLATE_TAG_NAME = "translate"
PUBLIC_TRANSLATE_TAG_NAME = "public-translate"
TRANSLATE_ATTR_KEY = "key"


class TagParser(ParserInterface):

    name = "tag"

    def __init__(
        self,
        tag_names: Iterable[str] = (TRANSLATE_TAG_NAME, PUBLIC_TRANSLATE_TAG_NAME),
        key_attribute: str = TRANSLATE_ATTR_KEY,
    ):
        self.tag_names: Sequence[str] = tuple(tag_names)
        self.key_attribute = key_attribute

    def extract(self, source: str, file_path: str) -> Optional[TranslationCollection]:
        collection = TranslationCollection()

        if file_path and is_component_file(file_path):
            source = extract_inline_template(source, file_path)

        nodes = self.parse_template(source, file_path)
        elements = self.get_elements_with_translate_tag(nodes)

        for element in elements:
            attribute = self.get_attribute(element, self.key_attribute)
            if attribute is not None and attribute.value:
                collection = collection.add(attribute.value)
                continue

            bound_attribute = self.get_bound_attribute(element, self.key_attribute)
            if bound_attribute is not None:
                for literal in self.get_literal_primitives(bound_attribute.value):
                    key = literal_key(literal)
                    if key is not None:
                        collection = collection.add(key)
                continue

            for text_node in self.get_text_nodes(element):
                collection = collection.add(text_node.value.strip())

        logger.debug("%s: %d marked element(s), %d key(s)", file_path, len(elements), collection.count())
        return collection

    def get_elements_with_translate_tag(self, nodes: Sequence[Node]) -> List[ElementLike]:
        """
        Find all marked elements, depth-first, parents before their descendants.

        A bare ``<translate>Key</translate>`` counts as marked: its text is the key.
        """
        elements: List[ElementLike] = []
        for node in nodes:
            if not is_element_like(node):
                continue
            if isinstance(node, Element) and node.name in self.tag_names:
                elements.append(node)
            elements.extend(self.get_elements_with_translate_tag(node.children))
        return elements

    def get_text_nodes(self, element: ElementLike) -> List[Text]:
        """Direct child nodes of type Text."""
        return [child for child in element.children if isinstance(child, Text)]

    def get_attribute(self, element: ElementLike, name: str) -> Optional[TextAttribute]:
        return next((attribute for attribute in element.attributes if attribute.name == name), None)

    def get_bound_attribute(self, element: ElementLike, name: str) -> Optional[BoundAttribute]:
        return next((bound for bound in element.inputs if bound.name == name), None)

    def get_literal_primitives(self, exp: AST) -> List[LiteralPrimitive]:
        """
        Collect the literal primitives an expression can evaluate to.

        Only literals reachable through the node kinds listed in
        ``nested_expressions`` are found; calls, property reads, unary
        operators and the like are dead ends.
        """
        if isinstance(exp, LiteralPrimitive):
            return [exp]

        results: List[LiteralPrimitive] = []
        for child in nested_expressions(exp):
            results.extend(self.get_literal_primitives(child))
        return results

    def parse_template(self, template: str, path: str) -> List[Node]:
        return parse_template(template, path)


def nested_expressions(exp: AST) -> Sequence[AST]:
    """Sub-expressions that may hold literal keys; empty for every other kind."""
    if isinstance(exp, Interpolation):
        return exp.expressions
    if isinstance(exp, LiteralArray):
        return exp.expressions
    if isinstance(exp, LiteralMap):
        return exp.values
    if isinstance(exp, BindingPipe):
        return [exp.exp]
    if isinstance(exp, Conditional):
        return [exp.true_exp, exp.false_exp]
    if isinstance(exp, Binary):
        return [exp.left, exp.right]
    if isinstance(exp, ASTWithSource):
        return [exp.ast]
    return []


def literal_key(literal: LiteralPrimitive) -> Optional[str]:
    """
    Render a literal as a key the way it is spelled in the template.

    ``null`` and ``undefined`` give no key rather than the strings "null" and "undefined".
    """
    value = literal.value
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _number_text(value)
    return str(value)


def _number_text(value: float) -> str:
    """JavaScript number spelling: ``1``, ``0.00001``, ``1e-7``, ``1e+21``."""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    power = int(exponent)
    if -7 < power < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def is_element_like(node: Node) -> bool:
    return isinstance(node, (Element, Template))


__all__ = ["TagParser", "nested_expressions", "literal_key"]
