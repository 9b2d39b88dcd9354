"""
Template parser: HTML markup with Angular-style bindings → template node tree.

Markup structure comes from tree-sitter-html; attribute names are then
classified by their binding syntax and binding values are parsed with
``tkx.expression``. Malformed markup raises ``TemplateParseError``.
"""

from __future__ import annotations

import html
import logging
import re
from typing import List, Optional, Tuple

from tree_sitter import Language, Node as TsNode

from ..errors import TemplateParseError
from ..expression import ExpressionParseError, ExpressionParser, split_interpolation
from ..tree_sitter_support import TreeSitterDocument
from .nodes import (
    BoundAttribute,
    BoundEvent,
    BoundText,
    Element,
    Node,
    Reference,
    Template,
    Text,
    TextAttribute,
    Variable,
)

logger = logging.getLogger(__name__)

NG_TEMPLATE_TAG = "ng-template"

# Whitespace characters collapsed in text nodes
_WS_CHARS = " \f\n\r\t\v\u1680\u180e\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_WS_RUN_RE = re.compile(f"[{_WS_CHARS}]{{2,}}")

_PROPERTY_PREFIXES = ("attr.", "class.", "style.")

# Nodes whose content never contributes template nodes
_SKIPPED_TYPES = {"comment", "doctype", "script_element", "style_element"}

# Elements whose end tag may be left out (closed by their parent or by end of input)
_OPTIONAL_END_TAGS = {
    "li", "dt", "dd", "rb", "rt", "rtc", "rp", "optgroup", "option",
    "p", "thead", "tbody", "tfoot", "tr", "td", "th",
}
_VOID_ELEMENTS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
}

# Block parameters: @if (a < b) {
_BLOCK_PARAMS_RE = re.compile(r"@(?:if|else\s+if|for|switch|case|defer)\s*\(")


class HtmlDocument(TreeSitterDocument):

    def get_language(self) -> Language:
        import tree_sitter_html as tshtml
        return Language(tshtml.language())

    def get_parse_text(self) -> str:
        # the HTML grammar would read a comparison as the start of a tag
        return mask_expression_brackets(self.text)


def mask_expression_brackets(text: str) -> str:
    """
    Blank out ``<`` and ``>`` inside ``{{ }}`` interpolations and block
    parameters such as ``@if (a < b)``.

    Every replaced character is a single byte, so the result keeps the byte
    offsets of ``text``.
    """
    spans: List[Tuple[int, int]] = []

    parts = split_interpolation(text)
    if parts is not None:
        spans.extend((offset, offset + len(chunk)) for chunk, offset in parts[1])

    for match in _BLOCK_PARAMS_RE.finditer(text):
        end = _find_closing_paren(text, match.end())
        if end >= 0:
            spans.append((match.end(), end))

    if not spans:
        return text

    chars = list(text)
    for start, end in spans:
        for i in range(start, end):
            if chars[i] in "<>":
                chars[i] = " "
    return "".join(chars)


def _find_closing_paren(text: str, start: int) -> int:
    depth = 0
    quote: Optional[str] = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            if depth == 0:
                return i
            depth -= 1
        elif ch == "{":
            # a block body started: the parameter list was never closed
            return -1
        i += 1
    return -1


def parse_template(text: str, path: str = "") -> List[Node]:
    """
    Parse template markup into top-level nodes.

    Args:
        text: Template source
        path: File path, used in error messages only

    Returns:
        Top-level nodes in document order

    Raises:
        TemplateParseError: On malformed markup or an invalid binding expression
    """
    return TemplateBuilder(HtmlDocument(text, "html"), path).build()


class TemplateBuilder:
    """Converts a parsed HTML document into template nodes."""

    def __init__(self, doc: HtmlDocument, path: str = ""):
        self.doc = doc
        self.path = path
        self.expressions = ExpressionParser()

    def build(self) -> List[Node]:
        self._check_errors()
        root = self.doc.root_node
        return self._build_content(root, 0, root.end_byte)

    def _check_errors(self) -> None:
        for node in self.doc.find_nodes_by_type("erroneous_end_tag"):
            name_nodes = [c for c in node.children if c.type == "erroneous_end_tag_name"]
            name = self.doc.get_node_text(name_nodes[0]) if name_nodes else "?"
            raise self._error(f"Unexpected closing tag '{name}'", node)

        if not self.doc.has_error():
            return

        errors = self.doc.get_errors()
        if errors:
            first = errors[0]
            if first.is_missing:
                raise self._error(f"Missing '{first.type}'", first)
            snippet = self.doc.get_node_text(first).strip().splitlines()
            raise self._error(f"Unexpected '{snippet[0] if snippet else first.type}'", first)

        # No visible error node: the grammar is missing implicit end tags at end of input
        for node in self.doc.find_nodes_by_type("element"):
            name = self._unclosed_name(node)
            if name and name not in _OPTIONAL_END_TAGS and name not in _VOID_ELEMENTS:
                raise self._error(f"Unclosed element '{name}'", node)
        logger.debug("%s: end tags closed implicitly at end of input", self.path or "<template>")

    def _unclosed_name(self, node: TsNode) -> Optional[str]:
        """Lower-case tag name of an element written without an end tag, else None."""
        tag_node = node.children[0]
        if tag_node.type != "start_tag" or any(c.type == "end_tag" for c in node.children):
            return None
        name_nodes = [c for c in tag_node.children if c.type == "tag_name"]
        return self.doc.get_node_text(name_nodes[0]).lower() if name_nodes else None

    # ---- Children and text ----

    def _build_content(self, parent: TsNode, start: int, end: int) -> List[Node]:
        nodes: List[Node] = []
        cursor = start

        for child in parent.children:
            if child.type in ("element", *_SKIPPED_TYPES):
                self._flush_text(cursor, child.start_byte, nodes)
                if child.type == "element":
                    nodes.append(self._build_element(child))
                cursor = child.end_byte

        self._flush_text(cursor, end, nodes)
        return nodes

    def _flush_text(self, start: int, end: int, out: List[Node]) -> None:
        if start >= end:
            return
        raw = self.doc.get_byte_range_text(start, end)
        if not raw.strip():
            return

        value = html.unescape(raw)
        try:
            interpolation = self.expressions.parse_interpolation(value)
        except ExpressionParseError as e:
            raise TemplateParseError(f"{e.message} in interpolation '{value.strip()}'", self.path) from e

        if interpolation is not None:
            out.append(BoundText(value=interpolation))
        else:
            out.append(Text(value=_WS_RUN_RE.sub(" ", value)))

    # ---- Elements ----

    def _build_element(self, node: TsNode) -> Node:
        tag_node = node.children[0]
        name_nodes = [c for c in tag_node.children if c.type == "tag_name"]
        tag_name = self.doc.get_node_text(name_nodes[0]) if name_nodes else ""
        line, _column = self.doc.get_position(node)

        end_tags = [c for c in node.children if c.type == "end_tag"]
        if tag_node.type == "self_closing_tag":
            children: List[Node] = []
        else:
            content_end = end_tags[0].start_byte if end_tags else node.end_byte
            children = self._build_content(node, tag_node.end_byte, content_end)

        attrs = _AttributeSet()
        for attr_node in tag_node.children:
            if attr_node.type == "attribute":
                self._classify_attribute(attr_node, attrs)

        result: Node
        if tag_name == NG_TEMPLATE_TAG:
            result = Template(
                tag_name=tag_name,
                attributes=tuple(attrs.attributes),
                inputs=tuple(attrs.inputs),
                outputs=tuple(attrs.outputs),
                references=tuple(attrs.references),
                variables=tuple(attrs.variables),
                children=tuple(children),
                line=line,
            )
        else:
            result = Element(
                name=tag_name,
                attributes=tuple(attrs.attributes),
                inputs=tuple(attrs.inputs),
                outputs=tuple(attrs.outputs),
                references=tuple(attrs.references),
                children=tuple(children),
                line=line,
            )

        if attrs.template_attrs:
            # structural directive: the element lives inside an implicit template
            return Template(
                tag_name=tag_name,
                template_attrs=tuple(attrs.template_attrs),
                children=(result,),
                line=line,
            )
        return result

    def _classify_attribute(self, node: TsNode, attrs: _AttributeSet) -> None:
        name, value = self._attribute_parts(node)

        if name.startswith("*"):
            attrs.template_attrs.append(TextAttribute(name=name[1:], value=value))
        elif name.startswith("[(") and name.endswith(")]"):
            self._add_two_way(name[2:-2], value, node, attrs)
        elif name.startswith("bindon-"):
            self._add_two_way(name[len("bindon-"):], value, node, attrs)
        elif name.startswith("[") and name.endswith("]"):
            attrs.inputs.append(self._bound(_property_name(name[1:-1]), value, node))
        elif name.startswith("bind-"):
            attrs.inputs.append(self._bound(_property_name(name[len("bind-"):]), value, node))
        elif name.startswith("(") and name.endswith(")"):
            attrs.outputs.append(BoundEvent(name=name[1:-1], handler=value))
        elif name.startswith("on-"):
            attrs.outputs.append(BoundEvent(name=name[len("on-"):], handler=value))
        elif name.startswith("#"):
            attrs.references.append(Reference(name=name[1:], value=value))
        elif name.startswith("ref-"):
            attrs.references.append(Reference(name=name[len("ref-"):], value=value))
        elif name.startswith("let-"):
            attrs.variables.append(Variable(name=name[len("let-"):], value=value))
        else:
            interpolation = self._parse(node, name, value, interpolate=True)
            if interpolation is not None:
                attrs.inputs.append(BoundAttribute(name=name, value=interpolation))
            else:
                attrs.attributes.append(TextAttribute(name=name, value=value))

    def _add_two_way(self, name: str, value: str, node: TsNode, attrs: _AttributeSet) -> None:
        attrs.inputs.append(self._bound(name, value, node))
        attrs.outputs.append(BoundEvent(name=f"{name}Change", handler=value))

    def _bound(self, name: str, value: str, node: TsNode) -> BoundAttribute:
        return BoundAttribute(name=name, value=self._parse(node, name, value, interpolate=False))

    def _parse(self, node: TsNode, name: str, value: str, *, interpolate: bool):
        try:
            if interpolate:
                return self.expressions.parse_interpolation(value)
            return self.expressions.parse_binding(value)
        except ExpressionParseError as e:
            raise self._error(f"{e.message} in {name}=\"{value}\"", node) from e

    def _attribute_parts(self, node: TsNode) -> Tuple[str, str]:
        name = ""
        value = ""
        for child in node.children:
            if child.type == "attribute_name":
                name = self.doc.get_node_text(child)
            elif child.type == "attribute_value":
                value = self.doc.get_node_text(child)
            elif child.type == "quoted_attribute_value":
                inner = [c for c in child.children if c.type == "attribute_value"]
                value = self.doc.get_node_text(inner[0]) if inner else ""
        return name, html.unescape(value)

    def _error(self, message: str, node: Optional[TsNode]) -> TemplateParseError:
        if node is None:
            return TemplateParseError(message, self.path)
        line, column = self.doc.get_position(node)
        logger.debug("Template error in %s at %d:%d: %s", self.path or "<template>", line, column, message)
        return TemplateParseError(message, self.path, line, column)


class _AttributeSet:
    """Attributes of one element, grouped by binding kind."""

    def __init__(self):
        self.attributes: List[TextAttribute] = []
        self.inputs: List[BoundAttribute] = []
        self.outputs: List[BoundEvent] = []
        self.references: List[Reference] = []
        self.variables: List[Variable] = []
        self.template_attrs: List[TextAttribute] = []


def _property_name(name: str) -> str:
    for prefix in _PROPERTY_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix):]
    return name


__all__ = ["parse_template", "HtmlDocument", "TemplateBuilder"]
