"""
Tree-sitter documents: one parsed source text plus named queries over it.

Subclasses pick the grammar (``get_language``) and may register queries
(``get_query_definitions``). Parsing happens once, in the constructor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Tuple

from tree_sitter import Language, Node, Parser, Query, QueryCursor, Tree


class TreeSitterDocument(ABC):

    def __init__(self, text: str, ext: str):
        self.text = text
        self.ext = ext
        self._text_bytes = text.encode("utf-8")
        self._queries: Dict[str, Query] = {}
        self.tree: Tree = Parser(self.get_language()).parse(self.get_parse_text().encode("utf-8"))

    @abstractmethod
    def get_language(self) -> Language:
        """Grammar used for parsing and for compiling queries."""

    def get_parse_text(self) -> str:
        """
        Text handed to the grammar. Node text is always read from ``text``,
        so an override must keep every byte offset unchanged.
        """
        return self.text

    def get_query_definitions(self) -> Dict[str, str]:
        """Named S-expression queries available through ``query``."""
        return {}

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    # ---- Queries ----

    def query(self, query_name: str) -> List[Dict[str, List[Node]]]:
        """
        Run a named query.

        Returns:
            One dict per match, mapping capture names to captured nodes

        Raises:
            ValueError: If the query is not registered for this document
        """
        compiled = self._queries.get(query_name)
        if compiled is None:
            source = self.get_query_definitions().get(query_name)
            if source is None:
                raise ValueError(f"Unknown query: {query_name}")
            compiled = self._queries[query_name] = Query(self.get_language(), source)

        return [captures for _pattern, captures in QueryCursor(compiled).matches(self.root_node)]

    def walk(self, node: Node | None = None) -> Iterator[Node]:
        """All nodes below ``node`` (default: root), pre-order."""
        stack = [node or self.root_node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def find_nodes_by_type(self, node_type: str) -> List[Node]:
        return [n for n in self.walk() if n.type == node_type]

    # ---- Text and positions ----

    def get_node_text(self, node: Node) -> str:
        return self.get_byte_range_text(node.start_byte, node.end_byte)

    def get_byte_range_text(self, start_byte: int, end_byte: int) -> str:
        return self._text_bytes[start_byte:end_byte].decode("utf-8")

    def get_position(self, node: Node) -> Tuple[int, int]:
        """1-based (line, column) of a node, with the column counted in characters."""
        row, byte_col = node.start_point
        line_start = node.start_byte - byte_col
        column = len(self._text_bytes[line_start:node.start_byte].decode("utf-8", errors="ignore"))
        return row + 1, column + 1

    # ---- Syntax errors ----

    def has_error(self) -> bool:
        return self.root_node.has_error

    def get_errors(self) -> List[Node]:
        """ERROR and MISSING nodes in document order; children of an ERROR node are not listed."""
        results: List[Node] = []
        stack = [self.root_node]
        while stack:
            node = stack.pop()
            if node.is_error or node.is_missing:
                results.append(node)
            elif node.has_error:
                stack.extend(reversed(node.children))
        return results


__all__ = ["TreeSitterDocument"]
