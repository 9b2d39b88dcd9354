"""
TypeScript source documents backed by tree-sitter-typescript.
"""

from __future__ import annotations

from typing import Dict

from tree_sitter import Language

from .tree_sitter_support import TreeSitterDocument

QUERIES = {
    # Object literal properties passed to a decorator call: @Component({ template: `...` })
    "decorator_properties": """
    (decorator
      (call_expression
        function: (_) @decorator_name
        arguments: (arguments
          (object
            (pair
              key: (_) @key
              value: [(string) (template_string)] @value)))))
    """,
}


class TypeScriptDocument(TreeSitterDocument):

    def get_language(self) -> Language:
        import tree_sitter_typescript as tsts
        if self.ext in ("tsx", "jsx"):
            # TS and TSX have two different grammars in one package
            return Language(tsts.language_tsx())
        return Language(tsts.language_typescript())

    def get_query_definitions(self) -> Dict[str, str]:
        return QUERIES


def ext_of(path: str) -> str:
    """Lower-case extension without the dot ('' when there is none)."""
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


__all__ = ["TypeScriptDocument", "QUERIES", "ext_of"]
