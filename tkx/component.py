"""
Helpers for component definition files with inline templates.
"""

from __future__ import annotations

import logging

from .typescript import TypeScriptDocument, ext_of

logger = logging.getLogger(__name__)

COMPONENT_EXTENSIONS = {"ts", "js", "tsx", "jsx"}
COMPONENT_DECORATOR = "Component"
TEMPLATE_PROPERTY = "template"


def is_component_file(path: str) -> bool:
    """True for script files that may hold a component definition."""
    return bool(path) and ext_of(path) in COMPONENT_EXTENSIONS


def extract_inline_template(source: str, path: str = "") -> str:
    """
    Return the raw inline template of the first ``@Component({ template: ... })``.

    The surrounding quotes or backticks are removed; escapes are left as written.
    Returns an empty string when the source defines no inline template.
    """
    doc = TypeScriptDocument(source, ext_of(path) or "ts")

    for captures in doc.query("decorator_properties"):
        name = doc.get_node_text(captures["decorator_name"][0])
        if name.rsplit(".", 1)[-1] != COMPONENT_DECORATOR:
            continue
        key = doc.get_node_text(captures["key"][0]).strip("'\"")
        if key != TEMPLATE_PROPERTY:
            continue
        value = doc.get_node_text(captures["value"][0])
        logger.debug("Inline template found in %s at line %d", path or "<source>", captures["value"][0].start_point[0] + 1)
        return value[1:-1]

    return ""


__all__ = ["is_component_file", "extract_inline_template"]
