"""
Pattern parser: finds quoted ``prefix.segment|payload`` keys anywhere in source text.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence

from ..collection import TranslationCollection
from ..typescript import TypeScriptDocument, ext_of
from .base import ParserInterface

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "dfa"
DEFAULT_EXCLUDED_MARKERS = ("|http", "|not-set")


def build_key_regex(prefix: str) -> re.Pattern:
    """``'prefix.a.b|payload'`` or the double-quoted form; group 1 is the key."""
    return re.compile(rf"""['"]({re.escape(prefix)}\.[\w.]+\|[^+]+?)['"]""", re.ASCII)


class RegexpParser(ParserInterface):

    name = "regexp"

    def __init__(
        self,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        excluded_markers: Iterable[str] = DEFAULT_EXCLUDED_MARKERS,
    ):
        self.key_regex = build_key_regex(key_prefix)
        self.excluded_markers: Sequence[str] = tuple(excluded_markers)

    def extract(self, source: str, file_path: str) -> Optional[TranslationCollection]:
        source_text = TypeScriptDocument(source, ext_of(file_path)).text

        keys: List[str] = []
        for match in self.key_regex.finditer(source_text):
            key = match.group(1)
            if any(marker in key for marker in self.excluded_markers):
                continue
            keys.append(key)

        logger.debug("%s: %d key(s) matched", file_path, len(keys))
        collection = TranslationCollection()
        if keys:
            collection = collection.add_keys(keys)
        return collection


__all__ = ["RegexpParser", "build_key_regex", "DEFAULT_KEY_PREFIX", "DEFAULT_EXCLUDED_MARKERS"]
