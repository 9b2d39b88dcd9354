"""
Translation key extractor.

Two independent parsers discover translation keys: ``TagParser`` walks
``<translate>`` elements in templates, ``RegexpParser`` scans source text
for quoted ``dfa.*|...`` keys.
"""

from __future__ import annotations

from .collection import TranslationCollection
from .parsers import ParserInterface, RegexpParser, TagParser

__all__ = ["TranslationCollection", "ParserInterface", "RegexpParser", "TagParser"]
