from __future__ import annotations

from .base import ParserInterface
from .regexp import RegexpParser
from .tag import TagParser

__all__ = ["ParserInterface", "RegexpParser", "TagParser"]
