from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..collection import TranslationCollection


class ParserInterface(ABC):
    """
    Extracts translation keys from the source text of one file.

    ``extract`` returns ``None`` when the file contributes nothing to this
    parser; callers skip merging in that case.
    """

    name: str = ""

    @abstractmethod
    def extract(self, source: str, file_path: str) -> Optional[TranslationCollection]:
        pass


__all__ = ["ParserInterface"]
