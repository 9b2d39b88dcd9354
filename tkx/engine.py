"""
Extraction pipeline: runs every parser over a file set and merges the keys.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .collection import TranslationCollection
from .config import ExtractorCfg
from .errors import TkxUserError
from .filtering import build_exclude_spec, iter_files, read_text
from .parsers import ParserInterface, RegexpParser, TagParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileFailure:
    path: str
    parser: str
    error: str


@dataclass
class ExtractionResult:
    collection: TranslationCollection = field(default_factory=TranslationCollection)
    files: int = 0
    failed: List[FileFailure] = field(default_factory=list)

    def to_dict(self, *, sort: bool = False) -> Dict[str, Any]:
        collection = self.collection.sort() if sort else self.collection
        return {
            "keys": collection.keys(),
            "files": self.files,
            "failed": [{"path": f.path, "parser": f.parser, "error": f.error} for f in self.failed],
        }


def build_parsers(cfg: ExtractorCfg) -> List[ParserInterface]:
    return [
        TagParser(tag_names=cfg.tag_names, key_attribute=cfg.key_attribute),
        RegexpParser(key_prefix=cfg.key_prefix, excluded_markers=cfg.excluded_markers),
    ]


def extract_file(
    source: str,
    file_path: str,
    parsers: Sequence[ParserInterface],
    failed: Optional[List[FileFailure]] = None,
) -> TranslationCollection:
    """
    Run all parsers on one file and merge their keys.

    A parser rejecting the file (malformed markup) is logged and recorded in
    ``failed``; the remaining parsers still run. Without ``failed`` the
    error propagates.
    """
    collection = TranslationCollection()
    for parser in parsers:
        try:
            result = parser.extract(source, file_path)
        except TkxUserError as e:
            if failed is None:
                raise
            logger.warning("%s parser failed on %s: %s", parser.name, file_path, e)
            failed.append(FileFailure(path=file_path, parser=parser.name, error=str(e)))
            continue
        if result is None:
            continue
        collection = collection.union(result)
    return collection


def run_extract(inputs: Sequence[Path], cfg: ExtractorCfg) -> ExtractionResult:
    """
    Extract keys from every matching file under the given inputs.

    Raises:
        TkxUserError: If an input path does not exist
    """
    parsers = build_parsers(cfg)
    extensions = set(cfg.extensions)
    result = ExtractionResult()

    for input_path in inputs:
        if not input_path.exists():
            raise TkxUserError(f"Input path not found: {input_path}")

        base = input_path if input_path.is_dir() else input_path.parent
        spec = build_exclude_spec(base, cfg.exclude)
        for path in iter_files(input_path, extensions=extensions, spec=spec):
            display = _display_path(path)
            keys = extract_file(read_text(path), display, parsers, result.failed)
            result.collection = result.collection.union(keys)
            result.files += 1

    logger.info(
        "Extracted %d key(s) from %d file(s), %d failure(s)",
        result.collection.count(), result.files, len(result.failed),
    )
    return result


def _display_path(path: Path) -> str:
    try:
        return path.relative_to(Path.cwd()).as_posix()
    except ValueError:
        return path.as_posix()


__all__ = ["ExtractionResult", "FileFailure", "build_parsers", "extract_file", "run_extract"]
