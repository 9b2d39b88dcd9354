from __future__ import annotations

from .fs import build_exclude_spec, iter_files, read_text

__all__ = ["build_exclude_spec", "iter_files", "read_text"]
