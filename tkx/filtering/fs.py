from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set

import pathspec


def read_text(path: Path) -> str:
    with path.open(encoding="utf-8", errors="ignore") as f:
        return f.read()


def build_exclude_spec(root: Path, extra: Sequence[str] = ()) -> Optional[pathspec.PathSpec]:
    """
    Build PathSpec from .gitignore plus extra patterns.
    Return None if there is nothing to exclude.
    """
    lines: List[str] = []
    gitignore = root / ".gitignore"
    if gitignore.is_file():
        for ln in gitignore.read_text(encoding="utf-8", errors="ignore").splitlines():
            ln = ln.strip()
            if ln and not ln.startswith("#"):
                lines.append(ln)
    lines.extend(p for p in extra if p.strip())
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def iter_files(
    root: Path,
    *,
    extensions: Set[str],
    spec: Optional[pathspec.PathSpec],
) -> Iterable[Path]:
    """
    Recursive file iterator with exclusion support, in sorted order.
    A file passed as root is yielded when its extension matches.
    """
    root = root.resolve()
    if root.is_file():
        if root.suffix.lower() in extensions:
            yield root
        return

    for dirpath, dirnames, filenames in os.walk(root):
        # Do not enter VCS metadata and dependency folders
        dirnames[:] = sorted(
            d for d in dirnames
            if d not in {".git", "node_modules"}
            and not (spec and spec.match_file(Path(dirpath, d).relative_to(root).as_posix() + "/"))
        )

        for fn in sorted(filenames):
            p = Path(dirpath, fn)
            if p.suffix.lower() not in extensions:
                continue
            if spec and spec.match_file(p.relative_to(root).as_posix()):
                continue
            yield p
