from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_config
from .engine import run_extract
from .errors import TkxUserError
from .jsonic import dumps as jdumps
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tkx",
        description="Translation key extractor",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_extract = sub.add_parser("extract", help="JSON report: keys found in templates and sources")
    sp_extract.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="files or directories to scan (default: current directory)",
    )
    sp_extract.add_argument(
        "--config",
        type=Path,
        help="configuration file (default: ./tkx.yaml when present)",
    )
    sp_extract.add_argument(
        "--sort",
        action="store_true",
        help="sort keys alphabetically instead of discovery order",
    )
    sp_extract.add_argument(
        "--output", "-o",
        type=Path,
        help="write the report to a file instead of stdout",
    )
    sp_extract.add_argument(
        "--verbose",
        action="store_true",
        help="log progress to stderr",
    )

    return p


def _setup_logging(verbose: bool) -> None:
    log = logging.getLogger("tkx")
    log.setLevel(logging.INFO if verbose else logging.WARNING)
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        log.addHandler(h)


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    try:
        if ns.cmd == "extract":
            _setup_logging(bool(ns.verbose))
            root = Path.cwd()
            cfg = load_config(root, ns.config)
            paths = list(ns.paths) or [root]

            result = run_extract(paths, cfg)
            text = jdumps(result.to_dict(sort=bool(ns.sort)))
            if ns.output:
                ns.output.parent.mkdir(parents=True, exist_ok=True)
                ns.output.write_text(text + "\n", encoding="utf-8")
            else:
                sys.stdout.write(text)
            return 1 if result.failed else 0

    except TkxUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
