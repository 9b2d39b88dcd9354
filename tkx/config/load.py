from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ConfigError
from .model import ExtractorCfg

logger = logging.getLogger(__name__)

# Single source of truth for the configuration file name.
CFG_FILE = "tkx.yaml"

_YAML = YAML(typ="safe")


def cfg_path(root: Path) -> Path:
    """Path to the configuration file <root>/tkx.yaml."""
    return (root / CFG_FILE).resolve()


def load_config(root: Path, path: Optional[Path] = None) -> ExtractorCfg:
    """
    Load extractor configuration.

    Args:
        root: Project root; ``<root>/tkx.yaml`` is read when present
        path: Explicit config file; it must exist

    Returns:
        Parsed configuration (defaults when no file is found)

    Raises:
        ConfigError: Missing explicit file, invalid YAML or invalid values
    """
    if path is None:
        path = cfg_path(root)
        if not path.is_file():
            logger.debug("No %s in %s, using defaults", CFG_FILE, root)
            return ExtractorCfg()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = _YAML.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return ExtractorCfg.from_dict(raw)


__all__ = ["load_config", "cfg_path", "CFG_FILE"]
