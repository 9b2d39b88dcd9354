from __future__ import annotations

from .load import CFG_FILE, cfg_path, load_config
from .model import ExtractorCfg

__all__ = ["ExtractorCfg", "load_config", "cfg_path", "CFG_FILE"]
