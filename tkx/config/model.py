from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..errors import ConfigError
from ..parsers.regexp import DEFAULT_EXCLUDED_MARKERS, DEFAULT_KEY_PREFIX
from ..parsers.tag import PUBLIC_TRANSLATE_TAG_NAME, TRANSLATE_ATTR_KEY, TRANSLATE_TAG_NAME


# --- helpers ---------------------------------------------------------------
def _assert_only_keys(d: Dict[str, Any] | None, allowed: Iterable[str], *, ctx: str) -> None:
    if d is None:
        return
    allowed_set = set(allowed)
    extra = set(d.keys()) - allowed_set
    if extra:
        raise ConfigError(f"{ctx}: unknown key(s): {', '.join(sorted(extra))}")


def _str_list(d: Dict[str, Any], key: str, default: List[str], *, ctx: str) -> List[str]:
    value = d.get(key, default)
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{ctx}.{key}: expected a list of strings")
    return list(value)


def _str(d: Dict[str, Any], key: str, default: str, *, ctx: str) -> str:
    value = d.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{ctx}.{key}: expected a non-empty string")
    return value


@dataclass
class ExtractorCfg:
    """
    Extractor settings (tkx.yaml).
    """
    # marker element names for the tag parser
    tag_names: List[str] = field(default_factory=lambda: [TRANSLATE_TAG_NAME, PUBLIC_TRANSLATE_TAG_NAME])
    # attribute holding the key on a marker element
    key_attribute: str = TRANSLATE_ATTR_KEY
    # namespace of keys found by the pattern parser
    key_prefix: str = DEFAULT_KEY_PREFIX
    # captures containing any of these are placeholders, not keys
    excluded_markers: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_MARKERS))
    # scanned file extensions
    extensions: List[str] = field(default_factory=lambda: [".html", ".ts"])
    # gitignore-style patterns excluded from scanning
    exclude: List[str] = field(default_factory=list)

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> ExtractorCfg:
        if not d:
            return ExtractorCfg()
        if not isinstance(d, dict):
            raise ConfigError("tkx.yaml: top level must be a mapping")

        ctx = "tkx.yaml"
        _assert_only_keys(
            d,
            ["tag_names", "key_attribute", "key_prefix", "excluded_markers", "extensions", "exclude"],
            ctx=ctx,
        )
        defaults = ExtractorCfg()

        extensions = [
            e.lower() if e.startswith(".") else f".{e.lower()}"
            for e in _str_list(d, "extensions", defaults.extensions, ctx=ctx)
        ]

        return ExtractorCfg(
            tag_names=_str_list(d, "tag_names", defaults.tag_names, ctx=ctx),
            key_attribute=_str(d, "key_attribute", defaults.key_attribute, ctx=ctx),
            key_prefix=_str(d, "key_prefix", defaults.key_prefix, ctx=ctx),
            excluded_markers=_str_list(d, "excluded_markers", defaults.excluded_markers, ctx=ctx),
            extensions=extensions,
            exclude=_str_list(d, "exclude", defaults.exclude, ctx=ctx),
        )


__all__ = ["ExtractorCfg"]
