"""
Tests for tkx.yaml loading.
"""

import pytest

from tkx.config import ExtractorCfg, load_config
from tkx.errors import ConfigError


def test_defaults_without_file(tmp_path):
    cfg = load_config(tmp_path)
    assert cfg == ExtractorCfg()
    assert cfg.tag_names == ["translate", "public-translate"]
    assert cfg.key_attribute == "key"
    assert cfg.key_prefix == "dfa"
    assert cfg.excluded_markers == ["|http", "|not-set"]
    assert cfg.extensions == [".html", ".ts"]


def test_load_values(tmp_path):
    (tmp_path / "tkx.yaml").write_text(
        "tag_names: [i18n]\n"
        "key_prefix: app\n"
        "extensions: [html, .TS, .js]\n"
        "exclude:\n"
        "  - '**/*.spec.ts'\n",
        encoding="utf-8",
    )
    cfg = load_config(tmp_path)
    assert cfg.tag_names == ["i18n"]
    assert cfg.key_prefix == "app"
    assert cfg.extensions == [".html", ".ts", ".js"]
    assert cfg.exclude == ["**/*.spec.ts"]
    assert cfg.key_attribute == "key"


def test_empty_file_gives_defaults(tmp_path):
    (tmp_path / "tkx.yaml").write_text("", encoding="utf-8")
    assert load_config(tmp_path) == ExtractorCfg()


def test_explicit_path(tmp_path):
    custom = tmp_path / "conf" / "extract.yaml"
    custom.parent.mkdir()
    custom.write_text("key_attribute: code\n", encoding="utf-8")
    assert load_config(tmp_path, custom).key_attribute == "code"


def test_explicit_path_missing(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, tmp_path / "missing.yaml")


@pytest.mark.parametrize("text, message", [
    ("unknown_key: 1\n", "unknown key"),
    ("tag_names: 5\n", "tag_names"),
    ("key_prefix: ''\n", "key_prefix"),
    ("- a\n- b\n", "mapping"),
    ("tag_names: [a\n", "Failed to parse"),
])
def test_invalid_config(tmp_path, text, message):
    (tmp_path / "tkx.yaml").write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)
