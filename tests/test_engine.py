"""
Tests for the extraction pipeline.
"""

import pytest

from tkx.collection import TranslationCollection
from tkx.config import ExtractorCfg
from tkx.engine import FileFailure, build_parsers, extract_file, run_extract
from tkx.errors import TemplateParseError, TkxUserError
from tkx.parsers import ParserInterface, RegexpParser, TagParser


class NoInputParser(ParserInterface):
    name = "none"

    def extract(self, source, file_path):
        return None


def test_build_parsers_uses_config():
    parsers = build_parsers(ExtractorCfg(tag_names=["t"], key_prefix="app"))
    assert [type(p) for p in parsers] == [TagParser, RegexpParser]
    assert parsers[0].tag_names == ("t",)


def test_extract_file_merges_parsers():
    source = """<translate key="dfa.a"></translate><b title="dfa.b|B"></b>"""
    result = extract_file(source, "page.html", build_parsers(ExtractorCfg()))
    assert result.keys() == ["dfa.a", "dfa.b|B"]


def test_extract_file_skips_none_results():
    result = extract_file("x", "a.html", [NoInputParser()])
    assert result == TranslationCollection()


def test_extract_file_records_failures():
    failed = []
    source = "<div></span></div> 'dfa.kept|Kept'"
    result = extract_file(source, "bad.html", build_parsers(ExtractorCfg()), failed)
    assert result.keys() == ["dfa.kept|Kept"]
    assert len(failed) == 1
    assert isinstance(failed[0], FileFailure)
    assert failed[0].path == "bad.html"
    assert failed[0].parser == "tag"


def test_extract_file_propagates_without_failure_list():
    with pytest.raises(TemplateParseError):
        extract_file("<div></span></div>", "bad.html", build_parsers(ExtractorCfg()))


def test_run_extract_project(tmpproj, monkeypatch):
    monkeypatch.chdir(tmpproj)
    result = run_extract([tmpproj], ExtractorCfg())
    assert result.files == 3
    assert result.failed == []
    keys = set(result.collection.keys())
    assert keys == {
        "dfa.home.title",
        "dfa.home.new",
        "dfa.home.old",
        "Welcome back",
        "dfa.card.title",
        "dfa.card.label|Card",
        "dfa.links.help|Help",
    }


def test_run_extract_honors_exclude_and_gitignore(tmpproj, monkeypatch):
    monkeypatch.chdir(tmpproj)
    (tmpproj / ".gitignore").write_text("src/app/links.service.ts\n", encoding="utf-8")
    cfg = ExtractorCfg(exclude=["*.html"])
    result = run_extract([tmpproj], cfg)
    assert result.files == 1
    assert set(result.collection.keys()) == {"dfa.card.title", "dfa.card.label|Card"}


def test_run_extract_single_file(tmpproj, monkeypatch):
    monkeypatch.chdir(tmpproj)
    result = run_extract([tmpproj / "src" / "app" / "links.service.ts"], ExtractorCfg())
    assert result.files == 1
    assert result.collection.keys() == ["dfa.links.help|Help"]


def test_run_extract_missing_path(tmp_path):
    with pytest.raises(TkxUserError, match="not found"):
        run_extract([tmp_path / "nope"], ExtractorCfg())


def test_report_dict_sorted(tmpproj, monkeypatch):
    monkeypatch.chdir(tmpproj)
    report = run_extract([tmpproj], ExtractorCfg()).to_dict(sort=True)
    assert report["keys"] == sorted(report["keys"])
    assert report["files"] == 3
    assert report["failed"] == []
