"""
End-to-end tests for the tkx command line.
"""

import json


def test_extract_report(tmpproj, cli):
    cp = cli(tmpproj, "extract", "--sort")
    assert cp.returncode == 0, cp.stderr
    data = json.loads(cp.stdout)
    assert data["files"] == 3
    assert data["failed"] == []
    assert "dfa.home.title" in data["keys"]
    assert "dfa.links.help|Help" in data["keys"]
    assert "dfa.links.missing|not-set" not in data["keys"]
    assert data["keys"] == sorted(data["keys"])


def test_extract_to_output_file(tmpproj, cli):
    cp = cli(tmpproj, "extract", "src", "--output", "out/keys.json")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == ""
    data = json.loads((tmpproj / "out" / "keys.json").read_text(encoding="utf-8"))
    assert "dfa.card.title" in data["keys"]


def test_config_file_is_used(tmpproj, cli):
    (tmpproj / "tkx.yaml").write_text("extensions: [.html]\n", encoding="utf-8")
    cp = cli(tmpproj, "extract")
    assert cp.returncode == 0, cp.stderr
    data = json.loads(cp.stdout)
    assert data["files"] == 1


def test_parse_failure_exit_code(tmpproj, cli):
    (tmpproj / "src" / "broken.html").write_text("<div></span></div>", encoding="utf-8")
    cp = cli(tmpproj, "extract")
    assert cp.returncode == 1
    data = json.loads(cp.stdout)
    assert [f["path"] for f in data["failed"]] == ["src/broken.html"]
    assert "Unexpected closing tag" in cp.stderr


def test_invalid_config_exit_code(tmpproj, cli):
    (tmpproj / "tkx.yaml").write_text("bogus: 1\n", encoding="utf-8")
    cp = cli(tmpproj, "extract")
    assert cp.returncode == 2
    assert "unknown key" in cp.stderr


def test_missing_input_path(tmpproj, cli):
    cp = cli(tmpproj, "extract", "does-not-exist")
    assert cp.returncode == 2
    assert "not found" in cp.stderr
