"""Tests for the stylesplit CLI commands."""
from __future__ import annotations

import json

from click.testing import CliRunner

from stylesplit import __version__
from stylesplit.cli.main import cli


def _write(tmp_path, name: str, content: str) -> str:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_help_lists_commands(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "adapt" in result.output
        assert "split" in result.output
        assert "apply" in result.output

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# adapt command
# ---------------------------------------------------------------------------


class TestAdaptCommand:
    def test_adapts_both(self, tmp_path) -> None:
        css = _write(tmp_path, "a.css", "@media (max-device-width: 9px) { a:hover { x: y } }")
        result = CliRunner().invoke(cli, ["adapt", css])
        assert result.exit_code == 0
        assert result.output == "@media (max-width: 9px) { a:hover,\na.\\:hover { x: y } }"

    def test_no_hover(self, tmp_path) -> None:
        css = _write(tmp_path, "a.css", "@media (max-device-width: 9px) { a:hover { x: y } }")
        result = CliRunner().invoke(cli, ["adapt", css, "--no-hover"])
        assert result.output == "@media (max-width: 9px) { a:hover { x: y } }"

    def test_no_media(self, tmp_path) -> None:
        css = _write(tmp_path, "a.css", "@media (max-device-width: 9px) { a { x: y } }")
        result = CliRunner().invoke(cli, ["adapt", css, "--no-media"])
        assert result.output == "@media (max-device-width: 9px) { a { x: y } }"

    def test_extra_pseudo_class(self, tmp_path) -> None:
        css = _write(tmp_path, "a.css", "a:focus { x: y }")
        result = CliRunner().invoke(cli, ["adapt", css, "--pseudo-class", "focus"])
        assert result.output == "a:focus,\na.\\:focus { x: y }"

    def test_missing_file(self, tmp_path) -> None:
        result = CliRunner().invoke(cli, ["adapt", str(tmp_path / "nope.css")])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# split command
# ---------------------------------------------------------------------------


class TestSplitCommand:
    def test_prints_marked_css(self, tmp_path) -> None:
        css = _write(tmp_path, "s.css", ".a { color: red; }.b { color: blue; }")
        fragments = _write(tmp_path, "f.json", json.dumps([".a{color:red}", ".b{color:blue}"]))
        result = CliRunner().invoke(cli, ["split", css, fragments])
        assert result.exit_code == 0
        assert result.output == ".a { color: red; }/* rr_split */.b { color: blue; }"

    def test_json_output(self, tmp_path) -> None:
        css = _write(tmp_path, "s.css", ".a { margin: 0px; }.b { color: blue; }")
        fragments = _write(tmp_path, "f.json", json.dumps([".a{margin:0}", ".b{color:blue}"]))
        result = CliRunner().invoke(cli, ["split", css, fragments, "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [".a { margin: 0px; }", ".b { color: blue; }"]

    def test_bad_fragments_file(self, tmp_path) -> None:
        css = _write(tmp_path, "s.css", ".a {}")
        fragments = _write(tmp_path, "f.json", '{"not": "a list"}')
        result = CliRunner().invoke(cli, ["split", css, fragments])
        assert result.exit_code == 1
        assert "Fragment error" in result.output


# ---------------------------------------------------------------------------
# apply command
# ---------------------------------------------------------------------------


class TestApplyCommand:
    def test_slots(self, tmp_path) -> None:
        marked = _write(tmp_path, "m.css", "a:hov/* rr_split */er { color: red; }")
        result = CliRunner().invoke(cli, ["apply", marked, "--slots", "2", "--allow-invalid"])
        assert result.exit_code == 0
        assert json.loads(result.output) == ["a:hov", "er,\na.\\:hover { color: red; }"]

    def test_slots_without_transforms(self, tmp_path) -> None:
        marked = _write(tmp_path, "m.css", "a:hover {}/* rr_split */b {}")
        result = CliRunner().invoke(
            cli, ["apply", marked, "--slots", "3", "--no-hover", "--no-media"]
        )
        assert json.loads(result.output) == ["a:hover {}", "b {}", ""]

    def test_node(self, tmp_path) -> None:
        marked = _write(tmp_path, "m.css", "a {}/* rr_split */b {}")
        node = {
            "type": "element",
            "tagName": "style",
            "attributes": {},
            "childNodes": [{"type": "text", "textContent": "old"}],
        }
        node_file = _write(tmp_path, "n.json", json.dumps(node))
        result = CliRunner().invoke(cli, ["apply", marked, "--node", node_file])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["childNodes"] == [{"type": "text", "textContent": "a {}b {}"}]

    def test_bad_node(self, tmp_path) -> None:
        marked = _write(tmp_path, "m.css", "a {}")
        node_file = _write(tmp_path, "n.json", json.dumps({"type": "text"}))
        result = CliRunner().invoke(cli, ["apply", marked, "--node", node_file])
        assert result.exit_code == 1
        assert "Snapshot error" in result.output

    def test_requires_exactly_one_target(self, tmp_path) -> None:
        marked = _write(tmp_path, "m.css", "a {}")
        result = CliRunner().invoke(cli, ["apply", marked])
        assert result.exit_code == 2
        assert "exactly one of --slots or --node" in result.output
