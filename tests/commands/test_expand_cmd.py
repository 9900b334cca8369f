"""Tests for the expand command."""
from __future__ import annotations

import io
import json

import pytest

from tests.core.graph_test_helpers import file_record, tag_record


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "graph.json"
    path.write_text(
        json.dumps(
            {
                "nodes": {
                    "F.md": file_record(["#Root|Mid|Leaf", "#A||B"]),
                    "#Root|Mid|Leaf": tag_record(["F.md"]),
                    "#A||B": tag_record(["F.md"]),
                }
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def missing_config(tmp_path):
    return tmp_path / "none.toml"


class TestLoadPayload:
    def test_wraps_bare_mapping(self, tmp_path):
        from nestedtags.commands.expand_cmd import load_payload

        path = tmp_path / "bare.json"
        path.write_text(json.dumps({"x": tag_record()}), encoding="utf-8")

        assert load_payload(str(path)) == {"nodes": {"x": tag_record()}}

    def test_rejects_non_object(self, tmp_path):
        from nestedtags.commands.expand_cmd import load_payload

        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError, match="JSON object"):
            load_payload(str(path))

    def test_reads_stdin(self, monkeypatch):
        from nestedtags.commands.expand_cmd import load_payload

        monkeypatch.setattr("sys.stdin", io.StringIO('{"nodes": {}}'))
        assert load_payload("-") == {"nodes": {}}


class TestExpandCommand:
    def test_writes_output_file(self, graph_file, missing_config, tmp_path, capsys):
        from nestedtags.cli import main

        out = tmp_path / "out.json"
        rc = main(["--config", str(missing_config), "expand", str(graph_file), "-o", str(out)])

        assert rc == 0
        nodes = json.loads(out.read_text(encoding="utf-8"))["nodes"]
        assert "#Root|Mid|Leaf" not in nodes
        assert nodes["F.md"]["links"] == {"#A||B": True, "Leaf": True}
        assert nodes["Leaf"]["color"] == "#ea580c"
        err = capsys.readouterr().err
        assert "Expanded 1 compound tag(s), skipped 1" in err
        assert "#A||B: empty segment" in err

    def test_stdout_and_root_target(self, graph_file, missing_config, capsys):
        from nestedtags.cli import main

        rc = main(["--config", str(missing_config), "expand", str(graph_file), "--target", "root"])

        assert rc == 0
        nodes = json.loads(capsys.readouterr().out)["nodes"]
        assert nodes["F.md"]["links"] == {"#A||B": True, "#Root": True}

    def test_no_colors(self, graph_file, missing_config, capsys):
        from nestedtags.cli import main

        main(["--config", str(missing_config), "expand", str(graph_file), "--no-colors"])

        nodes = json.loads(capsys.readouterr().out)["nodes"]
        assert "color" not in nodes["Leaf"]

    def test_quiet_suppresses_summary(self, graph_file, missing_config, capsys):
        from nestedtags.cli import main

        main(["--config", str(missing_config), "-q", "expand", str(graph_file)])

        assert capsys.readouterr().err == ""

    def test_config_target_used(self, graph_file, tmp_path, capsys):
        from nestedtags.cli import main

        config = tmp_path / ".nestedtags.toml"
        config.write_text('[expansion]\ntarget = "root"\n', encoding="utf-8")

        main(["--config", str(config), "expand", str(graph_file)])

        nodes = json.loads(capsys.readouterr().out)["nodes"]
        assert "#Root" in nodes["F.md"]["links"]

    def test_missing_input_reports_error(self, missing_config, tmp_path, capsys):
        from nestedtags.cli import main

        rc = main(["--config", str(missing_config), "expand", str(tmp_path / "nope.json")])

        assert rc == 1
        assert capsys.readouterr().err.startswith("Error:")


class TestVerboseSummary:
    def test_lists_applied_operations(self, graph_file, missing_config, capsys):
        from nestedtags.cli import main

        assert main(["--config", str(missing_config), "-v", "expand", str(graph_file)]) == 0

        err = capsys.readouterr().err
        assert "3 node(s) created" in err
        assert "delete_node(#Root|Mid|Leaf)" in err
