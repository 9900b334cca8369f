"""Tests for the check command."""
from __future__ import annotations

import json

from tests.core.graph_test_helpers import build_document, file_record, tag_record


class TestCheckDocument:
    def test_clean_document(self):
        from nestedtags.commands.check_cmd import check_document

        document = build_document({"F.md": file_record(["T"]), "T": tag_record(["F.md"])})

        report = check_document(document, "|")

        assert report.ok
        assert report.to_dict()["ok"] is True

    def test_violations(self):
        from nestedtags.commands.check_cmd import check_document

        document = build_document(
            {"F.md": file_record(["#A|B", "gone"]), "#A|B": tag_record()}
        )

        report = check_document(document, "|")

        assert report.compound_ids == ["#A|B"]
        assert report.broken == ["F.md --> gone (missing)"]
        assert report.asymmetric == ["F.md -> #A|B"]
        assert not report.ok


class TestCheckCommand:
    def test_expanded_output_passes(self, tmp_path, capsys):
        from nestedtags.cli import main

        config = str(tmp_path / "none.toml")
        source = tmp_path / "graph.json"
        source.write_text(
            json.dumps({"F.md": file_record(["#R|L"]), "#R|L": tag_record(["F.md"])}),
            encoding="utf-8",
        )
        out = tmp_path / "out.json"
        assert main(["--config", config, "-q", "expand", str(source), "-o", str(out)]) == 0
        capsys.readouterr()

        rc = main(["--config", config, "check", str(out)])

        assert rc == 0
        assert "✓ Graph is fully expanded and consistent" in capsys.readouterr().out

    def test_unexpanded_input_fails_as_json(self, tmp_path, capsys):
        from nestedtags.cli import main

        source = tmp_path / "graph.json"
        source.write_text(
            json.dumps({"nodes": {"F.md": file_record(["#R|L"]), "#R|L": tag_record(["F.md"])}}),
            encoding="utf-8",
        )

        rc = main(["--config", str(tmp_path / "none.toml"), "check", str(source), "--json"])

        assert rc == 1
        report = json.loads(capsys.readouterr().out)
        assert report["ok"] is False
        assert report["compound_ids"] == ["#R|L"]
