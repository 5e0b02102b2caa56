"""
Tests for the kcx command-line interface and diagnostics.
"""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from kcextract import __version__
from kcextract.cli import app
from kcextract.diagnostics import CheckResult, collect_diagnostics, summarize_checks

runner = CliRunner()


def write_transcript(path, *entries):
    path.write_text(
        "".join(json.dumps({"t": t, "text": text}) + "\n" for t, text in entries),
        encoding="utf-8",
    )
    return path


class TestCLI:
    """Test CLI commands."""

    def test_version(self):
        """Version flag prints the package version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_analyze_stdout(self, tmp_path):
        """analyze prints the result JSON to stdout."""
        transcript = write_transcript(tmp_path / "t.jsonl", (1, "if (x > 0)"), (2, "return x;"))
        result = runner.invoke(app, [
            "analyze", str(transcript),
            "--url", "https://youtu.be/abc",
            "--title", "C++ basics",
            "--poll-interval", "0",
            "--classifier", str(tmp_path / "missing"),
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["language"] == "cpp"
        assert [c["token"] for c in data["knowledgeComponents"]] == ["If", "Greater", "Return"]

    def test_analyze_output_file(self, tmp_path):
        """analyze writes the result to --output."""
        transcript = write_transcript(tmp_path / "t.jsonl", (3, "while True:"))
        out = tmp_path / "result.json"
        result = runner.invoke(app, [
            "analyze", str(transcript),
            "--url", "https://youtu.be/abc",
            "--title", "Python loops",
            "--poll-interval", "0",
            "--output", str(out),
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["language"] == "python"
        assert data["knowledgeComponents"][0]["timeStamp"] == "https://youtu.be/abc&t=3"

    def test_analyze_unresolved_without_classifier(self, tmp_path):
        """No hint and no classifier leaves the language null."""
        transcript = write_transcript(tmp_path / "t.jsonl", (1, "int main() { return 0; }"))
        result = runner.invoke(app, [
            "analyze", str(transcript),
            "--url", "https://youtu.be/abc",
            "--title", "random title",
            "--poll-interval", "0",
            "--classifier", str(tmp_path / "missing"),
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["language"] is None
        assert data["knowledgeComponents"] == []

    def test_analyze_missing_transcript(self, tmp_path):
        """A missing transcript exits with an error."""
        result = runner.invoke(app, [
            "analyze", str(tmp_path / "nope.jsonl"), "--url", "u",
        ])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_analyze_invalid_transcript(self, tmp_path):
        """A malformed transcript exits with an error."""
        path = tmp_path / "bad.jsonl"
        path.write_text("not json\n", encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path), "--url", "u"])
        assert result.exit_code == 1
        assert "Invalid transcript" in result.output

    def test_classify_hint(self):
        """classify reports the hinted language."""
        result = runner.invoke(app, ["classify", "Intro to Java"])
        assert result.exit_code == 0
        assert "Java" in result.output

    def test_tokens_json(self):
        """tokens --json lists kinds, resolutions and chains."""
        result = runner.invoke(app, ["tokens", "int *p;", "--language", "cpp", "--json"])
        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        assert rows[1]["token"] == "Asterisk"
        assert rows[1]["resolved"] == "Pointer"
        assert rows[1]["chain"] == "Declaration -> Declarator -> Pointer"
        assert rows[2]["chain"] is None

    def test_tokens_table(self):
        """tokens renders a table by default."""
        result = runner.invoke(app, ["tokens", "for x in y:", "--language", "python"])
        assert result.exit_code == 0
        assert "Iteration" in result.output

    def test_tokens_unknown_language(self):
        """An unknown language name is rejected."""
        result = runner.invoke(app, ["tokens", "x", "--language", "cobol"])
        assert result.exit_code != 0

    def test_doctor_json(self, tmp_path):
        """doctor --json lists every check."""
        result = runner.invoke(app, ["doctor", "--json"])
        assert result.exit_code == 0
        names = [c["name"] for c in json.loads(result.stdout)]
        assert "Language classifier" in names
        assert "Typer" in names


class TestDiagnostics:
    """Test environment checks."""

    def test_missing_classifier_warns(self, tmp_path):
        """A missing classifier is a warning."""
        checks = collect_diagnostics(tmp_path / "missing")
        assert checks[0].name == "Language classifier"
        assert checks[0].status == "warn"

    def test_executable_classifier_ok(self, tmp_path):
        """An executable classifier passes."""
        binary = tmp_path / "classifier"
        binary.write_text("#!/bin/sh\necho python\n")
        binary.chmod(0o755)
        assert collect_diagnostics(binary)[0].status == "ok"

    def test_dependencies_available(self):
        """Typer and Rich are installed in the test environment."""
        checks = {c.name: c.status for c in collect_diagnostics()}
        assert checks["Typer"] == "ok"
        assert checks["Rich"] == "ok"

    def test_dependency_detail_names_its_use(self):
        """Dependency checks say what needs them and how to install them."""
        details = {c.name: c.detail for c in collect_diagnostics()}
        assert details["Typer"] == "Typer available for the kcx command line"
        with patch("kcextract.diagnostics._module_available", return_value=False):
            checks = {c.name: c for c in collect_diagnostics()}
        assert checks["Rich"].status == "error"
        assert "pip install rich" in checks["Rich"].detail
        assert "kcx console output" in checks["Rich"].detail

    def test_summarize(self):
        """Statuses are counted per kind."""
        checks = [
            CheckResult("a", "ok", ""),
            CheckResult("b", "warn", ""),
            CheckResult("c", "ok", ""),
        ]
        assert summarize_checks(checks) == {"ok": 2, "warn": 1, "error": 0}
