"""
Tests for programming language detection.

Tests cover:
- Title heuristics and their precedence
- Model label mapping
- Subprocess model failure handling
"""

import logging
import os
import stat
import subprocess
import sys
from unittest.mock import patch

import pytest

from kcextract.classifier import LanguageClassifier, SubprocessLanguageModel
from kcextract.models import ProgrammingLanguage


def write_script(tmp_path, body):
    script = tmp_path / "classifier"
    script.write_text("#!/bin/sh\n" + body)
    script.chmod(script.stat().st_mode | stat.S_IEXEC)
    return script


class TestClassifyByHint:
    """Test substring heuristics."""

    @pytest.mark.parametrize("title,expected", [
        ("Tutorial on C++ basics", ProgrammingLanguage.CPP),
        ("CPP pointers explained", ProgrammingLanguage.CPP),
        ("Intro to Java", ProgrammingLanguage.JAVA),
        ("Python for beginners", ProgrammingLanguage.PYTHON),
        ("learn c ", ProgrammingLanguage.C),
        ("random title", None),
        ("", None),
    ])
    def test_hint(self, title, expected):
        """Titles map to languages case-insensitively."""
        assert LanguageClassifier.classify_by_hint(title) is expected

    def test_cpp_checked_before_c(self):
        """C++ wins over plain C."""
        assert LanguageClassifier.classify_by_hint("c vs c++") is ProgrammingLanguage.CPP

    def test_java_checked_before_python(self):
        """Java wins over Python."""
        assert LanguageClassifier.classify_by_hint("java or python") is ProgrammingLanguage.JAVA


class TestClassifyByModel:
    """Test model label handling with injected models."""

    @pytest.mark.parametrize("label,expected", [
        ("c_cpp", ProgrammingLanguage.CPP),
        ("java", ProgrammingLanguage.JAVA),
        ("python", ProgrammingLanguage.PYTHON),
        ("python\n", ProgrammingLanguage.PYTHON),
        ("rust", None),
        ("", None),
    ])
    def test_label_mapping(self, label, expected):
        """Raw labels map to languages; unknown labels give None."""
        classifier = LanguageClassifier(model=lambda snippet: label)
        assert classifier.classify_by_model("x = 1") is expected

    def test_model_failure_is_none(self):
        """A model returning None leaves the snippet unclassified."""
        classifier = LanguageClassifier(model=lambda snippet: None)
        assert classifier.classify_by_model("x = 1") is None

    def test_snippet_passed_through(self):
        """The snippet reaches the model unchanged."""
        calls = []

        def model(snippet):
            calls.append(snippet)
            return "java"

        LanguageClassifier(model=model).classify_by_model("class A {}")
        assert calls == ["class A {}"]

    def test_raising_model_is_none(self, caplog):
        """A model that raises gives None and a warning."""
        def model(snippet):
            raise RuntimeError("model crashed")

        with caplog.at_level(logging.WARNING, logger="kcx-classifier"):
            assert LanguageClassifier(model=model).classify_by_model("int x;") is None
        assert "model crashed" in caplog.text


class TestSubprocessLanguageModel:
    """Test the external classifier wrapper."""

    def test_missing_binary(self, tmp_path):
        """A missing executable gives None."""
        model = SubprocessLanguageModel(tmp_path / "nope")
        assert model("int x;") is None

    @pytest.mark.skipif(sys.platform == "win32", reason="shell script classifier")
    def test_strips_stdout(self, tmp_path):
        """Surrounding whitespace is removed from the label."""
        script = write_script(tmp_path, "echo '  c_cpp  '\n")
        assert SubprocessLanguageModel(script)("int x;") == "c_cpp"

    @pytest.mark.skipif(sys.platform == "win32", reason="shell script classifier")
    def test_receives_snippet_as_argument(self, tmp_path):
        """The snippet is the executable's only argument."""
        script = write_script(tmp_path, 'printf "%s" "$1"\n')
        assert SubprocessLanguageModel(script)("print('hi')") == "print('hi')"

    @pytest.mark.skipif(sys.platform == "win32", reason="shell script classifier")
    def test_nonzero_exit(self, tmp_path):
        """Output of a failed run is ignored."""
        script = write_script(tmp_path, "echo java\nexit 3\n")
        assert SubprocessLanguageModel(script)("x") is None

    @pytest.mark.skipif(sys.platform == "win32", reason="shell script classifier")
    def test_nul_byte_in_snippet(self, tmp_path, caplog):
        """OCR text with a NUL byte gives None instead of raising."""
        script = write_script(tmp_path, "echo java\n")
        with caplog.at_level(logging.WARNING, logger="kcx-classifier"):
            assert SubprocessLanguageModel(script)("int\x00 x;") is None
        assert "could not be run" in caplog.text

    @pytest.mark.skipif(sys.platform == "win32", reason="shell script classifier")
    def test_undecodable_output(self, tmp_path):
        """Output that is not UTF-8 gives None instead of raising."""
        script = write_script(tmp_path, "printf '\\377\\376'\n")
        assert SubprocessLanguageModel(script)("int x;") is None

    @pytest.mark.skipif(sys.platform == "win32", reason="shell script classifier")
    def test_nul_byte_through_classifier(self, tmp_path):
        """classify_by_model survives a snippet the OS rejects."""
        script = write_script(tmp_path, "echo c_cpp\n")
        classifier = LanguageClassifier(SubprocessLanguageModel(script))
        assert classifier.classify_by_model("return\x000;") is None

    def test_timeout(self, tmp_path):
        """A model that runs too long gives None."""
        model = SubprocessLanguageModel(tmp_path / "slow", timeout=0.1)
        with patch(
            "kcextract.classifier.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="slow", timeout=0.1),
        ):
            assert model("x") is None

    def test_command_line(self, tmp_path):
        """The executable path, snippet and timeout are passed to subprocess.run."""
        model = SubprocessLanguageModel(tmp_path / "clf", timeout=5)
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="java\n", stderr="")
        with patch("kcextract.classifier.subprocess.run", return_value=completed) as run:
            assert model("snippet") == "java"
        args, kwargs = run.call_args
        assert args[0] == [os.fspath(tmp_path / "clf"), "snippet"]
        assert kwargs["timeout"] == 5
