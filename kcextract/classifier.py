"""
Programming language detection.

Two strategies, tried by the stream coordinator in this order:

1. classify_by_hint(): cheap case-insensitive substring match on free text,
   normally the video title
2. classify_by_model(): ask an external black-box model about a snippet
   of OCR'd code

The model is any callable taking the snippet and returning a raw label
(``c_cpp``, ``java``, ``python``) or None. The default runs the classifier
executable from config as a subprocess, so tests can inject a fake.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional
import logging
import subprocess

from kcextract.config import CLASSIFIER_BINARY, MODEL_TIMEOUT
from kcextract.models import ProgrammingLanguage

logger = logging.getLogger("kcx-classifier")

LanguageModel = Callable[[str], Optional[str]]

# Raw model labels
MODEL_LABELS = {
    "c_cpp": ProgrammingLanguage.CPP,
    "java": ProgrammingLanguage.JAVA,
    "python": ProgrammingLanguage.PYTHON,
}

# Checked in order; the first substring found wins
HINT_RULES: list[tuple[tuple[str, ...], ProgrammingLanguage]] = [
    (("c++", "cpp"), ProgrammingLanguage.CPP),
    (("java",), ProgrammingLanguage.JAVA),
    (("python",), ProgrammingLanguage.PYTHON),
    (("c ",), ProgrammingLanguage.C),
]


class SubprocessLanguageModel:
    """Runs the external classifier with the snippet as its only argument.

    Any failure (missing executable, non-zero exit, timeout, a snippet the
    OS refuses as an argument, undecodable output) yields None.
    """

    def __init__(self, binary: Path | str = CLASSIFIER_BINARY, timeout: float = MODEL_TIMEOUT):
        self.binary = Path(binary)
        self.timeout = timeout

    def __call__(self, snippet: str) -> Optional[str]:
        try:
            completed = subprocess.run(
                [str(self.binary), snippet],
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Language model timed out after %.1fs", self.timeout)
            return None
        except (OSError, ValueError) as exc:
            # ValueError covers NUL bytes in the snippet and undecodable output
            logger.warning("Language model could not be run (%s): %s", self.binary, exc)
            return None

        if completed.returncode != 0:
            logger.warning(
                "Language model exited with %d: %s",
                completed.returncode, completed.stderr.strip(),
            )
            return None
        return completed.stdout.strip()


class LanguageClassifier:
    """Resolves text to a ProgrammingLanguage."""

    def __init__(self, model: Optional[LanguageModel] = None):
        self.model = model if model is not None else SubprocessLanguageModel()

    @staticmethod
    def classify_by_hint(text: str) -> Optional[ProgrammingLanguage]:
        lowered = text.lower()
        for needles, language in HINT_RULES:
            if any(needle in lowered for needle in needles):
                return language
        return None

    def classify_by_model(self, snippet: str) -> Optional[ProgrammingLanguage]:
        """Ask the model once; unknown labels and failures give None."""
        try:
            label = self.model(snippet)
        except Exception as exc:
            logger.warning("Language model failed: %s", exc)
            return None
        if label is None:
            return None
        language = MODEL_LABELS.get(label.strip())
        if language is None:
            logger.warning("Language model returned unknown label %r", label)
        return language
