"""Environment diagnostics for kcextract.

Checks the external language classifier and the Python dependencies so
users get actionable guidance instead of a silently unbound analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
import importlib.util
import os
from pathlib import Path
from typing import Dict, List, Optional

from .config import CLASSIFIER_BINARY


@dataclass
class CheckResult:
    """Represents a diagnostic check with status and human-readable detail."""

    name: str
    status: str  # ok | warn | error
    detail: str


def _module_available(module_name: str) -> bool:
    return importlib.util.find_spec(module_name) is not None


def _check_dependency(
    module: str, friendly: str, purpose: str, package: str, required: bool = False
) -> CheckResult:
    available = _module_available(module)
    status = "ok" if available else ("error" if required else "warn")
    if available:
        detail = f"{friendly} available for {purpose}"
    else:
        detail = f"{friendly} missing; {purpose} needs it (pip install {package})"
    return CheckResult(friendly, status, detail)


def _check_classifier(binary: Path) -> CheckResult:
    name = "Language classifier"
    if not binary.exists():
        return CheckResult(
            name,
            "warn",
            f"Not found at {binary}. Titles without a language name will stay "
            "unresolved; set KCX_CLASSIFIER to the classifier executable.",
        )
    if not binary.is_file() or not os.access(binary, os.X_OK):
        return CheckResult(name, "error", f"{binary} is not an executable file")
    return CheckResult(name, "ok", f"Executable at {binary}")


def collect_diagnostics(classifier_binary: Optional[Path] = None) -> List[CheckResult]:
    """Run a series of lightweight checks and return their results."""

    checks: List[CheckResult] = []
    checks.append(_check_classifier(Path(classifier_binary or CLASSIFIER_BINARY)))
    checks.append(_check_dependency("typer", "Typer", "the kcx command line", "typer", required=True))
    checks.append(_check_dependency("rich", "Rich", "the kcx console output", "rich", required=True))
    return checks


def summarize_checks(checks: List[CheckResult]) -> Dict[str, int]:
    summary = {"ok": 0, "warn": 0, "error": 0}
    for c in checks:
        if c.status in summary:
            summary[c.status] += 1
    return summary
