"""
Project-wide configuration and directory structure.

This module defines the paths and tunables used throughout kcextract.
The classifier directory is created at import time so the external
language model has a well-known place to live.

Module Contents:
    APP_NAME: Application name for display purposes
    DATA_DIR: Main data directory
    CLASSIFIER_DIR: Directory holding the external language classifier
    CLASSIFIER_BINARY: Executable invoked for model-based language detection
    CLASSIFICATION_THRESHOLD: Characters accumulated before the model is asked
    POLL_INTERVAL: Pause (seconds) after each message the coordinator handles
    MODEL_TIMEOUT: Upper bound (seconds) for one classifier invocation

Environment:
    KCX_CLASSIFIER: Overrides CLASSIFIER_BINARY

Example:
    >>> from kcextract.config import CLASSIFIER_BINARY, CLASSIFICATION_THRESHOLD
    >>> print(f"Model at: {CLASSIFIER_BINARY} (threshold {CLASSIFICATION_THRESHOLD})")
"""

import os
from pathlib import Path

# Application name for display and identification
APP_NAME = "kcextract"

# Main data directory
DATA_DIR = Path(__file__).resolve().parent / "data"

# External language classifier lives here
CLASSIFIER_DIR = DATA_DIR / "classifier"

# Classifier executable, overridable from the environment
CLASSIFIER_BINARY = Path(os.environ.get("KCX_CLASSIFIER", CLASSIFIER_DIR / "classifier"))

# Characters of fragment text accumulated before the model is consulted
CLASSIFICATION_THRESHOLD = 8

# Fixed pause after each processed message (seconds)
POLL_INTERVAL = 0.5

# Upper bound for one classifier invocation (seconds)
MODEL_TIMEOUT = 30.0

# Ensure the classifier directory exists at import time
for d in (DATA_DIR, CLASSIFIER_DIR):
    d.mkdir(parents=True, exist_ok=True)
