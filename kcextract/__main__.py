"""
Entry point for running kcextract as a module.

Usage:
    python -m kcextract --help
    python -m kcextract analyze transcript.jsonl --url https://youtu.be/abc --title "C++ loops"
    python -m kcextract tokens "for (int i = 0; i < 10; i++)" --language cpp
"""
from .cli import app


if __name__ == "__main__":
    app()
