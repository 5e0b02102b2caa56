"""
Taxonomy classifiers.

Each grammar module exposes ``classify(window)`` returning a
Classification (resolved token plus category chain) or None to skip.
"""

from kcextract.taxonomy.base import Classification, build_chain
from kcextract.taxonomy import cj, py

__all__ = [
    "Classification",
    "build_chain",
    "cj",
    "py",
]
