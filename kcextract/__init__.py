"""
kcextract: knowledge component extraction for coding tutorials

Turns the OCR'd code fragments of a screen-recorded tutorial into a
deduplicated, time-stamped inventory of the programming concepts it shows.

Pipeline:
1. Resolve the language from the video title, or from the code via a model
2. Tokenize each fragment with the C/C++/Java or the Python grammar
3. Classify every token into a concept taxonomy
4. Keep the first time stamp at which each concept appeared
"""

__version__ = "0.1.0"

from kcextract.models import (
    AnalysisResult,
    KnowledgeComponent,
    KnowledgeComponentRegistry,
    ProgrammingLanguage,
    Video,
)
from kcextract.stream import run_analysis

__all__ = [
    "AnalysisResult",
    "KnowledgeComponent",
    "KnowledgeComponentRegistry",
    "ProgrammingLanguage",
    "Video",
    "run_analysis",
]
