"""
Fragment producers.

The video pipeline (frame sampling, code region detection, OCR) is not part
of this package. What it hands the coordinator is a time-ordered series of
OCR'd fragments, which can be stored as a transcript and replayed:

    {"t": 12, "text": "#include <iostream>"}
    {"t": 15, "text": "int main() {"}

One JSON object per line; blank lines are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol
import json
import logging
import time

logger = logging.getLogger("kcx-producer")


class FragmentSink(Protocol):
    def send_fragment(self, text: str, offset: int) -> None: ...

    def send_end(self, offset: int = 0) -> None: ...


@dataclass(frozen=True)
class TranscriptEntry:
    offset: int
    text: str

    def to_dict(self) -> dict:
        return {"t": self.offset, "text": self.text}

    @classmethod
    def from_dict(cls, d: dict) -> TranscriptEntry:
        offset = d["t"]
        text = d["text"]
        if not isinstance(offset, int) or isinstance(offset, bool) or offset < 0:
            raise ValueError(f"'t' must be a non-negative integer, got {offset!r}")
        if not isinstance(text, str):
            raise ValueError(f"'text' must be a string, got {type(text).__name__}")
        return cls(offset, text)


def parse_transcript(lines: Iterable[str]) -> list[TranscriptEntry]:
    """Parse JSON Lines transcript text.

    Raises:
        ValueError: on malformed lines or decreasing offsets; the message
            carries the 1-based line number
    """
    entries: list[TranscriptEntry] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            entry = TranscriptEntry.from_dict(json.loads(line))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"line {lineno}: invalid transcript entry: {exc}") from exc
        if entries and entry.offset < entries[-1].offset:
            raise ValueError(
                f"line {lineno}: offset {entry.offset} is before {entries[-1].offset}"
            )
        entries.append(entry)
    return entries


def load_transcript(path: Path | str) -> list[TranscriptEntry]:
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        return parse_transcript(f)


class TranscriptProducer:
    """Replays transcript entries into a sink, then terminates the stream.

    ``delay`` pauses between fragments to mimic a live OCR producer.
    """

    def __init__(self, entries: Iterable[TranscriptEntry], delay: float = 0.0):
        self.entries = list(entries)
        self.delay = delay

    @classmethod
    def from_path(cls, path: Path | str, delay: float = 0.0) -> TranscriptProducer:
        return cls(load_transcript(path), delay=delay)

    def __call__(self, sink: FragmentSink) -> None:
        last_offset = 0
        for entry in self.entries:
            sink.send_fragment(entry.text, entry.offset)
            last_offset = entry.offset
            if self.delay > 0:
                time.sleep(self.delay)
        logger.debug("Replayed %d fragments", len(self.entries))
        sink.send_end(last_offset)
