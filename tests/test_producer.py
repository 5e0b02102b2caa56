"""
Tests for transcript loading and replay.
"""

import pytest

from kcextract.models import End, Fragment
from kcextract.producer import (
    TranscriptEntry,
    TranscriptProducer,
    load_transcript,
    parse_transcript,
)
from kcextract.stream import Channel


class TestParseTranscript:
    """Test JSON Lines parsing."""

    def test_valid_lines(self):
        """Valid lines parse into entries."""
        entries = parse_transcript([
            '{"t": 1, "text": "int x;"}\n',
            "\n",
            '{"t": 4, "text": "x++;"}\n',
        ])
        assert entries == [TranscriptEntry(1, "int x;"), TranscriptEntry(4, "x++;")]

    def test_invalid_json_reports_line(self):
        """Bad JSON is reported with its line number."""
        with pytest.raises(ValueError, match="line 2"):
            parse_transcript(['{"t": 1, "text": "a"}', "{not json"])

    def test_missing_field(self):
        """Entries need both fields."""
        with pytest.raises(ValueError, match="line 1"):
            parse_transcript(['{"t": 1}'])

    def test_negative_offset(self):
        """Offsets cannot be negative."""
        with pytest.raises(ValueError):
            parse_transcript(['{"t": -1, "text": "a"}'])

    def test_decreasing_offsets(self):
        """Offsets cannot go backwards."""
        with pytest.raises(ValueError, match="before"):
            parse_transcript(['{"t": 5, "text": "a"}', '{"t": 2, "text": "b"}'])

    def test_load_from_file(self, tmp_path):
        """Transcripts load from a file."""
        path = tmp_path / "t.jsonl"
        path.write_text('{"t": 0, "text": "for"}\n', encoding="utf-8")
        assert load_transcript(path) == [TranscriptEntry(0, "for")]


class TestTranscriptProducer:
    """Test replay into a channel."""

    def test_replay_then_end(self):
        """Replay sends every fragment then End."""
        channel = Channel()
        TranscriptProducer([TranscriptEntry(1, "a"), TranscriptEntry(3, "b")])(channel)
        assert channel.receive() == (Fragment("a"), 1)
        assert channel.receive() == (Fragment("b"), 3)
        message, offset = channel.receive()
        assert isinstance(message, End)
        assert offset == 3

    def test_empty_transcript_still_ends(self):
        """An empty transcript still sends End."""
        channel = Channel()
        TranscriptProducer([])(channel)
        assert channel.ended
