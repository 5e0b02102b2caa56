"""
Streaming coordinator: one producer, one consumer, one ordered channel.

The producer (frame sampling + OCR in the full system, a transcript replay
here) pushes ``(Fragment, offset)`` pairs and finally ``(End, offset)``.
The coordinator consumes them on a worker thread:

    hint lookup ──resolved──> Bound ──End──> snapshot
         │
         └─unresolved─> Accumulating ──buffer >= threshold──> ask model once
                              │                                    │
                              └──────────── End ─────> snapshot or empty

The registry and the dispatcher are owned by the coordinator alone; the
producer never touches them.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional
import logging
import queue
import time

from kcextract.classifier import LanguageClassifier, LanguageModel
from kcextract.config import CLASSIFICATION_THRESHOLD, POLL_INTERVAL
from kcextract.models import (
    END,
    AnalysisResult,
    End,
    Fragment,
    KnowledgeComponentRegistry,
    Message,
    ProgrammingLanguage,
    Video,
)
from kcextract.parser import ProtoParser

logger = logging.getLogger("kcx-stream")


class ChannelClosedError(RuntimeError):
    """The producer went away without terminating the stream."""


# ============================================================================
# Channel
# ============================================================================

class _Abort:
    def __init__(self, reason: str):
        self.reason = reason


class Channel:
    """Ordered, unbounded message channel between producer and coordinator."""

    def __init__(self):
        self._queue: queue.Queue = queue.Queue()
        self.ended = False

    def send(self, message: Message, offset: int) -> None:
        self._queue.put((message, offset))
        if isinstance(message, End):
            self.ended = True

    def send_fragment(self, text: str, offset: int) -> None:
        self.send(Fragment(text), offset)

    def send_end(self, offset: int = 0) -> None:
        self.send(END, offset)

    def abort(self, reason: str) -> None:
        """Wake the consumer with a ChannelClosedError."""
        self._queue.put(_Abort(reason))

    def receive(self) -> tuple[Message, int]:
        """Block until the next message arrives."""
        item = self._queue.get()
        if isinstance(item, _Abort):
            raise ChannelClosedError(item.reason)
        return item


# ============================================================================
# Coordinator
# ============================================================================

@dataclass
class CoordinatorConfig:
    """Tunables of the stream coordinator."""
    # Characters buffered before the model is consulted
    threshold: int = CLASSIFICATION_THRESHOLD
    # Pause after each handled message (seconds)
    poll_interval: float = POLL_INTERVAL

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging."""
        return {
            "threshold": self.threshold,
            "poll_interval": self.poll_interval,
        }


@dataclass
class CoordinatorOutcome:
    language: Optional[ProgrammingLanguage]
    registry: KnowledgeComponentRegistry


class StreamCoordinator:
    """Resolves the language lazily and feeds fragments to the bound parser.

    Only the fragment that pushes the buffer over the threshold is sent to
    the model, and the model is asked at most once. Fragments received
    before a language is bound are dropped for good.
    """

    def __init__(
        self,
        video: Video,
        classifier: LanguageClassifier,
        config: Optional[CoordinatorConfig] = None,
    ):
        self.video = video
        self.classifier = classifier
        self.config = config or CoordinatorConfig()

    def run(self, channel: Channel) -> CoordinatorOutcome:
        dispatcher = ProtoParser()
        language = self.classifier.classify_by_hint(self.video.hint)
        if language is not None:
            logger.info("Language resolved from hint %r: %s", self.video.hint, language.value)
            dispatcher.bind(self.video.url, language)
        else:
            logger.info("No language in hint %r, accumulating fragments", self.video.hint)

        armed = language is None
        buffer = ""
        while True:
            message, offset = channel.receive()
            if isinstance(message, End):
                logger.debug("End received at t=%s", offset)
                break

            if armed:
                buffer += message.text
                if len(buffer) >= self.config.threshold:
                    armed = False
                    detected = self.classifier.classify_by_model(message.text)
                    if detected is not None:
                        logger.info("Language resolved by model: %s", detected.value)
                        dispatcher.bind(self.video.url, detected)
                    else:
                        logger.info("Model could not resolve the language")

            logger.debug("Fragment at t=%s (%d chars)", offset, len(message.text))
            dispatcher.parse(message.text, offset)
            if self.config.poll_interval > 0:
                time.sleep(self.config.poll_interval)

        if not dispatcher.is_bound:
            return CoordinatorOutcome(None, KnowledgeComponentRegistry())
        return CoordinatorOutcome(dispatcher.language, dispatcher.snapshot())


# ============================================================================
# Entry Point
# ============================================================================

Producer = Callable[[Channel], None]


def run_analysis(
    video: Video,
    producer: Producer,
    model: Optional[LanguageModel] = None,
    config: Optional[CoordinatorConfig] = None,
) -> AnalysisResult:
    """Run one analysis: producer on this thread, coordinator on a worker.

    Args:
        video: Title (language hint) and URL (time stamp prefix)
        producer: Callable that sends fragments and End into the channel
        model: Language model override; defaults to the external classifier
        config: Coordinator tunables

    Returns:
        AnalysisResult with the resolved language and components

    Raises:
        ChannelClosedError: if the producer returned without sending End
        Exception: whatever the producer raised, after the coordinator stopped
    """
    config = config or CoordinatorConfig()
    logger.debug("Starting analysis of %s with %s", video.url, config.to_dict())
    channel = Channel()
    coordinator = StreamCoordinator(video, LanguageClassifier(model), config)

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="kcx-coordinator") as executor:
        future = executor.submit(coordinator.run, channel)
        try:
            producer(channel)
        except BaseException as exc:
            channel.abort(f"producer failed: {exc!r}")
            raise
        if not channel.ended:
            channel.abort("producer returned without sending End")
        outcome = future.result()

    return AnalysisResult(
        video=video,
        language=outcome.language,
        knowledge_components=outcome.registry,
    )
