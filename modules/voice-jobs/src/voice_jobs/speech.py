from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from voice_jobs.config import Settings
from voice_jobs.log import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Utterance:
    text: str
    rate: float = 0.9
    pitch: float = 1.0
    volume: float = 0.8


Speaker = Callable[[Utterance], None]


def build_utterance(text: str, settings: Settings) -> Utterance:
    return Utterance(
        text=text,
        rate=settings.speech_rate,
        pitch=settings.speech_pitch,
        volume=settings.speech_volume,
    )


def log_utterance(utterance: Utterance) -> None:
    log.info("speak: %s", utterance.text)


class TranscriptAssembler:
    def __init__(self, silence_seconds: float = 3.0) -> None:
        self.silence_seconds = silence_seconds
        self._finals: list[str] = []
        self._interim = ""
        self._deadline: float | None = None
        self._last_processed: str | None = None

    @property
    def transcript(self) -> str:
        return " ".join(part for part in [*self._finals, self._interim] if part).strip()

    def push(self, segment: str, *, is_final: bool, now: float) -> None:
        text = segment.strip()
        if is_final:
            if text:
                self._finals.append(text)
                self._deadline = now + self.silence_seconds
            self._interim = ""
        else:
            self._interim = text

    def poll(self, now: float) -> str | None:
        if self._deadline is None or now < self._deadline:
            return None

        command = self.transcript
        self.reset()
        if not command or command == self._last_processed:
            log.debug("dropping repeated or empty transcript %r", command)
            return None
        self._last_processed = command
        return command

    def reset(self) -> None:
        self._finals.clear()
        self._interim = ""
        self._deadline = None
