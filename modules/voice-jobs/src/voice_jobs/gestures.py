from __future__ import annotations

from enum import Enum

from voice_jobs.config import Settings
from voice_jobs.log import get_logger
from voice_jobs.models import Intent

log = get_logger(__name__)


class Gesture(str, Enum):
    THUMBS_UP = "thumbs-up"
    THUMBS_DOWN = "thumbs-down"
    SWIPE_LEFT = "swipe-left"
    SWIPE_RIGHT = "swipe-right"

    @property
    def is_swipe(self) -> bool:
        return self in (Gesture.SWIPE_LEFT, Gesture.SWIPE_RIGHT)


GESTURE_INTENTS: dict[Gesture, Intent] = {
    Gesture.THUMBS_UP: Intent.SAVE,
    Gesture.SWIPE_RIGHT: Intent.SAVE,
    Gesture.THUMBS_DOWN: Intent.NAVIGATE,
    Gesture.SWIPE_LEFT: Intent.NAVIGATE,
}


def parse_gesture(value: str) -> Gesture:
    try:
        return Gesture(value.strip().lower())
    except ValueError as exc:
        names = ", ".join(gesture.value for gesture in Gesture)
        raise ValueError(f"unknown gesture {value!r}; expected one of {names}") from exc


class GestureGate:
    def __init__(self, swipe_cooldown_ms: int = 1000, static_cooldown_ms: int = 1500) -> None:
        self.swipe_cooldown_ms = swipe_cooldown_ms
        self.static_cooldown_ms = static_cooldown_ms
        self._last_accepted_ms: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GestureGate":
        return cls(settings.swipe_cooldown_ms, settings.static_gesture_cooldown_ms)

    def accept(self, gesture: Gesture, now_ms: float) -> bool:
        cooldown = self.swipe_cooldown_ms if gesture.is_swipe else self.static_cooldown_ms
        # window runs from the last accepted gesture of any kind
        if self._last_accepted_ms is not None and now_ms - self._last_accepted_ms <= cooldown:
            log.debug("gesture %s throttled", gesture.value)
            return False
        self._last_accepted_ms = now_ms
        return True
