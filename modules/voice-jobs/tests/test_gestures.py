import pytest

from voice_jobs.config import Settings
from voice_jobs.gestures import GESTURE_INTENTS, Gesture, GestureGate, parse_gesture
from voice_jobs.models import Intent


def test_gesture_intents() -> None:
    assert GESTURE_INTENTS[Gesture.THUMBS_UP] is Intent.SAVE
    assert GESTURE_INTENTS[Gesture.SWIPE_RIGHT] is Intent.SAVE
    assert GESTURE_INTENTS[Gesture.THUMBS_DOWN] is Intent.NAVIGATE
    assert GESTURE_INTENTS[Gesture.SWIPE_LEFT] is Intent.NAVIGATE


def test_parse_gesture() -> None:
    assert parse_gesture(" Thumbs-Up ") is Gesture.THUMBS_UP
    with pytest.raises(ValueError, match="unknown gesture"):
        parse_gesture("wave")


def test_gate_uses_cooldown_of_incoming_gesture() -> None:
    gate = GestureGate(swipe_cooldown_ms=1000, static_cooldown_ms=1500)

    assert gate.accept(Gesture.THUMBS_UP, 0)
    assert not gate.accept(Gesture.SWIPE_LEFT, 1000)
    assert gate.accept(Gesture.SWIPE_LEFT, 1001)
    assert not gate.accept(Gesture.THUMBS_DOWN, 2000)
    assert gate.accept(Gesture.THUMBS_DOWN, 2502)


def test_gate_from_settings() -> None:
    gate = GestureGate.from_settings(Settings(swipe_cooldown_ms=10, static_gesture_cooldown_ms=20))

    assert gate.accept(Gesture.SWIPE_RIGHT, 0)
    assert gate.accept(Gesture.SWIPE_RIGHT, 11)
    assert not gate.accept(Gesture.THUMBS_UP, 31)
    assert gate.accept(Gesture.THUMBS_UP, 32)
