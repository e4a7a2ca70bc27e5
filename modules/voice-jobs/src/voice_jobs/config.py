from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    subagent_delay_min_seconds: float = Field(default=0.1, ge=0.0)
    subagent_delay_max_seconds: float = Field(default=0.3, ge=0.0)
    result_limit: int = Field(default=10, ge=1)
    fallback_job_count: int = Field(default=5, ge=0)
    max_suggestions: int = Field(default=3, ge=0)
    search_keywords_csv: str | None = None
    silence_threshold_seconds: float = Field(default=3.0, gt=0.0)
    speech_rate: float = Field(default=0.9, ge=0.1, le=10.0)
    speech_pitch: float = Field(default=1.0, ge=0.0, le=2.0)
    speech_volume: float = Field(default=0.8, ge=0.0, le=1.0)
    swipe_cooldown_ms: int = Field(default=1000, ge=0)
    static_gesture_cooldown_ms: int = Field(default=1500, ge=0)
    remote_fetch_delay_seconds: float = Field(default=1.0, ge=0.0)
    fetch_retry_attempts: int = Field(default=2, ge=1)
    fetch_retry_delay_seconds: float = Field(default=1.0, ge=0.0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level

    @model_validator(mode="after")
    def _validate_delay_window(self) -> "Settings":
        if self.subagent_delay_max_seconds < self.subagent_delay_min_seconds:
            raise ValueError("SUBAGENT_DELAY_MAX_SECONDS must not be below SUBAGENT_DELAY_MIN_SECONDS")
        return self


def _env_value(environ: Mapping[str, str], key: str) -> str:
    return environ.get(key, "").strip()


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    source = os.environ if environ is None else environ
    try:
        payload = {
            "subagent_delay_min_seconds": float(_env_value(source, "SUBAGENT_DELAY_MIN_SECONDS") or "0.1"),
            "subagent_delay_max_seconds": float(_env_value(source, "SUBAGENT_DELAY_MAX_SECONDS") or "0.3"),
            "result_limit": int(_env_value(source, "RESULT_LIMIT") or "10"),
            "fallback_job_count": int(_env_value(source, "FALLBACK_JOB_COUNT") or "5"),
            "max_suggestions": int(_env_value(source, "MAX_SUGGESTIONS") or "3"),
            "search_keywords_csv": _env_value(source, "SEARCH_KEYWORDS_CSV") or None,
            "silence_threshold_seconds": float(_env_value(source, "SILENCE_THRESHOLD_SECONDS") or "3"),
            "speech_rate": float(_env_value(source, "SPEECH_RATE") or "0.9"),
            "speech_pitch": float(_env_value(source, "SPEECH_PITCH") or "1.0"),
            "speech_volume": float(_env_value(source, "SPEECH_VOLUME") or "0.8"),
            "swipe_cooldown_ms": int(_env_value(source, "SWIPE_COOLDOWN_MS") or "1000"),
            "static_gesture_cooldown_ms": int(_env_value(source, "STATIC_GESTURE_COOLDOWN_MS") or "1500"),
            "remote_fetch_delay_seconds": float(_env_value(source, "REMOTE_FETCH_DELAY_SECONDS") or "1"),
            "fetch_retry_attempts": int(_env_value(source, "FETCH_RETRY_ATTEMPTS") or "2"),
            "fetch_retry_delay_seconds": float(_env_value(source, "FETCH_RETRY_DELAY_SECONDS") or "1"),
            "log_level": _env_value(source, "LOG_LEVEL") or "INFO",
        }
        return Settings(**payload)
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc


_NO_DELAYS = {
    "subagent_delay_min_seconds": 0.0,
    "subagent_delay_max_seconds": 0.0,
    "remote_fetch_delay_seconds": 0.0,
    "fetch_retry_delay_seconds": 0.0,
}


def without_delays(settings: Settings | None = None) -> Settings:
    """Copy of the settings with every simulated delay switched off."""
    return (settings or Settings()).model_copy(update=_NO_DELAYS)
