import pytest

from voice_jobs.config import Settings, load_settings, without_delays


def test_load_settings_defaults() -> None:
    settings = load_settings({})

    assert settings == Settings()
    assert settings.subagent_delay_min_seconds == 0.1
    assert settings.subagent_delay_max_seconds == 0.3
    assert settings.result_limit == 10
    assert settings.fallback_job_count == 5
    assert settings.silence_threshold_seconds == 3.0
    assert settings.log_level == "INFO"


def test_load_settings_reads_environment() -> None:
    settings = load_settings(
        {
            "RESULT_LIMIT": "4",
            "SEARCH_KEYWORDS_CSV": "plumber, nurse",
            "SWIPE_COOLDOWN_MS": "250",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.result_limit == 4
    assert settings.search_keywords_csv == "plumber, nurse"
    assert settings.swipe_cooldown_ms == 250
    assert settings.log_level == "DEBUG"


def test_load_settings_rejects_inverted_delay_window() -> None:
    env = {"SUBAGENT_DELAY_MIN_SECONDS": "0.5", "SUBAGENT_DELAY_MAX_SECONDS": "0.2"}

    with pytest.raises(ValueError, match="SUBAGENT_DELAY_MAX_SECONDS"):
        load_settings(env)


def test_load_settings_rejects_out_of_range_values() -> None:
    with pytest.raises(ValueError):
        load_settings({"SPEECH_VOLUME": "1.5"})
    with pytest.raises(ValueError):
        load_settings({"LOG_LEVEL": "verbose"})
    with pytest.raises(ValueError):
        load_settings({"RESULT_LIMIT": "ten"})


def test_without_delays_keeps_other_settings() -> None:
    settings = without_delays(Settings(result_limit=3, remote_fetch_delay_seconds=2.0))

    assert settings.subagent_delay_min_seconds == 0.0
    assert settings.subagent_delay_max_seconds == 0.0
    assert settings.remote_fetch_delay_seconds == 0.0
    assert settings.fetch_retry_delay_seconds == 0.0
    assert settings.result_limit == 3
