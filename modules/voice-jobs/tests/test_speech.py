from voice_jobs.config import Settings
from voice_jobs.speech import TranscriptAssembler, build_utterance


def test_transcript_is_released_after_silence() -> None:
    assembler = TranscriptAssembler(silence_seconds=3.0)
    assembler.push("find react", is_final=True, now=0.0)

    assert assembler.poll(2.9) is None
    assert assembler.poll(3.0) == "find react"
    assert assembler.transcript == ""


def test_trailing_interim_text_is_included() -> None:
    assembler = TranscriptAssembler()
    assembler.push("find react", is_final=True, now=0.0)
    assembler.push("jobs", is_final=False, now=1.0)

    assert assembler.transcript == "find react jobs"
    assert assembler.poll(3.0) == "find react jobs"


def test_new_final_segment_extends_deadline() -> None:
    assembler = TranscriptAssembler()
    assembler.push("find react jobs", is_final=True, now=0.0)
    assembler.push("in austin", is_final=True, now=2.0)

    assert assembler.poll(4.0) is None
    assert assembler.poll(5.0) == "find react jobs in austin"


def test_repeated_and_empty_commands_are_dropped() -> None:
    assembler = TranscriptAssembler()
    assembler.push("next job", is_final=True, now=0.0)
    assert assembler.poll(3.0) == "next job"

    assembler.push("next job", is_final=True, now=10.0)
    assert assembler.poll(13.0) is None

    assembler.push("   ", is_final=True, now=20.0)
    assert assembler.poll(30.0) is None


def test_build_utterance_uses_speech_settings() -> None:
    utterance = build_utterance("hello", Settings(speech_rate=1.2, speech_pitch=0.5, speech_volume=1.0))

    assert (utterance.text, utterance.rate, utterance.pitch, utterance.volume) == ("hello", 1.2, 0.5, 1.0)
