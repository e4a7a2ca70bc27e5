import io

from voice_jobs.cli import main


def test_search_command_prints_ranked_jobs(capsys) -> None:
    exit_code = main(["--no-delay", "search", "react", "--remote"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "9 of 9 matching jobs" in output
    assert " 1. [3] Frontend Developer (React) - StartupXYZ (Austin, TX, remote)" in output
    assert "suggestions:" in output


def test_classify_command(capsys) -> None:
    assert main(["classify", "next", "job"]) == 0
    assert "intent=navigate" in capsys.readouterr().out

    assert main(["classify", "what's", "the", "weather"]) == 1
    assert "intent=unknown" in capsys.readouterr().out


def test_session_command_reads_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("React developer jobs remote\nsave this job\n!wave\nnext job\n"))

    assert main(["--no-delay", "session"]) == 0
    output = capsys.readouterr().out

    assert "> Found 9 jobs." in output
    assert "> Job saved: Frontend Developer (React) at StartupXYZ" in output
    assert "unknown gesture 'wave'" in output
    assert "> Moving to next job:" in output
    assert output.rstrip().endswith(
        "saved jobs: 1\n 1. Frontend Developer (React) - StartupXYZ (no application link)"
    )


def test_fetch_command(capsys) -> None:
    assert main(["--no-delay", "fetch", "designer", "--location", "Austin"]) == 0
    output = capsys.readouterr().out

    assert "[3] UX Designer - Design Studio (Austin, TX) https://example.com/job3" in output


def test_invalid_environment_is_reported(monkeypatch, capsys) -> None:
    monkeypatch.setenv("SPEECH_VOLUME", "3")

    assert main(["classify", "next", "job"]) == 1
    assert "speech_volume" in capsys.readouterr().out


def test_session_commands_apply_list_and_unsave(monkeypatch, capsys) -> None:
    lines = "React developer jobs remote\nsave this job\n/apply\n/saved\n/unsave 1\n/unsave 7\n/open\n"
    monkeypatch.setattr("sys.stdin", io.StringIO(lines))

    assert main(["--no-delay", "session"]) == 0
    output = capsys.readouterr().out

    assert "> Please visit StartupXYZ's website to apply for this position." in output
    assert " 1. Frontend Developer (React) - StartupXYZ (no application link)" in output
    assert "> Removed Frontend Developer (React) at StartupXYZ from saved jobs" in output
    assert "no saved job '7'" in output
    assert "unknown session command 'open'" in output
    assert output.rstrip().endswith("saved jobs: 0")
