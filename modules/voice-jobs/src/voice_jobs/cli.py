from __future__ import annotations

import argparse
import asyncio
import sys
import time
from typing import TextIO

from voice_jobs.config import Settings, load_settings, without_delays
from voice_jobs.dispatcher import CommandDispatcher, application_url
from voice_jobs.gestures import parse_gesture
from voice_jobs.intents import IntentClassifier
from voice_jobs.job_client import JobSearchClient
from voice_jobs.keywords import build_keyword_set
from voice_jobs.log import configure_logging
from voice_jobs.models import CommandContext, Intent, SearchQuery, SearchResult
from voice_jobs.pipeline import perform_search
from voice_jobs.speech import Utterance


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="voice-jobs")
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Skip the simulated processing delays",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Rank the job listings for a query")
    search_parser.add_argument("keywords", nargs="+")
    search_parser.add_argument("--location", default=None)
    search_parser.add_argument("--remote", action="store_true", default=None)
    search_parser.add_argument("--salary-min", type=int, default=None)
    search_parser.add_argument("--job-type", default=None)

    classify_parser = subparsers.add_parser("classify", help="Show how an utterance is interpreted")
    classify_parser.add_argument("text", nargs="+")

    subparsers.add_parser(
        "session",
        help=(
            "Read utterances from stdin; lines starting with '!' are gestures, "
            "'/apply', '/saved' and '/unsave N' manage applications and saved jobs"
        ),
    )

    fetch_parser = subparsers.add_parser("fetch", help="Query the mock remote job search client")
    fetch_parser.add_argument("role")
    fetch_parser.add_argument("--location", default=None)

    return parser


def _print_search_result(result: SearchResult) -> None:
    print(f"{len(result.jobs)} of {result.total_count} matching jobs")
    for position, job in enumerate(result.jobs, start=1):
        remote = "remote" if job.remote else "on-site"
        print(f"{position:>2}. [{job.id}] {job.title} - {job.company} ({job.location}, {remote})")
    if result.search_insights:
        print("")
        print("insights:")
        for insight in result.search_insights:
            print(f"- {insight}")
    if result.suggested_refinements:
        print("")
        print("suggestions:")
        for suggestion in result.suggested_refinements:
            print(f"- {suggestion}")


def _cmd_search(settings: Settings, args: argparse.Namespace) -> int:
    query = SearchQuery(
        keywords=" ".join(args.keywords),
        location=args.location,
        remote=args.remote,
        salary_min=args.salary_min,
        job_type=args.job_type,
    )
    result = asyncio.run(perform_search(query, settings=settings))
    _print_search_result(result)
    return 0


def _cmd_classify(settings: Settings, args: argparse.Namespace) -> int:
    classifier = IntentClassifier(job_keywords=build_keyword_set(settings.search_keywords_csv))
    command = classifier.classify(" ".join(args.text), CommandContext())
    print(f"intent={command.intent.value}", f"confidence={command.confidence:.2f}")
    for name, value in command.parameters.items():
        print(f"{name}={value}")
    print(command.response)
    return 0 if command.intent is not Intent.UNKNOWN else 1


def _print_utterance(utterance: Utterance) -> None:
    print(f"> {utterance.text}")


def _print_saved(dispatcher: CommandDispatcher) -> None:
    for position, job in enumerate(dispatcher.state.saved, start=1):
        link = application_url(job) or "no application link"
        print(f"{position:>2}. {job.title} - {job.company} ({link})")


def _run_session_command(dispatcher: CommandDispatcher, line: str) -> None:
    name, _, argument = line[1:].partition(" ")
    if name == "apply":
        link = dispatcher.apply_to_job()
        if link:
            print(f"open {link}")
    elif name == "saved":
        _print_saved(dispatcher)
    elif name == "unsave":
        keys = dispatcher.state.saved.keys()
        position = int(argument) if argument.strip().isdigit() else 0
        if 1 <= position <= len(keys):
            dispatcher.remove_saved(keys[position - 1])
        else:
            print(f"no saved job {argument.strip()!r}")
    else:
        print(f"unknown session command {name!r}; expected apply, saved or unsave")


async def _run_session(settings: Settings, stdin: TextIO) -> int:
    dispatcher = CommandDispatcher(settings, speaker=_print_utterance)
    for raw_line in stdin:
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith("!"):
            try:
                gesture = parse_gesture(line[1:])
            except ValueError as exc:
                print(exc)
                continue
            await dispatcher.handle_gesture(gesture, time.monotonic() * 1000)
        elif line.startswith("/"):
            _run_session_command(dispatcher, line)
        else:
            await dispatcher.handle_utterance(line)
    print(f"saved jobs: {len(dispatcher.state.saved)}")
    _print_saved(dispatcher)
    return 0


def _cmd_fetch(settings: Settings, args: argparse.Namespace) -> int:
    client = JobSearchClient(settings)
    jobs = asyncio.run(client.search_jobs(args.role, args.location))
    for job in jobs:
        print(f"[{job.id}] {job.title} - {job.company} ({job.location}) {job.url or ''}".rstrip())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
        if args.no_delay:
            settings = without_delays(settings)
        configure_logging(settings.log_level)

        if args.command == "search":
            return _cmd_search(settings, args)
        if args.command == "classify":
            return _cmd_classify(settings, args)
        if args.command == "session":
            return asyncio.run(_run_session(settings, sys.stdin))
        if args.command == "fetch":
            return _cmd_fetch(settings, args)
    except ValueError as exc:
        print(exc)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
