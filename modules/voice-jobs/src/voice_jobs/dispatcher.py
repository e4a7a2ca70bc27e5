from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from functools import partial

from voice_jobs.config import Settings
from voice_jobs.gestures import GESTURE_INTENTS, Gesture, GestureGate
from voice_jobs.intents import (
    NO_JOBS_LOADED_RESPONSE,
    NOTHING_TO_ANALYZE_RESPONSE,
    NOTHING_TO_EXPLAIN_RESPONSE,
    NOTHING_TO_SAVE_RESPONSE,
    IntentClassifier,
    search_query_from_parameters,
)
from voice_jobs.jobs import JOB_LISTINGS
from voice_jobs.keywords import build_keyword_set
from voice_jobs.log import get_logger
from voice_jobs.models import (
    CommandContext,
    Intent,
    JobPosting,
    SearchQuery,
    SearchResult,
    VoiceCommand,
)
from voice_jobs.narratives import (
    generate_job_analysis,
    generate_job_summary,
    generate_simple_explanation,
)
from voice_jobs.pipeline import perform_search
from voice_jobs.saved import SavedJobs
from voice_jobs.speech import Speaker, build_utterance, log_utterance

log = get_logger(__name__)

Searcher = Callable[[SearchQuery], Awaitable[SearchResult]]

END_OF_LIST_MESSAGE = "You have reached the end of the job list."
START_OF_LIST_MESSAGE = "You are at the first job."
ALREADY_SAVED_MESSAGE = "This job is already saved."
NO_RESULTS_MESSAGE = "I couldn't find any jobs matching your criteria. Try a different search."
SEARCH_FAILED_MESSAGE = "Sorry, there was an error searching for jobs. Please try again."
EMPTY_SEARCH_MESSAGE = "Tell me what kind of job to look for."
GESTURE_WITHOUT_JOBS_MESSAGE = "Please search for jobs first before using gestures."
NOTHING_TO_APPLY_MESSAGE = "There's no job currently selected to apply for."


def application_url(job: JobPosting) -> str | None:
    return job.apply_url or job.url


class SessionPhase(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    BROWSING = "browsing"


@dataclass
class SessionState:
    phase: SessionPhase = SessionPhase.IDLE
    jobs: tuple[JobPosting, ...] = ()
    index: int = 0
    saved: SavedJobs = field(default_factory=SavedJobs)
    search_generation: int = 0
    last_query: SearchQuery | None = None
    last_result: SearchResult | None = None

    @property
    def current_job(self) -> JobPosting | None:
        if 0 <= self.index < len(self.jobs):
            return self.jobs[self.index]
        return None


@dataclass(frozen=True)
class DispatchResult:
    intent: Intent
    message: str
    applied: bool = True
    search_result: SearchResult | None = None


class CommandDispatcher:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        jobs: tuple[JobPosting, ...] = JOB_LISTINGS,
        classifier: IntentClassifier | None = None,
        search: Searcher | None = None,
        speaker: Speaker = log_utterance,
        state: SessionState | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.state = state or SessionState()
        self.classifier = classifier or IntentClassifier(
            job_keywords=build_keyword_set(self.settings.search_keywords_csv)
        )
        self.gestures = GestureGate.from_settings(self.settings)
        self._search = search or partial(perform_search, jobs=jobs, settings=self.settings)
        self._speaker = speaker

    def context(self) -> CommandContext:
        return CommandContext(
            current_jobs=self.state.jobs,
            current_index=self.state.index,
            is_search_active=self.state.phase is SessionPhase.SEARCHING,
            last_query=self.state.last_query,
        )

    async def handle_utterance(self, text: str) -> DispatchResult:
        command = self.classifier.classify(text, self.context())
        log.info("utterance %r -> %s (%.2f)", text, command.intent.value, command.confidence)
        return await self.dispatch(command)

    async def handle_gesture(self, gesture: Gesture, now_ms: float) -> DispatchResult | None:
        if not self.gestures.accept(gesture, now_ms):
            return None

        intent = GESTURE_INTENTS[gesture]
        if not self.state.jobs:
            outcome = DispatchResult(intent, GESTURE_WITHOUT_JOBS_MESSAGE, applied=False)
        elif intent is Intent.SAVE:
            outcome = self._save()
        else:
            outcome = self._navigate("next")
        log.info("gesture %s -> %s", gesture.value, intent.value)
        self._speak(outcome.message)
        return outcome

    async def dispatch(self, command: VoiceCommand) -> DispatchResult:
        if command.intent is Intent.SEARCH:
            outcome = await self._run_search(search_query_from_parameters(command.parameters))
        elif command.intent is Intent.NAVIGATE:
            outcome = self._navigate(command.parameters.get("direction", "next"))
        elif command.intent is Intent.SAVE:
            outcome = self._save()
        elif command.intent is Intent.ANALYZE:
            outcome = self._describe(Intent.ANALYZE, generate_job_analysis, NOTHING_TO_ANALYZE_RESPONSE)
        elif command.intent is Intent.EXPLAIN:
            outcome = self._describe(Intent.EXPLAIN, generate_simple_explanation, NOTHING_TO_EXPLAIN_RESPONSE)
        else:
            outcome = DispatchResult(Intent.UNKNOWN, command.response, applied=False)

        if outcome.message:
            self._speak(outcome.message)
        return outcome

    def apply_to_job(self, job: JobPosting | None = None) -> str | None:
        target = job or self.state.current_job
        if target is None:
            self._speak(NOTHING_TO_APPLY_MESSAGE)
            return None

        link = application_url(target)
        if link:
            message = f"Opening application for {target.title} at {target.company}"
        else:
            message = f"Please visit {target.company}'s website to apply for this position."
        log.info("apply to %s at %s: %s", target.title, target.company, link or "no link")
        self._speak(message)
        return link

    def remove_saved(self, key: str) -> str:
        removed = self.state.saved.remove(key)
        if removed is None:
            message = "That job is not in your saved jobs."
        else:
            message = f"Removed {removed.title} at {removed.company} from saved jobs"
        self._speak(message)
        return message

    async def _run_search(self, query: SearchQuery) -> DispatchResult:
        if not query.keywords.strip():
            return DispatchResult(Intent.SEARCH, EMPTY_SEARCH_MESSAGE, applied=False)

        self.state.search_generation += 1
        generation = self.state.search_generation
        self.state.phase = SessionPhase.SEARCHING
        self.state.last_query = query

        try:
            result = await self._search(query)
        except Exception:
            log.exception("search %r failed", query.keywords)
            if generation != self.state.search_generation:
                return DispatchResult(Intent.SEARCH, "", applied=False)
            self.state.phase = SessionPhase.BROWSING if self.state.jobs else SessionPhase.IDLE
            return DispatchResult(Intent.SEARCH, SEARCH_FAILED_MESSAGE, applied=False)

        if generation != self.state.search_generation:
            log.info(
                "discarding result of search %d; search %d is newer",
                generation,
                self.state.search_generation,
            )
            return DispatchResult(Intent.SEARCH, "", applied=False, search_result=result)

        self.state.jobs = result.jobs
        self.state.index = 0
        self.state.last_result = result
        self.state.phase = SessionPhase.BROWSING

        if result.jobs:
            summary = generate_job_summary(result.jobs[0])
            message = f"Found {len(result.jobs)} jobs. Let me tell you about the first one: {summary}"
        else:
            message = NO_RESULTS_MESSAGE
        return DispatchResult(Intent.SEARCH, message, search_result=result)

    def _navigate(self, direction: str) -> DispatchResult:
        total = len(self.state.jobs)
        if total == 0:
            return DispatchResult(Intent.NAVIGATE, NO_JOBS_LOADED_RESPONSE, applied=False)

        if direction == "previous":
            if self.state.index <= 0:
                return DispatchResult(Intent.NAVIGATE, START_OF_LIST_MESSAGE, applied=False)
            self.state.index -= 1
            label = "previous"
        else:
            if self.state.index >= total - 1:
                return DispatchResult(Intent.NAVIGATE, END_OF_LIST_MESSAGE, applied=False)
            self.state.index += 1
            label = "next"

        summary = generate_job_summary(self.state.jobs[self.state.index])
        return DispatchResult(Intent.NAVIGATE, f"Moving to {label} job: {summary}")

    def _save(self) -> DispatchResult:
        job = self.state.current_job
        if job is None:
            return DispatchResult(Intent.SAVE, NOTHING_TO_SAVE_RESPONSE, applied=False)
        if not self.state.saved.add_if_new(job):
            return DispatchResult(Intent.SAVE, ALREADY_SAVED_MESSAGE, applied=False)
        return DispatchResult(Intent.SAVE, f"Job saved: {job.title} at {job.company}")

    def _describe(
        self,
        intent: Intent,
        narrate: Callable[[JobPosting], str],
        nothing_selected: str,
    ) -> DispatchResult:
        job = self.state.current_job
        if job is None:
            return DispatchResult(intent, nothing_selected, applied=False)
        return DispatchResult(intent, narrate(job))

    def _speak(self, text: str) -> None:
        self._speaker(build_utterance(text, self.settings))
