"""Rule-based classification of spoken commands.

Rows of ``INTENT_PATTERNS`` are tried top to bottom against the lower-cased,
trimmed utterance and the first match decides the intent, so the row order is
part of the behaviour: a phrase such as "react developer jobs next week" is a
search because search rows come before the bare ``next`` row.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import Any

from voice_jobs.keywords import DEFAULT_JOB_KEYWORDS, is_job_search_query, normalize_utterance
from voice_jobs.log import get_logger
from voice_jobs.models import CommandContext, Intent, SearchQuery, VoiceCommand
from voice_jobs.narratives import generate_job_analysis, generate_simple_explanation
from voice_jobs.salary import extract_salary_floor

log = get_logger(__name__)

IntentPattern = tuple[Intent, re.Pattern[str]]


def _rows(intent: Intent, *patterns: str) -> list[IntentPattern]:
    return [(intent, re.compile(pattern, re.IGNORECASE)) for pattern in patterns]


INTENT_PATTERNS: tuple[IntentPattern, ...] = tuple(
    _rows(
        Intent.SEARCH,
        r"find\s+jobs?\s+(?:for\s+)?(.+)",
        r"search\s+(?:for\s+)?(.+)",
        r"look\s+for\s+(.+)\s+jobs?",
        r"show\s+me\s+(.+)\s+positions?",
        r"(.+)\s+jobs?\s+in\s+(.+)",
        r"remote\s+(.+)\s+jobs?",
        r"(.+)\s+developer\s+jobs?",
        r"(.+)\s+engineer\s+positions?",
    )
    + _rows(
        Intent.NAVIGATE,
        r"(?:go\s+to\s+)?next\s+job",
        r"next",
        r"(?:go\s+to\s+)?previous\s+job",
        r"previous",
        r"prev",
        r"go\s+back",
        r"show\s+me\s+the\s+next\s+(?:job|position)",
        r"show\s+me\s+the\s+previous\s+(?:job|position)",
    )
    + _rows(
        Intent.SAVE,
        r"save\s+this\s+job",
        r"save\s+(?:this\s+)?position",
        r"bookmark\s+this",
        r"add\s+to\s+favorites",
        r"remember\s+this\s+job",
    )
    + _rows(
        Intent.ANALYZE,
        r"analyze\s+this\s+job",
        r"tell\s+me\s+about\s+this\s+(?:job|position)",
        r"what\s+do\s+you\s+think\s+about\s+this\s+job",
        r"analyze\s+(?:this\s+)?position",
        r"give\s+me\s+insights?\s+(?:about\s+)?(?:this\s+)?job",
        r"evaluate\s+this\s+(?:job|position)",
    )
    + _rows(
        Intent.EXPLAIN,
        r"explain\s+this\s+job",
        r"what\s+does\s+this\s+job\s+do",
        r"simplify\s+this\s+(?:job|position)",
        r"break\s+down\s+this\s+job",
        r"explain\s+(?:this\s+)?position\s+simply",
        r"what\s+would\s+i\s+be\s+doing",
        r"summarize\s+this\s+job",
    )
)

UNKNOWN_RESPONSE = (
    "I didn't understand that command. Try saying 'find React jobs', 'next job', "
    "'save this job', or 'analyze this position'."
)
NO_JOBS_LOADED_RESPONSE = "No jobs are currently loaded. Try searching for positions first."
NOTHING_TO_SAVE_RESPONSE = "There's no job currently selected to save."
NOTHING_TO_ANALYZE_RESPONSE = "There's no job currently selected to analyze. Please search for jobs first."
NOTHING_TO_EXPLAIN_RESPONSE = "There's no job currently selected to explain. Please search for jobs first."

Handler = Callable[[Sequence[Any], str, CommandContext], VoiceCommand]


def navigation_direction(text: str) -> str:
    lowered = text.lower()
    if "next" in lowered:
        return "next"
    if any(word in lowered for word in ("previous", "back", "prev")):
        return "previous"
    return "next"


def search_query_from_parameters(parameters: dict[str, Any]) -> SearchQuery:
    return SearchQuery(
        keywords=parameters.get("keywords", ""),
        location=parameters.get("location"),
        remote=parameters.get("remote"),
        salary_min=parameters.get("salary_min"),
        job_type=parameters.get("job_type"),
    )


def describe_search(query: SearchQuery) -> str:
    parts: list[str] = []
    if query.keywords:
        parts.append(f"searching for {query.keywords} positions")
    if query.location:
        parts.append(f"in {query.location}")
    if query.remote:
        parts.append("with remote work options")
    if query.salary_min:
        parts.append(f"with minimum salary of ${query.salary_min:,}")
    description = " ".join(parts) if parts else "jobs matching your criteria"
    return f"I'm {description}. Let me analyze the available positions using my AI subagents..."


class IntentClassifier:
    def __init__(
        self,
        *,
        patterns: tuple[IntentPattern, ...] = INTENT_PATTERNS,
        job_keywords: tuple[str, ...] = DEFAULT_JOB_KEYWORDS,
    ) -> None:
        self.patterns = patterns
        self.job_keywords = job_keywords
        self._handlers: dict[Intent, Handler] = {
            Intent.SEARCH: self._search,
            Intent.NAVIGATE: self._navigate,
            Intent.SAVE: self._save,
            Intent.ANALYZE: self._analyze,
            Intent.EXPLAIN: self._explain,
        }

    def classify(self, text: str, context: CommandContext) -> VoiceCommand:
        normalized = normalize_utterance(text)

        for intent, pattern in self.patterns:
            match = pattern.search(normalized)
            if match:
                log.debug("matched %s pattern %r for %r", intent.value, pattern.pattern, normalized)
                return self._handlers[intent](match.groups(), text, context)

        if is_job_search_query(normalized, self.job_keywords):
            log.debug("keyword fallback search for %r", normalized)
            return self._search((), text, context)

        log.info("unrecognised command: %r", text)
        return VoiceCommand(
            intent=Intent.UNKNOWN,
            confidence=0.1,
            original_text=text,
            response=UNKNOWN_RESPONSE,
        )

    def _search(self, groups: Sequence[Any], text: str, context: CommandContext) -> VoiceCommand:
        location = ""
        if groups:
            keywords = groups[0].strip()
            if len(groups) == 2 and groups[1]:
                location = groups[1].strip()
        else:
            keywords = text.strip()

        parameters: dict[str, Any] = {"keywords": keywords}
        if location:
            parameters["location"] = location
        if "remote" in text.lower():
            parameters["remote"] = True
        salary_floor = extract_salary_floor(text)
        if salary_floor is not None:
            parameters["salary_min"] = salary_floor

        return VoiceCommand(
            intent=Intent.SEARCH,
            confidence=0.9,
            original_text=text,
            response=describe_search(search_query_from_parameters(parameters)),
            parameters=parameters,
        )

    def _navigate(self, groups: Sequence[Any], text: str, context: CommandContext) -> VoiceCommand:
        direction = navigation_direction(text)
        total = len(context.current_jobs)
        if total == 0:
            return VoiceCommand(
                intent=Intent.NAVIGATE,
                confidence=0.8,
                original_text=text,
                response=NO_JOBS_LOADED_RESPONSE,
                parameters={"direction": direction},
            )

        index = context.current_index
        if direction == "next":
            if index >= total - 1:
                response = f"You're viewing the last job ({total} of {total}). Try searching for more positions."
            else:
                response = f"Moving to the next job ({index + 2} of {total})."
        elif index <= 0:
            response = f"You're viewing the first job. There are {total} jobs total."
        else:
            response = f"Going back to the previous job ({index} of {total})."

        return VoiceCommand(
            intent=Intent.NAVIGATE,
            confidence=0.95,
            original_text=text,
            response=response,
            parameters={"direction": direction},
        )

    def _save(self, groups: Sequence[Any], text: str, context: CommandContext) -> VoiceCommand:
        job = context.selected_job
        if job is None:
            return VoiceCommand(
                intent=Intent.SAVE,
                confidence=0.8,
                original_text=text,
                response=NOTHING_TO_SAVE_RESPONSE,
            )
        return VoiceCommand(
            intent=Intent.SAVE,
            confidence=0.95,
            original_text=text,
            response=f'I\'ve saved the "{job.title}" position at {job.company} to your favorites.',
            parameters={"job_id": job.id},
        )

    def _analyze(self, groups: Sequence[Any], text: str, context: CommandContext) -> VoiceCommand:
        job = context.selected_job
        if job is None:
            return VoiceCommand(
                intent=Intent.ANALYZE,
                confidence=0.8,
                original_text=text,
                response=NOTHING_TO_ANALYZE_RESPONSE,
            )
        return VoiceCommand(
            intent=Intent.ANALYZE,
            confidence=0.9,
            original_text=text,
            response=generate_job_analysis(job),
            parameters={"job_id": job.id},
        )

    def _explain(self, groups: Sequence[Any], text: str, context: CommandContext) -> VoiceCommand:
        job = context.selected_job
        if job is None:
            return VoiceCommand(
                intent=Intent.EXPLAIN,
                confidence=0.8,
                original_text=text,
                response=NOTHING_TO_EXPLAIN_RESPONSE,
            )
        return VoiceCommand(
            intent=Intent.EXPLAIN,
            confidence=0.9,
            original_text=text,
            response=generate_simple_explanation(job),
            parameters={"job_id": job.id},
        )
