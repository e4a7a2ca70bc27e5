from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable, Sequence

from voice_jobs.config import Settings
from voice_jobs.jobs import JOB_LISTINGS
from voice_jobs.log import get_logger
from voice_jobs.models import (
    JobPosting,
    KeywordAnalysis,
    LocationAnalysis,
    MatchAnalysis,
    SalaryAnalysis,
    SearchQuery,
    SearchResult,
    SubagentKind,
    SubagentPayload,
    SubagentResult,
)
from voice_jobs.subagents import DEFAULT_SUBAGENTS, Subagent

log = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]

SUGGEST_SKILLS = 'Try adding specific technical skills (e.g., "React", "Python", "AWS")'
SUGGEST_BROADEN = "Broaden your search terms or consider related technologies"
SUGGEST_LOCATION = "Specify a preferred location or search for remote positions"
SUGGEST_SALARY = "Add salary expectations to see more targeted results"
SUGGEST_REMOTE = "Consider remote positions for more opportunities"

FEW_MATCHES_THRESHOLD = 3
MANY_REMOTE_THRESHOLD = 5


def _safe_run_subagent(
    kind: SubagentKind,
    subagent: Subagent,
    query: SearchQuery,
    jobs: Sequence[JobPosting],
) -> SubagentResult:
    try:
        return subagent(query, jobs)
    except Exception:
        log.exception("subagent %s failed", kind.value)
        return SubagentResult(
            kind=kind,
            result=None,
            confidence=0.0,
            insights=(f"Subagent {kind.value} encountered an error",),
        )


async def run_subagents(
    query: SearchQuery,
    jobs: Sequence[JobPosting],
    *,
    subagents: tuple[tuple[SubagentKind, Subagent], ...] = DEFAULT_SUBAGENTS,
    delay_range: tuple[float, float] = (0.1, 0.3),
    sleep: Sleep = asyncio.sleep,
) -> list[SubagentResult]:
    low, high = delay_range
    results: list[SubagentResult] = []
    for kind, subagent in subagents:
        if high > 0:
            await sleep(random.uniform(low, high))
        result = _safe_run_subagent(kind, subagent, query, jobs)
        log.debug("subagent %s finished with confidence %.2f", kind.value, result.confidence)
        results.append(result)
    return results


def _payload(results: Sequence[SubagentResult], kind: SubagentKind) -> SubagentPayload | None:
    for result in results:
        if result.kind == kind:
            return result.result
    return None


def suggest_refinements(
    results: Sequence[SubagentResult],
    query: SearchQuery,
    *,
    limit: int = 3,
) -> tuple[str, ...]:
    keywords = _payload(results, SubagentKind.KEYWORD_ANALYSIS)
    matches = _payload(results, SubagentKind.JOB_MATCHING)
    locations = _payload(results, SubagentKind.LOCATION_ANALYSIS)

    suggestions: list[str] = []
    if isinstance(keywords, KeywordAnalysis) and not keywords.tech_skills:
        suggestions.append(SUGGEST_SKILLS)
    if isinstance(matches, MatchAnalysis) and matches.total_matches < FEW_MATCHES_THRESHOLD:
        suggestions.append(SUGGEST_BROADEN)
    if not query.location:
        suggestions.append(SUGGEST_LOCATION)
    if not query.salary_min:
        suggestions.append(SUGGEST_SALARY)
    if isinstance(locations, LocationAnalysis) and locations.remote_count > MANY_REMOTE_THRESHOLD:
        suggestions.append(SUGGEST_REMOTE)
    return tuple(suggestions[:limit])


def combine_results(
    results: Sequence[SubagentResult],
    query: SearchQuery,
    jobs: Sequence[JobPosting] = JOB_LISTINGS,
    *,
    result_limit: int = 10,
    fallback_count: int = 5,
    max_suggestions: int = 3,
) -> SearchResult:
    matches = _payload(results, SubagentKind.JOB_MATCHING)
    if isinstance(matches, MatchAnalysis):
        combined = [item.job for item in matches.ranked]
    else:
        log.warning("no job matching result; falling back to the first %d jobs", fallback_count)
        combined = list(jobs[:fallback_count])

    salaries = _payload(results, SubagentKind.SALARY_ANALYSIS)
    if isinstance(salaries, SalaryAnalysis):
        allowed = {job.id for job in salaries.filtered_jobs}
        combined = [job for job in combined if job.id in allowed]

    locations = _payload(results, SubagentKind.LOCATION_ANALYSIS)
    if isinstance(locations, LocationAnalysis):
        allowed = {job.id for job in locations.filtered_jobs}
        combined = [job for job in combined if job.id in allowed]

    return SearchResult(
        jobs=tuple(combined[:result_limit]),
        total_count=len(combined),
        search_insights=tuple(insight for result in results for insight in result.insights),
        suggested_refinements=suggest_refinements(results, query, limit=max_suggestions),
    )


async def perform_search(
    query: SearchQuery,
    jobs: Sequence[JobPosting] = JOB_LISTINGS,
    *,
    settings: Settings | None = None,
    subagents: tuple[tuple[SubagentKind, Subagent], ...] = DEFAULT_SUBAGENTS,
    sleep: Sleep = asyncio.sleep,
) -> SearchResult:
    settings = settings or Settings()
    results = await run_subagents(
        query,
        jobs,
        subagents=subagents,
        delay_range=(settings.subagent_delay_min_seconds, settings.subagent_delay_max_seconds),
        sleep=sleep,
    )
    search_result = combine_results(
        results,
        query,
        jobs,
        result_limit=settings.result_limit,
        fallback_count=settings.fallback_job_count,
        max_suggestions=settings.max_suggestions,
    )
    log.info(
        "search %r returned %d of %d matching jobs",
        query.keywords,
        len(search_result.jobs),
        search_result.total_count,
    )
    return search_result
