from __future__ import annotations

from collections.abc import Callable, Sequence

from voice_jobs.keywords import (
    determine_experience_level,
    extract_job_type_preferences,
    extract_tech_skills,
    split_words,
)
from voice_jobs.models import (
    JobPosting,
    KeywordAnalysis,
    LocationAnalysis,
    MatchAnalysis,
    SalaryAnalysis,
    SalaryBand,
    ScoredJob,
    SearchQuery,
    SubagentKind,
    SubagentResult,
)
from voice_jobs.salary import format_money, salary_band

Subagent = Callable[[SearchQuery, Sequence[JobPosting]], SubagentResult]

KEYWORD_CONFIDENCE = 0.85
MATCHING_CONFIDENCE = 0.9
SALARY_CONFIDENCE = 0.8
LOCATION_CONFIDENCE = 0.9

MATCH_LIMIT = 10
TOP_LOCATION_LIMIT = 5

TITLE_POINTS = 30
TAG_POINTS = 15
DESCRIPTION_POINTS = 10
LOCATION_POINTS = 20
REMOTE_POINTS = 15
LEVEL_POINTS = 25


def analyze_keywords(query: SearchQuery, jobs: Sequence[JobPosting]) -> SubagentResult:
    search_text = (query.keywords or "").lower()
    tech_skills = extract_tech_skills(search_text)
    experience_level = determine_experience_level(search_text)
    preferences = extract_job_type_preferences(search_text)

    return SubagentResult(
        kind=SubagentKind.KEYWORD_ANALYSIS,
        result=KeywordAnalysis(
            tech_skills=tuple(tech_skills),
            experience_level=experience_level,
            job_type_preferences=tuple(preferences),
            processed_keywords=tuple(word for word in split_words(search_text) if len(word) > 2),
        ),
        confidence=KEYWORD_CONFIDENCE,
        insights=(
            f"Identified {len(tech_skills)} technical skills",
            f"Experience level: {experience_level}",
            f"Job type preferences: {', '.join(preferences) or 'none'}",
        ),
    )


def score_job(job: JobPosting, query: SearchQuery) -> ScoredJob:
    search_text = (query.keywords or "").lower()
    words = split_words(search_text)
    title = job.title.lower()
    score = 0
    reasons: list[str] = []

    if search_text in title or any(word in title for word in words):
        score += TITLE_POINTS
        reasons.append("Title match")

    matching_tags = [
        tag for tag in job.tags if tag.lower() in search_text or search_text in tag.lower()
    ]
    score += TAG_POINTS * len(matching_tags)
    if matching_tags:
        reasons.append(f"{len(matching_tags)} skill matches")

    if search_text in job.description.lower():
        score += DESCRIPTION_POINTS
        reasons.append("Description match")

    if query.location and query.location.lower() in job.location.lower():
        score += LOCATION_POINTS
        reasons.append("Location match")

    if query.remote is not None and job.remote == query.remote:
        score += REMOTE_POINTS
        reasons.append("Remote preference match")

    if "senior" in search_text and "senior" in job.tags:
        score += LEVEL_POINTS
        reasons.append("Senior level match")
    elif "junior" in search_text and "junior" in job.tags:
        score += LEVEL_POINTS
        reasons.append("Junior level match")

    return ScoredJob(job=job, score=score, reasons=tuple(reasons))


def match_jobs(query: SearchQuery, jobs: Sequence[JobPosting]) -> SubagentResult:
    scored = [score_job(job, query) for job in jobs]
    # sorted() is stable, so equal scores keep store order
    ranked = sorted((item for item in scored if item.score > 0), key=lambda item: -item.score)

    top = ranked[0] if ranked else None
    average = round(sum(item.score for item in ranked) / len(ranked)) if ranked else 0
    return SubagentResult(
        kind=SubagentKind.JOB_MATCHING,
        result=MatchAnalysis(ranked=tuple(ranked[:MATCH_LIMIT]), total_matches=len(ranked)),
        confidence=MATCHING_CONFIDENCE,
        insights=(
            f"Found {len(ranked)} relevant jobs",
            f"Top match: {top.job.title if top else 'None'} (Score: {top.score if top else 0})",
            f"Average relevance score: {average}",
        ),
    )


def _salary_insights(bands: list[SalaryBand], query: SearchQuery) -> tuple[str, ...]:
    if not bands:
        return ("Limited salary data available",)

    by_average = sorted(bands, key=lambda band: -band.average)
    highest, lowest = by_average[0], by_average[-1]
    insights = [
        f"Highest paying: {highest.job.title} at {highest.job.company}",
        f"Entry level range: {format_money(lowest.minimum)} - {format_money(lowest.maximum)}",
    ]
    if query.salary_min:
        meeting = sum(1 for band in bands if band.maximum >= query.salary_min)
        insights.append(f"{meeting}/{len(bands)} positions meet your salary expectations")
    return tuple(insights)


def analyze_salaries(query: SearchQuery, jobs: Sequence[JobPosting]) -> SubagentResult:
    bands = [band for band in (salary_band(job) for job in jobs) if band is not None]

    if bands:
        average_salary = round(sum(band.average for band in bands) / len(bands))
        salary_range: tuple[int, int] | None = (
            min(band.minimum for band in bands),
            max(band.maximum for band in bands),
        )
        range_text = f"{format_money(salary_range[0])} - {format_money(salary_range[1])}"
    else:
        average_salary = 0
        salary_range = None
        range_text = "unavailable"

    if query.salary_min:
        filtered = tuple(band.job for band in bands if band.maximum >= query.salary_min)
    else:
        filtered = tuple(jobs)

    return SubagentResult(
        kind=SubagentKind.SALARY_ANALYSIS,
        result=SalaryAnalysis(
            average_salary=average_salary,
            salary_range=salary_range,
            filtered_jobs=filtered,
            salary_insights=_salary_insights(bands, query),
        ),
        confidence=SALARY_CONFIDENCE,
        insights=(
            f"Average salary: {format_money(average_salary)}",
            f"Salary range: {range_text}",
            f"{len(filtered)} jobs meet salary expectations",
        ),
    )


def analyze_locations(query: SearchQuery, jobs: Sequence[JobPosting]) -> SubagentResult:
    distribution: dict[str, int] = {}
    for job in jobs:
        distribution[job.location] = distribution.get(job.location, 0) + 1

    remote_count = sum(1 for job in jobs if job.remote)
    top_locations = tuple(
        sorted(distribution.items(), key=lambda item: -item[1])[:TOP_LOCATION_LIMIT]
    )

    if query.location:
        wanted = query.location.lower()
        filtered = tuple(
            job
            for job in jobs
            if wanted in job.location.lower() or (query.remote is True and job.remote)
        )
    else:
        filtered = tuple(jobs)

    return SubagentResult(
        kind=SubagentKind.LOCATION_ANALYSIS,
        result=LocationAnalysis(
            location_distribution=distribution,
            remote_count=remote_count,
            on_site_count=len(jobs) - remote_count,
            filtered_jobs=filtered,
            top_locations=top_locations,
        ),
        confidence=LOCATION_CONFIDENCE,
        insights=(
            f"{remote_count} remote positions available",
            f"Top location: {top_locations[0][0] if top_locations else 'None'}",
            f"{len(filtered)} jobs match location preferences",
        ),
    )


DEFAULT_SUBAGENTS: tuple[tuple[SubagentKind, Subagent], ...] = (
    (SubagentKind.KEYWORD_ANALYSIS, analyze_keywords),
    (SubagentKind.JOB_MATCHING, match_jobs),
    (SubagentKind.SALARY_ANALYSIS, analyze_salaries),
    (SubagentKind.LOCATION_ANALYSIS, analyze_locations),
)
