from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class Intent(str, Enum):
    SEARCH = "search"
    NAVIGATE = "navigate"
    SAVE = "save"
    ANALYZE = "analyze"
    EXPLAIN = "explain"
    UNKNOWN = "unknown"


class SubagentKind(str, Enum):
    KEYWORD_ANALYSIS = "keyword-analysis"
    JOB_MATCHING = "job-matching"
    SALARY_ANALYSIS = "salary-analysis"
    LOCATION_ANALYSIS = "location-analysis"


@dataclass(frozen=True)
class JobPosting:
    id: str
    title: str
    company: str
    location: str
    type: str
    remote: bool
    description: str
    posted_date: str
    tags: tuple[str, ...] = ()
    salary: str | None = None
    requirements: tuple[str, ...] = ()
    benefits: tuple[str, ...] = ()
    application_deadline: str | None = None
    url: str | None = None
    apply_url: str | None = None


@dataclass(frozen=True)
class SearchQuery:
    keywords: str = ""
    location: str | None = None
    remote: bool | None = None
    salary_min: int | None = None
    job_type: str | None = None


@dataclass(frozen=True)
class KeywordAnalysis:
    tech_skills: tuple[str, ...]
    experience_level: str
    job_type_preferences: tuple[str, ...]
    processed_keywords: tuple[str, ...]


@dataclass(frozen=True)
class ScoredJob:
    job: JobPosting
    score: int
    reasons: tuple[str, ...]


@dataclass(frozen=True)
class MatchAnalysis:
    ranked: tuple[ScoredJob, ...]
    total_matches: int


@dataclass(frozen=True)
class SalaryBand:
    job: JobPosting
    minimum: int
    maximum: int

    @property
    def average(self) -> float:
        return (self.minimum + self.maximum) / 2


@dataclass(frozen=True)
class SalaryAnalysis:
    average_salary: int
    salary_range: tuple[int, int] | None
    filtered_jobs: tuple[JobPosting, ...]
    salary_insights: tuple[str, ...]


@dataclass(frozen=True)
class LocationAnalysis:
    location_distribution: dict[str, int]
    remote_count: int
    on_site_count: int
    filtered_jobs: tuple[JobPosting, ...]
    top_locations: tuple[tuple[str, int], ...]


SubagentPayload = Union[KeywordAnalysis, MatchAnalysis, SalaryAnalysis, LocationAnalysis]


@dataclass(frozen=True)
class SubagentResult:
    kind: SubagentKind
    result: SubagentPayload | None
    confidence: float
    insights: tuple[str, ...]


@dataclass(frozen=True)
class SearchResult:
    jobs: tuple[JobPosting, ...]
    total_count: int
    search_insights: tuple[str, ...]
    suggested_refinements: tuple[str, ...]


@dataclass(frozen=True)
class VoiceCommand:
    intent: Intent
    confidence: float
    original_text: str
    response: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CommandContext:
    current_jobs: tuple[JobPosting, ...] = ()
    current_index: int = 0
    is_search_active: bool = False
    last_query: SearchQuery | None = None

    @property
    def selected_job(self) -> JobPosting | None:
        if 0 <= self.current_index < len(self.current_jobs):
            return self.current_jobs[self.current_index]
        return None
