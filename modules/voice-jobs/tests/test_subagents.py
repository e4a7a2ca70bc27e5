from dataclasses import replace

from voice_jobs.jobs import JOB_LISTINGS
from voice_jobs.models import (
    KeywordAnalysis,
    LocationAnalysis,
    MatchAnalysis,
    SalaryAnalysis,
    SearchQuery,
    SubagentKind,
)
from voice_jobs.subagents import (
    DEFAULT_SUBAGENTS,
    analyze_keywords,
    analyze_locations,
    analyze_salaries,
    match_jobs,
    score_job,
)


def _ids(jobs) -> list[str]:
    return [job.id for job in jobs]


def test_default_subagents_run_in_fixed_order() -> None:
    assert [kind for kind, _ in DEFAULT_SUBAGENTS] == [
        SubagentKind.KEYWORD_ANALYSIS,
        SubagentKind.JOB_MATCHING,
        SubagentKind.SALARY_ANALYSIS,
        SubagentKind.LOCATION_ANALYSIS,
    ]


def test_analyze_keywords() -> None:
    result = analyze_keywords(SearchQuery(keywords="Senior React developer remote"), JOB_LISTINGS)

    assert result.kind is SubagentKind.KEYWORD_ANALYSIS
    assert result.confidence == 0.85
    assert isinstance(result.result, KeywordAnalysis)
    assert result.result.tech_skills == ("react",)
    assert result.result.experience_level == "senior"
    assert result.result.job_type_preferences == ("remote",)
    assert result.result.processed_keywords == ("senior", "react", "developer", "remote")
    assert result.insights == (
        "Identified 1 technical skills",
        "Experience level: senior",
        "Job type preferences: remote",
    )


def test_analyze_keywords_empty_query() -> None:
    result = analyze_keywords(SearchQuery(), JOB_LISTINGS)

    assert result.result == KeywordAnalysis(
        tech_skills=(),
        experience_level="any",
        job_type_preferences=(),
        processed_keywords=(),
    )
    assert result.insights[-1] == "Job type preferences: none"


def test_match_jobs_ranks_react_remote_search() -> None:
    result = match_jobs(SearchQuery(keywords="react", remote=True), JOB_LISTINGS)

    assert result.confidence == 0.9
    assert isinstance(result.result, MatchAnalysis)
    assert result.result.total_matches == 9
    assert _ids(item.job for item in result.result.ranked) == [
        "3", "5", "1", "6", "4", "7", "8", "9", "10",
    ]
    assert [item.score for item in result.result.ranked][:4] == [70, 55, 30, 30]
    assert result.insights == (
        "Found 9 relevant jobs",
        "Top match: Frontend Developer (React) (Score: 70)",
        "Average relevance score: 29",
    )


def test_match_jobs_keeps_store_order_for_ties() -> None:
    reordered = (JOB_LISTINGS[5], JOB_LISTINGS[0])
    result = match_jobs(SearchQuery(keywords="react", remote=True), reordered)

    assert _ids(item.job for item in result.result.ranked) == ["6", "1"]


def test_match_jobs_is_deterministic() -> None:
    query = SearchQuery(keywords="React developer jobs remote", remote=True)

    assert match_jobs(query, JOB_LISTINGS) == match_jobs(query, JOB_LISTINGS)


def test_match_jobs_with_no_jobs() -> None:
    result = match_jobs(SearchQuery(keywords="react"), ())

    assert result.result == MatchAnalysis(ranked=(), total_matches=0)
    assert result.insights[1:] == ("Top match: None (Score: 0)", "Average relevance score: 0")


def test_score_job_level_bonuses() -> None:
    senior = score_job(JOB_LISTINGS[0], SearchQuery(keywords="senior"))
    junior = score_job(JOB_LISTINGS[9], SearchQuery(keywords="junior"))

    assert senior.score == 80
    assert "Senior level match" in senior.reasons
    assert junior.score == 80
    assert "Junior level match" in junior.reasons


def test_score_job_location_and_remote_preferences() -> None:
    in_austin = score_job(JOB_LISTINGS[2], SearchQuery(keywords="react", location="austin"))
    on_site = score_job(JOB_LISTINGS[1], SearchQuery(keywords="python", remote=False))

    assert in_austin.score == 75
    assert in_austin.reasons[-1] == "Location match"
    assert on_site.score == 30
    assert on_site.reasons == ("1 skill matches", "Remote preference match")


def test_analyze_salaries_over_all_jobs() -> None:
    result = analyze_salaries(SearchQuery(), JOB_LISTINGS)

    assert isinstance(result.result, SalaryAnalysis)
    assert result.confidence == 0.8
    assert result.result.average_salary == 139750
    assert result.result.salary_range == (70000, 220000)
    assert len(result.result.filtered_jobs) == 10
    assert result.insights == (
        "Average salary: $139,750",
        "Salary range: $70,000 - $220,000",
        "10 jobs meet salary expectations",
    )
    assert result.result.salary_insights == (
        "Highest paying: Machine Learning Engineer at AI Innovations Inc.",
        "Entry level range: $70,000 - $90,000",
    )


def test_analyze_salaries_filters_by_maximum() -> None:
    result = analyze_salaries(SearchQuery(salary_min=200000), JOB_LISTINGS)

    assert _ids(result.result.filtered_jobs) == ["2"]
    assert result.result.salary_insights[-1] == "1/10 positions meet your salary expectations"


def test_analyze_salaries_skips_malformed_salaries() -> None:
    jobs = (
        replace(JOB_LISTINGS[1], salary="Competitive"),
        replace(JOB_LISTINGS[2], salary=None),
        JOB_LISTINGS[0],
    )

    unfiltered = analyze_salaries(SearchQuery(), jobs)
    filtered = analyze_salaries(SearchQuery(salary_min=150000), jobs)

    assert unfiltered.result.average_salary == 160000
    assert unfiltered.result.salary_range == (140000, 180000)
    assert len(unfiltered.result.filtered_jobs) == 3
    assert _ids(filtered.result.filtered_jobs) == ["1"]


def test_analyze_salaries_without_data() -> None:
    jobs = (replace(JOB_LISTINGS[0], salary=None),)
    result = analyze_salaries(SearchQuery(), jobs)

    assert result.result.average_salary == 0
    assert result.result.salary_range is None
    assert result.result.salary_insights == ("Limited salary data available",)
    assert result.insights[1] == "Salary range: unavailable"


def test_analyze_locations() -> None:
    result = analyze_locations(SearchQuery(), JOB_LISTINGS)

    assert isinstance(result.result, LocationAnalysis)
    assert result.confidence == 0.9
    assert result.result.remote_count == sum(1 for job in JOB_LISTINGS if job.remote) == 7
    assert result.result.on_site_count == 3
    assert len(result.result.location_distribution) == 10
    assert result.result.top_locations[0] == ("San Francisco, CA", 1)
    assert len(result.result.top_locations) == 5
    assert len(result.result.filtered_jobs) == 10
    assert result.insights == (
        "7 remote positions available",
        "Top location: San Francisco, CA",
        "10 jobs match location preferences",
    )


def test_analyze_locations_filters_by_location_and_remote() -> None:
    local = analyze_locations(SearchQuery(location="new york"), JOB_LISTINGS)
    local_or_remote = analyze_locations(SearchQuery(location="new york", remote=True), JOB_LISTINGS)

    assert _ids(local.result.filtered_jobs) == ["2"]
    assert _ids(local_or_remote.result.filtered_jobs) == ["1", "2", "3", "4", "6", "7", "9", "10"]
