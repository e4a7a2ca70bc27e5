from __future__ import annotations

from voice_jobs.keywords import modern_tech_tags
from voice_jobs.models import JobPosting
from voice_jobs.salary import parse_salary_range


def seniority_label(title: str) -> str:
    lowered = title.lower()
    if "senior" in lowered:
        return "senior"
    if "junior" in lowered:
        return "junior"
    return "mid-level"


def _level_insight(title: str) -> str:
    lowered = title.lower()
    if "senior" in lowered or "lead" in lowered:
        return "This is a senior-level position requiring significant experience"
    if "junior" in lowered or "entry" in lowered:
        return "This is an entry-level position perfect for career starters"
    return "This appears to be a mid-level position"


def compensation_tier(salary: str | None) -> str | None:
    parsed = parse_salary_range(salary)
    if parsed is None:
        return None
    average = (parsed[0] + parsed[1]) / 2
    if average > 150_000:
        return "The compensation is highly competitive, above market average"
    if average > 100_000:
        return "The salary range is competitive for this role"
    return "This position offers entry to mid-level compensation"


def _requirements_insight(requirements: tuple[str, ...]) -> str | None:
    if len(requirements) > 6:
        return "This role has extensive requirements, indicating a complex position"
    if len(requirements) > 3:
        return "The role has moderate requirements, typical for the level"
    return None


def _tech_insight(tags: tuple[str, ...]) -> str | None:
    matched = modern_tech_tags(tags)
    if len(matched) >= 3:
        return "This position uses modern, in-demand technologies"
    if matched:
        return "The role includes some current technology stack elements"
    return None


def _company_insight(company: str) -> str:
    lowered = company.lower()
    if "startup" in lowered or "xyz" in lowered:
        return "This appears to be a startup environment with potential for rapid growth"
    return "This seems to be an established company offering stability"


def generate_job_analysis(job: JobPosting) -> str:
    if job.remote:
        arrangement_insight = "You can work remotely, offering great flexibility"
    else:
        arrangement_insight = "This is an on-site position requiring office presence"
    candidates = (
        _level_insight(job.title),
        compensation_tier(job.salary),
        arrangement_insight,
        _requirements_insight(job.requirements),
        _tech_insight(job.tags),
        _company_insight(job.company),
    )
    insights = [insight for insight in candidates if insight]

    arrangement = "remote work flexibility" if job.remote else "on-site collaboration"
    level = seniority_label(job.title)
    return (
        f"Here's my analysis of the {job.title} role at {job.company}: {'. '.join(insights)}. "
        f"The position offers {arrangement} and appears to be a {level} opportunity."
    )


def _role_type(title: str) -> str:
    lowered = title.lower()
    if "developer" in lowered or "engineer" in lowered:
        return "technical person who builds software"
    if "designer" in lowered:
        return "creative person who designs user interfaces"
    if "data scientist" in lowered:
        return "analyst who finds insights in data"
    if "manager" in lowered:
        return "leader who guides teams and projects"
    return "professional"


def _experience_needed(title: str) -> str:
    lowered = title.lower()
    if "senior" in lowered:
        return "5+ years of experience"
    if "junior" in lowered or "entry" in lowered:
        return "little to no experience required"
    return "some experience"


def company_goal(description: str) -> str:
    lowered = description.lower()
    if "user" in lowered and "product" in lowered:
        return "build better products for their users"
    if "platform" in lowered or "system" in lowered:
        return "maintain and improve their technology platform"
    if "client" in lowered or "customer" in lowered:
        return "serve their clients and customers better"
    if "data" in lowered or "analytics" in lowered:
        return "make data-driven decisions"
    return "grow their business and achieve their goals"


def generate_simple_explanation(job: JobPosting) -> str:
    main_tech = ", ".join(job.tags[:3])
    skills = f" and skills in {main_tech}" if main_tech else ""
    workplace = "You can work from home. " if job.remote else "You'd work in their office. "
    pay = f"They're offering {job.salary} per year. " if job.salary else ""
    return (
        f"In simple terms: You'd be a {_role_type(job.title)} at {job.company}. "
        f"{workplace}"
        f"This role needs {_experience_needed(job.title)}{skills}. "
        f"{pay}"
        f"Your main job would be helping {job.company} {company_goal(job.description)}."
    )


def generate_job_summary(job: JobPosting) -> str:
    """Short spoken overview read out after a search and when moving between jobs."""
    lowered = job.title.lower()
    if "senior" in lowered:
        role_level = "senior-level"
    elif "junior" in lowered:
        role_level = "entry-level"
    else:
        role_level = "mid-level"

    work_style = "remote" if job.remote else "on-site"
    location = job.location or "location not specified"
    salary = job.salary or "salary not disclosed"
    skills = ", ".join(job.tags[:3]) if job.tags else "various skills"
    details = (
        f"{job.description[:100]}..."
        if job.description
        else "More details are available in the job listing."
    )
    return (
        f"This is a {role_level} {job.title} position at {job.company} in {location}. "
        f"It's a {work_style} role offering {salary}. "
        f"Key requirements include {skills}. "
        f"{details}"
    )
