from dataclasses import replace

from voice_jobs.jobs import JOB_LISTINGS
from voice_jobs.narratives import (
    company_goal,
    compensation_tier,
    generate_job_analysis,
    generate_job_summary,
    generate_simple_explanation,
    seniority_label,
)


def test_job_analysis_for_senior_remote_role() -> None:
    analysis = generate_job_analysis(JOB_LISTINGS[0])

    assert analysis.startswith("Here's my analysis of the Senior Full Stack Developer role at TechFlow Solutions: ")
    assert "This is a senior-level position requiring significant experience" in analysis
    assert "The compensation is highly competitive, above market average" in analysis
    assert "You can work remotely, offering great flexibility" in analysis
    assert "The role has moderate requirements, typical for the level" in analysis
    assert "This position uses modern, in-demand technologies" in analysis
    assert "This seems to be an established company offering stability" in analysis
    assert analysis.endswith(
        "The position offers remote work flexibility and appears to be a senior opportunity."
    )


def test_job_analysis_for_startup_role() -> None:
    analysis = generate_job_analysis(JOB_LISTINGS[2])

    assert "This appears to be a mid-level position" in analysis
    assert "The salary range is competitive for this role" in analysis
    assert "The role includes some current technology stack elements" in analysis
    assert "This appears to be a startup environment with potential for rapid growth" in analysis


def test_job_analysis_skips_unparseable_salary() -> None:
    analysis = generate_job_analysis(replace(JOB_LISTINGS[1], salary="Competitive"))

    assert "compensation" not in analysis.lower()
    assert "This is an on-site position requiring office presence" in analysis
    assert analysis.endswith("appears to be a mid-level opportunity.")


def test_compensation_tiers() -> None:
    assert compensation_tier("$70,000 - $90,000") == "This position offers entry to mid-level compensation"
    assert compensation_tier(None) is None


def test_seniority_label() -> None:
    assert seniority_label("Senior Security Engineer") == "senior"
    assert seniority_label("Junior Software Developer") == "junior"
    assert seniority_label("Data Scientist") == "mid-level"


def test_simple_explanation() -> None:
    explanation = generate_simple_explanation(JOB_LISTINGS[0])

    assert explanation == (
        "In simple terms: You'd be a technical person who builds software at TechFlow Solutions. "
        "You can work from home. "
        "This role needs 5+ years of experience and skills in react, nodejs, typescript. "
        "They're offering $140,000 - $180,000 per year. "
        "Your main job would be helping TechFlow Solutions build better products for their users."
    )


def test_simple_explanation_for_on_site_role() -> None:
    explanation = generate_simple_explanation(JOB_LISTINGS[1])

    assert "You'd work in their office." in explanation
    assert explanation.endswith("maintain and improve their technology platform.")


def test_company_goal() -> None:
    assert company_goal("We serve enterprise clients") == "serve their clients and customers better"
    assert company_goal("We crunch data") == "make data-driven decisions"
    assert company_goal("We sell shoes") == "grow their business and achieve their goals"


def test_job_summary() -> None:
    summary = generate_job_summary(JOB_LISTINGS[0])

    assert summary.startswith(
        "This is a senior-level Senior Full Stack Developer position at TechFlow Solutions in "
        "San Francisco, CA. It's a remote role offering $140,000 - $180,000. "
        "Key requirements include react, nodejs, typescript. Join our dynamic team"
    )
    assert summary.endswith("...")


def test_job_summary_with_missing_details() -> None:
    job = replace(JOB_LISTINGS[9], tags=(), salary=None, description="", location="")

    assert generate_job_summary(job) == (
        "This is a entry-level Junior Software Developer position at GrowthPath Technologies in "
        "location not specified. It's a remote role offering salary not disclosed. "
        "Key requirements include various skills. More details are available in the job listing."
    )
