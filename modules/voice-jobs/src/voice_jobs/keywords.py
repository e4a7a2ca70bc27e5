from __future__ import annotations

import re

DEFAULT_JOB_KEYWORDS = (
    "developer",
    "engineer",
    "designer",
    "manager",
    "analyst",
    "scientist",
    "react",
    "python",
    "java",
    "javascript",
    "node",
    "angular",
    "vue",
    "remote",
    "frontend",
    "backend",
    "fullstack",
    "devops",
    "data",
    "senior",
    "junior",
    "entry",
    "intern",
    "lead",
    "principal",
    "software",
    "web",
    "mobile",
    "app",
    "api",
    "database",
    "marketing",
    "sales",
    "product",
    "design",
    "ui",
    "ux",
)

TECH_SKILLS = (
    "react",
    "nodejs",
    "typescript",
    "javascript",
    "python",
    "java",
    "go",
    "aws",
    "azure",
    "gcp",
    "kubernetes",
    "docker",
    "terraform",
    "machine-learning",
    "ai",
    "data-science",
    "sql",
    "mongodb",
    "frontend",
    "backend",
    "fullstack",
    "devops",
    "mobile",
    "react-native",
    "ios",
    "android",
    "security",
    "cybersecurity",
)

MODERN_TECH = ("react", "typescript", "kubernetes", "aws", "python", "node.js")

JOB_TYPE_PREFERENCES = ("remote", "full-time", "part-time", "contract")

_SENIOR_TERMS = ("senior", "lead", "principal")
_JUNIOR_TERMS = ("junior", "entry")
_MID_TERMS = ("mid", "intermediate")


def normalize_utterance(value: str) -> str:
    return (value or "").lower().strip()


def parse_keywords_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def build_keyword_set(extra_csv: str | None = None) -> tuple[str, ...]:
    combined = list(DEFAULT_JOB_KEYWORDS) + [word.lower() for word in parse_keywords_csv(extra_csv)]
    return tuple(dict.fromkeys(combined))


def is_job_search_query(text: str, keywords: tuple[str, ...] = DEFAULT_JOB_KEYWORDS) -> bool:
    return any(keyword in text for keyword in keywords)


def extract_tech_skills(search_text: str) -> list[str]:
    """Skills named in the text, either as written or with the hyphen spoken as a space."""
    return [
        skill
        for skill in TECH_SKILLS
        if skill in search_text or skill.replace("-", " ", 1) in search_text
    ]


def determine_experience_level(search_text: str) -> str:
    if any(term in search_text for term in _SENIOR_TERMS):
        return "senior"
    if any(term in search_text for term in _JUNIOR_TERMS):
        return "junior"
    if any(term in search_text for term in _MID_TERMS):
        return "mid"
    return "any"


def extract_job_type_preferences(search_text: str) -> list[str]:
    return [preference for preference in JOB_TYPE_PREFERENCES if preference in search_text]


def split_words(search_text: str) -> list[str]:
    return re.split(r"\s+", search_text.strip()) if search_text.strip() else []


def modern_tech_tags(tags: tuple[str, ...]) -> list[str]:
    return [tag for tag in tags if any(tech in tag.lower() for tech in MODERN_TECH)]
