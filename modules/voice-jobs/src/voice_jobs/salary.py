from __future__ import annotations

import re

from voice_jobs.models import JobPosting, SalaryBand

_RANGE_PATTERN = re.compile(r"\$(\d[\d,]*)\s*-\s*\$(\d[\d,]*)")
_SPOKEN_SALARY_PATTERN = re.compile(
    r"(\d[\d,]*)\s*k?\+?\s*(?:salary|pay|compensation)",
    re.IGNORECASE,
)


def parse_salary_range(salary: str | None) -> tuple[int, int] | None:
    if not salary:
        return None
    match = _RANGE_PATTERN.search(salary)
    if match is None:
        return None
    return int(match.group(1).replace(",", "")), int(match.group(2).replace(",", ""))


def salary_band(job: JobPosting) -> SalaryBand | None:
    parsed = parse_salary_range(job.salary)
    if parsed is None:
        return None
    return SalaryBand(job=job, minimum=parsed[0], maximum=parsed[1])


def extract_salary_floor(text: str) -> int | None:
    """Minimum salary spoken before a pay word; "150k salary" and "150 pay" both mean 150,000."""
    match = _SPOKEN_SALARY_PATTERN.search(text)
    if match is None:
        return None
    amount = int(match.group(1).replace(",", ""))
    return amount if amount >= 1000 else amount * 1000


def format_money(amount: float) -> str:
    return f"${round(amount):,}"
