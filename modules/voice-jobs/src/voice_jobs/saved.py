from __future__ import annotations

import re
from collections.abc import Iterator

from voice_jobs.models import JobPosting


def saved_job_key(job: JobPosting) -> str:
    """Removal handle for a saved job: title and company, whitespace folded into dashes."""
    return re.sub(r"\s+", "-", f"{job.title}-{job.company}")


class SavedJobs:
    def __init__(self) -> None:
        self._jobs: dict[tuple[str, str], JobPosting] = {}

    def add_if_new(self, job: JobPosting) -> bool:
        identity = (job.title, job.company)
        if identity in self._jobs:
            return False
        self._jobs[identity] = job
        return True

    def contains(self, job: JobPosting) -> bool:
        return (job.title, job.company) in self._jobs

    def remove(self, key: str) -> JobPosting | None:
        for identity, job in self._jobs.items():
            if saved_job_key(job) == key:
                del self._jobs[identity]
                return job
        return None

    def keys(self) -> list[str]:
        return [saved_job_key(job) for job in self._jobs.values()]

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[JobPosting]:
        return iter(list(self._jobs.values()))

    def __contains__(self, job: object) -> bool:
        return isinstance(job, JobPosting) and self.contains(job)
