from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence

from tenacity import AsyncRetrying, stop_after_attempt, wait_fixed

from voice_jobs.config import Settings
from voice_jobs.log import get_logger
from voice_jobs.models import JobPosting

log = get_logger(__name__)

Fetcher = Callable[[], Awaitable[Sequence[JobPosting]]]

FALLBACK_COUNT = 3

MOCK_REMOTE_JOBS: tuple[JobPosting, ...] = (
    JobPosting(
        id="1",
        title="Senior Software Engineer",
        company="TechCorp Inc.",
        location="New York, NY",
        type="Full-time",
        remote=False,
        salary="$120,000 - $150,000",
        description=(
            "We are looking for a senior software engineer to join our dynamic team. You will "
            "work on cutting-edge web applications using React, Node.js, and TypeScript. The "
            "role requires 5+ years of experience in full-stack development, strong "
            "problem-solving skills, and the ability to work in an agile environment. We offer "
            "competitive salary, excellent benefits, and opportunities for professional growth."
        ),
        url="https://example.com/job1",
        posted_date="2024-11-10",
    ),
    JobPosting(
        id="2",
        title="Data Scientist",
        company="DataFlow Analytics",
        location="San Francisco, CA",
        type="Full-time",
        remote=True,
        salary="$130,000 - $170,000",
        description=(
            "Join our data science team to build predictive models and analytics solutions. "
            "You will work with large datasets, implement machine learning algorithms, and "
            "collaborate with cross-functional teams. Requirements include PhD or Masters in "
            "Data Science, experience with Python, R, SQL, and machine learning frameworks "
            "like TensorFlow or PyTorch."
        ),
        url="https://example.com/job2",
        posted_date="2024-11-12",
    ),
    JobPosting(
        id="3",
        title="UX Designer",
        company="Design Studio",
        location="Austin, TX",
        type="Full-time",
        remote=False,
        salary="$80,000 - $110,000",
        description=(
            "We are seeking a creative UX Designer to create intuitive and engaging user "
            "experiences. You will conduct user research, create wireframes and prototypes, "
            "and collaborate with development teams. The ideal candidate has 3+ years of UX "
            "design experience, proficiency in Figma, Sketch, and understanding of design "
            "systems."
        ),
        url="https://example.com/job3",
        posted_date="2024-11-13",
    ),
    JobPosting(
        id="4",
        title="Frontend Developer",
        company="WebTech Solutions",
        location="Remote",
        type="Full-time",
        remote=True,
        salary="$90,000 - $120,000",
        description=(
            "Remote frontend developer position focusing on React and modern JavaScript. You "
            "will build responsive web applications, optimize performance, and collaborate "
            "with backend developers and designers. Requirements include strong knowledge of "
            "React, TypeScript, CSS, and experience with state management libraries."
        ),
        url="https://example.com/job4",
        posted_date="2024-11-14",
    ),
    JobPosting(
        id="5",
        title="Product Manager",
        company="InnovateNow",
        location="Seattle, WA",
        type="Full-time",
        remote=False,
        salary="$110,000 - $140,000",
        description=(
            "Product Manager role focusing on mobile applications and user growth. You will "
            "define product strategy, work with engineering and design teams, analyze user "
            "metrics, and drive product development. The role requires 4+ years of product "
            "management experience, strong analytical skills, and experience with Agile "
            "methodologies."
        ),
        url="https://example.com/job5",
        posted_date="2024-11-11",
    ),
)


def filter_remote_jobs(
    jobs: Sequence[JobPosting],
    role: str,
    location: str | None = None,
) -> list[JobPosting]:
    wanted_role = role.lower()
    wanted_location = (location or "").lower()
    matches = [
        job
        for job in jobs
        if (wanted_role in job.title.lower() or wanted_role in job.description.lower())
        and (not wanted_location or wanted_location in job.location.lower() or job.remote)
    ]
    return matches or list(jobs[:FALLBACK_COUNT])


class JobSearchClient:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        fetch: Fetcher | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.settings = settings or Settings()
        self._fetch = fetch or self._fetch_mock_jobs
        self._sleep = sleep

    async def _fetch_mock_jobs(self) -> Sequence[JobPosting]:
        if self.settings.remote_fetch_delay_seconds > 0:
            await self._sleep(self.settings.remote_fetch_delay_seconds)
        return MOCK_REMOTE_JOBS

    async def _fetch_with_retry(self) -> Sequence[JobPosting]:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.settings.fetch_retry_attempts),
            wait=wait_fixed(self.settings.fetch_retry_delay_seconds),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    log.warning("retrying job fetch (attempt %d)", attempt.retry_state.attempt_number)
                return await self._fetch()

    async def search_jobs(self, role: str, location: str | None = None) -> list[JobPosting]:
        jobs = await self._fetch_with_retry()
        results = filter_remote_jobs(jobs, role, location)
        log.info("remote search %r (%s) returned %d jobs", role, location or "any location", len(results))
        return results
