import asyncio

import pytest

from voice_jobs.config import Settings, without_delays
from voice_jobs.job_client import MOCK_REMOTE_JOBS, JobSearchClient, filter_remote_jobs


def _ids(jobs) -> list[str]:
    return [job.id for job in jobs]


def test_filter_remote_jobs_matches_title_or_description() -> None:
    assert _ids(filter_remote_jobs(MOCK_REMOTE_JOBS, "Data Scientist")) == ["2"]
    assert _ids(filter_remote_jobs(MOCK_REMOTE_JOBS, "developer")) == ["4"]


def test_filter_remote_jobs_accepts_remote_jobs_for_any_location() -> None:
    assert _ids(filter_remote_jobs(MOCK_REMOTE_JOBS, "designer", "Seattle")) == ["4"]


def test_filter_remote_jobs_falls_back_to_first_jobs() -> None:
    assert _ids(filter_remote_jobs(MOCK_REMOTE_JOBS, "astronaut")) == ["1", "2", "3"]


def test_search_jobs_waits_for_simulated_latency() -> None:
    delays: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    client = JobSearchClient(Settings(), sleep=fake_sleep)
    jobs = asyncio.run(client.search_jobs("product manager"))

    assert _ids(jobs) == ["5"]
    assert delays == [1.0]


def test_search_jobs_retries_a_failed_fetch() -> None:
    attempts: list[int] = []

    async def flaky_fetch():
        attempts.append(1)
        if len(attempts) == 1:
            raise ConnectionError("temporary outage")
        return MOCK_REMOTE_JOBS

    client = JobSearchClient(without_delays(Settings(fetch_retry_attempts=2)), fetch=flaky_fetch)
    jobs = asyncio.run(client.search_jobs("ux designer", "austin"))

    assert _ids(jobs) == ["3"]
    assert len(attempts) == 2


def test_search_jobs_gives_up_after_last_attempt() -> None:
    attempts: list[int] = []

    async def broken_fetch():
        attempts.append(1)
        raise ConnectionError("still down")

    client = JobSearchClient(without_delays(Settings(fetch_retry_attempts=3)), fetch=broken_fetch)

    with pytest.raises(ConnectionError):
        asyncio.run(client.search_jobs("developer"))
    assert len(attempts) == 3
