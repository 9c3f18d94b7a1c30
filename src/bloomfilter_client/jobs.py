"""
Job Poller

Drives an asynchronous provisioning job to a terminal state.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable
from urllib.parse import quote

import httpx

from bloomfilter_client.exceptions import JobFailedError, JobTimeoutError
from bloomfilter_client.models import JOB_COMPLETED, JOB_FAILED, JobStatus
from bloomfilter_client.session import SessionManager

logger = logging.getLogger("bloomfilter.jobs")

# Delay between status checks (seconds)
JOB_POLL_INTERVAL = 2.0

# Total polling budget (seconds) - 5 minutes
JOB_TIMEOUT = 300.0


class JobPoller:
    """
    Polls /domains/status/{job_id} until the job completes or fails.

    Example:
        poller = JobPoller(http, session)
        job = await poller.poll("job-123")
        print(job.result)
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        session: SessionManager,
        interval: float = JOB_POLL_INTERVAL,
        timeout: float = JOB_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._http = http
        self._session = session
        self.interval = interval
        self.timeout = timeout
        self._clock = clock
        self._sleep = sleep

    async def fetch(self, job_id: str) -> JobStatus:
        """Fetch the current job status once (authenticated)."""
        await self._session.ensure_authenticated()
        response = await self._http.get(
            f"/domains/status/{quote(job_id, safe='')}",
            headers=self._session.get_auth_headers(),
        )
        response.raise_for_status()
        return JobStatus.from_dict(response.json())

    async def poll(self, job_id: str) -> JobStatus:
        """
        Wait for a job to reach a terminal state.

        Args:
            job_id: Server job identifier

        Returns:
            The completed JobStatus

        Raises:
            JobFailedError: Job reported failure
            JobTimeoutError: Budget exhausted; the job may still be running
        """
        start = self._clock()
        last_status = None

        while self._clock() - start < self.timeout:
            # Re-checked every iteration, long polls can outlast the token
            job = await self.fetch(job_id)

            if job.status != last_status:
                logger.info(f"Job {job_id}: {job.status}")
                last_status = job.status

            if job.status == JOB_COMPLETED:
                return job
            if job.status == JOB_FAILED:
                raise JobFailedError(job_id, job.error)

            await self._sleep(self.interval)

        raise JobTimeoutError(job_id, self.timeout)
