"""
Background refetch loops for frequently changing queries.

Each job expires its key prefix in every cache scope on a fixed interval,
so the next read of any user goes upstream. Jobs that carry a fetcher also
warm the cache under the service scope. Loops stop only when the poller is
stopped at application shutdown.

Dependencies: asyncio
System role: Query freshness polling
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from syntegra.boundary.query_cache import QueryCache, QueryKey
from syntegra.core.exceptions import SyntegraException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollJob:
    """One periodically refreshed query."""

    name: str
    key: QueryKey
    interval_seconds: float
    fetcher: Callable[[], Awaitable[Any]] | None = None
    stale_seconds: float | None = None


class QueryPoller:
    """Owns the asyncio tasks that refresh polled queries."""

    def __init__(self, cache: QueryCache, service_scope: str | None = None) -> None:
        """
        Initialize poller.

        Args:
            cache: Cache whose entries are refreshed
            service_scope: Scope used when warming entries with job fetchers
        """
        self._cache = cache
        self._service_scope = service_scope
        self._jobs: list[PollJob] = []
        self._tasks: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    @property
    def jobs(self) -> list[PollJob]:
        return list(self._jobs)

    def register(self, job: PollJob) -> None:
        if self.running:
            raise RuntimeError("Cannot register poll jobs while the poller is running")
        self._jobs.append(job)

    async def run_once(self, job: PollJob) -> None:
        """Expire the job's key and, when possible, refetch it."""
        self._cache.invalidate(job.key)
        if job.fetcher is None or self._service_scope is None:
            return
        try:
            value = await job.fetcher()
        except SyntegraException as e:
            logger.warning(f"{__name__}:{job.name} - refetch failed: {e}")
            return
        self._cache.set(self._service_scope, job.key, value, job.stale_seconds)

    async def _loop(self, job: PollJob) -> None:
        while True:
            await asyncio.sleep(job.interval_seconds)
            await self.run_once(job)

    def start(self) -> None:
        """Start one task per registered job."""
        if self.running:
            return
        self._tasks = [
            asyncio.create_task(self._loop(job), name=f"poll:{job.name}") for job in self._jobs
        ]
        logger.info(f"{__name__}:start - {len(self._tasks)} poll jobs started")

    async def stop(self) -> None:
        """Cancel all loops and wait for them to finish."""
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info(f"{__name__}:stop - poll jobs stopped")
