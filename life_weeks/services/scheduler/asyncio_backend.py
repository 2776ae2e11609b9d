"""
AsyncioScheduler: RuntimeScheduler backed by plain asyncio tasks.

Each ScheduledJob gets one task on the running event loop. Scheduling a
name that already exists replaces the previous job.
"""

import asyncio
import logging
from typing import Dict, List

from .base import RuntimeScheduler, ScheduledJob

logger = logging.getLogger(__name__)


class AsyncioScheduler(RuntimeScheduler):
    """In-process scheduler running jobs as asyncio tasks."""

    def __init__(self) -> None:
        self._jobs: Dict[str, ScheduledJob] = {}
        self._tasks: Dict[str, asyncio.Task] = {}

    def schedule(self, job: ScheduledJob) -> None:
        if job.name in self._jobs:
            self.cancel(job.name)

        self._tasks[job.name] = asyncio.get_running_loop().create_task(
            self._run_interval(job), name=job.name
        )
        self._jobs[job.name] = job
        logger.info(
            "Scheduled interval job '%s' every %ss", job.name, job.interval_seconds
        )

    async def _run_interval(self, job: ScheduledJob) -> None:
        while True:
            await self._invoke(job)
            await asyncio.sleep(job.interval_seconds)

    async def _invoke(self, job: ScheduledJob) -> None:
        try:
            await job.callback()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Job '%s' failed: %s", job.name, e, exc_info=True)

    def cancel(self, name: str) -> bool:
        if name not in self._jobs:
            return False

        task = self._tasks.pop(name, None)
        if task is not None and not task.done():
            task.cancel()

        del self._jobs[name]
        logger.info("Cancelled job '%s'", name)
        return True

    def list_jobs(self) -> List[str]:
        return list(self._jobs.keys())

    async def stop(self) -> None:
        tasks = list(self._tasks.values())
        for name in list(self._jobs.keys()):
            self.cancel(name)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("All scheduled jobs cancelled")
