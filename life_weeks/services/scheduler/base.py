"""
Scheduler base types and abstract interface.

ScheduledJob defines what to run and how often.
RuntimeScheduler is the ABC for in-process backends (e.g. AsyncioScheduler).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, List


@dataclass
class ScheduledJob:
    """A job repeated every ``interval_seconds``, first run immediately."""

    name: str
    callback: Callable[[], Coroutine[Any, Any, None]]
    interval_seconds: float

    def __post_init__(self) -> None:
        if not self.interval_seconds or self.interval_seconds < 0:
            raise ValueError("interval_seconds must be positive")


class RuntimeScheduler(ABC):
    """ABC for in-process job schedulers."""

    @abstractmethod
    def schedule(self, job: ScheduledJob) -> None:
        """Register a job for execution."""

    @abstractmethod
    def cancel(self, name: str) -> bool:
        """Cancel a scheduled job by name. Returns True if found."""

    @abstractmethod
    def list_jobs(self) -> List[str]:
        """Return names of all registered jobs."""

    @abstractmethod
    async def stop(self) -> None:
        """Stop the scheduler and cancel all jobs."""
