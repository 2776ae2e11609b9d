"""
Scheduler abstraction for periodic tasks.

Provides:
- RuntimeScheduler ABC for in-process job execution
- AsyncioScheduler running jobs as asyncio tasks
"""

from .asyncio_backend import AsyncioScheduler
from .base import RuntimeScheduler, ScheduledJob

__all__ = [
    "RuntimeScheduler",
    "ScheduledJob",
    "AsyncioScheduler",
]
