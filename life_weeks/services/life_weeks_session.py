"""Life Weeks session: holds the active birth date and drives refreshes.

The session is the only stateful piece: it owns the current birth date
(replaced wholesale, never mutated), persists it through a BirthDateStore,
and registers the once-per-second countdown job on a RuntimeScheduler.
The grid and progress are recomputed per birth-date change; the countdown
is recomputed on every tick.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..utils.logging import get_countdown_logger
from .birth_date_store import BirthDateStore
from .life_weeks_domain import DateLike, WeekRecord, check_birth_date, generate_weeks
from .life_weeks_progress import (
    CountdownSnapshot,
    ProgressSnapshot,
    compute_countdown,
    compute_progress,
    projected_end,
)
from .scheduler import RuntimeScheduler, ScheduledJob

logger = logging.getLogger(__name__)

COUNTDOWN_JOB_NAME = "life-weeks-countdown"

TickHandler = Callable[[CountdownSnapshot], Union[None, Awaitable[None]]]


@dataclass(frozen=True)
class LifeWeeksView:
    """Everything the presentation layer needs for one render."""

    birth_date: date
    weeks: List[WeekRecord]
    progress: ProgressSnapshot
    countdown: CountdownSnapshot

    def to_dict(self) -> Dict[str, Any]:
        return {
            "birth_date": self.birth_date.isoformat(),
            "projected_end": projected_end(self.birth_date).date().isoformat(),
            "progress": {
                "days_lived": self.progress.days_lived,
                "percentage": round(self.progress.percentage, 4),
            },
            "countdown": {
                "years": self.countdown.years,
                "months": self.countdown.months,
                "days": self.countdown.days,
                "hours": self.countdown.hours,
                "minutes": self.countdown.minutes,
                "seconds": self.countdown.seconds,
            },
            "weeks": [
                {
                    "week_number": w.week_number,
                    "start_date": w.start_date.isoformat(),
                    "is_lived": w.is_lived,
                    "is_birth": w.is_birth,
                    "is_death": w.is_death,
                    "is_current_week": w.is_current_week,
                    "total_days_lived": w.total_days_lived,
                    "days_lived_in_week": w.days_lived_in_week,
                }
                for w in self.weeks
            ],
        }


class LifeWeeksSession:
    """Owns the active birth date and the countdown refresh job."""

    def __init__(
        self,
        store: Optional[BirthDateStore] = None,
        scheduler: Optional[RuntimeScheduler] = None,
        clock: Callable[[], datetime] = datetime.now,
        tick_interval_seconds: float = 1.0,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._clock = clock
        self._tick_interval_seconds = tick_interval_seconds
        self._birth_date: Optional[date] = None
        self._weeks: List[WeekRecord] = []
        self._progress: Optional[ProgressSnapshot] = None
        self._on_tick: Optional[TickHandler] = None
        self._log = get_countdown_logger()

    @property
    def birth_date(self) -> Optional[date]:
        return self._birth_date

    @property
    def is_ticking(self) -> bool:
        return (
            self._scheduler is not None
            and COUNTDOWN_JOB_NAME in self._scheduler.list_jobs()
        )

    def _now(self, now: Optional[DateLike]) -> DateLike:
        return self._clock() if now is None else now

    def _replace(self, birth_date: date) -> None:
        now = self._clock()
        self._birth_date = birth_date
        self._weeks = generate_weeks(birth_date, now)
        self._progress = compute_progress(birth_date, now)

    def restore(self) -> Optional[date]:
        """Load the persisted birth date, if any, and make it active."""
        if self._store is None:
            return None

        birth_date = self._store.load()
        if birth_date is None:
            logger.info("No persisted birth date to restore")
            return None

        self._replace(birth_date)
        logger.info("Restored birth date %s", birth_date.isoformat())
        self._resume_ticker()
        return birth_date

    def submit(self, birth_date: date) -> None:
        """Make ``birth_date`` the active date and persist it.

        Raises:
            ValueError: If birth_date is None or out of range.
        """
        if birth_date is None:
            raise ValueError("A birth date is required")
        check_birth_date(birth_date)

        self._replace(birth_date)
        if self._store is not None:
            self._store.save(birth_date)
        logger.info("Birth date set to %s", birth_date.isoformat())
        self._resume_ticker()

    def clear(self) -> None:
        """Drop the active birth date and its persisted copy; stops ticking."""
        self._cancel_ticker()
        self._birth_date = None
        self._weeks = []
        self._progress = None
        if self._store is not None:
            self._store.clear()

    def weeks(self) -> List[WeekRecord]:
        self._require_birth_date()
        return list(self._weeks)

    def progress(self, now: Optional[DateLike] = None) -> ProgressSnapshot:
        birth_date = self._require_birth_date()
        if now is None and self._progress is not None:
            return self._progress
        return compute_progress(birth_date, self._now(now))

    def countdown(self, now: Optional[DateLike] = None) -> CountdownSnapshot:
        birth_date = self._require_birth_date()
        return compute_countdown(birth_date, self._now(now))

    def view(self, now: Optional[DateLike] = None) -> LifeWeeksView:
        """Recompute grid, progress and countdown from scratch."""
        birth_date = self._require_birth_date()
        now = self._now(now)
        return LifeWeeksView(
            birth_date=birth_date,
            weeks=generate_weeks(birth_date, now),
            progress=compute_progress(birth_date, now),
            countdown=compute_countdown(birth_date, now),
        )

    def _require_birth_date(self) -> date:
        if self._birth_date is None:
            raise RuntimeError("No birth date set")
        return self._birth_date

    def start_ticker(self, on_tick: TickHandler) -> None:
        """Call ``on_tick`` with a fresh countdown every tick interval.

        Must be called from a running event loop. Ticking only happens while
        a birth date is active; ``submit`` starts it again after ``clear``.
        """
        if self._scheduler is None:
            raise RuntimeError("No scheduler attached to this session")

        self._on_tick = on_tick
        if self._birth_date is not None:
            self._schedule_ticker()

    def _resume_ticker(self) -> None:
        if self._on_tick is not None and not self.is_ticking:
            self._schedule_ticker()

    def _schedule_ticker(self) -> None:
        self._scheduler.schedule(
            ScheduledJob(
                name=COUNTDOWN_JOB_NAME,
                callback=self._tick,
                interval_seconds=self._tick_interval_seconds,
            )
        )
        self._log.debug(
            "countdown ticker started",
            birth_date=self._birth_date.isoformat(),
            interval_seconds=self._tick_interval_seconds,
        )

    async def _tick(self) -> None:
        if self._birth_date is None or self._on_tick is None:
            return

        snapshot = compute_countdown(self._birth_date, self._clock())
        result = self._on_tick(snapshot)
        if result is not None:
            await result

    def _cancel_ticker(self) -> None:
        if self._scheduler is not None and self._scheduler.cancel(COUNTDOWN_JOB_NAME):
            self._log.debug("countdown ticker stopped")

    def stop(self) -> None:
        """Cancel the countdown job and forget the tick handler."""
        self._cancel_ticker()
        self._on_tick = None
