"""Progress and countdown calculations for Life Weeks.

Both functions are pure in ``(birth_date, now)``. The countdown uses fixed
unit lengths (365.25-day year, 30.44-day month) so it only approximates
calendar time; it drives a human-readable "time remaining" indicator.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .life_weeks_domain import (
    LIFE_EXPECTANCY_YEARS,
    DateLike,
    as_wall_clock,
    add_years,
    days_between,
    start_of_day,
)

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR
MS_PER_MONTH = round(30.44 * MS_PER_DAY)
MS_PER_YEAR = round(365.25 * MS_PER_DAY)

# Progress divides by plain 365-day years
EXPECTED_LIFESPAN_DAYS = LIFE_EXPECTANCY_YEARS * 365


@dataclass(frozen=True)
class ProgressSnapshot:
    days_lived: int
    percentage: float


@dataclass(frozen=True)
class CountdownSnapshot:
    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @property
    def is_zero(self) -> bool:
        return not any(
            (self.years, self.months, self.days, self.hours, self.minutes, self.seconds)
        )


def compute_progress(birth_date: date, now: DateLike) -> ProgressSnapshot:
    """Days lived and percentage of the expected lifespan.

    A birth date in the future counts as zero days lived.
    """
    days_lived = max(0, days_between(birth_date, now))
    percentage = days_lived / EXPECTED_LIFESPAN_DAYS * 100
    return ProgressSnapshot(days_lived=days_lived, percentage=min(100.0, percentage))


def projected_end(birth_date: date) -> datetime:
    """Midnight of the day life expectancy is reached."""
    return start_of_day(add_years(birth_date, LIFE_EXPECTANCY_YEARS))


def compute_countdown(birth_date: date, now: DateLike) -> CountdownSnapshot:
    """Break the time left until the projected end into display units.

    Units are taken greedily from years down to seconds, each quotient
    floored and the remainder carried to the next unit.
    """
    diff = (projected_end(birth_date) - as_wall_clock(now)) // timedelta(
        milliseconds=1
    )
    if diff <= 0:
        return CountdownSnapshot()

    years, diff = divmod(diff, MS_PER_YEAR)
    months, diff = divmod(diff, MS_PER_MONTH)
    days, diff = divmod(diff, MS_PER_DAY)
    hours, diff = divmod(diff, MS_PER_HOUR)
    minutes, diff = divmod(diff, MS_PER_MINUTE)
    seconds = diff // MS_PER_SECOND

    return CountdownSnapshot(
        years=years,
        months=months,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )


def format_countdown(countdown: CountdownSnapshot) -> str:
    """Compact form like ``49y 3m 2d 18h 5m 12s``; zero units are dropped
    except seconds."""
    parts = []
    if countdown.years:
        parts.append(f"{countdown.years}y")
    if countdown.months:
        parts.append(f"{countdown.months}m")
    if countdown.days:
        parts.append(f"{countdown.days}d")
    if countdown.hours:
        parts.append(f"{countdown.hours}h")
    if countdown.minutes:
        parts.append(f"{countdown.minutes}m")
    parts.append(f"{countdown.seconds}s")
    return " ".join(parts)


def format_progress(progress: ProgressSnapshot) -> str:
    return (
        f"{progress.days_lived:,} days lived · "
        f"{progress.percentage:.1f}% of {LIFE_EXPECTANCY_YEARS} years"
    )
