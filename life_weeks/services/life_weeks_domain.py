"""Pure domain logic for the Life Weeks grid.

No storage or I/O, only date arithmetic and the week-grid transform.
All dates are local wall-clock values; aware datetimes are converted to
local time and made naive before any arithmetic.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterator, List, Optional, Sequence, Union

LIFE_EXPECTANCY_YEARS = 73
WEEKS_PER_YEAR = 52
DAYS_PER_WEEK = 7
TOTAL_WEEKS = LIFE_EXPECTANCY_YEARS * WEEKS_PER_YEAR
# Latest birth year whose expected lifespan still fits in a datetime.date
MAX_BIRTH_YEAR = date.max.year - LIFE_EXPECTANCY_YEARS

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class WeekRecord:
    """One cell of the life grid."""

    week_number: int  # 1-based
    start_date: date
    is_lived: bool
    is_birth: bool
    is_death: bool
    is_current_week: bool
    total_days_lived: int  # cumulative, capped at this week's end
    days_lived_in_week: int  # 0..7

    @property
    def index(self) -> int:
        return self.week_number - 1


def parse_birth_date(value: str) -> date:
    """Parse a birth date in ISO ``YYYY-MM-DD`` form.

    Raises:
        ValueError: If value is empty, not a valid calendar date, or too
            late for its lifespan to be representable.
    """
    if not value or not value.strip():
        raise ValueError("Invalid date format. Expected YYYY-MM-DD: empty value")

    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as e:
        raise ValueError(f"Invalid date format. Expected YYYY-MM-DD: {e}")
    return check_birth_date(parsed)


def check_birth_date(birth_date: date) -> date:
    """Return ``birth_date`` if its whole lifespan fits the calendar.

    Raises:
        ValueError: If birth_date is later than MAX_BIRTH_YEAR.
    """
    if birth_date.year > MAX_BIRTH_YEAR:
        raise ValueError(
            f"Birth date out of range: {birth_date.isoformat()} "
            f"(latest supported year is {MAX_BIRTH_YEAR})"
        )
    return birth_date


def start_of_day(day: date) -> datetime:
    """Local midnight of ``day`` as a naive datetime."""
    return datetime.combine(day, time.min)


def as_wall_clock(moment: DateLike) -> datetime:
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            return moment.astimezone().replace(tzinfo=None)
        return moment
    return start_of_day(moment)


def days_between(start: date, now: DateLike) -> int:
    """Whole days from local midnight of ``start`` to ``now``.

    Truncates toward zero, so a start date in the future gives a
    non-positive count.
    """
    delta = as_wall_clock(now) - start_of_day(start)
    if delta < timedelta(0):
        return -((-delta).days)
    return delta.days


def weeks_between(start: date, now: DateLike) -> int:
    """Whole 7-day periods from ``start`` to ``now``, truncated toward zero."""
    days = days_between(start, now)
    if days < 0:
        return -((-days) // DAYS_PER_WEEK)
    return days // DAYS_PER_WEEK


def add_weeks(day: date, weeks: int) -> date:
    return day + timedelta(weeks=weeks)


def add_years(day: date, years: int) -> date:
    """Shift ``day`` by calendar years; Feb 29 lands on Feb 28 when needed."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def calculate_life_week(
    birth_date: date, reference: Optional[DateLike] = None
) -> int:
    """Number of fully elapsed weeks since birth, never negative.

    Args:
        birth_date: The user's date of birth.
        reference: Moment to calculate from (defaults to now).

    Raises:
        TypeError: If birth_date is None.
    """
    if birth_date is None:
        raise TypeError("birth_date cannot be None")

    if reference is None:
        reference = datetime.now()

    return max(0, weeks_between(birth_date, reference))


def generate_weeks(birth_date: date, now: DateLike) -> List[WeekRecord]:
    """Build the full, chronologically ordered week grid.

    The result always has ``TOTAL_WEEKS`` records. Weeks before the number
    of whole weeks elapsed are lived; the last of those is the current
    week. A future birth date yields no lived and no current week, and a
    ``now`` past the projected end marks every week lived.
    """
    if birth_date is None:
        raise TypeError("birth_date cannot be None")

    days_lived = days_between(birth_date, now)
    weeks_lived = calculate_life_week(birth_date, now)

    weeks: List[WeekRecord] = []
    for i in range(TOTAL_WEEKS):
        is_lived = i < weeks_lived
        weeks.append(
            WeekRecord(
                week_number=i + 1,
                start_date=add_weeks(birth_date, i),
                is_lived=is_lived,
                is_birth=i == 0,
                is_death=i == TOTAL_WEEKS - 1,
                is_current_week=i == weeks_lived - 1,
                total_days_lived=(
                    min(days_lived, (i + 1) * DAYS_PER_WEEK) if is_lived else 0
                ),
                days_lived_in_week=(
                    min(DAYS_PER_WEEK, days_lived - i * DAYS_PER_WEEK)
                    if is_lived
                    else 0
                ),
            )
        )

    return weeks


def year_labels(birth_date: date) -> List[int]:
    """Calendar year shown at the start of each grid row."""
    return [
        add_years(birth_date, row).year for row in range(LIFE_EXPECTANCY_YEARS)
    ]


def iter_year_rows(weeks: Sequence[WeekRecord]) -> Iterator[Sequence[WeekRecord]]:
    """Split the grid into rows of ``WEEKS_PER_YEAR`` records."""
    for start in range(0, len(weeks), WEEKS_PER_YEAR):
        yield weeks[start : start + WEEKS_PER_YEAR]


def describe_week(week: WeekRecord) -> str:
    """Tooltip text for a single week cell."""
    if week.is_birth:
        label = "Birth"
    elif week.is_death:
        label = "End of life expectancy"
    else:
        label = f"Week {week.week_number}"

    if week.is_lived:
        label += f" ({week.total_days_lived:,} days lived)"
    if week.is_current_week:
        label += " - Current Week"

    return label
