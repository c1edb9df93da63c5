"""
Date-only calendar value.

A CalendarDate is (year, month, day) with no time of day and no timezone.
It is built from the leading ``YYYY-MM-DD`` characters of a string, so a value
such as ``2025-10-15T00:00:00.000Z`` always means October 15th, whatever the
local offset is. Zoned timestamps are never converted to local time.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

_ISO_DATE_PREFIX = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})")


class CalendarDateError(ValueError):
    pass


@dataclass(frozen=True, order=True)
class CalendarDate:
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        try:
            date(self.year, self.month, self.day)
        except (TypeError, ValueError) as exc:
            raise CalendarDateError(
                f"invalid calendar date: {self.year}-{self.month}-{self.day}"
            ) from exc

    # --- constructors ---

    @classmethod
    def parse(cls, value: str) -> "CalendarDate":
        """Parse ``YYYY-MM-DD``; anything after the first ten characters is ignored."""
        if not isinstance(value, str):
            raise CalendarDateError(f"expected a date string, got {type(value).__name__}")
        m = _ISO_DATE_PREFIX.match(value.strip())
        if not m:
            raise CalendarDateError(f"not a YYYY-MM-DD date: {value!r}")
        return cls(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        """Truncate a date or naive/aware datetime to its own calendar day (no tz conversion)."""
        if isinstance(value, datetime):
            value = value.date()
        return cls(value.year, value.month, value.day)

    @classmethod
    def coerce(cls, value: "CalendarDate | date | str") -> "CalendarDate":
        if isinstance(value, CalendarDate):
            return value
        if isinstance(value, date):
            return cls.from_date(value)
        return cls.parse(value)

    # --- arithmetic ---

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def add_days(self, n: int) -> "CalendarDate":
        try:
            return CalendarDate.from_date(self.to_date() + timedelta(days=n))
        except OverflowError as exc:
            raise CalendarDateError(f"{self} {n:+d} days is outside the calendar") from exc

    def days_until(self, other: "CalendarDate") -> int:
        """Whole days from self to other (negative if other is earlier)."""
        return (other.to_date() - self.to_date()).days

    def weekday(self) -> int:
        """Monday = 0 ... Sunday = 6"""
        return self.to_date().weekday()

    def isocalendar_week(self) -> tuple[int, int]:
        iso = self.to_date().isocalendar()
        return iso[0], iso[1]

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()


def parse_optional(value: str | None) -> CalendarDate | None:
    """Best-effort parse: blank, missing or malformed values give None."""
    if value is None:
        return None
    if isinstance(value, date):
        return CalendarDate.from_date(value)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return CalendarDate.parse(value)
    except CalendarDateError:
        return None


MIN_DATE = CalendarDate.from_date(date.min)
MAX_DATE = CalendarDate.from_date(date.max)
