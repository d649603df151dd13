"""Calendar date, time-of-day and timestamp parameters.

This module implements:
- CalendarDate: proleptic Gregorian date, text form YYYY-MM-DD
- ClockTime: time of day, text form hh:mm:ss
- Timestamp: a date and a time joined by a separator (default "T")
- Clock / SystemClock / FixedClock: injectable wall-clock sources for now()

Date arithmetic is based on a day count where 0001-01-01 is day 1, so
weekday() is the day count modulo 7 with 0 = Sunday ... 6 = Saturday.

formatted_value() substitutes these tokens:
    %Y  four-digit year        %H  two-digit hour
    %m  two-digit month        %M  two-digit minute
    %d  two-digit day          %S  two-digit second
    %%  a literal percent sign
Unknown tokens are left untouched.
"""

import datetime as _dt
import re
import string
from functools import total_ordering
from typing import Any, Dict, Optional, Protocol, Tuple, Union

from ..constants import TIMESTAMP_SEPARATOR
from ..errors import FormatError, RangeError, TypeMismatchError
from .base import LeafParameter
from .validation import contains_any, parse_uint, split_exact

SECONDS_PER_DAY = 24 * 60 * 60
MAX_YEAR = 9999

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_TOKEN = re.compile(r"%(.)")


class Clock(Protocol):
    """Source of the current wall-clock instant."""

    def now(self) -> _dt.datetime:
        ...


class SystemClock:
    """Clock reading the local wall-clock time of the process."""

    def now(self) -> _dt.datetime:
        return _dt.datetime.now()


class FixedClock:
    """Clock that always returns the same instant.

    Attributes:
        instant: The instant returned by now()
    """

    def __init__(self, instant: _dt.datetime):
        self.instant = instant

    def now(self) -> _dt.datetime:
        return self.instant


SYSTEM_CLOCK = SystemClock()


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, 0 if month is not in [1, 12]."""
    if not (1 <= month <= 12):
        return 0
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_DAYS[month - 1]


def day_count(year: int, month: int, day: int) -> int:
    """Proleptic Gregorian day number with 0001-01-01 as day 1."""
    prior = year - 1
    days = prior * 365 + prior // 4 - prior // 100 + prior // 400
    days += sum(days_in_month(year, m) for m in range(1, month))
    return days + day


def _substitute(pattern: str, values: Dict[str, str]) -> str:
    def replace(match):
        token = match.group(1)
        if token == "%":
            return "%"
        return values.get(token, match.group(0))

    return _TOKEN.sub(replace, pattern)


@total_ordering
class CalendarDate(LeafParameter):
    """Calendar date parameter.

    Defaults to 0000-00-00, which is_valid() reports as invalid until a
    real date is assigned.

    Attributes:
        name: Parameter name
        year: Year in [0, 9999]
        month: Month in [1, 12] (0 when unset)
        day: Day of month (0 when unset)
    """

    def __init__(self, name: str = "date", year: int = 0, month: int = 0, day: int = 0):
        super().__init__(name)
        self._year, self._month, self._day = 0, 0, 0
        if (year, month, day) != (0, 0, 0):
            self.set_date(year, month, day)

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    def get_date(self) -> Tuple[int, int, int]:
        return self._year, self._month, self._day

    def set_date(self, year: int, month: int, day: int) -> None:
        """Set all components at once.

        Raises:
            RangeError: If the combination is not a valid calendar date
        """
        self._check(year, month, day)
        self._year, self._month, self._day = year, month, day

    def is_leap_year(self) -> bool:
        return is_leap_year(self._year)

    def days_in_month(self) -> int:
        return days_in_month(self._year, self._month)

    def days_of_year(self) -> int:
        return 366 if self.is_leap_year() else 365

    def day_count(self) -> int:
        return day_count(self._year, self._month, self._day)

    def is_valid(self) -> bool:
        return 1 <= self._month <= 12 and 1 <= self._day <= self.days_in_month()

    def weekday(self) -> int:
        """Day of week, 0 = Sunday through 6 = Saturday."""
        return self.day_count() % 7

    def now(self, clock: Optional[Clock] = None) -> None:
        """Set this date to today according to clock."""
        instant = (clock or SYSTEM_CLOCK).now()
        self.set_date(instant.year, instant.month, instant.day)

    def to_date(self) -> _dt.date:
        """Convert to datetime.date (requires year >= 1)."""
        return _dt.date(self._year, self._month, self._day)

    def assign(self, value: Union[str, _dt.date]) -> None:
        """Assign from "YYYY-MM-DD" text or a datetime.date.

        Raises:
            FormatError: If text is not three dash-separated numbers
            RangeError: If the date does not exist
        """
        if isinstance(value, _dt.date):
            self.set_date(value.year, value.month, value.day)
            return
        if not isinstance(value, str):
            raise TypeMismatchError(
                f"Parameter {self.name} requires str or date, got {type(value).__name__}"
            )
        year_text, month_text, day_text = split_exact(value.strip(), "-", 3, "date")
        year = parse_uint(year_text, "year", MAX_YEAR)
        month = parse_uint(month_text, "month", 12, minimum=1)
        day = parse_uint(day_text, "day", 31, minimum=1)
        self.set_date(year, month, day)

    def render_value(self) -> str:
        return f"{self._year:04d}-{self._month:02d}-{self._day:02d}"

    def formatted_value(self, pattern: str) -> str:
        """Render using %Y, %m and %d tokens."""
        return _substitute(pattern, self._tokens())

    def _tokens(self) -> Dict[str, str]:
        return {"Y": f"{self._year:04d}", "m": f"{self._month:02d}", "d": f"{self._day:02d}"}

    def _check(self, year: int, month: int, day: int) -> None:
        if not (0 <= year <= MAX_YEAR):
            raise RangeError(f"Parameter {self.name}: year {year} outside [0, {MAX_YEAR}]")
        if not (1 <= month <= 12):
            raise RangeError(f"Parameter {self.name}: month {month} outside [1, 12]")
        last = days_in_month(year, month)
        if not (1 <= day <= last):
            raise RangeError(
                f"Parameter {self.name}: day {day} outside [1, {last}] for {year:04d}-{month:02d}"
            )

    def _copy_state(self, other: "CalendarDate") -> None:
        self._year, self._month, self._day = other.get_date()

    def __sub__(self, other: "CalendarDate") -> int:
        """Signed number of days from other to self."""
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self.day_count() - other.day_count()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self.get_date() == other.get_date()

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self.get_date() < other.get_date()

    __hash__ = None


@total_ordering
class ClockTime(LeafParameter):
    """Time-of-day parameter.

    The second component may temporarily exceed 59 (e.g. while building a
    sum by hand); is_valid() reports such values and add() normalizes them.

    Attributes:
        name: Parameter name
        hour: Hour in [0, 23]
        minute: Minute in [0, 59]
        second: Second, normally in [0, 59]
    """

    def __init__(self, name: str = "time", hour: int = 0, minute: int = 0, second: int = 0):
        super().__init__(name)
        self._hour, self._minute, self._second = 0, 0, 0
        self.set_time(hour, minute, second)

    @property
    def hour(self) -> int:
        return self._hour

    @property
    def minute(self) -> int:
        return self._minute

    @property
    def second(self) -> int:
        return self._second

    def get_time(self) -> Tuple[int, int, int]:
        return self._hour, self._minute, self._second

    def set_time(self, hour: int, minute: int, second: int) -> None:
        """Set all components at once.

        Raises:
            RangeError: If hour or minute is out of range or second is negative
        """
        if not (0 <= hour <= 23):
            raise RangeError(f"Parameter {self.name}: hour {hour} outside [0, 23]")
        if not (0 <= minute <= 59):
            raise RangeError(f"Parameter {self.name}: minute {minute} outside [0, 59]")
        if second < 0:
            raise RangeError(f"Parameter {self.name}: second {second} is negative")
        self._hour, self._minute, self._second = hour, minute, second

    def seconds_of_time(self) -> int:
        return self._hour * 3600 + self._minute * 60 + self._second

    def is_valid(self) -> bool:
        return 0 <= self._hour <= 23 and 0 <= self._minute <= 59 and 0 <= self._second <= 59

    def add(self, other: "ClockTime") -> Tuple["ClockTime", int]:
        """Add two times of day.

        Returns:
            Tuple of (normalized time, number of whole days carried)
        """
        carry, rest = divmod(self.seconds_of_time() + other.seconds_of_time(), SECONDS_PER_DAY)
        hour, rest = divmod(rest, 3600)
        minute, second = divmod(rest, 60)
        return ClockTime(self.name, hour, minute, second), carry

    def now(self, clock: Optional[Clock] = None) -> None:
        """Set this time to the current time according to clock."""
        instant = (clock or SYSTEM_CLOCK).now()
        self.set_time(instant.hour, instant.minute, instant.second)

    def assign(self, value: Union[str, _dt.time]) -> None:
        """Assign from "hh:mm:ss" text or a datetime.time.

        Raises:
            FormatError: If text is not three colon-separated numbers
            RangeError: If a component is out of range
        """
        if isinstance(value, _dt.time):
            self.set_time(value.hour, value.minute, value.second)
            return
        if not isinstance(value, str):
            raise TypeMismatchError(
                f"Parameter {self.name} requires str or time, got {type(value).__name__}"
            )
        hour_text, minute_text, second_text = split_exact(value.strip(), ":", 3, "time")
        hour = parse_uint(hour_text, "hour", 23)
        minute = parse_uint(minute_text, "minute", 59)
        second = parse_uint(second_text, "second", 59)
        self.set_time(hour, minute, second)

    def render_value(self) -> str:
        return f"{self._hour:02d}:{self._minute:02d}:{self._second:02d}"

    def formatted_value(self, pattern: str) -> str:
        """Render using %H, %M and %S tokens."""
        return _substitute(pattern, self._tokens())

    def _tokens(self) -> Dict[str, str]:
        return {"H": f"{self._hour:02d}", "M": f"{self._minute:02d}", "S": f"{self._second:02d}"}

    def _copy_state(self, other: "ClockTime") -> None:
        self._hour, self._minute, self._second = other.get_time()

    def __sub__(self, other: "ClockTime") -> int:
        """Signed number of seconds from other to self."""
        if not isinstance(other, ClockTime):
            return NotImplemented
        return self.seconds_of_time() - other.seconds_of_time()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ClockTime):
            return NotImplemented
        return self.get_time() == other.get_time()

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, ClockTime):
            return NotImplemented
        return self.get_time() < other.get_time()

    __hash__ = None


@total_ordering
class Timestamp(LeafParameter):
    """Date and time of day joined by a separator.

    Attributes:
        name: Parameter name
        date: The date part
        time: The time part
        separator: Text placed between date and time when rendering
    """

    def __init__(self, name: str = "timestamp", separator: str = TIMESTAMP_SEPARATOR):
        super().__init__(name)
        if not separator:
            raise ValueError("Timestamp separator cannot be empty")
        # "-" and ":" belong to the date and time grammars
        if contains_any(separator, "-:" + string.digits):
            raise ValueError(
                f"Timestamp separator {separator!r} cannot contain '-', ':' or digits"
            )
        self.separator = separator
        self.date = CalendarDate("date")
        self.time = ClockTime("time")

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def day(self) -> int:
        return self.date.day

    @property
    def hour(self) -> int:
        return self.time.hour

    @property
    def minute(self) -> int:
        return self.time.minute

    @property
    def second(self) -> int:
        return self.time.second

    def weekday(self) -> int:
        return self.date.weekday()

    def set_date(self, date: CalendarDate) -> None:
        self.date._copy_state(date)

    def set_time(self, time: ClockTime) -> None:
        self.time._copy_state(time)

    def is_valid(self) -> bool:
        return self.date.is_valid() and self.time.is_valid()

    def now(self, clock: Optional[Clock] = None) -> None:
        """Set date and time from a single reading of clock."""
        instant = (clock or SYSTEM_CLOCK).now()
        self.date.set_date(instant.year, instant.month, instant.day)
        self.time.set_time(instant.hour, instant.minute, instant.second)

    def assign(self, value: Union[str, _dt.datetime]) -> None:
        """Assign from "<date><separator><time>" text or a datetime.

        Raises:
            FormatError: If the separator is missing or a part is malformed
            RangeError: If a component is out of range
        """
        if isinstance(value, _dt.datetime):
            date_value, time_value = value.date(), value.time()
        elif isinstance(value, str):
            parts = value.strip().split(self.separator)
            if len(parts) != 2:
                raise FormatError(
                    f"Parameter {self.name}: {value!r} must be a date and a time "
                    f"separated by {self.separator!r}"
                )
            date_value, time_value = parts
        else:
            raise TypeMismatchError(
                f"Parameter {self.name} requires str or datetime, got {type(value).__name__}"
            )
        date = CalendarDate(self.date.name)
        time = ClockTime(self.time.name)
        date.assign(date_value)
        time.assign(time_value)
        self.set_date(date)
        self.set_time(time)

    def render_value(self) -> str:
        return f"{self.date.render_value()}{self.separator}{self.time.render_value()}"

    def formatted_value(self, date_pattern: str, time_pattern: str,
                        separator: Optional[str] = None) -> str:
        """Render date and time with their own patterns.

        Args:
            date_pattern: Pattern for the date part (%Y, %m, %d)
            time_pattern: Pattern for the time part (%H, %M, %S)
            separator: Text between the parts, defaults to self.separator
        """
        sep = self.separator if separator is None else separator
        return f"{self.date.formatted_value(date_pattern)}{sep}{self.time.formatted_value(time_pattern)}"

    def _copy_state(self, other: "Timestamp") -> None:
        self.set_date(other.date)
        self.set_time(other.time)

    def __sub__(self, other: "Timestamp") -> int:
        """Signed number of seconds from other to self."""
        if not isinstance(other, Timestamp):
            return NotImplemented
        return (self.date - other.date) * SECONDS_PER_DAY + (self.time - other.time)

    def _sort_key(self) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
        return self.date.get_date(), self.time.get_time()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    __hash__ = None
