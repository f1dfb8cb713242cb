# STORAGE/aggregate.py
"""
Read-only week, month and year views over a set of days.

Views are rebuilt from the store on every query and never saved.  Weeks
follow ISO-8601: they start on Monday and week 1 is the week holding the
first Thursday of the ISO year.  Near new year the ISO year of a week can
differ from the calendar year of its days, e.g. 2021-01-01 is in week 53
of 2020.
"""
import calendar as cal
from datetime import date, timedelta
from typing import Iterable, List, Tuple

from reti.STORAGE.errors import InvalidQueryError
from reti.STORAGE.model import Day


def iso_week_of(day_date: date) -> Tuple[int, int]:
    iso = day_date.isocalendar()
    return iso[0], iso[1]


def weeks_in_year(iso_year: int) -> int:
    # Dec 28 is always in the last ISO week of its year
    return date(iso_year, 12, 28).isocalendar()[1]


def _check_year(year: int):
    if not date.min.year <= year <= date.max.year:
        raise InvalidQueryError(f"Year {year} is out of range.")


def _check_month(year: int, month: int):
    _check_year(year)
    if not 1 <= month <= 12:
        raise InvalidQueryError(f"Month {month} is not in 1..12.")


def _check_week(iso_year: int, week: int):
    _check_year(iso_year)
    last = weeks_in_year(iso_year)
    if not 1 <= week <= last:
        raise InvalidQueryError(f"Week {week} is not in 1..{last} for {iso_year}.")


def _sorted(days: Iterable[Day]) -> List[Day]:
    return sorted(days, key=lambda d: d.date)


def days_in_year(days: Iterable[Day], year: int) -> List[Day]:
    _check_year(year)
    return _sorted(d for d in days if d.date.year == year)


def days_in_month(days: Iterable[Day], year: int, month: int) -> List[Day]:
    _check_month(year, month)
    return _sorted(d for d in days if d.date.year == year and d.date.month == month)


def days_in_week(days: Iterable[Day], iso_year: int, week: int) -> List[Day]:
    _check_week(iso_year, week)
    return _sorted(d for d in days if iso_week_of(d.date) == (iso_year, week))


class Period:
    """Sums shared by every view."""

    def __init__(self, days: List[Day]):
        self.days = days

    @property
    def day_count(self) -> int:
        return len(self.days)

    @property
    def worked_duration(self) -> timedelta:
        return sum((d.worked_duration for d in self.days), timedelta(0))

    @property
    def credited_break_duration(self) -> timedelta:
        return sum((d.credited_break_duration for d in self.days), timedelta(0))

    def earnings(self, fee: float) -> float:
        """Worked hours times `fee`.  Breaks are not paid."""
        return self.worked_duration.total_seconds() / 3600 * fee

    def __bool__(self):
        return bool(self.days)


class Week(Period):

    def __init__(self, iso_year: int, week: int, days: List[Day]):
        super().__init__(days)
        self.iso_year = iso_year
        self.week = week

    @classmethod
    def build(cls, days: Iterable[Day], iso_year: int, week: int) -> "Week":
        return cls(iso_year, week, days_in_week(days, iso_year, week))

    @property
    def first_date(self) -> date:
        return date.fromisocalendar(self.iso_year, self.week, 1)

    @property
    def last_date(self) -> date:
        return date.fromisocalendar(self.iso_year, self.week, 7)

    def __repr__(self):
        return f"<Week({self.iso_year}-W{self.week:02}, days={self.day_count})>"


class Month(Period):

    def __init__(self, year: int, month: int, days: List[Day]):
        super().__init__(days)
        self.year = year
        self.month = month

    @classmethod
    def build(cls, days: Iterable[Day], year: int, month: int) -> "Month":
        return cls(year, month, days_in_month(days, year, month))

    @property
    def name(self) -> str:
        return cal.month_name[self.month]

    def __repr__(self):
        return f"<Month({self.year}-{self.month:02}, days={self.day_count})>"


class Year(Period):

    def __init__(self, year: int, days: List[Day]):
        super().__init__(days)
        self.year = year

    @classmethod
    def build(cls, days: Iterable[Day], year: int) -> "Year":
        return cls(year, days_in_year(days, year))

    def months(self) -> List[Month]:
        """Non-empty months of this year, in calendar order."""
        keys = sorted({d.date.month for d in self.days})
        return [Month.build(self.days, self.year, m) for m in keys]

    def weeks(self) -> List[Week]:
        """
        Non-empty ISO weeks touching this year, holding only this
        year's days.  The first and last entries may belong to the
        neighbouring ISO year.
        """
        keys = sorted({iso_week_of(d.date) for d in self.days})
        return [Week.build(self.days, y, w) for y, w in keys]

    def __repr__(self):
        return f"<Year({self.year}, days={self.day_count})>"
