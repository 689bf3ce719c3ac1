# apps/chambers/services/expander.py
"""
Turns a schedule pattern into concrete calendar dates.

Every scan is bounded, so a pattern that never matches yields fewer dates
instead of looping.
"""
import calendar
from datetime import date, timedelta

from core.constants import ScheduleType, WeekDay, WeekNumber
from core.exceptions import MalformedPatternError

from ..conf import get_setting


def add_months(day, months):
    """First day of the month `months` after day's month"""
    month_index = day.year * 12 + (day.month - 1) + months
    return date(month_index // 12, month_index % 12 + 1, 1)


def nth_weekday_of_month(year, month, week_number, week_day):
    """
    Date of the given ordinal weekday in a month.

    FIRST..FOURTH count forward from the first occurrence; a result that
    falls into the next month is dropped (None). LAST counts backward from
    the month's last day.
    """
    week_number = WeekNumber(week_number)
    target = WeekDay(week_day).python_weekday
    last_day = calendar.monthrange(year, month)[1]

    if week_number == WeekNumber.LAST:
        day = date(year, month, last_day)
        while day.weekday() != target:
            day -= timedelta(days=1)
        return day

    first = date(year, month, 1)
    first_occurrence = first + timedelta(days=(target - first.weekday()) % 7)
    result = first_occurrence + timedelta(weeks=week_number.ordinal - 1)
    if result.month != month:
        return None
    return result


def _monthly_dates(pattern, month_start):
    dates = set()
    for week_number in pattern.week_numbers:
        for week_day in pattern.week_days:
            day = nth_weekday_of_month(month_start.year, month_start.month, week_number, week_day)
            if day is not None:
                dates.add(day)
    return dates


def _check_type(pattern):
    if pattern.schedule_type not in ScheduleType.values:
        raise MalformedPatternError(pattern.schedule_type)


def expand_dates(pattern, from_date, count):
    """
    Next `count` dates (from_date inclusive) on which the chamber runs.
    Sorted ascending; may return fewer than `count`.
    """
    _check_type(pattern)
    if count <= 0 or not pattern.week_days:
        return []

    if pattern.is_recurring:
        weekdays = pattern.python_weekdays
        dates = []
        for offset in range(count * 7):
            day = from_date + timedelta(days=offset)
            if day.weekday() in weekdays:
                dates.append(day)
                if len(dates) == count:
                    break
        return dates

    if not pattern.week_numbers:
        return []

    # every month yields at least one date for a valid pattern
    scan_months = max(get_setting("MONTHLY_SCAN_MONTHS"), count)
    dates = set()
    for offset in range(scan_months):
        month_start = add_months(from_date, offset)
        dates.update(d for d in _monthly_dates(pattern, month_start) if d >= from_date)

    return sorted(dates)[:count]


def dates_between(pattern, from_date, to_date):
    """All dates in [from_date, to_date) on which the chamber runs"""
    _check_type(pattern)
    if to_date <= from_date or not pattern.week_days:
        return []

    if pattern.is_recurring:
        weekdays = pattern.python_weekdays
        total_days = (to_date - from_date).days
        return [
            from_date + timedelta(days=offset)
            for offset in range(total_days)
            if (from_date + timedelta(days=offset)).weekday() in weekdays
        ]

    dates = set()
    month_start = add_months(from_date, 0)
    while month_start < to_date:
        dates.update(
            d for d in _monthly_dates(pattern, month_start)
            if from_date <= d < to_date
        )
        month_start = add_months(month_start, 1)

    return sorted(dates)


def occurs_on(pattern, day):
    """Whether the chamber runs on `day`"""
    return bool(dates_between(pattern, day, day + timedelta(days=1)))
