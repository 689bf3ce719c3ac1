# apps/chambers/services/display.py
"""Human-readable labels for chamber schedules"""

from core.constants import ScheduleType, WeekDay


def _join(parts):
    parts = list(parts)
    if len(parts) <= 1:
        return "".join(parts)
    return f"{', '.join(parts[:-1])} & {parts[-1]}"


def schedule_label(pattern):
    """'Every Monday', 'Every Sunday & Friday', '2nd & 4th Sunday of every month'"""
    if not pattern.week_days:
        return "Not configured"

    day_names = [WeekDay(day).label for day in pattern.week_days]

    if pattern.is_recurring:
        return f"Every {_join(day_names)}"

    if pattern.schedule_type == ScheduleType.MONTHLY_SPECIFIC and pattern.week_numbers:
        weeks = " & ".join(number.label for number in pattern.week_numbers)
        return f"{weeks} {' & '.join(day_names)} of every month"

    return "Not configured"


def schedule_type_label(pattern):
    if pattern.schedule_type:
        return ScheduleType(pattern.schedule_type).label
    return "Not configured"


def format_time_range(start_time, end_time):
    return f"{start_time:%H:%M} - {end_time:%H:%M}"


def doctor_chamber_summary(chambers):
    """
    'Monday: 09:00-13:00; Friday: 17:00-19:00' for a doctor's chambers,
    grouped by weekday in calendar order.
    """
    by_day = {}
    for chamber in chambers:
        for day in chamber.week_days:
            by_day.setdefault(WeekDay(day), []).append(chamber)

    if not by_day:
        return "No chambers"

    summary = []
    for day in WeekDay:
        if day not in by_day:
            continue
        slots = ", ".join(
            f"{c.start_time:%H:%M}-{c.end_time:%H:%M}"
            for c in sorted(by_day[day], key=lambda c: c.start_time)
        )
        summary.append(f"{day.label}: {slots}")

    return "; ".join(summary)
