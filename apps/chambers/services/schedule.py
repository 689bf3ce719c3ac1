# apps/chambers/services/schedule.py
"""
Schedule pattern model: the three chamber recurrence variants and their
validation.

A pattern says *which days* a chamber runs, a time window says *when* on those
days and how the session is cut into slots. Validation collects every
violation so a form can show all of them at once.
"""
from dataclasses import dataclass
from datetime import datetime, date, time
from decimal import Decimal, InvalidOperation

from core.constants import ScheduleType, WeekDay, WeekNumber
from core.exceptions import MalformedPatternError


class ScheduleErrorCode:
    MISSING_FIELD = "missing_field"
    INVALID_DAY_COUNT = "invalid_day_count"
    DUPLICATE_WEEK_DAYS = "duplicate_week_days"
    MISSING_WEEK_NUMBERS = "missing_week_numbers"
    INVALID_TIME_RANGE = "invalid_time_range"
    SESSION_TOO_SHORT = "session_too_short"
    INVALID_SLOT_DURATION = "invalid_slot_duration"
    INVALID_FEE = "invalid_fee"
    INVALID_CAPACITY = "invalid_capacity"


@dataclass(frozen=True)
class ScheduleError:
    code: str
    field: str
    message: str


@dataclass(frozen=True)
class SchedulePattern:
    schedule_type: ScheduleType
    week_days: tuple = ()
    week_numbers: tuple = ()

    def __post_init__(self):
        # Coerce raw strings so callers can pass request data directly
        object.__setattr__(self, "schedule_type", coerce_schedule_type(self.schedule_type))
        object.__setattr__(self, "week_days", tuple(WeekDay(d) for d in self.week_days or ()))
        numbers = tuple(WeekNumber(w) for w in self.week_numbers or ())
        if self.schedule_type in ScheduleType.recurring():
            numbers = ()
        object.__setattr__(self, "week_numbers", numbers)

    @property
    def is_recurring(self):
        return self.schedule_type in ScheduleType.recurring()

    @property
    def python_weekdays(self):
        return {day.python_weekday for day in self.week_days}


@dataclass(frozen=True)
class TimeWindow:
    start_time: object = None
    end_time: object = None
    slot_duration: int = 0

    def __post_init__(self):
        # "HH:MM" strings from request data
        for name in ("start_time", "end_time"):
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, _parse_time(name, value))

    @property
    def duration_minutes(self):
        """Whole minutes between start and end; 0 when degenerate"""
        if self.start_time is None or self.end_time is None:
            return 0
        start = datetime.combine(date.min, self.start_time)
        end = datetime.combine(date.min, self.end_time)
        if end <= start:
            return 0
        return int((end - start).total_seconds() // 60)


def _parse_time(name, value):
    if not value:
        return None
    try:
        return time.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{name} must be a time in HH:MM format, got {value!r}") from None


def coerce_schedule_type(value):
    """None stays None; unknown values raise MalformedPatternError"""
    if value is None or value == "":
        return None
    try:
        return ScheduleType(value)
    except ValueError:
        raise MalformedPatternError(value) from None


def pattern_from_legacy(data):
    """
    Build a SchedulePattern from a stored record.

    Old records carry a single ``weekDay`` / ``weekNumber`` instead of the
    ``weekDays`` / ``weekNumbers`` arrays. This is the only place that shape
    is understood.
    """
    week_days = data.get("weekDays") or data.get("week_days") or []
    if not week_days and data.get("weekDay"):
        week_days = [data["weekDay"]]

    week_numbers = data.get("weekNumbers") or data.get("week_numbers") or []
    if not week_numbers and data.get("weekNumber"):
        week_numbers = [data["weekNumber"]]

    # a bare value stored where a list is expected
    if isinstance(week_days, str):
        week_days = [week_days]
    if isinstance(week_numbers, str):
        week_numbers = [week_numbers]

    schedule_type = data.get("scheduleType") or data.get("schedule_type")
    if not schedule_type:
        if data.get("isRecurring"):
            schedule_type = ScheduleType.WEEKLY_RECURRING
        elif week_numbers:
            schedule_type = ScheduleType.MONTHLY_SPECIFIC

    return SchedulePattern(
        schedule_type=schedule_type,
        week_days=tuple(week_days),
        week_numbers=tuple(week_numbers),
    )


def _to_decimal(value):
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def validate_schedule(pattern, window, fees, min_session_minutes=0, allowed_slot_durations=None):
    """
    Return every violation of the pattern/window/fee combination.

    An empty list means the chamber configuration is valid.
    """
    from .capacity import compute_max_slots

    errors = []

    if not pattern.schedule_type:
        errors.append(ScheduleError(
            ScheduleErrorCode.MISSING_FIELD, "schedule_type", "Schedule type is required"))

    if not pattern.week_days:
        errors.append(ScheduleError(
            ScheduleErrorCode.MISSING_FIELD, "week_days", "At least one week day is required"))
    elif len(set(pattern.week_days)) != len(pattern.week_days):
        errors.append(ScheduleError(
            ScheduleErrorCode.DUPLICATE_WEEK_DAYS, "week_days", "Duplicate week days are not allowed"))

    if pattern.schedule_type == ScheduleType.WEEKLY_RECURRING and len(pattern.week_days) != 1:
        errors.append(ScheduleError(
            ScheduleErrorCode.INVALID_DAY_COUNT, "week_days",
            "Weekly recurring schedule needs exactly one day"))

    if pattern.schedule_type == ScheduleType.MONTHLY_SPECIFIC and not pattern.week_numbers:
        errors.append(ScheduleError(
            ScheduleErrorCode.MISSING_WEEK_NUMBERS, "week_numbers",
            "Week numbers are required for monthly specific schedule"))

    has_times = True
    if window.start_time is None:
        has_times = False
        errors.append(ScheduleError(
            ScheduleErrorCode.MISSING_FIELD, "start_time", "Start time is required"))
    if window.end_time is None:
        has_times = False
        errors.append(ScheduleError(
            ScheduleErrorCode.MISSING_FIELD, "end_time", "End time is required"))

    if has_times:
        if window.end_time <= window.start_time:
            errors.append(ScheduleError(
                ScheduleErrorCode.INVALID_TIME_RANGE, "end_time", "End time must be after start time"))
        elif min_session_minutes and window.duration_minutes < min_session_minutes:
            errors.append(ScheduleError(
                ScheduleErrorCode.SESSION_TOO_SHORT, "end_time",
                f"Chamber session must be at least {min_session_minutes} minutes long"))

    slot_duration_ok = True
    if allowed_slot_durations and window.slot_duration not in allowed_slot_durations:
        slot_duration_ok = False
        allowed = ", ".join(str(d) for d in allowed_slot_durations)
        errors.append(ScheduleError(
            ScheduleErrorCode.INVALID_SLOT_DURATION, "slot_duration",
            f"Slot duration must be one of {allowed} minutes"))

    amount = _to_decimal(fees)
    if amount is None or amount <= 0:
        errors.append(ScheduleError(
            ScheduleErrorCode.INVALID_FEE, "fees", "Fees must be greater than zero"))

    if has_times and slot_duration_ok and compute_max_slots(window) <= 0:
        errors.append(ScheduleError(
            ScheduleErrorCode.INVALID_CAPACITY, "slot_duration",
            "Invalid time range or slot duration: no bookable slots"))

    return errors
