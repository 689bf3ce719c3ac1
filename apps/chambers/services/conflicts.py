# apps/chambers/services/conflicts.py
"""
Detects day + time collisions between chambers of the same doctor.

Two chambers conflict when they can run on the same calendar day and their
time windows overlap. Recurring chambers are compared by weekday; anything
involving a monthly-specific chamber is compared by expanding both patterns
over a shared horizon.
"""
from dataclasses import dataclass, field

from django.utils import timezone

from ..conf import get_setting
from .display import format_time_range
from .expander import add_months, dates_between


@dataclass(frozen=True)
class ChamberSchedule:
    chamber_id: object
    pattern: object
    window: object
    is_active: bool = True


@dataclass(frozen=True)
class ConflictResult:
    chamber_id: object
    start_time: object
    end_time: object
    week_days: tuple = ()
    dates: tuple = field(default=())

    @property
    def message(self):
        time_range = format_time_range(self.start_time, self.end_time)
        if self.week_days:
            days = ", ".join(day.label for day in self.week_days)
            return (
                f"Doctor already has a chamber scheduled on {days} from {time_range}. "
                "Please choose a different time."
            )
        first = self.dates[0].isoformat() if self.dates else "the same dates"
        return (
            f"Doctor already has a chamber scheduled on {first} from {time_range}. "
            "Please choose a different time."
        )

    def as_dict(self):
        return {
            "chamber_id": self.chamber_id,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "week_days": list(self.week_days),
            "dates": list(self.dates),
            "message": self.message,
        }


def windows_overlap(a, b):
    """Half-open overlap: touching boundaries do not overlap"""
    return a.start_time < b.end_time and b.start_time < a.end_time


def shared_days(a, b, reference_date=None, horizon_months=None):
    """
    (week_days, dates) the two patterns have in common.
    Only one of the two is filled, depending on how they were compared.
    """
    if a.is_recurring and b.is_recurring:
        common = set(a.week_days) & set(b.week_days)
        return tuple(day for day in a.week_days if day in common), ()

    reference_date = reference_date or timezone.localdate()
    horizon_months = horizon_months or get_setting("CONFLICT_HORIZON_MONTHS")
    horizon_end = add_months(reference_date, horizon_months)

    dates_a = set(dates_between(a, reference_date, horizon_end))
    dates_b = set(dates_between(b, reference_date, horizon_end))
    return (), tuple(sorted(dates_a & dates_b))


def detect_conflict(candidate, existing, reference_date=None, horizon_months=None):
    """
    First active chamber in `existing` colliding with `candidate`, or None.

    `existing` should hold the doctor's other chambers; the candidate's own
    record is skipped when present. Verification status does not matter.
    """
    if not candidate.is_active:
        return None

    for other in existing:
        if not other.is_active:
            continue
        if candidate.chamber_id is not None and other.chamber_id == candidate.chamber_id:
            continue
        if not windows_overlap(candidate.window, other.window):
            continue

        week_days, dates = shared_days(
            candidate.pattern, other.pattern,
            reference_date=reference_date,
            horizon_months=horizon_months,
        )
        if week_days or dates:
            return ConflictResult(
                chamber_id=other.chamber_id,
                start_time=other.window.start_time,
                end_time=other.window.end_time,
                week_days=week_days,
                dates=dates,
            )

    return None


def has_conflict(candidate, existing, reference_date=None, horizon_months=None):
    return detect_conflict(candidate, existing, reference_date, horizon_months) is not None
