# apps/chambers/services/revenue.py
from dataclasses import dataclass
from decimal import Decimal

from core.constants import ScheduleType
from core.exceptions import MalformedPatternError

from .capacity import compute_max_slots


@dataclass(frozen=True)
class RevenueProjection:
    max_slots: int
    session: Decimal
    sessions_per_week: int = None
    weekly: Decimal = None
    sessions_per_month: int = None
    monthly: Decimal = None

    def as_dict(self):
        data = {"max_slots": self.max_slots, "session": self.session}
        if self.weekly is not None:
            data["sessions_per_week"] = self.sessions_per_week
            data["weekly"] = self.weekly
        if self.monthly is not None:
            data["sessions_per_month"] = self.sessions_per_month
            data["monthly"] = self.monthly
        return data


def project_revenue(pattern, window, fees):
    """
    Display-only revenue potential of a chamber.
    Recurring chambers project per week, monthly-specific ones per month.
    """
    max_slots = compute_max_slots(window)
    session = Decimal(max_slots) * Decimal(str(fees or 0))

    if pattern.is_recurring:
        sessions = len(pattern.week_days)
        return RevenueProjection(
            max_slots=max_slots,
            session=session,
            sessions_per_week=sessions,
            weekly=session * sessions,
        )

    if pattern.schedule_type == ScheduleType.MONTHLY_SPECIFIC:
        sessions = len(pattern.week_numbers) * len(pattern.week_days)
        return RevenueProjection(
            max_slots=max_slots,
            session=session,
            sessions_per_month=sessions,
            monthly=session * sessions,
        )

    raise MalformedPatternError(pattern.schedule_type)
