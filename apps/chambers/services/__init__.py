from .schedule import (
    SchedulePattern,
    TimeWindow,
    ScheduleError,
    ScheduleErrorCode,
    validate_schedule,
    pattern_from_legacy,
)
from .capacity import compute_max_slots, slot_times
from .expander import expand_dates, dates_between, occurs_on, nth_weekday_of_month
from .conflicts import ChamberSchedule, ConflictResult, detect_conflict, has_conflict, windows_overlap
from .revenue import RevenueProjection, project_revenue
from .display import schedule_label, schedule_type_label, format_time_range, doctor_chamber_summary
