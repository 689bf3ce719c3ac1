"""Tests for schedule pattern validation."""
from datetime import time

import pytest

from apps.chambers.services.schedule import (
    SchedulePattern,
    ScheduleErrorCode,
    TimeWindow,
    pattern_from_legacy,
    validate_schedule,
)
from core.constants import ScheduleType, WeekDay, WeekNumber
from core.exceptions import MalformedPatternError


def codes(errors):
    return {error.code for error in errors}


def window(start=(9, 0), end=(13, 0), slot=30):
    return TimeWindow(start_time=time(*start), end_time=time(*end), slot_duration=slot)


class TestSchedulePattern:

    def test_coerces_raw_strings(self):
        pattern = SchedulePattern("MULTI_WEEKLY", ("SUNDAY", "FRIDAY"))

        assert pattern.schedule_type is ScheduleType.MULTI_WEEKLY
        assert pattern.week_days == (WeekDay.SUNDAY, WeekDay.FRIDAY)
        assert pattern.is_recurring

    def test_recurring_pattern_drops_week_numbers(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY",), ("FIRST",))

        assert pattern.week_numbers == ()

    def test_monthly_specific_is_not_recurring(self):
        pattern = SchedulePattern("MONTHLY_SPECIFIC", ("SUNDAY",), ("SECOND", "FOURTH"))

        assert not pattern.is_recurring
        assert pattern.week_numbers == (WeekNumber.SECOND, WeekNumber.FOURTH)

    def test_unknown_schedule_type_is_malformed(self):
        with pytest.raises(MalformedPatternError):
            SchedulePattern("DAILY", ("MONDAY",))


class TestValidateSchedule:

    def test_valid_weekly_chamber(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY",))

        assert validate_schedule(pattern, window(), 500) == []

    def test_weekly_recurring_allows_one_day(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY", "TUESDAY"))

        errors = validate_schedule(pattern, window(), 500)

        assert codes(errors) == {ScheduleErrorCode.INVALID_DAY_COUNT}
        assert errors[0].field == "week_days"

    def test_weekly_recurring_without_days(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ())

        errors = validate_schedule(pattern, window(), 500)

        assert codes(errors) == {
            ScheduleErrorCode.MISSING_FIELD,
            ScheduleErrorCode.INVALID_DAY_COUNT,
        }
        assert {e.field for e in errors} == {"week_days"}

    def test_multi_weekly_allows_several_days(self):
        pattern = SchedulePattern("MULTI_WEEKLY", ("MONDAY", "TUESDAY", "FRIDAY"))

        assert validate_schedule(pattern, window(), 500) == []

    def test_monthly_specific_requires_week_numbers(self):
        pattern = SchedulePattern("MONTHLY_SPECIFIC", ("SUNDAY",))

        errors = validate_schedule(pattern, window(), 500)

        assert codes(errors) == {ScheduleErrorCode.MISSING_WEEK_NUMBERS}

    def test_reports_every_missing_field(self):
        pattern = SchedulePattern(None)

        errors = validate_schedule(pattern, TimeWindow(slot_duration=30), 500)

        missing = {e.field for e in errors if e.code == ScheduleErrorCode.MISSING_FIELD}
        assert missing == {"schedule_type", "week_days", "start_time", "end_time"}

    def test_end_before_start(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY",))

        errors = validate_schedule(pattern, window(start=(13, 0), end=(9, 0)), 500)

        assert ScheduleErrorCode.INVALID_TIME_RANGE in codes(errors)
        assert ScheduleErrorCode.INVALID_CAPACITY in codes(errors)

    def test_equal_start_and_end_is_invalid(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY",))

        errors = validate_schedule(pattern, window(start=(9, 0), end=(9, 0)), 500)

        assert ScheduleErrorCode.INVALID_TIME_RANGE in codes(errors)

    @pytest.mark.parametrize("fees", [0, -10, None, "", "abc"])
    def test_fees_must_be_positive(self, fees):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY",))

        errors = validate_schedule(pattern, window(), fees)

        assert codes(errors) == {ScheduleErrorCode.INVALID_FEE}

    def test_slot_longer_than_window_has_no_capacity(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY",))

        errors = validate_schedule(pattern, window(start=(9, 0), end=(9, 45), slot=60), 500)

        assert codes(errors) == {ScheduleErrorCode.INVALID_CAPACITY}

    def test_minimum_session_length(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY",))

        errors = validate_schedule(
            pattern, window(start=(9, 0), end=(9, 20), slot=15), 500, min_session_minutes=30
        )

        assert codes(errors) == {ScheduleErrorCode.SESSION_TOO_SHORT}

    def test_slot_duration_outside_allowed_set(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY",))

        errors = validate_schedule(
            pattern, window(slot=20), 500, allowed_slot_durations=[15, 30, 45, 60]
        )

        assert codes(errors) == {ScheduleErrorCode.INVALID_SLOT_DURATION}

    def test_duplicate_week_days(self):
        pattern = SchedulePattern("MULTI_WEEKLY", ("MONDAY", "MONDAY"))

        errors = validate_schedule(pattern, window(), 500)

        assert codes(errors) == {ScheduleErrorCode.DUPLICATE_WEEK_DAYS}

    def test_collects_all_violations(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY", "FRIDAY"))

        errors = validate_schedule(pattern, window(start=(12, 0), end=(10, 0)), 0)

        assert {
            ScheduleErrorCode.INVALID_DAY_COUNT,
            ScheduleErrorCode.INVALID_TIME_RANGE,
            ScheduleErrorCode.INVALID_FEE,
        } <= codes(errors)


class TestTimeWindow:

    def test_parses_time_strings(self):
        parsed = TimeWindow("09:00", "13:00", 30)

        assert parsed.start_time == time(9, 0)
        assert parsed.end_time == time(13, 0)
        assert parsed.duration_minutes == 240

    def test_string_window_validates(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY",))

        errors = validate_schedule(pattern, TimeWindow("13:00", "09:00", 30), 500)

        assert ScheduleErrorCode.INVALID_TIME_RANGE in codes(errors)

    def test_empty_string_is_missing(self):
        pattern = SchedulePattern("WEEKLY_RECURRING", ("MONDAY",))

        errors = validate_schedule(pattern, TimeWindow("", "13:00", 30), 500)

        assert codes(errors) == {ScheduleErrorCode.MISSING_FIELD}

    def test_rejects_malformed_time(self):
        with pytest.raises(ValueError, match="start_time"):
            TimeWindow("nine", "13:00", 30)


class TestLegacyAdapter:

    def test_single_week_day_recurring(self):
        pattern = pattern_from_legacy({"weekDay": "MONDAY", "isRecurring": True})

        assert pattern.schedule_type == ScheduleType.WEEKLY_RECURRING
        assert pattern.week_days == (WeekDay.MONDAY,)

    def test_single_week_number_monthly(self):
        pattern = pattern_from_legacy({"weekDay": "SUNDAY", "weekNumber": "LAST"})

        assert pattern.schedule_type == ScheduleType.MONTHLY_SPECIFIC
        assert pattern.week_numbers == (WeekNumber.LAST,)

    def test_current_format_passes_through(self):
        pattern = pattern_from_legacy({
            "scheduleType": "MULTI_WEEKLY",
            "weekDays": ["SUNDAY", "FRIDAY"],
        })

        assert pattern.schedule_type == ScheduleType.MULTI_WEEKLY
        assert pattern.week_days == (WeekDay.SUNDAY, WeekDay.FRIDAY)

    def test_bare_stored_values_become_lists(self):
        pattern = pattern_from_legacy({
            "schedule_type": "MONTHLY_SPECIFIC",
            "week_days": "SUNDAY",
            "week_numbers": "LAST",
        })

        assert pattern.week_days == (WeekDay.SUNDAY,)
        assert pattern.week_numbers == (WeekNumber.LAST,)
