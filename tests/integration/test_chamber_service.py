"""Tests for chamber lifecycle services."""
from datetime import time, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.appointments.models import Appointment
from apps.chambers.models import Chamber
from apps.chambers.services.chamber_service import (
    create_chamber,
    delete_chamber,
    set_chamber_active,
    update_chamber,
    verify_chamber,
)
from core.constants import AppointmentStatus, ScheduleType, WeekDay
from core.exceptions import ChamberInUseError, SchedulingConflict

pytestmark = pytest.mark.django_db


def chamber_data(doctor, pharmacy, **overrides):
    data = {
        "doctor": doctor,
        "pharmacy": pharmacy,
        "schedule_type": ScheduleType.WEEKLY_RECURRING,
        "week_days": ["MONDAY"],
        "week_numbers": [],
        "start_time": time(9, 0),
        "end_time": time(13, 0),
        "slot_duration": 30,
        "fees": Decimal("500.00"),
    }
    data.update(overrides)
    return data


class TestCreateChamber:

    def test_new_chamber_is_active_and_unverified(self, doctor, pharmacy, admin_user):
        chamber = create_chamber(chamber_data(doctor, pharmacy), admin_user)

        assert chamber.pk is not None
        assert chamber.is_active
        assert not chamber.is_verified
        assert chamber.max_slots == 8
        assert chamber.created_by == admin_user

    def test_recurring_chamber_drops_week_numbers(self, doctor, pharmacy, admin_user):
        chamber = create_chamber(
            chamber_data(doctor, pharmacy, week_numbers=["FIRST"]), admin_user
        )

        assert chamber.week_numbers == []

    def test_overlapping_chamber_is_rejected(self, make_chamber, doctor, pharmacy, admin_user):
        existing = make_chamber()

        with pytest.raises(SchedulingConflict) as excinfo:
            create_chamber(
                chamber_data(doctor, pharmacy, start_time=time(9, 30), end_time=time(11, 0)),
                admin_user,
            )

        assert excinfo.value.conflict.chamber_id == existing.pk
        assert Chamber.objects.count() == 1

    def test_other_doctor_may_use_same_slot(self, make_chamber, make_doctor, pharmacy, admin_user):
        make_chamber()
        other = make_doctor(name="Karim Hossain")

        chamber = create_chamber(chamber_data(other, pharmacy), admin_user)

        assert chamber.pk is not None

    def test_inactive_chamber_does_not_block(self, make_chamber, doctor, pharmacy, admin_user):
        make_chamber(is_active=False)

        chamber = create_chamber(chamber_data(doctor, pharmacy), admin_user)

        assert chamber.is_active


class TestUpdateChamber:

    def test_update_recomputes_capacity(self, make_chamber, admin_user):
        chamber = make_chamber()

        chamber, warnings = update_chamber(chamber, {"end_time": time(11, 0)}, admin_user)

        assert chamber.max_slots == 4
        assert warnings == []

    def test_update_into_conflict_is_rejected(self, make_chamber, admin_user):
        make_chamber()
        other = make_chamber(week_days=["TUESDAY"])

        with pytest.raises(SchedulingConflict):
            update_chamber(other, {"week_days": ["MONDAY"]}, admin_user)

        other.refresh_from_db()
        assert other.week_days == ["TUESDAY"]

    def test_update_may_keep_its_own_slot(self, make_chamber, admin_user):
        chamber = make_chamber()

        chamber, _ = update_chamber(chamber, {"end_time": time(10, 30)}, admin_user)

        assert chamber.end_time == time(10, 30)

    def test_warns_about_upcoming_bookings(self, make_chamber, admin_user):
        chamber = make_chamber(is_verified=True)
        Appointment.objects.create(
            chamber=chamber,
            appointment_date=timezone.localdate() + timedelta(days=7),
            slot_number=1,
            status=AppointmentStatus.CONFIRMED,
        )

        _, warnings = update_chamber(chamber, {"fees": Decimal("600.00")}, admin_user)

        assert len(warnings) == 1
        assert warnings[0]["code"] == "affects_existing_bookings"
        assert warnings[0]["fields"] == ["fees"]
        assert warnings[0]["upcoming_appointments"] == 1

    def test_no_warning_when_nothing_relevant_changed(self, make_chamber, admin_user):
        chamber = make_chamber(is_verified=True)
        Appointment.objects.create(
            chamber=chamber,
            appointment_date=timezone.localdate() + timedelta(days=7),
            slot_number=1,
        )

        _, warnings = update_chamber(chamber, {"fees": Decimal("500.00")}, admin_user)

        assert warnings == []


class TestVerification:

    def test_verify_activates(self, make_chamber, admin_user):
        chamber = make_chamber(is_active=False)

        verify_chamber(chamber, True, "Documents checked", admin_user)
        chamber.refresh_from_db()

        assert chamber.is_verified
        assert chamber.is_active
        assert chamber.verified_by == admin_user
        assert chamber.verification_date is not None
        assert chamber.verification_notes == "Documents checked"

    def test_reject_deactivates(self, make_chamber, admin_user):
        chamber = make_chamber(is_verified=True)

        verify_chamber(chamber, False, "", admin_user)
        chamber.refresh_from_db()

        assert not chamber.is_verified
        assert not chamber.is_active
        assert chamber.verification_date is None

    def test_verify_checks_conflicts(self, make_chamber, admin_user):
        make_chamber()
        pending = make_chamber(is_active=False)

        with pytest.raises(SchedulingConflict):
            verify_chamber(pending, True, "", admin_user)

        pending.refresh_from_db()
        assert not pending.is_verified


class TestActivation:

    def test_activation_checks_conflicts(self, make_chamber, admin_user):
        make_chamber()
        dormant = make_chamber(is_active=False)

        with pytest.raises(SchedulingConflict):
            set_chamber_active(dormant, True, admin_user)

    def test_deactivation_always_succeeds(self, make_chamber, admin_user):
        chamber = make_chamber()

        set_chamber_active(chamber, False, admin_user)
        chamber.refresh_from_db()

        assert not chamber.is_active
        assert chamber.updated_by == admin_user


class TestSoftDeletedDoctor:

    def test_chambers_can_still_be_deactivated(self, make_chamber, doctor, admin_user):
        chamber = make_chamber()
        doctor.delete(user=admin_user)

        set_chamber_active(chamber, False, admin_user)
        chamber.refresh_from_db()

        assert not chamber.is_active

    def test_chambers_can_still_be_rejected(self, make_chamber, doctor, admin_user):
        chamber = make_chamber(is_verified=True)
        doctor.delete(user=admin_user)

        verify_chamber(chamber, False, "Doctor left the platform", admin_user)
        chamber.refresh_from_db()

        assert not chamber.is_verified
        assert not chamber.is_active


def test_stored_bare_week_day_is_read_as_list(make_chamber):
    chamber = make_chamber(week_days="MONDAY")

    assert chamber.pattern.week_days == (WeekDay.MONDAY,)


class TestDeleteChamber:

    def test_soft_delete(self, make_chamber, admin_user):
        chamber = make_chamber()

        delete_chamber(chamber, admin_user)

        assert not Chamber.objects.filter(pk=chamber.pk).exists()
        deleted = Chamber.all_objects.get(pk=chamber.pk)
        assert deleted.is_deleted
        assert deleted.deleted_by == admin_user

    def test_refuses_with_active_appointments(self, make_chamber, admin_user):
        chamber = make_chamber()
        Appointment.objects.create(
            chamber=chamber, appointment_date=timezone.localdate(), slot_number=1
        )

        with pytest.raises(ChamberInUseError):
            delete_chamber(chamber, admin_user)

    def test_deleting_twice_is_a_no_op(self, make_chamber, admin_user, manager_user):
        chamber = make_chamber()
        delete_chamber(chamber, admin_user)

        delete_chamber(chamber, manager_user)

        assert Chamber.all_objects.get(pk=chamber.pk).deleted_by == admin_user

    def test_cancelled_appointments_do_not_block(self, make_chamber, admin_user):
        chamber = make_chamber()
        Appointment.objects.create(
            chamber=chamber,
            appointment_date=timezone.localdate(),
            slot_number=1,
            status=AppointmentStatus.CANCELLED,
        )

        delete_chamber(chamber, admin_user)

        assert Chamber.all_objects.get(pk=chamber.pk).is_deleted
