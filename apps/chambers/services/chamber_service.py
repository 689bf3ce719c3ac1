# apps/chambers/services/chamber_service.py
"""
Chamber lifecycle against the database.

Conflict checking and saving happen inside one transaction holding a row
lock on the doctor, so two concurrent requests for the same doctor cannot
both pass the conflict check.
"""
import logging

from django.db import transaction
from django.utils import timezone

from apps.appointments.models import Appointment
from apps.doctors.models import Doctor
from core.constants import AppointmentStatus, SlotDuration
from core.exceptions import ChamberInUseError, SchedulingConflict

from ..models import Chamber
from .capacity import compute_max_slots
from .conflicts import detect_conflict

logger = logging.getLogger(__name__)

SCHEDULE_FIELDS = ("schedule_type", "week_days", "week_numbers", "start_time", "end_time", "slot_duration")
BOOKING_IMPACT_FIELDS = SCHEDULE_FIELDS + ("fees",)


def _lock_doctor(doctor_id):
    # includes soft-deleted doctors
    return Doctor.all_objects.select_for_update().get(pk=doctor_id)


def doctor_schedules(doctor_id, exclude_id=None):
    """The doctor's active chambers as ChamberSchedule values"""
    chambers = Chamber.objects.filter(doctor_id=doctor_id, is_active=True)
    if exclude_id is not None:
        chambers = chambers.exclude(pk=exclude_id)
    return [chamber.to_schedule() for chamber in chambers]


def ensure_no_conflict(chamber):
    """Raise SchedulingConflict if `chamber` collides with the doctor's other chambers"""
    conflict = detect_conflict(
        chamber.to_schedule(),
        doctor_schedules(chamber.doctor_id, exclude_id=chamber.pk),
    )
    if conflict is not None:
        logger.warning(
            f"Chamber conflict for doctor {chamber.doctor_id}: "
            f"collides with chamber {conflict.chamber_id}"
        )
        raise SchedulingConflict(conflict)


def upcoming_bookings(chamber):
    return Appointment.objects.filter(
        chamber=chamber,
        appointment_date__gte=timezone.localdate(),
        status__in=AppointmentStatus.occupying(),
    ).count()


def create_chamber(data, user):
    """
    Persist a new chamber (active, unverified). `data` is already validated.
    """
    with transaction.atomic():
        doctor = _lock_doctor(data["doctor"].pk)

        chamber = Chamber(
            doctor=doctor,
            pharmacy=data["pharmacy"],
            schedule_type=data["schedule_type"],
            week_days=list(data["week_days"]),
            week_numbers=list(data.get("week_numbers") or []),
            start_time=data["start_time"],
            end_time=data["end_time"],
            slot_duration=data.get("slot_duration", SlotDuration.MIN_30),
            fees=data["fees"],
            is_active=True,
            is_verified=False,
            created_by=user,
            updated_by=user,
        )
        if chamber.is_recurring:
            chamber.week_numbers = []
        chamber.max_slots = compute_max_slots(chamber.window)

        ensure_no_conflict(chamber)
        chamber.save()

    logger.info(f"Chamber created: {chamber.pk} for doctor {doctor.pk} by {user}")
    return chamber


def update_chamber(chamber, data, user):
    """
    Apply a partial update. Returns (chamber, warnings).

    Schedule, time or fee changes on a verified chamber with upcoming
    bookings are allowed but reported in the warnings.
    """
    warnings = []

    with transaction.atomic():
        _lock_doctor(chamber.doctor_id)
        chamber = Chamber.objects.select_for_update().get(pk=chamber.pk)

        changed = [
            name for name in BOOKING_IMPACT_FIELDS
            if name in data and _differs(getattr(chamber, name), data[name])
        ]

        for name, value in data.items():
            if name in ("week_days", "week_numbers"):
                value = list(value or [])
            setattr(chamber, name, value)

        if chamber.is_recurring:
            chamber.week_numbers = []
        chamber.max_slots = compute_max_slots(chamber.window)
        chamber.updated_by = user

        ensure_no_conflict(chamber)
        chamber.save()

        if changed and chamber.is_verified:
            booked = upcoming_bookings(chamber)
            if booked:
                warnings.append({
                    "code": "affects_existing_bookings",
                    "fields": changed,
                    "upcoming_appointments": booked,
                    "message": (
                        f"{booked} upcoming appointment(s) were booked against the "
                        "previous schedule and may need rescheduling."
                    ),
                })

    logger.info(f"Chamber updated: {chamber.pk} by {user} (changed: {', '.join(changed) or 'none'})")
    return chamber, warnings


def _differs(current, new):
    if isinstance(current, list):
        return list(current) != list(new or [])
    return current != new


def verify_chamber(chamber, verified, notes, user):
    """
    Record the admin verification decision.
    Verifying also activates the chamber; rejecting deactivates it.
    """
    with transaction.atomic():
        _lock_doctor(chamber.doctor_id)

        chamber.is_verified = verified
        chamber.verification_date = timezone.now() if verified else None
        chamber.verification_notes = notes or ""
        chamber.verified_by = user if verified else None
        chamber.is_active = verified
        chamber.updated_by = user

        if verified:
            ensure_no_conflict(chamber)

        chamber.save(update_fields=[
            "is_verified",
            "verification_date",
            "verification_notes",
            "verified_by",
            "is_active",
            "updated_by",
            "updated_at",
        ])

    logger.info(f"Chamber {'verified' if verified else 'rejected'}: {chamber.pk} by {user}")
    return chamber


def set_chamber_active(chamber, active, user):
    """Activation re-runs the conflict check; deactivation always succeeds"""
    with transaction.atomic():
        _lock_doctor(chamber.doctor_id)

        chamber.is_active = active
        if active:
            ensure_no_conflict(chamber)

        chamber.save(update_fields=["is_active"] + chamber.touch(user))

    logger.info(f"Chamber {'activated' if active else 'deactivated'}: {chamber.pk} by {user}")
    return chamber


def delete_chamber(chamber, user):
    """Soft delete; refused while appointments still hold slots"""
    if chamber.is_deleted:
        return

    active = Appointment.objects.filter(
        chamber=chamber,
        status__in=AppointmentStatus.occupying(),
    ).count()

    if active:
        raise ChamberInUseError("Cannot delete chamber with active appointments")

    chamber.delete(user=user)
    logger.info(f"Chamber soft deleted: {chamber.pk} by {user}")
