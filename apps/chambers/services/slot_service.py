# apps/chambers/services/slot_service.py
from django.db.models import Count, Q, Sum

from apps.appointments.models import Appointment
from core.constants import AppointmentStatus, PaymentStatus

from .capacity import slot_times
from .expander import occurs_on


def get_slot_availability(chamber, date, exclude_appointment=None):
    """
    Booked and free slot numbers of a chamber on a date.
    `exclude_appointment` lets an appointment being edited keep its own slot.
    """
    appointments = Appointment.objects.filter(
        chamber=chamber,
        appointment_date=date,
        status__in=AppointmentStatus.occupying(),
    )
    if exclude_appointment:
        appointments = appointments.exclude(pk=exclude_appointment)

    booked = sorted(set(appointments.values_list("slot_number", flat=True)))
    all_slots = range(1, chamber.max_slots + 1)
    available = [slot for slot in all_slots if slot not in booked]

    times = slot_times(chamber.window)

    return {
        "date": date,
        "is_scheduled": occurs_on(chamber.pattern, date),
        "total_slots": chamber.max_slots,
        "booked_slots": booked,
        "available_slots": available,
        "is_fully_booked": not available,
        "slots": [
            {
                "slot_number": number,
                "start_time": start,
                "end_time": end,
                "available": number not in booked,
            }
            for number, (start, end) in enumerate(times, start=1)
        ],
    }


def get_chamber_statistics(chamber):
    """Appointment counts and collected revenue from real bookings"""
    stats = Appointment.objects.filter(chamber=chamber).aggregate(
        total_appointments=Count("id"),
        completed_appointments=Count("id", filter=Q(status=AppointmentStatus.COMPLETED)),
        revenue=Sum("amount", filter=Q(payment_status=PaymentStatus.PAID)),
    )
    stats["revenue"] = stats["revenue"] or 0
    return stats
