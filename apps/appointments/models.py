# apps/appointments/models.py

from django.db import models
from django.db.models import Q

from core.constants import AppointmentStatus, PaymentStatus


class Appointment(models.Model):
    """
    A booked slot of a chamber on a concrete date.
    Slot numbers run 1..chamber.max_slots.
    """

    chamber = models.ForeignKey(
        'chambers.Chamber',
        on_delete=models.PROTECT,
        related_name='appointments'
    )
    patient = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='appointments'
    )

    appointment_date = models.DateField()
    slot_number = models.PositiveIntegerField()
    status = models.CharField(
        max_length=20,
        choices=AppointmentStatus.choices,
        default=AppointmentStatus.PENDING
    )

    amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING
    )

    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'appointments'
        ordering = ['-appointment_date', 'slot_number']
        indexes = [
            models.Index(fields=['chamber', 'appointment_date']),
            models.Index(fields=['status']),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['chamber', 'appointment_date', 'slot_number'],
                condition=Q(status__in=['PENDING', 'CONFIRMED']),
                name='unique_occupied_slot',
            ),
        ]

    def __str__(self):
        return f"{self.chamber} on {self.appointment_date} #{self.slot_number}"
