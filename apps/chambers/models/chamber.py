# apps/chambers/models/chamber.py
from django.db import models
from django.core.validators import MinValueValidator

from core.constants import ScheduleType, SlotDuration
from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.soft_delete import SoftDeleteMixin

from ..services.schedule import TimeWindow, pattern_from_legacy
from ..services.conflicts import ChamberSchedule


class Chamber(AuditFieldsMixin, SoftDeleteMixin, models.Model):
    """
    A doctor's consultation session hosted by a pharmacy.
    Created active and unverified; an admin verifies it separately.
    """

    doctor = models.ForeignKey(
        "doctors.Doctor",
        on_delete=models.CASCADE,
        related_name="chambers",
    )
    pharmacy = models.ForeignKey(
        "pharmacies.Pharmacy",
        on_delete=models.CASCADE,
        related_name="chambers",
    )

    # =========================
    # Schedule pattern
    # =========================
    schedule_type = models.CharField(max_length=20, choices=ScheduleType.choices)
    week_days = models.JSONField(default=list)
    week_numbers = models.JSONField(default=list, blank=True)

    # =========================
    # Time window
    # =========================
    start_time = models.TimeField()
    end_time = models.TimeField()
    slot_duration = models.PositiveIntegerField(
        choices=SlotDuration.choices,
        default=SlotDuration.MIN_30,
    )
    max_slots = models.PositiveIntegerField(default=0, editable=False)

    fees = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
    )

    # =========================
    # Verification
    # =========================
    is_verified = models.BooleanField(default=False)
    verification_date = models.DateTimeField(null=True, blank=True)
    verification_notes = models.TextField(blank=True)
    verified_by = models.ForeignKey(
        "accounts.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="verified_chambers",
    )

    class Meta:
        db_table = "chambers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["doctor", "is_active"]),
            models.Index(fields=["pharmacy", "is_active"]),
            models.Index(fields=["is_active", "is_verified"]),
        ]

    def __str__(self):
        return f"{self.doctor} @ {self.pharmacy} ({self.schedule_type})"

    # =========================
    # Domain views
    # =========================
    @property
    def is_recurring(self):
        return self.schedule_type in ScheduleType.recurring()

    @property
    def pattern(self):
        return pattern_from_legacy({
            "schedule_type": self.schedule_type,
            "week_days": self.week_days,
            "week_numbers": self.week_numbers,
        })

    @property
    def window(self):
        return TimeWindow(
            start_time=self.start_time,
            end_time=self.end_time,
            slot_duration=self.slot_duration,
        )

    def to_schedule(self):
        return ChamberSchedule(
            chamber_id=self.pk,
            pattern=self.pattern,
            window=self.window,
            is_active=self.is_active,
        )
