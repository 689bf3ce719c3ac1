# apps/doctors/models.py

from django.db import models

from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.soft_delete import SoftDeleteMixin


class Doctor(AuditFieldsMixin, SoftDeleteMixin, models.Model):
    """Doctor profile - link to User account"""

    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='doctor_profile'
    )

    specialization = models.CharField(max_length=100)
    qualification = models.CharField(max_length=200, blank=True)
    license_number = models.CharField(max_length=100, unique=True)
    years_of_experience = models.PositiveIntegerField(default=0)

    is_verified = models.BooleanField(default=False)
    verified_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'doctors'
        ordering = ['user__full_name']
        indexes = [
            models.Index(fields=['specialization']),
            models.Index(fields=['is_active', 'is_verified']),
        ]

    def __str__(self):
        return f"Dr. {self.full_name} ({self.specialization})"

    @property
    def full_name(self):
        return self.user.full_name
