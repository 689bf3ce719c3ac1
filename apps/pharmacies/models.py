# apps/pharmacies/models.py

from django.db import models

from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.soft_delete import SoftDeleteMixin


class Pharmacy(AuditFieldsMixin, SoftDeleteMixin, models.Model):
    """
    Pharmacy location hosting doctor chambers.
    """

    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='pharmacy_profile'
    )

    name = models.CharField(max_length=200)
    address = models.TextField()
    phone = models.CharField(max_length=20, blank=True)
    license_number = models.CharField(max_length=100, blank=True)

    is_verified = models.BooleanField(default=False)
    verified_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'pharmacies'
        verbose_name_plural = 'Pharmacies'
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active', 'is_verified']),
        ]

    def __str__(self):
        return self.name
