# core/mixins/audit_fields.py
from django.db import models


class AuditFieldsMixin(models.Model):
    """Adds created/updated audit fields to models"""
    created_at = models.DateTimeField(auto_now_add=True, editable=False)
    updated_at = models.DateTimeField(auto_now=True, editable=False)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_%(class)ss',
        editable=False
    )
    updated_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='updated_%(class)ss',
        editable=False
    )

    class Meta:
        abstract = True

    def touch(self, user):
        """Stamp the acting user; returns the fields to add to update_fields"""
        self.updated_by = user
        return ['updated_by', 'updated_at']
