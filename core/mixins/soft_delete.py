# core/mixins/soft_delete.py

from django.db import models, transaction
from django.utils import timezone


class NotDeletedManager(models.Manager):
    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class SoftDeleteMixin(models.Model):
    """Soft delete instead of actual deletion"""
    is_active = models.BooleanField(default=True)
    deleted_at = models.DateTimeField(null=True, blank=True, editable=False)
    deleted_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        editable=False,
        related_name='deleted_%(class)ss'
    )

    objects = NotDeletedManager()
    all_objects = models.Manager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def delete(self, *args, user=None, **kwargs):
        """Override delete to soft delete"""
        with transaction.atomic():
            self.is_active = False
            self.deleted_at = timezone.now()
            if user is not None:
                self.deleted_by = user
            self.save(update_fields=['is_active', 'deleted_at', 'deleted_by'])
