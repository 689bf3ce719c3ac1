# apps/chambers/filters.py

from django.db.models import Q
from django_filters import rest_framework as filters

from core.constants import ScheduleType
from .models import Chamber


class ChamberFilter(filters.FilterSet):
    """Filter for chambers"""

    search = filters.CharFilter(method='filter_search')
    doctor = filters.NumberFilter(field_name='doctor_id')
    pharmacy = filters.NumberFilter(field_name='pharmacy_id')
    schedule_type = filters.ChoiceFilter(choices=ScheduleType.choices)
    verified = filters.ChoiceFilter(
        method='filter_verified',
        choices=[('all', 'All'), ('verified', 'Verified'), ('unverified', 'Unverified')],
    )
    status = filters.ChoiceFilter(
        method='filter_status',
        choices=[('all', 'All'), ('active', 'Active'), ('inactive', 'Inactive')],
    )

    class Meta:
        model = Chamber
        fields = ['doctor', 'pharmacy', 'schedule_type']

    def filter_search(self, queryset, name, value):
        """Search by doctor name, specialization or pharmacy name"""
        return queryset.filter(
            Q(doctor__user__full_name__icontains=value) |
            Q(doctor__specialization__icontains=value) |
            Q(pharmacy__name__icontains=value)
        )

    def filter_verified(self, queryset, name, value):
        if value == 'all':
            return queryset
        return queryset.filter(is_verified=value == 'verified')

    def filter_status(self, queryset, name, value):
        if value == 'all':
            return queryset
        return queryset.filter(is_active=value == 'active')
