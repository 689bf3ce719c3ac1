# apps/doctors/admin.py

from django.contrib import admin

from apps.chambers.models import Chamber
from .models import Doctor


class ChamberInline(admin.TabularInline):
    model = Chamber
    fk_name = 'doctor'
    extra = 0
    fields = ('pharmacy', 'schedule_type', 'week_days', 'start_time', 'end_time', 'is_active', 'is_verified')
    readonly_fields = fields
    can_delete = False
    show_change_link = True


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'specialization', 'license_number', 'is_active', 'is_verified')
    list_filter = ('specialization', 'is_active', 'is_verified')
    search_fields = ('user__email', 'user__full_name', 'license_number')
    readonly_fields = ('verified_at', 'created_at', 'updated_at', 'created_by', 'updated_by')
    raw_id_fields = ('user',)
    inlines = [ChamberInline]
