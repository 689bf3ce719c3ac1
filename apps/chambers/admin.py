# apps/chambers/admin.py

from django.contrib import admin

from .models import Chamber
from .services import schedule_label


@admin.register(Chamber)
class ChamberAdmin(admin.ModelAdmin):
    list_display = ('doctor', 'pharmacy', 'schedule', 'start_time', 'end_time', 'max_slots', 'fees', 'is_active', 'is_verified')
    list_filter = ('schedule_type', 'is_active', 'is_verified')
    search_fields = ('doctor__user__full_name', 'pharmacy__name')
    # schedule and status changes go through the API so conflict checks always run
    readonly_fields = ('schedule_type', 'week_days', 'week_numbers', 'start_time', 'end_time', 'slot_duration', 'max_slots', 'is_active', 'is_verified', 'verification_date', 'verified_by', 'created_at', 'updated_at', 'created_by', 'updated_by')
    raw_id_fields = ('doctor', 'pharmacy')

    fieldsets = (
        ('Partnership', {
            'fields': ('doctor', 'pharmacy', 'fees')
        }),
        ('Schedule', {
            'fields': ('schedule_type', 'week_days', 'week_numbers', 'start_time', 'end_time', 'slot_duration', 'max_slots')
        }),
        ('Verification', {
            'fields': ('is_active', 'is_verified', 'verification_date', 'verification_notes', 'verified_by')
        }),
        ('Audit', {
            'fields': ('created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',)
        }),
    )

    @admin.display(description='Schedule')
    def schedule(self, obj):
        return schedule_label(obj.pattern)

    def has_add_permission(self, request):
        return False
