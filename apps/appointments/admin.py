# apps/appointments/admin.py

from django.contrib import admin

from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('chamber', 'appointment_date', 'slot_number', 'patient', 'status', 'payment_status', 'amount')
    list_filter = ('status', 'payment_status', 'appointment_date')
    search_fields = ('patient__email', 'patient__full_name')
    raw_id_fields = ('chamber', 'patient')
    date_hierarchy = 'appointment_date'
