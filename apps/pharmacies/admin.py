# apps/pharmacies/admin.py

from django.contrib import admin

from .models import Pharmacy


@admin.register(Pharmacy)
class PharmacyAdmin(admin.ModelAdmin):
    list_display = ('name', 'phone', 'is_active', 'is_verified')
    list_filter = ('is_active', 'is_verified')
    search_fields = ('name', 'address', 'user__email')
    readonly_fields = ('verified_at', 'created_at', 'updated_at', 'created_by', 'updated_by')
    raw_id_fields = ('user',)
