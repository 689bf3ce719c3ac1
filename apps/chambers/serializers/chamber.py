# apps/chambers/serializers/chamber.py

from rest_framework import serializers
from rest_framework.exceptions import ErrorDetail

from apps.doctors.models import Doctor
from apps.pharmacies.models import Pharmacy
from core.constants import ScheduleType, SlotDuration, WeekDay, WeekNumber

from ..conf import get_setting
from ..models import Chamber
from ..services import (
    SchedulePattern,
    TimeWindow,
    validate_schedule,
    project_revenue,
    schedule_label,
    format_time_range,
)
from ..services.chamber_service import create_chamber, update_chamber


    # =========================
    #✅ Read
    # =========================

class ChamberSerializer(serializers.ModelSerializer):
    """Chamber with display labels, projection and booking statistics"""

    doctor_name = serializers.CharField(source='doctor.full_name', read_only=True)
    doctor_specialization = serializers.CharField(source='doctor.specialization', read_only=True)
    pharmacy_name = serializers.CharField(source='pharmacy.name', read_only=True)
    pharmacy_address = serializers.CharField(source='pharmacy.address', read_only=True)

    schedule_type_display = serializers.CharField(source='get_schedule_type_display', read_only=True)
    schedule_display = serializers.SerializerMethodField()
    time_range = serializers.SerializerMethodField()
    is_recurring = serializers.BooleanField(read_only=True)
    projection = serializers.SerializerMethodField()

    # Populated by queryset annotations in the view
    total_appointments = serializers.IntegerField(read_only=True, default=0)
    completed_appointments = serializers.IntegerField(read_only=True, default=0)
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True, default=0)

    class Meta:
        model = Chamber
        fields = [
            'id',
            'doctor', 'doctor_name', 'doctor_specialization',
            'pharmacy', 'pharmacy_name', 'pharmacy_address',

            # Schedule
            'schedule_type', 'schedule_type_display', 'schedule_display',
            'week_days', 'week_numbers', 'is_recurring',
            'start_time', 'end_time', 'time_range',
            'slot_duration', 'max_slots', 'fees', 'projection',

            # Status
            'is_active', 'is_verified', 'verification_date', 'verification_notes',

            # Statistics
            'total_appointments', 'completed_appointments', 'revenue',

            # Audit
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_schedule_display(self, obj):
        return schedule_label(obj.pattern)

    def get_time_range(self, obj):
        return format_time_range(obj.start_time, obj.end_time)

    def get_projection(self, obj):
        return project_revenue(obj.pattern, obj.window, obj.fees).as_dict()


    # =========================
    #✅ Write
    # =========================

class ScheduleFieldsMixin(serializers.Serializer):
    """Pattern / window / fee fields validated together"""

    schedule_type = serializers.ChoiceField(choices=ScheduleType.choices, required=False, allow_null=True)
    week_days = serializers.ListField(
        child=serializers.ChoiceField(choices=WeekDay.choices),
        required=False,
        allow_empty=True,
    )
    week_numbers = serializers.ListField(
        child=serializers.ChoiceField(choices=WeekNumber.choices),
        required=False,
        allow_empty=True,
    )
    start_time = serializers.TimeField(required=False, allow_null=True)
    end_time = serializers.TimeField(required=False, allow_null=True)
    slot_duration = serializers.IntegerField(required=False)
    fees = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)

    def _current(self, attrs, name, default=None):
        if name in attrs:
            return attrs[name]
        if getattr(self, 'instance', None) is not None:
            return getattr(self.instance, name)
        return default

    def build_schedule(self, attrs):
        pattern = SchedulePattern(
            schedule_type=self._current(attrs, 'schedule_type'),
            week_days=tuple(self._current(attrs, 'week_days', []) or ()),
            week_numbers=tuple(self._current(attrs, 'week_numbers', []) or ()),
        )
        window = TimeWindow(
            start_time=self._current(attrs, 'start_time'),
            end_time=self._current(attrs, 'end_time'),
            slot_duration=self._current(attrs, 'slot_duration', SlotDuration.MIN_30) or 0,
        )
        return pattern, window, self._current(attrs, 'fees')

    def validate_schedule_fields(self, attrs):
        pattern, window, fees = self.build_schedule(attrs)

        errors = validate_schedule(
            pattern,
            window,
            fees,
            min_session_minutes=get_setting('MIN_SESSION_MINUTES'),
            allowed_slot_durations=get_setting('SLOT_DURATIONS'),
        )
        if errors:
            detail = {}
            for error in errors:
                detail.setdefault(error.field, []).append(
                    ErrorDetail(error.message, code=error.code)
                )
            raise serializers.ValidationError(detail)

        return pattern, window, fees


class ChamberWriteSerializer(ScheduleFieldsMixin, serializers.ModelSerializer):
    """Create / update a chamber. Conflicts surface as SchedulingConflict."""

    doctor = serializers.PrimaryKeyRelatedField(queryset=Doctor.objects.all())
    pharmacy = serializers.PrimaryKeyRelatedField(queryset=Pharmacy.objects.all())
    is_active = serializers.BooleanField(required=False)

    class Meta:
        model = Chamber
        fields = [
            'doctor', 'pharmacy',
            'schedule_type', 'week_days', 'week_numbers',
            'start_time', 'end_time', 'slot_duration', 'fees',
            'is_active',
        ]

    def validate_doctor(self, value):
        if self.instance is not None and value != self.instance.doctor:
            raise serializers.ValidationError("Doctor of an existing chamber cannot be changed")
        return value

    def validate_pharmacy(self, value):
        if self.instance is not None and value != self.instance.pharmacy:
            raise serializers.ValidationError("Pharmacy of an existing chamber cannot be changed")
        return value

    def validate(self, attrs):
        self.validate_schedule_fields(attrs)
        return attrs

    def create(self, validated_data):
        validated_data.pop('is_active', None)
        return create_chamber(validated_data, self.context['request'].user)

    def update(self, instance, validated_data):
        validated_data.pop('doctor', None)
        validated_data.pop('pharmacy', None)

        chamber, warnings = update_chamber(instance, validated_data, self.context['request'].user)
        if warnings:
            self.context['warnings'] = self.context.get('warnings', []) + warnings
        return chamber


class ChamberPreviewSerializer(ScheduleFieldsMixin):
    """Stateless preview of a chamber configuration (nothing is saved)"""

    doctor = serializers.PrimaryKeyRelatedField(queryset=Doctor.objects.all(), required=False, allow_null=True)
    chamber = serializers.PrimaryKeyRelatedField(queryset=Chamber.objects.all(), required=False, allow_null=True)
    count = serializers.IntegerField(required=False, min_value=1)

    def validate_count(self, value):
        return min(value, get_setting('MAX_UPCOMING_COUNT'))


class ChamberVerifySerializer(serializers.Serializer):
    verified = serializers.BooleanField()
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class SlotQuerySerializer(serializers.Serializer):
    date = serializers.DateField()
    exclude_appointment = serializers.IntegerField(required=False)


class UpcomingDatesQuerySerializer(serializers.Serializer):
    from_date = serializers.DateField(required=False)
    count = serializers.IntegerField(required=False, min_value=1)

    def validate_count(self, value):
        maximum = get_setting('MAX_UPCOMING_COUNT')
        if value > maximum:
            raise serializers.ValidationError(f"Count cannot exceed {maximum}")
        return value
