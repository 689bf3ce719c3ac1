# apps/chambers/views/chamber.py

from django.db.models import Count, DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django_filters import rest_framework as filters
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.doctors.models import Doctor
from core.constants import AppointmentStatus, PaymentStatus, UserRoles
from core.exceptions import ChamberInUseError, SchedulingConflict
from core.permissions import IsAuthenticatedAndActive

from ..conf import get_setting
from ..filters import ChamberFilter
from ..models import Chamber
from ..permissions import ChamberPermissions
from ..serializers import (
    ChamberSerializer,
    ChamberWriteSerializer,
    ChamberPreviewSerializer,
    ChamberVerifySerializer,
    SlotQuerySerializer,
    UpcomingDatesQuerySerializer,
)
from ..services import (
    ChamberSchedule,
    compute_max_slots,
    detect_conflict,
    doctor_chamber_summary,
    expand_dates,
    project_revenue,
    schedule_label,
    validate_schedule,
)
from ..services.chamber_service import (
    delete_chamber,
    doctor_schedules,
    set_chamber_active,
    verify_chamber,
)
from ..services.slot_service import get_chamber_statistics, get_slot_availability


class ChamberViewSet(viewsets.ModelViewSet):
    """
    Chambers: doctor consultation sessions at partner pharmacies.
    """
    queryset = Chamber.objects.select_related(
        'doctor', 'doctor__user', 'pharmacy'
    )

    serializer_class = ChamberSerializer
    permission_classes = [IsAuthenticatedAndActive, ChamberPermissions]
    filter_backends = [filters.DjangoFilterBackend]
    filterset_class = ChamberFilter

    def get_serializer_class(self):
        """Return appropriate serializer class based on action"""
        if self.action in ['create', 'update', 'partial_update']:
            return ChamberWriteSerializer
        elif self.action == 'verify':
            return ChamberVerifySerializer
        elif self.action == 'preview':
            return ChamberPreviewSerializer
        return ChamberSerializer

    def get_queryset(self):
        """Annotate booking statistics and scope by role"""
        queryset = super().get_queryset().annotate(
            total_appointments=Count('appointments', distinct=True),
            completed_appointments=Count(
                'appointments',
                filter=Q(appointments__status=AppointmentStatus.COMPLETED),
                distinct=True,
            ),
            revenue=Coalesce(
                Sum('appointments__amount', filter=Q(appointments__payment_status=PaymentStatus.PAID)),
                Value(0),
                output_field=DecimalField(max_digits=12, decimal_places=2),
            ),
        )
        user = self.request.user

        # Doctors and pharmacies only see their own chambers
        if user.role == UserRoles.DOCTOR:
            queryset = queryset.filter(doctor__user=user)
        elif user.role == UserRoles.PHARMACY:
            queryset = queryset.filter(pharmacy__user=user)

        return queryset

    def handle_exception(self, exc):
        if isinstance(exc, SchedulingConflict):
            return Response(
                {
                    'detail': str(exc),
                    'code': 'scheduling_conflict',
                    'conflict': exc.conflict.as_dict(),
                },
                status=status.HTTP_409_CONFLICT,
            )
        if isinstance(exc, ChamberInUseError):
            return Response({'detail': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return super().handle_exception(exc)

    def _read(self, chamber):
        chamber = self.get_queryset().get(pk=chamber.pk)
        return ChamberSerializer(chamber, context=self.get_serializer_context()).data

    # =========================
    # CRUD
    # =========================
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        chamber = serializer.save()
        return Response(self._read(chamber), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        chamber = serializer.save()

        data = dict(self._read(chamber))
        data['warnings'] = serializer.context.get('warnings', [])
        return Response(data)

    def destroy(self, request, *args, **kwargs):
        delete_chamber(self.get_object(), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # =========================
    # Lifecycle
    # =========================
    @action(detail=True, methods=['post'])
    def verify(self, request, pk=None):
        """Approve or reject a chamber"""
        chamber = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        verify_chamber(
            chamber,
            serializer.validated_data['verified'],
            serializer.validated_data.get('notes', ''),
            request.user,
        )
        return Response(self._read(chamber))

    @action(detail=True, methods=['post'])
    def set_active(self, request, pk=None):
        """Activate a chamber"""
        chamber = set_chamber_active(self.get_object(), True, request.user)
        return Response(self._read(chamber))

    @action(detail=True, methods=['post'])
    def set_inactive(self, request, pk=None):
        """Deactivate a chamber without deleting it"""
        chamber = set_chamber_active(self.get_object(), False, request.user)
        return Response(self._read(chamber))

    # =========================
    # Schedule views
    # =========================
    @action(detail=True, methods=['get'])
    def slots(self, request, pk=None):
        """Booked and available slot numbers on a date"""
        chamber = self.get_object()
        query = SlotQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        availability = get_slot_availability(
            chamber,
            query.validated_data['date'],
            exclude_appointment=query.validated_data.get('exclude_appointment'),
        )
        availability['chamber'] = {
            'id': chamber.id,
            'start_time': chamber.start_time,
            'end_time': chamber.end_time,
            'slot_duration': chamber.slot_duration,
            'fees': chamber.fees,
        }
        return Response(availability)

    @action(detail=True, methods=['get'])
    def upcoming_dates(self, request, pk=None):
        """Next dates on which the chamber runs"""
        chamber = self.get_object()
        query = UpcomingDatesQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        from_date = query.validated_data.get('from_date') or timezone.localdate()
        count = query.validated_data.get('count') or get_setting('DEFAULT_UPCOMING_COUNT')

        return Response({
            'chamber_id': chamber.id,
            'schedule_display': schedule_label(chamber.pattern),
            'is_active': chamber.is_active,
            'from_date': from_date,
            'dates': expand_dates(chamber.pattern, from_date, count),
        })

    @action(detail=True, methods=['get'])
    def projection(self, request, pk=None):
        """Revenue potential next to actual booking statistics"""
        chamber = self.get_object()
        return Response({
            'chamber_id': chamber.id,
            'projection': project_revenue(chamber.pattern, chamber.window, chamber.fees).as_dict(),
            'statistics': get_chamber_statistics(chamber),
        })

    @action(detail=False, methods=['get'])
    def active(self, request):
        """Active and verified chambers, for booking screens"""
        queryset = self.get_queryset().filter(
            is_active=True,
            is_verified=True,
        ).order_by('doctor__user__full_name', 'pharmacy__name')

        serializer = ChamberSerializer(queryset, many=True, context=self.get_serializer_context())
        return Response(serializer.data)

    @action(detail=False, methods=['get'])
    def doctor_summary(self, request):
        """Weekday overview of a doctor's active chambers"""
        doctor_id = request.query_params.get('doctor')
        if not doctor_id:
            return Response(
                {'error': 'doctor parameter is required'},
                status=status.HTTP_400_BAD_REQUEST
            )

        doctor = get_object_or_404(Doctor, pk=doctor_id)
        chambers = self.get_queryset().filter(doctor=doctor, is_active=True)

        return Response({
            'doctor_id': doctor.id,
            'doctor_name': doctor.full_name,
            'active_chambers': chambers.count(),
            'summary': doctor_chamber_summary(chambers),
        })

    @action(detail=False, methods=['post'])
    def preview(self, request):
        """
        Validate a chamber configuration without saving it.
        Returns every violation, capacity, projection, next dates and the
        first conflict with the doctor's existing chambers.
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        editing = data.get('chamber')
        # fields left out of an edit fall back to the stored chamber
        serializer.instance = editing
        pattern, window, fees = serializer.build_schedule(data)
        errors = validate_schedule(
            pattern,
            window,
            fees,
            min_session_minutes=get_setting('MIN_SESSION_MINUTES'),
            allowed_slot_durations=get_setting('SLOT_DURATIONS'),
        )

        response = {
            'is_valid': not errors,
            'errors': [
                {'code': e.code, 'field': e.field, 'message': e.message}
                for e in errors
            ],
            'max_slots': compute_max_slots(window),
        }
        if errors:
            return Response(response)

        response['schedule_display'] = schedule_label(pattern)
        response['projection'] = project_revenue(pattern, window, fees).as_dict()
        response['upcoming_dates'] = expand_dates(
            pattern,
            timezone.localdate(),
            data.get('count') or get_setting('DEFAULT_UPCOMING_COUNT'),
        )

        conflict = None
        doctor = data.get('doctor') or (editing.doctor if editing else None)
        if doctor is not None:
            candidate = ChamberSchedule(
                chamber_id=editing.pk if editing else None,
                pattern=pattern,
                window=window,
            )
            conflict = detect_conflict(
                candidate,
                doctor_schedules(doctor.pk, exclude_id=editing.pk if editing else None),
            )
        response['conflict'] = conflict.as_dict() if conflict else None

        return Response(response)
