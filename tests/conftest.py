from datetime import time
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from core.constants import ScheduleType, UserRoles


@pytest.fixture
def make_user(django_user_model):
    counter = {"n": 0}

    def _make(role=UserRoles.ADMIN, **kwargs):
        counter["n"] += 1
        defaults = {
            "email": f"user{counter['n']}@example.com",
            "full_name": f"User {counter['n']}",
            "role": role,
        }
        defaults.update(kwargs)
        return django_user_model.objects.create_user(password="secret-pass-123", **defaults)

    return _make


@pytest.fixture
def admin_user(make_user):
    return make_user(role=UserRoles.ADMIN, full_name="Site Admin")


@pytest.fixture
def manager_user(make_user):
    return make_user(role=UserRoles.OFFICE_MANAGER, full_name="Office Manager")


@pytest.fixture
def make_doctor(make_user):
    from apps.doctors.models import Doctor

    def _make(name="Rahim Uddin", **kwargs):
        user = make_user(role=UserRoles.DOCTOR, full_name=name)
        defaults = {"specialization": "Cardiology", "license_number": f"LIC-{user.pk}"}
        defaults.update(kwargs)
        return Doctor.objects.create(user=user, **defaults)

    return _make


@pytest.fixture
def doctor(make_doctor):
    return make_doctor()


@pytest.fixture
def pharmacy(make_user):
    from apps.pharmacies.models import Pharmacy

    user = make_user(role=UserRoles.PHARMACY, full_name="City Pharmacy Owner")
    return Pharmacy.objects.create(user=user, name="City Pharmacy", address="12 Lake Road")


@pytest.fixture
def make_chamber(doctor, pharmacy):
    from apps.chambers.models import Chamber
    from apps.chambers.services import compute_max_slots

    def _make(**kwargs):
        data = {
            "doctor": doctor,
            "pharmacy": pharmacy,
            "schedule_type": ScheduleType.WEEKLY_RECURRING,
            "week_days": ["MONDAY"],
            "week_numbers": [],
            "start_time": time(9, 0),
            "end_time": time(10, 0),
            "slot_duration": 30,
            "fees": Decimal("500.00"),
            "is_active": True,
        }
        data.update(kwargs)
        chamber = Chamber(**data)
        chamber.max_slots = compute_max_slots(chamber.window)
        chamber.save()
        return chamber

    return _make


@pytest.fixture
def api_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client
